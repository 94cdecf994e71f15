from models.event import Event, parse_event
from models.report import Report, BehavioralMetrics, DeepFocusBlock
from models.session import Session, SessionSnapshot

__all__ = [
    "Event",
    "parse_event",
    "Report",
    "BehavioralMetrics",
    "DeepFocusBlock",
    "Session",
    "SessionSnapshot",
]
