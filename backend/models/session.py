from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from models.event import Event
from models.report import Report


class Session(BaseModel):
    """Mutable ingestion-side session. Only the SessionStore writes to it."""
    session_id: str
    start_time: int                     # ms
    end_time: Optional[int] = None      # None while active
    session_spacing: int = 0            # ms since the previous session ended
    events: list[Event] = Field(default_factory=list)
    event_count: int = 0
    app_switch_count: int = 0
    report: Optional[Report] = None

    @property
    def active(self) -> bool:
        return self.end_time is None


class SessionSnapshot(BaseModel):
    """Frozen, bounded copy of a session. The only thing the engine reads."""
    model_config = ConfigDict(frozen=True)

    session_id: str
    start_time: int
    end_time: int
    session_spacing: int = 0
    events: tuple[Event, ...] = ()

    @property
    def duration_ms(self) -> int:
        return self.end_time - self.start_time
