from typing import Sequence

from models.event import Event
from models.report import ActivitySummary, ClipboardSummary


def summarize_activity(events: Sequence[Event]) -> ActivitySummary:
    return ActivitySummary(
        total_events=len(events),
        app_switch_count=sum(1 for e in events if e.type == "app_switch"),
    )


def summarize_clipboard(events: Sequence[Event]) -> ClipboardSummary:
    """Counts only; clipboard actions carry no content."""
    actions = [e.metrics.action for e in events if e.type == "clipboard"]
    return ClipboardSummary(
        clipboard_count=len(actions),
        clipboard_copy_count=actions.count("copy"),
        clipboard_paste_count=actions.count("paste"),
        clipboard_cut_count=actions.count("cut"),
    )
