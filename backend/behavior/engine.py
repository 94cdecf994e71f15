"""
Report assembler: runs every analyzer over one frozen session slice.

finalize(snapshot) -> Report
    Full-session report. Pure: equal snapshots give equal reports.

recompute(source, range_start, range_end) -> Report
    Report over [range_start, range_end] (inclusive). The slice is turned into
    a standalone snapshot bounded by the range and passed to finalize, so
        recompute(s, s.start_time, s.end_time) == finalize(s)
    whenever s has no events outside its own bounds.

Counts (events, app switches, notifications, calls) are always taken from the
event slice itself, never from ingestion-side counters.
"""

import logging
from typing import Optional, Sequence, Union

from pydantic import BaseModel

import config
from behavior import composite, gaps
from behavior.activity import summarize_activity, summarize_clipboard
from behavior.deep_focus import deep_focus_blocks
from behavior.interruptions import summarize_interruptions
from behavior.scroll import scroll_jitter_rate
from behavior.typing_summary import summarize_typing
from errors import InvalidRange
from models.event import Event
from models.report import BehavioralMetrics, Report
from models.session import SessionSnapshot

logger = logging.getLogger(__name__)


def _behavioral_metrics(
    events: list[Event],
    snapshot: SessionSnapshot,
    notification_count: int,
    call_count: int,
    app_switch_count: int,
    total_typing_seconds: float,
) -> BehavioralMetrics:
    duration_ms = snapshot.duration_ms
    duration_s = duration_ms / 1000.0

    load = composite.notification_load(notification_count, duration_s)
    switch_rate = composite.task_switch_rate(app_switch_count, duration_s)
    switch_cost = composite.task_switch_cost(duration_ms, app_switch_count)

    idle_ratio = gaps.idle_time_ratio(events, duration_ms)
    fragmented = gaps.fragmented_idle_ratio(events, duration_ms)
    jitter = scroll_jitter_rate(events)

    score = composite.distraction_score(switch_rate, load, fragmented, jitter)
    typing_count = sum(1 for e in events if e.type == "typing")

    return BehavioralMetrics(
        interaction_intensity=composite.interaction_intensity(
            total_event_count=len(events),
            interruption_count=notification_count + call_count + app_switch_count,
            typing_event_count=typing_count,
            total_typing_duration_seconds=total_typing_seconds,
            duration_seconds=duration_s,
        ),
        task_switch_rate=switch_rate,
        task_switch_cost=switch_cost,
        idle_time_ratio=idle_ratio,
        active_time_ratio=gaps.active_time_ratio(duration_ms, idle_ratio, switch_cost),
        notification_load=load,
        burstiness=gaps.burstiness(events),
        behavioral_distraction_score=score,
        focus_hint=composite.focus_hint(score),
        fragmented_idle_ratio=fragmented,
        scroll_jitter_rate=jitter,
        deep_focus_blocks=deep_focus_blocks(events, snapshot.start_time, snapshot.end_time),
    )


# ---------- Public entry points ----------

def finalize(snapshot: SessionSnapshot, *, rate_basis: Optional[str] = None) -> Report:
    events = sorted(snapshot.events, key=lambda e: e.timestamp)
    duration_ms = snapshot.duration_ms

    logger.debug(
        "Computing report for %s: %d events over %dms",
        snapshot.session_id, len(events), duration_ms,
    )

    notifications = summarize_interruptions(events)
    activity = summarize_activity(events)
    typing_summary = summarize_typing(events, duration_ms, rate_basis)

    metrics = _behavioral_metrics(
        events,
        snapshot,
        notification_count=notifications.notification_count,
        call_count=notifications.call_count,
        app_switch_count=activity.app_switch_count,
        total_typing_seconds=typing_summary.total_typing_duration,
    )

    return Report(
        session_id=snapshot.session_id,
        start_at=snapshot.start_time,
        end_at=snapshot.end_time,
        duration_ms=duration_ms,
        micro_session=duration_ms < config.MICRO_SESSION_MS,
        session_spacing=snapshot.session_spacing,
        activity_summary=activity,
        behavioral_metrics=metrics,
        typing_session_summary=typing_summary,
        notification_summary=notifications,
        clipboard_summary=summarize_clipboard(events),
    )


def recompute(
    source: Union[SessionSnapshot, Sequence[Event]],
    range_start: int,
    range_end: int,
    *,
    session_id: Optional[str] = None,
    rate_basis: Optional[str] = None,
) -> Report:
    """
    Report over a sub-range of a session (or of a bare event list).

    Raises InvalidRange if range_end precedes range_start, or if source is a
    snapshot and the range leaves its bounds by more than the tolerance.
    Any other model (a live Session included) raises TypeError; take a
    snapshot from the store first.
    """
    if isinstance(source, BaseModel) and not isinstance(source, SessionSnapshot):
        raise TypeError(
            f"recompute takes a SessionSnapshot or a sequence of events, not {type(source).__name__}"
        )
    if range_end < range_start:
        raise InvalidRange(range_start, range_end)

    spacing = 0
    if isinstance(source, SessionSnapshot):
        tolerance = config.RANGE_TOLERANCE_MS
        if (range_start < source.start_time - tolerance
                or range_end > source.end_time + tolerance):
            raise InvalidRange(
                range_start, range_end,
                session_start=source.start_time,
                session_end=source.end_time,
                tolerance_ms=tolerance,
            )
        events = source.events
        sid = session_id or source.session_id
        spacing = source.session_spacing
    else:
        events = tuple(source)
        sid = session_id or (events[0].session_id if events else "adhoc")

    sliced = SessionSnapshot(
        session_id=sid,
        start_time=range_start,
        end_time=range_end,
        session_spacing=spacing,
        events=tuple(e for e in events if range_start <= e.timestamp <= range_end),
    )
    return finalize(sliced, rate_basis=rate_basis)
