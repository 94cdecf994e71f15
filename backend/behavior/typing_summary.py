"""
Typing session rollup.

Each typing event already carries one finished typing session's metrics from
the text-field collector; this module averages them across the slice and
passes the per-session records through unchanged as typing_metrics.

correction_rate and clipboard_activity_rate share a configurable denominator
(config.RATE_BASIS):
    keystrokes  per typed tap, clamped to [0, 1]
    sessions    per typing session
    minutes     per minute of typing
"""

from typing import Optional, Sequence

import config
from behavior.stats import clamp, mean
from models.event import Event, TypingMetrics
from models.report import TypingSessionSummary


def _rates(records: Sequence[TypingMetrics], basis: str) -> tuple[float, float]:
    corrections = sum(r.backspace_count for r in records)
    clipboard = sum(r.copy_count + r.paste_count + r.cut_count for r in records)

    if basis == "keystrokes":
        taps = sum(r.tap_count for r in records)
        if taps <= 0:
            return 0.0, 0.0
        return clamp(corrections / taps), clamp(clipboard / taps)

    if basis == "sessions":
        return corrections / len(records), clipboard / len(records)

    if basis == "minutes":
        minutes = sum(r.duration_seconds for r in records) / 60.0
        if minutes <= 0:
            return 0.0, 0.0
        return corrections / minutes, clipboard / minutes

    raise ValueError(f"Unknown rate basis {basis!r}; expected one of {config.RATE_BASES}")


def summarize_typing(
    events: Sequence[Event],
    duration_ms: int,
    rate_basis: Optional[str] = None,
) -> TypingSessionSummary:
    typing_events = [e for e in events if e.type == "typing"]
    if not typing_events:
        return TypingSessionSummary()

    records = [e.metrics for e in typing_events]
    total_duration = sum(r.duration_seconds for r in records)
    correction_rate, clipboard_rate = _rates(records, rate_basis or config.RATE_BASIS)

    # mean_inter_tap_interval_ms feeds both the "gap" and "inter-tap" averages
    inter_tap = mean([r.mean_inter_tap_interval_ms for r in records])

    return TypingSessionSummary(
        typing_session_count=len(records),
        average_keystrokes_per_session=mean([r.tap_count for r in records]),
        average_typing_session_duration=mean([r.duration_seconds for r in records]),
        average_typing_speed=mean([r.typing_speed for r in records]),
        average_typing_gap=inter_tap,
        average_inter_tap_interval=inter_tap,
        typing_cadence_stability=mean([r.cadence_stability for r in records]),
        burstiness_of_typing=mean([r.burstiness for r in records]),
        total_typing_duration=total_duration,
        active_typing_ratio=clamp(total_duration * 1000.0 / duration_ms) if duration_ms > 0 else 0.0,
        typing_contribution_to_interaction_intensity=len(typing_events) / len(events),
        deep_typing_blocks=sum(1 for r in records if r.deep_typing),
        typing_fragmentation=mean([r.gap_ratio for r in records]),
        correction_rate=correction_rate,
        clipboard_activity_rate=clipboard_rate,
        typing_metrics=list(records),
    )
