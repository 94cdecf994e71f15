"""
Gap/idle analysis over the inter-event gaps of a session slice.

idle_time_ratio:
    Time spent beyond the idle threshold inside gaps, as a fraction of the
    session duration. Clamped to [0, 1].

fragmented_idle_ratio:
    Number of idle gaps per second of session. A density, so not upper-clamped.

active_time_ratio:
    (duration - idle time - task switch cost) / duration, clamped to [0, 1].

burstiness:
    Barabási index (σ - μ)/(σ + μ) over inter-event gaps, remapped to [0, 1].
    Gaps touching a typing event are capped at the largest non-typing gap,
    since a typing session's own pauses are already summarized in its payload.
"""

from typing import Sequence

from config import IDLE_THRESHOLD_MS
from behavior.stats import clamp, consecutive_gaps, mean, pstdev
from models.event import Event


def _ordered(events: Sequence[Event]) -> list[Event]:
    return sorted(events, key=lambda e: e.timestamp)


def _gaps(events: Sequence[Event]) -> list[int]:
    return consecutive_gaps([e.timestamp for e in _ordered(events)])


def idle_time_ratio(events: Sequence[Event], duration_ms: int) -> float:
    if len(events) < 2 or duration_ms <= 0:
        return 0.0
    idle_ms = sum(g - IDLE_THRESHOLD_MS for g in _gaps(events) if g > IDLE_THRESHOLD_MS)
    return clamp(idle_ms / duration_ms)


def fragmented_idle_ratio(events: Sequence[Event], duration_ms: int) -> float:
    if len(events) < 2 or duration_ms <= 0:
        return 0.0
    idle_segments = sum(1 for g in _gaps(events) if g > IDLE_THRESHOLD_MS)
    return max(0.0, idle_segments / (duration_ms / 1000.0))


def active_time_ratio(duration_ms: int, idle_ratio: float, task_switch_cost_ms: int) -> float:
    if duration_ms <= 0:
        return 0.0
    idle_ms = int(idle_ratio * duration_ms)
    active_ms = duration_ms - idle_ms - task_switch_cost_ms
    return clamp(active_ms / duration_ms)


def burstiness(events: Sequence[Event]) -> float:
    if len(events) < 2:
        return 0.0

    ordered = _ordered(events)
    gaps: list[tuple[int, bool]] = []
    for prev, curr in zip(ordered, ordered[1:]):
        involves_typing = prev.type == "typing" or curr.type == "typing"
        gaps.append((curr.timestamp - prev.timestamp, involves_typing))

    cap = max((g for g, typing in gaps if not typing), default=0)
    if cap > 0:
        values = [min(g, cap) if typing else g for g, typing in gaps]
    else:
        values = [g for g, _ in gaps]

    mu = mean(values)
    if mu == 0:
        return 0.0
    sigma = pstdev(values, mu)
    if sigma == 0:
        return 0.0

    raw = (sigma - mu) / (sigma + mu)
    return clamp((raw + 1.0) / 2.0)
