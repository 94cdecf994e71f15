"""
Composite indices built from the per-analyzer outputs.

notification_load   = 1 - exp(-(notifications / s) / λ),  λ = 1/60
task_switch_rate    = 1 - exp(-(app switches / s) / μ),   μ = 1/30
task_switch_cost    = duration_ms // app switches, clamped to [0, 10 000] ms
distraction_score   = 0.35·switch + 0.30·notification + 0.20·fragmentation + 0.15·jitter
focus_hint          = 1 - distraction_score
interaction_intensity =
    (events that are neither interruptions nor typing + typing seconds / 10) / s
"""

import math

from config import (
    NOTIFICATION_LAMBDA,
    SWITCH_MU,
    TASK_SWITCH_COST_CAP_MS,
    W_FRAGMENTATION,
    W_NOTIFICATION,
    W_SCROLL_JITTER,
    W_TASK_SWITCH,
)
from behavior.stats import clamp


def _saturating(rate: float, scale: float) -> float:
    if rate <= 0:
        return 0.0
    return 1.0 - math.exp(-rate / scale)


def notification_load(notification_count: int, duration_seconds: float) -> float:
    rate = notification_count / duration_seconds if duration_seconds > 0 else 0.0
    return _saturating(rate, NOTIFICATION_LAMBDA)


def task_switch_rate(app_switch_count: int, duration_seconds: float) -> float:
    rate = app_switch_count / duration_seconds if duration_seconds > 0 else 0.0
    return _saturating(rate, SWITCH_MU)


def task_switch_cost(duration_ms: int, app_switch_count: int) -> int:
    if app_switch_count <= 0:
        return 0
    return max(0, min(TASK_SWITCH_COST_CAP_MS, duration_ms // app_switch_count))


def distraction_score(
    switch_rate: float,
    load: float,
    fragmented_idle: float,
    jitter: float,
) -> float:
    return clamp(
        W_TASK_SWITCH * switch_rate
        + W_NOTIFICATION * load
        + W_FRAGMENTATION * fragmented_idle
        + W_SCROLL_JITTER * jitter
    )


def focus_hint(score: float) -> float:
    return 1.0 - score


def interaction_intensity(
    total_event_count: int,
    interruption_count: int,
    typing_event_count: int,
    total_typing_duration_seconds: float,
    duration_seconds: float,
) -> float:
    if duration_seconds <= 0:
        return 0.0
    plain_events = total_event_count - interruption_count - typing_event_count
    return max(0.0, (plain_events + total_typing_duration_seconds / 10.0) / duration_seconds)
