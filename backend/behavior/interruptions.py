"""
Notification and call summaries.

Whether an interruption counts as "ignored" is decided upstream by the
producer (e.g. a call unanswered for 30 s is tagged ignored); here we only
count the tags.
"""

from typing import Sequence

from behavior.stats import clamp, consecutive_gaps, mean, pstdev
from models.event import Event
from models.report import NotificationSummary


def _of_type(events: Sequence[Event], kind: str) -> list[Event]:
    return [e for e in events if e.type == kind]


def ignore_rate(events: Sequence[Event]) -> float:
    if not events:
        return 0.0
    ignored = sum(1 for e in events if e.metrics.action == "ignored")
    return ignored / len(events)


def clustering_index(notifications: Sequence[Event]) -> float:
    """
    1 - CV/10 of the intervals between consecutive notifications.
    Regular, tightly spaced arrivals score near 1; erratic spacing near 0.
    """
    if len(notifications) < 2:
        return 0.0

    intervals = consecutive_gaps([e.timestamp for e in notifications])
    mu = mean(intervals)
    if mu == 0:
        return 0.0
    cv = pstdev(intervals, mu) / mu
    return clamp(1.0 - clamp(cv / 10.0))


def summarize_interruptions(events: Sequence[Event]) -> NotificationSummary:
    notifications = _of_type(events, "notification")
    calls = _of_type(events, "call")

    return NotificationSummary(
        notification_count=len(notifications),
        notification_ignored=sum(1 for e in notifications if e.metrics.action == "ignored"),
        notification_ignore_rate=ignore_rate(notifications),
        notification_clustering_index=clustering_index(notifications),
        call_count=len(calls),
        call_ignored=sum(1 for e in calls if e.metrics.action == "ignored"),
        call_ignore_rate=ignore_rate(calls),
    )
