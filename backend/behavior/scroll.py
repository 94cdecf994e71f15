from typing import Sequence

from behavior.stats import clamp
from models.event import Event


def direction_reversals(scrolls: Sequence[Event]) -> int:
    return sum(
        1 for a, b in zip(scrolls, scrolls[1:])
        if a.metrics.direction != b.metrics.direction
    )


def scroll_jitter_rate(events: Sequence[Event]) -> float:
    """Share of adjacent scroll pairs that flip direction."""
    scrolls = [e for e in events if e.type == "scroll"]
    if len(scrolls) < 2:
        return 0.0
    return clamp(direction_reversals(scrolls) / max(len(scrolls) - 1, 1))
