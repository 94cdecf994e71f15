"""
Numeric helpers shared by the analyzers.

Kept as plain left-to-right float arithmetic (population variance, no
compensated summation) so results match the native implementations bit for bit.
"""

import math
from typing import Sequence


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def pstdev(values: Sequence[float], mu: float) -> float:
    """Population standard deviation around a precomputed mean."""
    if not values:
        return 0.0
    variance = sum((v - mu) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def consecutive_gaps(timestamps: Sequence[int]) -> list[int]:
    return [b - a for a, b in zip(timestamps, timestamps[1:])]
