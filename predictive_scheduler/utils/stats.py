"""Statistics helpers for pattern learning and feature extraction."""

import math
import statistics
from typing import Sequence


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence."""
    if not values:
        return 0.0
    return statistics.fmean(values)


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation, 0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return statistics.pstdev(values)


def weighted_mean(values: Sequence[float], weights: Sequence[float]) -> float:
    """Weighted arithmetic mean, 0 when the weights sum to zero."""
    weight_sum = sum(weights)
    if weight_sum == 0:
        return 0.0
    return sum(v * w for v, w in zip(values, weights)) / weight_sum


def decay_weights(count: int, decay: float) -> list:
    """Exponential recency weights: the last item gets 1, earlier ones decay."""
    return [decay ** (count - i - 1) for i in range(count)]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))
