"""Math helpers for variation, clamping and angular falloff. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


def coefficient_of_variation(values: NDArray[np.float64]) -> float:
    """CV = std / mean (population std). inf for an empty or zero-mean sample."""
    if len(values) == 0:
        return float("inf")
    mean = float(np.mean(values))
    if abs(mean) < 1e-10:
        return float("inf")
    return float(np.std(values) / mean)


def consistency(values: NDArray[np.float64]) -> float:
    """max(0, 1 - CV). 1.0 = all values equal."""
    cv = coefficient_of_variation(values)
    if not math.isfinite(cv):
        return 0.0
    return max(0.0, 1.0 - cv)


def clamp01(value: float) -> float:
    """Clamp into [0, 1]; non-finite values collapse to 0."""
    if not math.isfinite(value):
        return 0.0
    return min(1.0, max(0.0, value))


def min_max_ratio(a: float, b: float) -> float:
    """min(a, b) / max(a, b), 0 when both are zero."""
    hi = max(a, b)
    if hi <= 0.0:
        return 0.0
    return min(a, b) / hi


def angle_accuracy(deviation_deg: float, tolerance_deg: float, decay_deg: float) -> float:
    """1.0 inside the tolerance band, exponential falloff outside it."""
    if not math.isfinite(deviation_deg):
        return 0.0
    return math.exp(-max(0.0, abs(deviation_deg) - tolerance_deg) / decay_deg)


def to_percent(fraction: float) -> int:
    """Round a [0, 1] fraction half-up to an integer percentage."""
    return int(math.floor(clamp01(fraction) * 100 + 0.5))
