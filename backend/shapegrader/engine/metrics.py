"""Path metrics shared by every analyzer."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from shapegrader.utils.geometry import centroid, distance, points_to_line_distances, radii, wrap_turn

# Segments shorter than this carry no heading (duplicate samples)
_MIN_SEGMENT = 1e-9


def smoothness(points: NDArray[np.float64]) -> float:
    """1 - mean turning angle / π over interior points.

    Zero-length segments (repeated samples) carry no heading and are dropped, so a
    turn is measured across them. Fewer than 3 points, or fewer than two segments
    left to compare, scores 0.
    """
    if len(points) < 3:
        return 0.0

    diffs = np.diff(points, axis=0)
    lengths = np.hypot(diffs[:, 0], diffs[:, 1])
    diffs = diffs[lengths > _MIN_SEGMENT]
    if len(diffs) < 2:
        return 0.0

    headings = np.arctan2(diffs[:, 1], diffs[:, 0])
    turns = wrap_turn(np.diff(headings))
    turns = turns[np.isfinite(turns)]
    if len(turns) == 0:
        return 0.0

    avg_turn = float(np.mean(turns))
    return max(0.0, 1.0 - avg_turn / math.pi)


def completeness(points: NDArray[np.float64]) -> float:
    """1 - (start/end gap) / mean radius. Fewer than 10 points scores 0."""
    if len(points) < 10:
        return 0.0

    mean_radius = float(np.mean(radii(points, centroid(points))))
    if not math.isfinite(mean_radius) or mean_radius <= 0.0:
        return 0.0

    closing = distance(points[0], points[-1])
    return max(0.0, 1.0 - closing / mean_radius)


def line_deviation(points: NDArray[np.float64], start, end) -> float:
    """Mean perpendicular distance of ``points`` from the line start→end."""
    if len(points) == 0:
        return 0.0
    return float(np.mean(points_to_line_distances(points, start, end)))


def straightness(edge_deviations: list[float], budget: float) -> float | None:
    """1 - mean deviation / budget over finite edge deviations.

    None when no edge produced a finite deviation.
    """
    finite = [d for d in edge_deviations if math.isfinite(d)]
    if not finite:
        return None
    avg = sum(finite) / len(finite)
    return max(0.0, 1.0 - min(avg / budget, 1.0))
