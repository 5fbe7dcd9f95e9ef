"""Leaf-node geometry helpers. No engine imports.

Paths are Nx2 float arrays of (x, y) samples in drawing order.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray

Point = tuple[float, float]


def as_path(points: Iterable[Point] | NDArray[np.float64]) -> NDArray[np.float64]:
    """Coerce a sequence of (x, y) pairs into an Nx2 float64 array."""
    arr = np.asarray(list(points) if not isinstance(points, np.ndarray) else points, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2))
    return arr.reshape(-1, 2)


def distance(a: Point | NDArray[np.float64], b: Point | NDArray[np.float64]) -> float:
    """Euclidean distance between two points."""
    return float(math.hypot(float(a[0]) - float(b[0]), float(a[1]) - float(b[1])))


def centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Arithmetic mean of the path coordinates. Callers guard against empty paths."""
    return (float(np.mean(points[:, 0])), float(np.mean(points[:, 1])))


def radii(points: NDArray[np.float64], center: Point | None = None) -> NDArray[np.float64]:
    """Distance from the centroid (or ``center``) to every point."""
    cx, cy = center if center is not None else centroid(points)
    return np.hypot(points[:, 0] - cx, points[:, 1] - cy)


def point_to_line_distance(
    p: Point | NDArray[np.float64],
    line_start: Point | NDArray[np.float64],
    line_end: Point | NDArray[np.float64],
) -> float:
    """Perpendicular distance from ``p`` to the infinite line through start/end.

    NaN when start == end.
    """
    a = float(line_end[1]) - float(line_start[1])
    b = float(line_start[0]) - float(line_end[0])
    c = float(line_end[0]) * float(line_start[1]) - float(line_start[0]) * float(line_end[1])
    norm = math.hypot(a, b)
    if norm == 0.0:
        return float("nan")
    return abs(a * float(p[0]) + b * float(p[1]) + c) / norm


def points_to_line_distances(
    points: NDArray[np.float64],
    line_start: Point | NDArray[np.float64],
    line_end: Point | NDArray[np.float64],
) -> NDArray[np.float64]:
    """Vectorised ``point_to_line_distance`` over a point array."""
    a = float(line_end[1]) - float(line_start[1])
    b = float(line_start[0]) - float(line_end[0])
    c = float(line_end[0]) * float(line_start[1]) - float(line_start[0]) * float(line_end[1])
    norm = math.hypot(a, b)
    if norm == 0.0:
        return np.full(len(points), np.nan)
    return np.abs(a * points[:, 0] + b * points[:, 1] + c) / norm


def segment_lengths(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Length of each consecutive segment."""
    diffs = np.diff(points, axis=0)
    return np.hypot(diffs[:, 0], diffs[:, 1])


def closed_perimeter(points: NDArray[np.float64]) -> float:
    """Traced length of the path plus the closing segment back to the start."""
    total = float(np.sum(segment_lengths(points)))
    if len(points) > 2:
        total += distance(points[-1], points[0])
    return total


def wrap_turn(diff: NDArray[np.float64]) -> NDArray[np.float64]:
    """Fold an absolute heading difference in [0, 2π] into [0, π]."""
    diff = np.abs(diff)
    return np.where(diff > np.pi, 2 * np.pi - diff, diff)


def windowed_turning_angles(points: NDArray[np.float64], window: int) -> NDArray[np.float64]:
    """Turning angle at every index i in [window, n - window).

    Measured between the headings p[i-w] → p[i] and p[i] → p[i+w], wrapped into [0, π].
    Entry k corresponds to path index ``k + window``.
    """
    n = len(points)
    if n < 2 * window + 1:
        return np.array([])
    prev = points[window : n - window] - points[: n - 2 * window]
    nxt = points[2 * window :] - points[window : n - window]
    h1 = np.arctan2(prev[:, 1], prev[:, 0])
    h2 = np.arctan2(nxt[:, 1], nxt[:, 0])
    return wrap_turn(h2 - h1)


def cyclic_turning_angles(points: NDArray[np.float64], window: int) -> NDArray[np.float64]:
    """Turning angle at every index of a closed loop, wrapping indices past either end.

    Entry i corresponds to path index i.
    """
    n = len(points)
    if n < 2 * window + 1:
        return np.array([])
    prev = points - np.roll(points, window, axis=0)
    nxt = np.roll(points, -window, axis=0) - points
    h1 = np.arctan2(prev[:, 1], prev[:, 0])
    h2 = np.arctan2(nxt[:, 1], nxt[:, 0])
    return wrap_turn(h2 - h1)


def closed_loop(points: NDArray[np.float64], max_gap_steps: float = 2.0) -> NDArray[np.float64] | None:
    """The stroke as a closed loop, or None when its ends do not meet.

    The ends meet when the closing gap is at most ``max_gap_steps`` median sample
    steps. Trailing samples that repeat the start are dropped, so every vertex of
    the loop appears exactly once.
    """
    if len(points) < 4:
        return None
    steps = segment_lengths(points)
    steps = steps[steps > 1e-9]
    if len(steps) == 0:
        return None

    step = float(np.median(steps))
    if not distance(points[0], points[-1]) <= max_gap_steps * step:
        return None

    end = len(points)
    while end > 1 and distance(points[0], points[end - 1]) <= 1e-9:
        end -= 1
    return points[:end]


def vertex_angle(prev: Point, vertex: Point, nxt: Point, min_magnitude: float = 1.0) -> float | None:
    """Interior angle (radians, 0..π) at ``vertex`` between the edges to prev/nxt.

    None when either edge is not longer than ``min_magnitude``.
    """
    v1x, v1y = prev[0] - vertex[0], prev[1] - vertex[1]
    v2x, v2y = nxt[0] - vertex[0], nxt[1] - vertex[1]
    mag1 = math.hypot(v1x, v1y)
    mag2 = math.hypot(v2x, v2y)
    if not (mag1 > min_magnitude and mag2 > min_magnitude):
        return None
    cos_value = (v1x * v2x + v1y * v2y) / (mag1 * mag2)
    return math.acos(min(1.0, max(-1.0, cos_value)))


def polygon_angles(vertices: NDArray[np.float64], min_magnitude: float = 1.0) -> list[float]:
    """Interior angles in degrees at each vertex of a closed polygon.

    Vertices whose adjacent edges are too short are skipped.
    """
    n = len(vertices)
    angles: list[float] = []
    for i in range(n):
        angle = vertex_angle(
            tuple(vertices[(i - 1) % n]),
            tuple(vertices[i]),
            tuple(vertices[(i + 1) % n]),
            min_magnitude,
        )
        if angle is not None:
            angles.append(math.degrees(angle))
    return angles


def polygon_edges(vertices: NDArray[np.float64]) -> NDArray[np.float64]:
    """Edge lengths of a closed polygon, edge i running from vertex i to i+1."""
    rolled = np.roll(vertices, -1, axis=0)
    return np.hypot(rolled[:, 0] - vertices[:, 0], rolled[:, 1] - vertices[:, 1])


def polar_angle(point: Point, center: Point) -> float:
    """atan2 angle of ``point`` around ``center`` in radians."""
    return math.atan2(point[1] - center[1], point[0] - center[0])
