"""Corner extraction: reduce a dense path to an ordered set of candidate vertices.

A sample is a corner candidate when the turning angle between p[i-w]→p[i] and
p[i]→p[i+w] exceeds the configured threshold. On a closed stroke the window wraps
around the ends, so a vertex where the stroke starts is found like any other.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from shapegrader.engine.config import COARSE_CORNERS, FINE_CORNERS, LOOP_MAX_GAP_STEPS, CornerConfig
from shapegrader.utils.geometry import closed_loop, cyclic_turning_angles, distance, windowed_turning_angles


@dataclass(frozen=True)
class CornerSet:
    """Detected vertices in path order."""

    # Path indices of each corner, ascending
    indices: tuple[int, ...] = ()
    # Turning angle (radians) measured at each corner
    sharpness: tuple[float, ...] = ()
    points: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))

    def __len__(self) -> int:
        return len(self.indices)


def extract_corners(points: NDArray[np.float64], config: CornerConfig) -> CornerSet:
    loop = closed_loop(points, LOOP_MAX_GAP_STEPS)
    if loop is not None:
        turns = cyclic_turning_angles(loop, config.window)
        offset = 0
    else:
        turns = windowed_turning_angles(points, config.window)
        offset = config.window
    if len(turns) == 0:
        return CornerSet()

    threshold = math.radians(config.threshold_deg)
    candidates = [
        (k + offset, float(turn))
        for k, turn in enumerate(turns)
        if turn > threshold
    ]

    if config.merge_distance is not None:
        candidates = _suppress_duplicates(points, candidates, config.merge_distance)

    if config.max_corners is not None and len(candidates) > config.max_corners:
        candidates = sorted(candidates, key=lambda c: (-c[1], c[0]))[: config.max_corners]

    candidates.sort(key=lambda c: c[0])
    indices = tuple(idx for idx, _ in candidates)
    return CornerSet(
        indices=indices,
        sharpness=tuple(sharp for _, sharp in candidates),
        points=points[list(indices)] if indices else np.empty((0, 2)),
    )


def _suppress_duplicates(
    points: NDArray[np.float64],
    candidates: list[tuple[int, float]],
    merge_distance: float,
) -> list[tuple[int, float]]:
    """Drop candidates within ``merge_distance`` of an already-accepted corner.

    Sharper candidates are accepted first, so the apex of a turn wins over the
    shallow samples leading into it.
    """
    accepted: list[tuple[int, float]] = []
    for idx, sharp in sorted(candidates, key=lambda c: (-c[1], c[0])):
        if any(distance(points[idx], points[other]) < merge_distance for other, _ in accepted):
            continue
        accepted.append((idx, sharp))
    return accepted


def coarse_corners(points: NDArray[np.float64]) -> CornerSet:
    """±2 sample window, 60° threshold, every qualifying sample kept."""
    return extract_corners(points, COARSE_CORNERS)


def fine_corners(points: NDArray[np.float64]) -> CornerSet:
    """±3 sample window, 30° threshold, 30-unit merge, sharpest three kept."""
    return extract_corners(points, FINE_CORNERS)


def edge_slices(n_points: int, corners: CornerSet) -> list[NDArray[np.int64]]:
    """Path indices belonging to each edge between consecutive corners.

    Edge i runs from corner i to corner i+1; the last edge wraps past the end of
    the path back to the first corner.
    """
    idx = corners.indices
    edges: list[NDArray[np.int64]] = []
    for i, start in enumerate(idx):
        end = idx[(i + 1) % len(idx)]
        if start < end:
            edges.append(np.arange(start, end + 1))
        else:
            edges.append(np.concatenate([np.arange(start, n_points), np.arange(0, end + 1)]))
    return edges
