"""Triangle: three fine corners graded against an equilateral triangle."""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Polygon

from shapegrader.engine.config import (
    ANGLE_DECAY_DEG,
    ANGLE_SUM_DECAY_DEG,
    ANGLE_TOLERANCE_DEG,
    MIN_VECTOR_MAGNITUDE,
    TRIANGLE_DEVIATION_BUDGET,
    TRIANGLE_EDGE_MAX_DISTANCE,
    TRIANGLE_EDGE_SLACK,
    TRIANGLE_MAX_SIDE_RATIO,
)
from shapegrader.engine.corners import fine_corners
from shapegrader.engine.metrics import completeness, line_deviation, smoothness, straightness
from shapegrader.engine.policy import CeilingLadder, FeedbackTable, ShapePolicy, Weights
from shapegrader.engine.registry import Shape, analyzer
from shapegrader.engine.result import ScoringResult
from shapegrader.utils.geometry import centroid, points_to_line_distances, polygon_angles, polygon_edges, radii
from shapegrader.utils.math_helpers import angle_accuracy, clamp01, consistency

logger = logging.getLogger(__name__)

# Area / perimeter² of an equilateral triangle, the maximum for any triangle
_EQUILATERAL_COMPACTNESS = math.sqrt(3) / 36

TRIANGLE_POLICY = ShapePolicy(
    weights=Weights(accuracy=0.90, smoothness=0.05, completeness=0.05),
    ladder=CeilingLadder(
        rungs=(
            (0.3, 30.0),
            (0.5, 50.0),
            (0.7, 70.0),
            (0.85, 85.0),
            (0.95, 95.0),
        )
    ),
    feedback=FeedbackTable(
        tiers=(
            (95.0, "Perfect triangle!"),
            (85.0, "Excellent triangle!"),
            (75.0, "Good triangle! Place the corners a little more precisely."),
            (65.0, "Not bad. Join the three sides with straighter lines."),
            (45.0, "Close to a triangle, but it needs work."),
            (0.0, "Try again! Draw a triangle with three straight sides."),
        )
    ),
    too_short="Too short! Draw a bigger triangle.",
)


def corner_count_accuracy(n_corners: int) -> float:
    if n_corners == 3:
        return 1.0
    return max(0.0, 1 - abs(n_corners - 3) / 3)


def edge_points(points: NDArray[np.float64], start, end) -> NDArray[np.float64]:
    """Samples near the line start→end and roughly inside the segment."""
    length = math.dist(start, end)
    if length == 0:
        return np.empty((0, 2))

    to_line = points_to_line_distances(points, start, end)
    to_start = np.hypot(points[:, 0] - start[0], points[:, 1] - start[1])
    to_end = np.hypot(points[:, 0] - end[0], points[:, 1] - end[1])
    mask = (to_line < TRIANGLE_EDGE_MAX_DISTANCE) & (to_start + to_end <= length * TRIANGLE_EDGE_SLACK)
    return points[mask]


def edge_straightness(points: NDArray[np.float64], vertices: NDArray[np.float64]) -> float:
    """Mean deviation per edge against a 10-unit budget; falls back to path smoothness."""
    if len(vertices) != 3:
        return 0.0

    deviations = []
    for i in range(3):
        start, end = vertices[i], vertices[(i + 1) % 3]
        members = edge_points(points, start, end)
        if len(members) > 2:
            deviations.append(line_deviation(members, start, end))

    result = straightness(deviations, TRIANGLE_DEVIATION_BUDGET)
    return result if result is not None else smoothness(points)


def proportion_accuracy(vertices: NDArray[np.float64]) -> float:
    """Side-ratio limit (3:1) blended with area / perimeter² against the equilateral value."""
    if len(vertices) != 3:
        return 0.0

    sides = sorted(float(s) for s in polygon_edges(vertices))
    if sides[0] <= 0.0:
        return 0.0
    ratio_score = max(0.0, 1 - (sides[2] / sides[0] - 1) / (TRIANGLE_MAX_SIDE_RATIO - 1))

    polygon = Polygon(vertices)
    perimeter = polygon.length
    compactness = polygon.area / (perimeter * perimeter) if perimeter > 0 else 0.0
    area_score = clamp01(compactness / _EQUILATERAL_COMPACTNESS)

    return ratio_score * 0.7 + area_score * 0.3


def equilateral_angle_accuracy(vertices: NDArray[np.float64]) -> float:
    """Per-vertex closeness to 60°, cross-checked against the 180° angle sum."""
    if len(vertices) != 3:
        return 0.0

    angles = polygon_angles(vertices, MIN_VECTOR_MAGNITUDE)
    if not angles:
        return 0.0

    per_vertex = sum(angle_accuracy(a - 60.0, ANGLE_TOLERANCE_DEG, ANGLE_DECAY_DEG) for a in angles) / 3
    angle_sum = angle_accuracy(sum(angles) - 180.0, 0.0, ANGLE_SUM_DECAY_DEG)
    return per_vertex * 0.85 + angle_sum * 0.15


def triangle_symmetry(vertices: NDArray[np.float64]) -> float:
    """Equal sides and equal vertex distances from the triangle's centroid."""
    if len(vertices) != 3:
        return 0.0
    side_balance = consistency(polygon_edges(vertices))
    radial_balance = consistency(radii(vertices, centroid(vertices)))
    return side_balance * 0.5 + radial_balance * 0.5


def measure_triangle(points: NDArray[np.float64]) -> dict[str, float]:
    corners = fine_corners(points)
    vertices = corners.points
    return {
        "corner_count": float(len(corners)),
        "corner_accuracy": corner_count_accuracy(len(corners)),
        "straightness": edge_straightness(points, vertices),
        "proportion": proportion_accuracy(vertices),
        "angle_accuracy": equilateral_angle_accuracy(vertices),
        "symmetry": triangle_symmetry(vertices),
    }


@analyzer(
    shape=Shape.TRIANGLE,
    min_points=10,
    policy=TRIANGLE_POLICY,
    description="Three sharp corners with equal 60° interior angles",
)
def score_triangle(points: NDArray[np.float64]) -> ScoringResult:
    features = measure_triangle(points)
    accuracy = (
        features["corner_accuracy"] * 0.2
        + features["straightness"] * 0.15
        + features["proportion"] * 0.15
        + features["angle_accuracy"] * 0.35
        + features["symmetry"] * 0.15
    )
    features["accuracy"] = accuracy
    gate = min(features["angle_accuracy"], features["corner_accuracy"])

    result = TRIANGLE_POLICY.grade(
        Shape.TRIANGLE,
        accuracy=accuracy,
        smoothness=smoothness(points),
        completeness=completeness(points),
        gate=gate,
        features=features,
    )
    logger.debug(
        "triangle: corners=%d angle=%.3f score=%s",
        int(features["corner_count"]),
        features["angle_accuracy"],
        result.score,
    )
    return result
