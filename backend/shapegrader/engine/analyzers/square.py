"""Square: four coarse corners joined by straight, equal edges at right angles.

Right-angle accuracy dominates. Corner counts other than four degrade the score
instead of failing: angle, balance and aspect checks need exactly four vertices and
score 0 otherwise, and the ceiling ladder caps whatever the other terms earn.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from shapegrader.engine.config import (
    ANGLE_DECAY_DEG,
    ANGLE_SUM_DECAY_DEG,
    ANGLE_TOLERANCE_DEG,
    MIN_VECTOR_MAGNITUDE,
    SQUARE_DEVIATION_BUDGET,
)
from shapegrader.engine.corners import CornerSet, coarse_corners, edge_slices
from shapegrader.engine.metrics import completeness, line_deviation, smoothness, straightness
from shapegrader.engine.policy import CeilingLadder, FeedbackTable, ShapePolicy, Weights
from shapegrader.engine.registry import Shape, analyzer
from shapegrader.engine.result import ScoringResult
from shapegrader.utils.geometry import distance, polygon_angles, polygon_edges
from shapegrader.utils.math_helpers import angle_accuracy, consistency, min_max_ratio

logger = logging.getLogger(__name__)

SQUARE_POLICY = ShapePolicy(
    weights=Weights(accuracy=0.90, smoothness=0.05, completeness=0.05),
    ladder=CeilingLadder(
        rungs=(
            (0.3, 25.0),
            (0.5, 45.0),
            (0.7, 65.0),
            (0.85, 80.0),
            (0.95, 92.0),
        )
    ),
    feedback=FeedbackTable(
        tiers=(
            (95.0, "Perfect square!"),
            (85.0, "Excellent square!"),
            (75.0, "Good square! Sharpen the corners a little."),
            (65.0, "Not bad. Make all four corners right angles."),
            (45.0, "Close to a square, but it needs work."),
            (0.0, "Try again! Draw a square with four right angles."),
        )
    ),
    too_short="Too short! Draw a bigger square.",
)


def corner_count_accuracy(n_corners: int) -> float:
    return max(0.0, 1 - abs(n_corners - 4) / 4)


def edge_straightness(points: NDArray[np.float64], corners: CornerSet) -> float:
    """Mean perpendicular deviation of each edge's samples, against a 20-unit budget."""
    if len(corners) < 2:
        return 0.0

    deviations = []
    vertices = corners.points
    for i, idx in enumerate(edge_slices(len(points), corners)):
        if len(idx) <= 2:
            continue
        deviations.append(line_deviation(points[idx], vertices[i], vertices[(i + 1) % len(vertices)]))

    result = straightness(deviations, SQUARE_DEVIATION_BUDGET)
    return result if result is not None else 0.0


def right_angle_accuracy(vertices: NDArray[np.float64]) -> float:
    """Per-vertex closeness to 90°, cross-checked against the 360° angle sum."""
    if len(vertices) != 4:
        return 0.0

    angles = polygon_angles(vertices, MIN_VECTOR_MAGNITUDE)
    if not angles:
        return 0.0

    per_vertex = sum(angle_accuracy(a - 90.0, ANGLE_TOLERANCE_DEG, ANGLE_DECAY_DEG) for a in angles) / 4
    angle_sum = angle_accuracy(sum(angles) - 360.0, 0.0, ANGLE_SUM_DECAY_DEG)
    return per_vertex * 0.85 + angle_sum * 0.15


def length_balance(vertices: NDArray[np.float64]) -> float:
    if len(vertices) != 4:
        return 0.0
    return consistency(polygon_edges(vertices))


def aspect_accuracy(vertices: NDArray[np.float64]) -> float:
    """Diagonal ratio and averaged opposite-side ratio, both ideally 1."""
    if len(vertices) != 4:
        return 0.0

    diagonal_ratio = min_max_ratio(distance(vertices[0], vertices[2]), distance(vertices[1], vertices[3]))
    sides = polygon_edges(vertices)
    width = (sides[0] + sides[2]) / 2
    height = (sides[1] + sides[3]) / 2
    return diagonal_ratio * 0.4 + min_max_ratio(float(width), float(height)) * 0.6


def measure_square(points: NDArray[np.float64]) -> dict[str, float]:
    corners = coarse_corners(points)
    vertices = corners.points
    return {
        "corner_count": float(len(corners)),
        "corner_accuracy": corner_count_accuracy(len(corners)),
        "straightness": edge_straightness(points, corners),
        "right_angle_accuracy": right_angle_accuracy(vertices),
        "length_balance": length_balance(vertices),
        "aspect_accuracy": aspect_accuracy(vertices),
    }


@analyzer(
    shape=Shape.SQUARE,
    min_points=12,
    policy=SQUARE_POLICY,
    description="Four right-angled corners joined by straight, equal edges",
)
def score_square(points: NDArray[np.float64]) -> ScoringResult:
    features = measure_square(points)
    accuracy = (
        features["corner_accuracy"] * 0.2
        + features["straightness"] * 0.2
        + features["right_angle_accuracy"] * 0.4
        + features["length_balance"] * 0.1
        + features["aspect_accuracy"] * 0.1
    )
    features["accuracy"] = accuracy
    gate = min(features["right_angle_accuracy"], features["corner_accuracy"])

    result = SQUARE_POLICY.grade(
        Shape.SQUARE,
        accuracy=accuracy,
        smoothness=smoothness(points),
        completeness=completeness(points),
        gate=gate,
        features=features,
    )
    logger.debug(
        "square: corners=%d right_angle=%.3f score=%s",
        int(features["corner_count"]),
        features["right_angle_accuracy"],
        result.score,
    )
    return result
