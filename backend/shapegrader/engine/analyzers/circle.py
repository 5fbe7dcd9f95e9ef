"""Circle: circularity from radius consistency, circumference ratio and a traced π.

The π estimate (perimeter / diameter) carries the most weight: an ellipse or a
rounded square can hold a steady-ish radius but still traces the wrong length.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from shapegrader.engine.config import PI_DECAY
from shapegrader.engine.metrics import completeness, smoothness
from shapegrader.engine.policy import CeilingLadder, FeedbackTable, ShapePolicy, Weights
from shapegrader.engine.registry import Shape, analyzer
from shapegrader.engine.result import ScoringResult
from shapegrader.utils.geometry import centroid, closed_perimeter, radii
from shapegrader.utils.math_helpers import consistency, min_max_ratio

logger = logging.getLogger(__name__)

CIRCLE_POLICY = ShapePolicy(
    weights=Weights(accuracy=0.90, smoothness=0.07, completeness=0.03),
    ladder=CeilingLadder(
        rungs=(
            (0.05, 15.0),
            (0.1, 30.0),
            (0.2, 50.0),
            (0.4, 70.0),
            (0.6, 85.0),
            (0.8, 95.0),
        )
    ),
    feedback=FeedbackTable(
        tiers=(
            (99.0, "Perfect circle!"),
            (95.0, "Excellent circle!"),
            (85.0, "Great circle! Keep the radius a little more even."),
            (70.0, "Good circle. Try to make it rounder."),
            (50.0, "Close to a circle, but it needs work."),
            (0.0, "Try again! Draw a rounder circle."),
        )
    ),
    too_short="Too short! Draw a bigger circle.",
)


def pi_accuracy(pi_estimate: float) -> float:
    """exp(-k · relative error) of a traced π estimate."""
    if not math.isfinite(pi_estimate):
        return 0.0
    return math.exp(-PI_DECAY * abs(pi_estimate - math.pi) / math.pi)


def circularity(radius_consistency: float, circumference_ratio: float, pi_acc: float) -> float:
    return radius_consistency * 0.3 + circumference_ratio * 0.2 + pi_acc * 0.5


def measure_circle(points: NDArray[np.float64]) -> dict[str, float]:
    center = centroid(points)
    r = radii(points, center)
    mean_radius = float(np.mean(r))
    perimeter = closed_perimeter(points)

    if not mean_radius > 0.0:
        return {
            "mean_radius": 0.0,
            "perimeter": perimeter,
            "radius_consistency": 0.0,
            "circumference_ratio": 0.0,
            "pi_estimate": 0.0,
            "pi_accuracy": 0.0,
            "circularity": 0.0,
        }

    radius_consistency = consistency(r)
    circumference_ratio = min_max_ratio(perimeter, 2 * math.pi * mean_radius)
    pi_estimate = perimeter / (2 * mean_radius)
    pi_acc = pi_accuracy(pi_estimate)

    return {
        "mean_radius": mean_radius,
        "perimeter": perimeter,
        "radius_consistency": radius_consistency,
        "circumference_ratio": circumference_ratio,
        "pi_estimate": pi_estimate,
        "pi_accuracy": pi_acc,
        "circularity": circularity(radius_consistency, circumference_ratio, pi_acc),
    }


@analyzer(
    shape=Shape.CIRCLE,
    min_points=10,
    policy=CIRCLE_POLICY,
    description="Circularity dominated by the traced π estimate",
)
def score_circle(points: NDArray[np.float64]) -> ScoringResult:
    features = measure_circle(points)
    accuracy = features["circularity"]

    result = CIRCLE_POLICY.grade(
        Shape.CIRCLE,
        accuracy=accuracy,
        smoothness=smoothness(points),
        completeness=completeness(points),
        gate=accuracy,
        features=features,
    )
    logger.debug("circle: circularity=%.3f pi=%.4f score=%s", accuracy, features["pi_estimate"], result.score)
    return result
