"""Star (five-pointed): peaks in the radius profile around the centroid.

A regular pentagram has five evenly spaced tips (72° apart) and an inner/outer
radius ratio of 1/φ². Ratio and spacing carry most of the weight; peak count and
tip-distance symmetry fill in the rest.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from shapegrader.engine.config import (
    LOOP_MAX_GAP_STEPS,
    STAR_GAP_DECAY,
    STAR_PEAK_PROMINENCE,
    STAR_POINTS,
    STAR_RADIUS_RATIO,
    STAR_RATIO_DECAY,
)
from shapegrader.engine.metrics import completeness, smoothness
from shapegrader.engine.policy import CeilingLadder, FeedbackTable, ShapePolicy, Weights
from shapegrader.engine.registry import Shape, analyzer
from shapegrader.engine.result import ScoringResult
from shapegrader.utils.geometry import Point, centroid, closed_loop, polar_angle, radii

logger = logging.getLogger(__name__)

STAR_POLICY = ShapePolicy(
    weights=Weights(accuracy=0.80, smoothness=0.10, completeness=0.10),
    ladder=CeilingLadder(
        rungs=(
            (0.2, 25.0),
            (0.4, 45.0),
            (0.6, 65.0),
            (0.8, 80.0),
            (0.9, 92.0),
        )
    ),
    feedback=FeedbackTable(
        tiers=(
            (95.0, "Perfect star!"),
            (85.0, "Excellent star!"),
            (75.0, "Good star! Make the points a little sharper."),
            (65.0, "Not bad. Make all five points clearer."),
            (45.0, "Close to a star, but it needs work."),
            (0.0, "Try again! Draw a star with five sharp points."),
        )
    ),
    too_short="Too short! Draw a bigger star.",
)


def find_star_peaks(r: NDArray[np.float64], cyclic: bool = False) -> list[int]:
    """Indices whose radius tops both neighbours on each side by a clear margin.

    A peak must exceed r[i±1] and r[i±2], and stand more than 10% above their mean.
    With ``cyclic`` the profile is a closed loop and neighbours wrap around its ends.
    """
    n = len(r)
    if cyclic:
        if n < 5:
            return []
        candidates = range(n)
    else:
        candidates = range(2, n - 2)

    peaks: list[int] = []
    for i in candidates:
        current = r[i]
        neighbours = (r[(i - 2) % n], r[(i - 1) % n], r[(i + 1) % n], r[(i + 2) % n])
        if not all(current > v for v in neighbours):
            continue
        avg = sum(neighbours) / 4
        if (current - avg) / current > STAR_PEAK_PROMINENCE:
            peaks.append(i)
    return peaks


def peak_count_accuracy(n_peaks: int) -> float:
    return max(0.0, 1 - abs(n_peaks - STAR_POINTS) / STAR_POINTS)


def radius_ratio_accuracy(ratio: float) -> float:
    if not math.isfinite(ratio):
        return 0.0
    return math.exp(-STAR_RATIO_DECAY * abs(ratio - STAR_RADIUS_RATIO))


def angle_consistency(peak_points: NDArray[np.float64], center: Point) -> float:
    """Mean exp falloff of each polar gap between sorted peaks from the ideal 72°."""
    if len(peak_points) < 3:
        return 0.0

    angles = sorted(polar_angle(p, center) for p in peak_points)
    expected_gap = 2 * math.pi / STAR_POINTS
    scores = []
    for i, angle in enumerate(angles):
        if i == len(angles) - 1:
            gap = angles[0] + 2 * math.pi - angle
        else:
            gap = angles[i + 1] - angle
        scores.append(math.exp(-abs(gap - expected_gap) * STAR_GAP_DECAY))
    return sum(scores) / len(scores)


def peak_symmetry(peak_points: NDArray[np.float64], center: Point) -> float:
    """Uniformity of tip distances from the centroid."""
    if len(peak_points) < STAR_POINTS:
        return 0.0

    d = radii(peak_points, center)
    avg = float(np.mean(d))
    if not avg > 0.0:
        return 0.0
    deviation = float(np.sum(np.abs(d - avg)) / avg)
    return max(0.0, 1 - deviation)


def measure_star(points: NDArray[np.float64]) -> dict[str, float]:
    loop = closed_loop(points, LOOP_MAX_GAP_STEPS)
    profile = loop if loop is not None else points
    center = centroid(profile)
    r = radii(profile, center)
    outer = float(np.max(r))
    ratio = float(np.min(r)) / outer if outer > 0.0 else float("nan")

    peaks = find_star_peaks(r, cyclic=loop is not None)
    peak_points = profile[peaks] if peaks else np.empty((0, 2))

    return {
        "peak_count": float(len(peaks)),
        "peak_accuracy": peak_count_accuracy(len(peaks)),
        "radius_ratio": ratio,
        "ratio_accuracy": radius_ratio_accuracy(ratio),
        "angle_consistency": angle_consistency(peak_points, center),
        "symmetry": peak_symmetry(peak_points, center),
    }


@analyzer(
    shape=Shape.STAR5,
    min_points=15,
    policy=STAR_POLICY,
    description="Five radius peaks, golden-ratio depth and 72° spacing",
)
def score_star(points: NDArray[np.float64]) -> ScoringResult:
    features = measure_star(points)
    accuracy = (
        features["peak_accuracy"] * 0.15
        + features["ratio_accuracy"] * 0.35
        + features["angle_consistency"] * 0.35
        + features["symmetry"] * 0.15
    )
    features["accuracy"] = accuracy
    gate = min(features["ratio_accuracy"], features["angle_consistency"])

    result = STAR_POLICY.grade(
        Shape.STAR5,
        accuracy=accuracy,
        smoothness=smoothness(points),
        completeness=completeness(points),
        gate=gate,
        features=features,
    )
    logger.debug(
        "star: peaks=%d ratio=%.3f gate=%.3f score=%s",
        int(features["peak_count"]),
        features["radius_ratio"],
        gate,
        result.score,
    )
    return result
