"""Score aggregation policy: weighted blend capped by a ceiling ladder.

raw = accuracy·wA + smoothness·wB + completeness·wC (as a percentage), then capped by
the first ladder rung whose threshold the shape's defining feature fails to clear.
The cap is what stops a smooth, closed stroke with the wrong geometry from scoring well.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from shapegrader.engine.result import ScoreDetails, ScoringResult, quantize_score
from shapegrader.utils.math_helpers import clamp01, to_percent

if TYPE_CHECKING:
    from shapegrader.engine.registry import Shape


@dataclass(frozen=True)
class CeilingLadder:
    """Ordered (feature threshold, score ceiling) rungs, lowest threshold first."""

    rungs: tuple[tuple[float, float], ...]

    def __post_init__(self) -> None:
        thresholds = [t for t, _ in self.rungs]
        ceilings = [c for _, c in self.rungs]
        if thresholds != sorted(set(thresholds)):
            raise ValueError(f"Ladder thresholds must be strictly ascending: {thresholds}")
        if ceilings != sorted(set(ceilings)):
            raise ValueError(f"Ladder ceilings must be strictly ascending: {ceilings}")
        if any(not 0.0 <= c <= 100.0 for c in ceilings):
            raise ValueError(f"Ladder ceilings must lie in [0, 100]: {ceilings}")

    def ceiling(self, feature: float) -> float:
        """Cap for a defining-feature value; 100 once every rung is cleared."""
        feature = clamp01(feature)
        for threshold, cap in self.rungs:
            if feature < threshold:
                return cap
        return 100.0

    def apply(self, raw: float, feature: float) -> float:
        return min(raw, self.ceiling(feature))


@dataclass(frozen=True)
class FeedbackTable:
    """(minimum score, message) tiers, highest threshold first."""

    tiers: tuple[tuple[float, str], ...]

    def __post_init__(self) -> None:
        minimums = [m for m, _ in self.tiers]
        if not minimums or minimums != sorted(minimums, reverse=True):
            raise ValueError(f"Feedback tiers must be in descending order: {minimums}")
        if minimums[-1] > 0:
            raise ValueError("Lowest feedback tier must accept a score of 0")

    def select(self, score: float) -> str:
        for minimum, message in self.tiers:
            if score >= minimum:
                return message
        return self.tiers[-1][1]


@dataclass(frozen=True)
class Weights:
    accuracy: float
    smoothness: float
    completeness: float

    def __post_init__(self) -> None:
        if not math.isclose(self.accuracy + self.smoothness + self.completeness, 1.0):
            raise ValueError(f"Weights must sum to 1: {self}")

    def blend(self, accuracy: float, smoothness: float, completeness: float) -> float:
        return (
            accuracy * self.accuracy
            + smoothness * self.smoothness
            + completeness * self.completeness
        ) * 100


@dataclass(frozen=True)
class ShapePolicy:
    """Everything that turns three sub-scores into a graded result for one shape."""

    weights: Weights
    ladder: CeilingLadder
    feedback: FeedbackTable
    too_short: str

    def grade(
        self,
        shape: Shape,
        accuracy: float,
        smoothness: float,
        completeness: float,
        gate: float,
        features: Mapping[str, float] | None = None,
    ) -> ScoringResult:
        accuracy = clamp01(accuracy)
        smoothness = clamp01(smoothness)
        completeness = clamp01(completeness)

        raw = self.weights.blend(accuracy, smoothness, completeness)
        score = quantize_score(self.ladder.apply(raw, gate))

        return ScoringResult(
            shape=shape,
            score=score,
            feedback=self.feedback.select(float(score)),
            details=ScoreDetails(
                accuracy=to_percent(accuracy),
                smoothness=to_percent(smoothness),
                completeness=to_percent(completeness),
            ),
            features=_clean_features(features or {}),
        )

    def reject(self, shape: Shape) -> ScoringResult:
        """Zero result for a path below the shape's minimum length."""
        return ScoringResult(shape=shape, score=quantize_score(0), feedback=self.too_short)


def _clean_features(features: Mapping[str, float]) -> Mapping[str, float]:
    cleaned = {}
    for key, value in features.items():
        value = float(value)
        cleaned[key] = round(value, 4) if math.isfinite(value) else 0.0
    return MappingProxyType(cleaned)
