"""ScoringResult: the engine's only output type."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from shapegrader.engine.registry import Shape

SCORE_QUANTUM = Decimal("0.001")
MAX_SCORE = Decimal("100.000")
MIN_SCORE = Decimal("0.000")


def quantize_score(value: float | Decimal) -> Decimal:
    """Clamp into [0, 100] and fix to exactly three fractional digits.

    Non-finite input maps to 0.
    """
    value = Decimal(value)
    if not value.is_finite():
        return MIN_SCORE
    value = min(MAX_SCORE, max(MIN_SCORE, value))
    return value.quantize(SCORE_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ScoreDetails:
    """Independent integer percentages, each in [0, 100]."""

    accuracy: int = 0
    smoothness: int = 0
    completeness: int = 0


@dataclass(frozen=True)
class ScoringResult:
    shape: Shape
    score: Decimal
    feedback: str
    details: ScoreDetails = field(default_factory=ScoreDetails)
    # Analyzer measurements, informational only
    features: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def score_text(self) -> str:
        return f"{self.score:.3f}"
