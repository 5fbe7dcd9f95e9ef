"""Shape-scoring engine: freehand paths in, graded ScoringResults out."""

from shapegrader.engine.registry import Shape, analyzer, get_registry, score_shape
from shapegrader.engine.result import ScoreDetails, ScoringResult
from shapegrader.engine.analyzers import score_circle, score_square, score_star, score_triangle

__all__ = [
    "Shape",
    "analyzer",
    "get_registry",
    "score_shape",
    "ScoreDetails",
    "ScoringResult",
    "score_circle",
    "score_star",
    "score_square",
    "score_triangle",
]
