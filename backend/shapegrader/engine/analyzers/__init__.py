"""Per-shape analyzers. Importing this package registers all four."""

from shapegrader.engine.analyzers.circle import score_circle
from shapegrader.engine.analyzers.square import score_square
from shapegrader.engine.analyzers.star import score_star
from shapegrader.engine.analyzers.triangle import score_triangle

__all__ = ["score_circle", "score_star", "score_square", "score_triangle"]
