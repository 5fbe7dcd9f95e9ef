"""Analyzer registry: every shape analyzer is a standalone function registered via decorator.

Usage:
    @analyzer(shape=Shape.CIRCLE, min_points=10, policy=CIRCLE_POLICY)
    def score_circle(points: NDArray[np.float64]) -> ScoringResult:
        ...

The decorator returns the public entry point: it coerces the input to an Nx2 array,
applies the minimum-length gate and silences numpy overflow warnings, so the body only
ever sees a path long enough to measure.
"""

from __future__ import annotations

import enum
import functools
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable, Union

import numpy as np
from numpy.typing import NDArray

from shapegrader.engine.policy import ShapePolicy
from shapegrader.engine.result import ScoringResult
from shapegrader.utils.geometry import Point, as_path

logger = logging.getLogger(__name__)

PathLike = Union[Iterable[Point], NDArray[np.float64]]
AnalyzerFn = Callable[[NDArray[np.float64]], ScoringResult]


class Shape(str, enum.Enum):
    CIRCLE = "circle"
    STAR5 = "star5"
    SQUARE = "square"
    TRIANGLE = "triangle"


@dataclass(frozen=True)
class AnalyzerSpec:
    shape: Shape
    fn: Callable[[PathLike], ScoringResult]
    min_points: int
    policy: ShapePolicy
    description: str = ""


class AnalyzerRegistry:
    """Shape → analyzer lookup."""

    def __init__(self) -> None:
        self._analyzers: dict[Shape, AnalyzerSpec] = {}

    def register(self, spec: AnalyzerSpec) -> None:
        if spec.shape in self._analyzers:
            raise ValueError(f"Duplicate analyzer for shape: {spec.shape.value}")
        self._analyzers[spec.shape] = spec
        logger.debug("Registered analyzer %s (min %d points)", spec.shape.value, spec.min_points)

    def get(self, shape: Shape | str) -> AnalyzerSpec:
        return self._analyzers[Shape(shape)]

    def all(self) -> list[AnalyzerSpec]:
        return [self._analyzers[s] for s in Shape if s in self._analyzers]

    @property
    def count(self) -> int:
        return len(self._analyzers)


# Module-level singleton
_registry = AnalyzerRegistry()


def get_registry() -> AnalyzerRegistry:
    return _registry


def analyzer(
    *,
    shape: Shape,
    min_points: int,
    policy: ShapePolicy,
    description: str = "",
    registry: AnalyzerRegistry | None = None,
):
    """Decorator to register a shape analyzer."""

    def decorator(fn: AnalyzerFn) -> Callable[[PathLike], ScoringResult]:
        @functools.wraps(fn)
        def entry(points: PathLike) -> ScoringResult:
            path = as_path(points)
            if len(path) < min_points:
                logger.debug("%s: %d points, below minimum %d", shape.value, len(path), min_points)
                return policy.reject(shape)
            with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
                return fn(path)

        (registry or _registry).register(
            AnalyzerSpec(
                shape=shape,
                fn=entry,
                min_points=min_points,
                policy=policy,
                description=description,
            )
        )
        return entry

    return decorator


def score_shape(shape: Shape | str, points: PathLike) -> ScoringResult:
    """Dispatch to the analyzer for ``shape``.

    Unknown shape ids raise ValueError; callers are expected to validate first.
    """
    return get_registry().get(shape).fn(points)
