"""Tests for the analyzer registry and shape dispatch."""

import pytest

from shapegrader.engine import Shape, get_registry, score_circle, score_shape
from shapegrader.engine.analyzers.circle import CIRCLE_POLICY
from shapegrader.engine.registry import AnalyzerRegistry, analyzer


def test_all_four_shapes_registered():
    reg = get_registry()
    assert reg.count == 4
    assert [spec.shape for spec in reg.all()] == [Shape.CIRCLE, Shape.STAR5, Shape.SQUARE, Shape.TRIANGLE]
    assert {spec.shape: spec.min_points for spec in reg.all()} == {
        Shape.CIRCLE: 10,
        Shape.STAR5: 15,
        Shape.SQUARE: 12,
        Shape.TRIANGLE: 10,
    }


def test_dispatch_by_identifier(circle_points):
    assert score_shape("circle", circle_points) == score_circle(circle_points)
    assert score_shape(Shape.CIRCLE, circle_points).shape is Shape.CIRCLE


def test_unknown_identifier_raises():
    with pytest.raises(ValueError):
        score_shape("hexagon", [(0, 0)] * 20)


def test_duplicate_registration_rejected():
    reg = AnalyzerRegistry()

    @analyzer(shape=Shape.CIRCLE, min_points=3, policy=CIRCLE_POLICY, registry=reg)
    def first(points):
        return CIRCLE_POLICY.reject(Shape.CIRCLE)

    with pytest.raises(ValueError):

        @analyzer(shape=Shape.CIRCLE, min_points=3, policy=CIRCLE_POLICY, registry=reg)
        def second(points):
            return CIRCLE_POLICY.reject(Shape.CIRCLE)


def test_decorator_gates_short_paths_before_body():
    reg = AnalyzerRegistry()
    calls = []

    @analyzer(shape=Shape.STAR5, min_points=5, policy=CIRCLE_POLICY, registry=reg)
    def body(points):
        calls.append(len(points))
        return CIRCLE_POLICY.reject(Shape.STAR5)

    body([(0, 0)] * 4)
    body([(0, 0)] * 5)
    assert calls == [5]
    assert reg.get("star5").min_points == 5
