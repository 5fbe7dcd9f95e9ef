"""Tests for the square analyzer."""

from decimal import Decimal

import pytest

from shapegrader.engine import Shape, score_square
from shapegrader.engine.analyzers.square import (
    aspect_accuracy,
    corner_count_accuracy,
    length_balance,
    right_angle_accuracy,
)
from shapegrader.utils.geometry import as_path
from tests.conftest import RHOMBUS_VERTICES, SQUARE_VERTICES, arc_length_path, circle_path, polygon_path


def test_near_perfect_square(square_points):
    result = score_square(square_points)
    assert result.shape is Shape.SQUARE
    assert float(result.score) >= 90.0
    assert result.features["corner_count"] == 4
    assert result.features["right_angle_accuracy"] > 0.99


def test_rhombus_capped_by_angles():
    # Equal sides but 30°/150° corners: the ceiling wins over the other terms
    result = score_square(polygon_path(RHOMBUS_VERTICES, per_edge=20))
    assert float(result.score) <= 25.0


def test_circle_has_no_corners():
    result = score_square(circle_path())
    assert result.features["corner_count"] == 0
    assert float(result.score) <= 25.0


def test_too_short():
    result = score_square(polygon_path(SQUARE_VERTICES, per_edge=20)[:11])
    assert result.score == 0
    assert result.feedback == "Too short! Draw a bigger square."


def test_corner_count_accuracy():
    assert corner_count_accuracy(4) == 1.0
    assert corner_count_accuracy(3) == 0.75
    assert corner_count_accuracy(8) == 0.0


def test_vertex_checks_need_four_vertices():
    tri = as_path([(0, 0), (100, 0), (50, 80)])
    assert right_angle_accuracy(tri) == 0.0
    assert length_balance(tri) == 0.0
    assert aspect_accuracy(tri) == 0.0


def test_vertex_checks_on_ideal_square():
    square = as_path(SQUARE_VERTICES)
    assert right_angle_accuracy(square) == pytest.approx(1.0)
    assert length_balance(square) == pytest.approx(1.0)
    assert aspect_accuracy(square) == pytest.approx(1.0)


def test_rectangle_loses_balance_not_angles():
    rect = as_path([(0, 0), (400, 0), (400, 100), (0, 100)])
    assert right_angle_accuracy(rect) == pytest.approx(1.0)
    assert length_balance(rect) < 0.7
    assert aspect_accuracy(rect) < 0.7


@pytest.mark.parametrize("offset", [0, 20, 40, 60])
def test_stroke_starting_on_a_corner(offset):
    result = score_square(polygon_path(SQUARE_VERTICES, per_edge=20, offset=offset))
    assert result.features["corner_count"] == 4
    assert float(result.score) >= 90.0


def test_evenly_spaced_from_a_corner():
    result = score_square(arc_length_path(SQUARE_VERTICES, 80))
    assert result.features["corner_count"] == 4
    assert float(result.score) >= 90.0


def test_vertices_between_samples_are_capped():
    # Each vertex falls half-way between samples and shows up as two corners, so the
    # corner count gate caps the score. Sampling density is not normalised.
    result = score_square(arc_length_path(SQUARE_VERTICES, 80, phase=0.5))
    assert result.features["corner_count"] == 8
    assert result.score == Decimal("25.000")
