"""Tests for the five-pointed star analyzer."""

import math
from decimal import Decimal

import pytest

from shapegrader.engine import Shape, score_star
from shapegrader.engine.analyzers.star import (
    angle_consistency,
    find_star_peaks,
    peak_count_accuracy,
    radius_ratio_accuracy,
)
from shapegrader.engine.config import STAR_RADIUS_RATIO
from shapegrader.utils.geometry import as_path
from tests.conftest import arc_length_path, circle_path, polygon_path, star_path, star_vertices


def _pentagon():
    return [
        (200 + 100 * math.cos(-math.pi / 2 + k * 2 * math.pi / 5), 200 + 100 * math.sin(-math.pi / 2 + k * 2 * math.pi / 5))
        for k in range(5)
    ]


def test_regular_pentagram(star_points):
    result = score_star(star_points)
    assert result.shape is Shape.STAR5
    assert float(result.score) >= 90.0
    assert result.features["peak_count"] == 5
    assert abs(result.features["radius_ratio"] - STAR_RADIUS_RATIO) < 0.02


def test_circle_is_not_a_star():
    result = score_star(circle_path())
    assert result.features["peak_count"] == 0
    assert float(result.score) <= 25.0


def test_pentagon_is_too_shallow():
    # Inner/outer ratio cos 36° ≈ 0.81 is far from a pentagram's
    result = score_star(polygon_path(_pentagon(), per_edge=8))
    assert float(result.score) <= 25.0


def test_too_short():
    result = score_star(star_path()[:14])
    assert result.score == 0
    assert result.feedback == "Too short! Draw a bigger star."


def test_peak_count_accuracy():
    assert peak_count_accuracy(5) == 1.0
    assert peak_count_accuracy(4) == 0.8
    assert peak_count_accuracy(10) == 0.0


def test_radius_ratio_accuracy_peaks_at_golden_target():
    assert radius_ratio_accuracy(STAR_RADIUS_RATIO) == 1.0
    assert radius_ratio_accuracy(0.6) < radius_ratio_accuracy(0.45)
    assert radius_ratio_accuracy(float("nan")) == 0.0


def test_find_star_peaks_ignores_plateaus():
    r = as_path([(1.0, 0.0)] * 20)[:, 0]
    assert find_star_peaks(r) == []


def test_angle_consistency_even_spacing():
    tips = as_path(
        [(math.cos(k * 2 * math.pi / 5), math.sin(k * 2 * math.pi / 5)) for k in range(5)]
    )
    assert angle_consistency(tips, (0.0, 0.0)) > 0.999
    assert angle_consistency(tips[:2], (0.0, 0.0)) == 0.0


def test_find_star_peaks_wraps_on_closed_profile():
    r = as_path([(10.0, 0.0)] + [(5.0, 0.0)] * 8 + [(8.0, 0.0)])[:, 0]
    assert find_star_peaks(r) == []
    assert find_star_peaks(r, cyclic=True) == [0]


def test_stroke_starting_on_a_tip():
    result = score_star(polygon_path(star_vertices(), per_edge=8, offset=0))
    assert result.features["peak_count"] == 5
    assert float(result.score) >= 90.0


@pytest.mark.parametrize("n", [50, 80])
def test_evenly_spaced_from_a_tip(n):
    result = score_star(arc_length_path(star_vertices(), n))
    assert result.features["peak_count"] == 5
    assert float(result.score) >= 90.0


def test_dense_sampling_flattens_the_tips():
    # 16 samples per side: the tips no longer stand 10% above their neighbours
    result = score_star(arc_length_path(star_vertices(), 160))
    assert result.features["peak_count"] == 0
    assert result.score == Decimal("25.000")
