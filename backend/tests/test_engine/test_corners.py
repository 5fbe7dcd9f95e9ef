"""Tests for the coarse and fine corner extractors."""

import pytest

from shapegrader.engine.config import CornerConfig
from shapegrader.engine.corners import coarse_corners, edge_slices, extract_corners, fine_corners
from shapegrader.utils.geometry import as_path
from tests.conftest import (
    SQUARE_VERTICES,
    TRIANGLE_VERTICES,
    arc_length_path,
    circle_path,
    polygon_path,
    square_path,
    triangle_path,
)


def test_coarse_finds_square_vertices():
    pts = as_path(square_path())
    corners = coarse_corners(pts)
    assert corners.indices == (10, 30, 50, 70)
    assert corners.points.tolist() == [[200.0, 0.0], [200.0, 200.0], [0.0, 200.0], [0.0, 0.0]]


def test_coarse_ignores_smooth_circle():
    assert len(coarse_corners(as_path(circle_path(n=64)))) == 0


def test_coarse_keeps_every_qualifying_sample():
    # A hairpin: every sample around the turn qualifies and none are merged
    pts = as_path([(float(i), 0.0) for i in range(10)] + [(float(9 - i), 1.0) for i in range(10)])
    assert len(coarse_corners(pts)) > 1


def test_fine_finds_three_triangle_vertices():
    pts = as_path(triangle_path())
    corners = fine_corners(pts)
    assert corners.indices == (15, 45, 75)
    assert all(s == pytest.approx(2.0944, abs=1e-3) for s in corners.sharpness)


def test_fine_keeps_sharpest_three_in_path_order():
    # Square has four equal vertices; the cap keeps three, returned in path order
    corners = fine_corners(as_path(square_path()))
    assert len(corners) == 3
    assert list(corners.indices) == sorted(corners.indices)


def test_merge_distance_drops_nearby_candidates():
    pts = as_path(square_path())
    unmerged = extract_corners(pts, CornerConfig(window=3, threshold_deg=30.0))
    merged = extract_corners(pts, CornerConfig(window=3, threshold_deg=30.0, merge_distance=30.0))
    assert len(unmerged) > len(merged) == 4


def test_short_path_has_no_corners():
    assert len(fine_corners(as_path([(0, 0), (1, 1), (2, 0)]))) == 0


def test_edge_slices_wrap_around():
    pts = as_path(square_path())
    edges = edge_slices(len(pts), coarse_corners(pts))
    # Last edge also holds the duplicated closing sample
    assert [len(e) for e in edges] == [21, 21, 21, 22]
    assert edges[-1][0] == 70 and edges[-1][-1] == 10


@pytest.mark.parametrize("offset", [0, 20, 40, 60])
def test_coarse_finds_vertex_where_stroke_starts(offset):
    corners = coarse_corners(as_path(polygon_path(SQUARE_VERTICES, per_edge=20, offset=offset)))
    assert corners.indices == (0, 20, 40, 60)


def test_fine_finds_vertex_where_stroke_starts():
    corners = fine_corners(as_path(polygon_path(TRIANGLE_VERTICES, per_edge=30, offset=30)))
    assert corners.indices == (0, 30, 60)
    assert corners.points[0].tolist() == [300.0, 0.0]


def test_open_stroke_ends_are_not_corners():
    # An L that does not close: only the bend is a vertex
    pts = as_path([(float(i), 0.0) for i in range(10)] + [(9.0, float(j)) for j in range(1, 10)])
    corners = coarse_corners(pts)
    assert all(abs(i - 9) <= 1 for i in corners.indices)
    assert len(corners) >= 1


def test_off_sample_vertices_are_doubled_by_coarse():
    # Evenly spaced by arc length with every vertex half-way between two samples
    corners = coarse_corners(as_path(arc_length_path(SQUARE_VERTICES, 80, phase=0.5)))
    assert len(corners) == 8
