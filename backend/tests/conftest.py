"""Shared test fixtures: synthetic strokes for each target shape."""

from __future__ import annotations

import math

import pytest


def circle_path(n: int = 64, radius: float = 100.0, center: tuple[float, float] = (200.0, 200.0)):
    """n samples evenly spaced on a circle, not repeating the start."""
    cx, cy = center
    return [
        (cx + radius * math.cos(2 * math.pi * k / n), cy + radius * math.sin(2 * math.pi * k / n))
        for k in range(n)
    ]


def polygon_path(vertices, per_edge: int, offset: int | None = None):
    """Closed stroke around ``vertices`` with ``per_edge`` steps per side.

    Every vertex lands exactly on a sample, and the last sample repeats the first.
    The stroke starts ``offset`` steps past the first vertex: mid-way along the first
    side by default, on a vertex when ``offset`` is a multiple of ``per_edge``.
    """
    samples = []
    n = len(vertices)
    for i in range(n):
        (x0, y0), (x1, y1) = vertices[i], vertices[(i + 1) % n]
        for j in range(per_edge):
            t = j / per_edge
            samples.append((x0 + (x1 - x0) * t, y0 + (y1 - y0) * t))

    if offset is None:
        offset = per_edge // 2
    rotated = samples[offset:] + samples[:offset]
    return rotated + [rotated[0]]


def arc_length_path(vertices, n: int, phase: float = 0.0):
    """``n`` samples evenly spaced by arc length around the outline of ``vertices``.

    Sample k sits (k + phase) steps past the first vertex. The start is not repeated,
    and with a fractional ``phase`` the vertices fall between samples.
    """
    outline = list(vertices) + [vertices[0]]
    sides = [math.dist(a, b) for a, b in zip(outline, outline[1:])]
    step = sum(sides) / n

    samples = []
    for k in range(n):
        s = (k + phase) * step
        i = 0
        while i < len(sides) - 1 and s > sides[i]:
            s -= sides[i]
            i += 1
        (x0, y0), (x1, y1) = outline[i], outline[i + 1]
        t = s / sides[i]
        samples.append((x0 + (x1 - x0) * t, y0 + (y1 - y0) * t))
    return samples


def star_vertices(outer: float = 100.0, inner: float | None = None, center=(200.0, 200.0)):
    """Outline of a regular pentagram: tips and inner vertices alternating."""
    if inner is None:
        inner = outer / ((1 + math.sqrt(5)) / 2) ** 2
    cx, cy = center
    vertices = []
    for k in range(10):
        r = outer if k % 2 == 0 else inner
        angle = -math.pi / 2 + k * math.pi / 5
        vertices.append((cx + r * math.cos(angle), cy + r * math.sin(angle)))
    return vertices


SQUARE_VERTICES = [(0.0, 0.0), (200.0, 0.0), (200.0, 200.0), (0.0, 200.0)]

TRIANGLE_VERTICES = [(0.0, 0.0), (300.0, 0.0), (150.0, 300.0 * math.sqrt(3) / 2)]

# 30° / 150° corners, equal sides
RHOMBUS_VERTICES = [
    (0.0, 0.0),
    (200.0, 0.0),
    (200.0 + 200.0 * math.cos(math.pi / 6), 200.0 * math.sin(math.pi / 6)),
    (200.0 * math.cos(math.pi / 6), 200.0 * math.sin(math.pi / 6)),
]

# 90° / 53.1° / 36.9°
RIGHT_TRIANGLE_VERTICES = [(0.0, 0.0), (400.0, 0.0), (0.0, 300.0)]


def square_path():
    return polygon_path(SQUARE_VERTICES, per_edge=20)


def triangle_path():
    return polygon_path(TRIANGLE_VERTICES, per_edge=30)


def star_path():
    return polygon_path(star_vertices(), per_edge=8)


@pytest.fixture
def circle_points():
    return circle_path()


@pytest.fixture
def square_points():
    return square_path()


@pytest.fixture
def triangle_points():
    return triangle_path()


@pytest.fixture
def star_points():
    return star_path()
