"""Engine calibration: corner-extractor presets and tuning constants.

Values were tuned against hand-drawn strokes on a pixel canvas. Point density is
not normalised, so every window and distance here assumes raw pointer samples.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CornerConfig:
    """Controls how a dense path is reduced to candidate vertices."""

    # Look-behind / look-ahead in samples
    window: int
    # Minimum turning angle for a corner candidate (degrees)
    threshold_deg: float
    # Candidates closer than this to an accepted corner are dropped (None = keep all)
    merge_distance: float | None = None
    # Keep only the sharpest N (None = unlimited)
    max_corners: int | None = None


# Quadrilaterals: every qualifying sample, unfiltered
COARSE_CORNERS = CornerConfig(window=2, threshold_deg=60.0)

# Triangles: more sensitive, merged and capped at three vertices
FINE_CORNERS = CornerConfig(window=3, threshold_deg=30.0, merge_distance=30.0, max_corners=3)

# A stroke is a closed loop when its closing gap is at most this many median sample steps
LOOP_MAX_GAP_STEPS = 2.0

# Edge vectors shorter than this are skipped when measuring vertex angles
MIN_VECTOR_MAGNITUDE = 1.0

# Vertex angle grading: flat inside ±tolerance, exp decay outside (degrees)
ANGLE_TOLERANCE_DEG = 5.0
ANGLE_DECAY_DEG = 10.0
# Decay for the interior-angle-sum cross-check (degrees)
ANGLE_SUM_DECAY_DEG = 20.0

# Mean perpendicular deviation that zeroes edge straightness (canvas units)
SQUARE_DEVIATION_BUDGET = 20.0
TRIANGLE_DEVIATION_BUDGET = 10.0

# Relaxed edge-membership test for triangle edges
TRIANGLE_EDGE_MAX_DISTANCE = 25.0
TRIANGLE_EDGE_SLACK = 1.3  # d(p,a) + d(p,b) <= slack * |ab|
TRIANGLE_MAX_SIDE_RATIO = 3.0

# Circle: exp(-PI_DECAY * relative error of the traced π estimate)
PI_DECAY = 10.0

# Star
STAR_POINTS = 5
STAR_PEAK_PROMINENCE = 0.1
# Inner/outer radius of a regular pentagram: 1/φ² = 1 - 1/φ
GOLDEN_RATIO = (1 + 5 ** 0.5) / 2
STAR_RADIUS_RATIO = 1 / GOLDEN_RATIO ** 2
STAR_RATIO_DECAY = 4.0
STAR_GAP_DECAY = 1.5
