#!/usr/bin/env python3
"""
Blob Path Generator

Organic closed shapes: `complexity` vertices evenly spaced in angle around the
centre of a width x height box, each pushed in or out by a seeded radius draw,
then joined by a closed Catmull-Rom spline expressed as cubic Bezier segments.

The same (seed, size, complexity, contrast) always yields byte-identical path
data, and numbers are printed the way browser-side renderers print them so a
path can be used as a cross-host golden fixture. Sine and cosine come from
aurawall.utils.trig for the same reason.
"""

import math
from typing import List, Tuple

from aurawall.utils import trig
from aurawall.utils.numbers import fmt_num

from .seeded_random import SeededRandom

MIN_COMPLEXITY = 3

Point = Tuple[float, float]


def _to_rad(deg: float) -> float:
    return deg * (math.pi / 180.0)


def blob_points(
    width: float,
    height: float,
    seed: str,
    complexity: int = 5,
    contrast: float = 0.3,
) -> List[Point]:
    """
    Place the blob's vertices.

    Radius of vertex i is min(width, height) / 2 * (1 - contrast + draw * contrast).
    contrast is not clamped: values outside [0, 1] deliberately produce blobs
    larger or smaller than the nominal box.

    Raises:
        ValueError: If complexity is below 3
    """
    if complexity < MIN_COMPLEXITY:
        raise ValueError(f"Blob complexity must be >= {MIN_COMPLEXITY}, got {complexity}")

    random = SeededRandom.from_string(seed)
    size = min(width, height) / 2
    center_x = width / 2
    center_y = height / 2
    angle_step = 360 / complexity

    points = []
    for i in range(complexity):
        angle = i * angle_step
        radius_variance = random.next() * contrast
        r = size * (1 - contrast + radius_variance)
        points.append(
            (
                center_x + trig.cos(_to_rad(angle)) * r,
                center_y + trig.sin(_to_rad(angle)) * r,
            )
        )
    return points


def smooth_closed_path(points: List[Point]) -> str:
    """
    Join points with a closed C1-continuous curve.

    Each segment p1 -> p2 gets control points derived from its neighbours p0
    and p3 (tangent = (next - previous) / 6). The final segment lands back on
    the first point and the path is closed with Z.
    """
    count = len(points)
    first_x, first_y = points[0]
    d = f"M {fmt_num(first_x)} {fmt_num(first_y)}"

    for i in range(count):
        p0 = points[count - 1 if i == 0 else i - 1]
        p1 = points[i]
        p2 = points[(i + 1) % count]
        p3 = points[(i + 2) % count]

        cp1x = p1[0] + (p2[0] - p0[0]) / 6
        cp1y = p1[1] + (p2[1] - p0[1]) / 6
        cp2x = p2[0] - (p3[0] - p1[0]) / 6
        cp2y = p2[1] - (p3[1] - p1[1]) / 6

        d += (
            f" C {fmt_num(cp1x)} {fmt_num(cp1y)} {fmt_num(cp2x)} {fmt_num(cp2y)}"
            f" {fmt_num(p2[0])} {fmt_num(p2[1])}"
        )
    return d + " Z"


def generate_blob_path(
    width: float,
    height: float,
    seed: str,
    complexity: int = 5,
    contrast: float = 0.3,
) -> str:
    """
    Generate SVG path data for a blob.

    Args:
        width, height: Size of the box the blob is centred in
        seed: Seed string (shape ids are used by the compiler)
        complexity: Vertex count, at least 3
        contrast: 0 gives a regular polygon-ish circle, higher is lumpier

    Returns:
        Path data starting with M and ending with Z, `complexity` C segments
    """
    return smooth_closed_path(blob_points(width, height, seed, complexity, contrast))
