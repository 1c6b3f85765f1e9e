"""Small geometry helpers shared by the snapping detectors."""

import math

from snapline.config import SNAP_PRECISION
from snapline.dsl.schema import Point


def rotate_point(point: Point, center: Point, angle: float) -> Point:
    """Rotate a point about a center by an angle in radians."""
    if angle == 0:
        return point

    x, y = point
    cx, cy = center
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return (
        (x - cx) * cos_a - (y - cy) * sin_a + cx,
        (x - cx) * sin_a + (y - cy) * cos_a + cy,
    )


def ranges_overlap(a: tuple[float, float], b: tuple[float, float]) -> bool:
    """Whether two closed ranges share at least one value."""
    return a[0] <= b[1] and b[0] <= a[1]


def range_intersection(
    a: tuple[float, float], b: tuple[float, float]
) -> tuple[float, float] | None:
    """Shared part of two closed ranges, or None if they are disjoint."""
    start = max(a[0], b[0])
    end = min(a[1], b[1])
    if start <= end:
        return (start, end)
    return None


def are_roughly_equal(a: float, b: float, precision: float = SNAP_PRECISION) -> bool:
    """Compare two values allowing for floating point error."""
    return abs(a - b) <= precision
