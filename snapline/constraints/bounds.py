"""Bounding boxes and corner sets for shapes and shape groups.

Corner extraction depends on the shape kind. Rectangular-cornered kinds snap
by their rotated box corners; diamonds and ellipses snap by their rotated side
apexes, since those are the points that actually touch neighbouring shapes.
Groups of several shapes always snap by their common box.
"""

import math
from typing import Callable

from snapline.constraints.geometry import rotate_point
from snapline.dsl.schema import BoundingBox, Point, ShapeKind, ShapeSummary, Vector


def _shape_box(shape: ShapeSummary, drag_offset: Vector | None) -> tuple[float, float, float, float]:
    x1 = shape.x
    y1 = shape.y
    if drag_offset is not None:
        x1 += drag_offset.x
        y1 += drag_offset.y
    return x1, y1, x1 + shape.width, y1 + shape.height


def _box_corners(shape: ShapeSummary, drag_offset: Vector | None) -> list[Point]:
    """Rotated corners of the shape's box: TL, TR, BL, BR."""
    x1, y1, x2, y2 = _shape_box(shape, drag_offset)
    center = ((x1 + x2) / 2, (y1 + y2) / 2)
    return [
        rotate_point((x1, y1), center, shape.angle),
        rotate_point((x2, y1), center, shape.angle),
        rotate_point((x1, y2), center, shape.angle),
        rotate_point((x2, y2), center, shape.angle),
    ]


def _side_midpoints(shape: ShapeSummary, drag_offset: Vector | None) -> list[Point]:
    """Rotated side apexes: left, top, right, bottom."""
    x1, y1, x2, y2 = _shape_box(shape, drag_offset)
    cx = (x1 + x2) / 2
    cy = (y1 + y2) / 2
    center = (cx, cy)
    return [
        rotate_point((x1, cy), center, shape.angle),
        rotate_point((cx, y1), center, shape.angle),
        rotate_point((x2, cy), center, shape.angle),
        rotate_point((cx, y2), center, shape.angle),
    ]


CornerExtractor = Callable[[ShapeSummary, Vector | None], list[Point]]

_CORNER_EXTRACTORS: dict[ShapeKind, CornerExtractor] = {
    ShapeKind.DIAMOND: _side_midpoints,
    ShapeKind.ELLIPSE: _side_midpoints,
}


def _ellipse_bounds(shape: ShapeSummary) -> BoundingBox:
    cx, cy = shape.center
    a = shape.width / 2
    b = shape.height / 2
    cos_a = math.cos(shape.angle)
    sin_a = math.sin(shape.angle)
    half_w = math.hypot(a * cos_a, b * sin_a)
    half_h = math.hypot(a * sin_a, b * cos_a)
    return BoundingBox(min_x=cx - half_w, min_y=cy - half_h, max_x=cx + half_w, max_y=cy + half_h)


def get_element_bounds(shape: ShapeSummary) -> BoundingBox:
    """Axis-aligned box of a single shape, taking rotation into account."""
    if shape.angle == 0:
        return BoundingBox(
            min_x=shape.x,
            min_y=shape.y,
            max_x=shape.x + shape.width,
            max_y=shape.y + shape.height,
        )

    if shape.kind == ShapeKind.ELLIPSE:
        return _ellipse_bounds(shape)
    if shape.kind == ShapeKind.DIAMOND:
        return BoundingBox.from_points(_side_midpoints(shape, None))
    return BoundingBox.from_points(_box_corners(shape, None))


def get_common_bounds(shapes: list[ShapeSummary]) -> BoundingBox | None:
    """Union of the shapes' boxes, or None for no shapes."""
    bounds = None
    for shape in shapes:
        box = get_element_bounds(shape)
        bounds = box if bounds is None else bounds.union(box)
    return bounds


def get_dragged_elements_bounds(
    shapes: list[ShapeSummary], drag_offset: Vector
) -> BoundingBox | None:
    """Common box of the shapes moved by a drag offset."""
    bounds = get_common_bounds(shapes)
    if bounds is None:
        return None
    return bounds.translate(drag_offset)


def get_elements_corners(
    shapes: list[ShapeSummary],
    omit_center: bool = False,
    bounding_box_corners: bool = False,
    drag_offset: Vector | None = None,
) -> list[Point]:
    """Canonical snap points of one shape or a group of shapes.

    Args:
        shapes: The shape, or the members of a group.
        omit_center: Leave out the center point.
        bounding_box_corners: Use box corners even for round shapes.
        drag_offset: Evaluate the shapes as if moved by this offset.

    Returns:
        Corner points followed by the center unless omitted.
    """
    if not shapes:
        return []

    if len(shapes) == 1:
        shape = shapes[0]
        extractor = _box_corners
        if not bounding_box_corners:
            extractor = _CORNER_EXTRACTORS.get(shape.kind, _box_corners)

        corners = extractor(shape, drag_offset)
        if omit_center:
            return corners

        x1, y1, x2, y2 = _shape_box(shape, drag_offset)
        return corners + [((x1 + x2) / 2, (y1 + y2) / 2)]

    bounds = get_dragged_elements_bounds(shapes, drag_offset or Vector())
    corners = bounds.corners
    if omit_center:
        return corners
    return corners + [bounds.center]
