"""Guide lines rendered for winning snap candidates."""

from snapline.constraints.geometry import range_intersection
from snapline.dsl.schema import (
    BoundingBox,
    GapDirection,
    GapSnap,
    GapSnapLine,
    PointSnap,
    PointSnapLine,
)


def create_point_snap_lines(point_snaps: list[PointSnap]) -> list[PointSnapLine]:
    """One line per matched point pair."""
    return [PointSnapLine(points=snap.points) for snap in point_snaps]


def create_gap_snap_lines(selection_bounds: BoundingBox, gap_snaps: list[GapSnap]) -> list[GapSnapLine]:
    """Two segments per gap snap, drawn through the middle of the shared span.

    Args:
        selection_bounds: Box of the selection at its final, snapped position.
        gap_snaps: Winning gap candidates.

    Returns:
        Gap lines; a snap whose overlap no longer meets the selection is dropped.
    """
    min_x, min_y = selection_bounds.min_x, selection_bounds.min_y
    max_x, max_y = selection_bounds.max_x, selection_bounds.max_y
    lines = []

    for snap in gap_snaps:
        gap = snap.gap
        start = gap.start_bounds
        end = gap.end_bounds

        if snap.direction in (GapDirection.CENTER_HORIZONTAL, GapDirection.SIDE_LEFT, GapDirection.SIDE_RIGHT):
            intersection = range_intersection((min_y, max_y), gap.overlap)
            if intersection is None:
                continue
            y = (intersection[0] + intersection[1]) / 2

            if snap.direction == GapDirection.CENTER_HORIZONTAL:
                segments = (
                    ((gap.start_side[0][0], y), (min_x, y)),
                    ((max_x, y), (gap.end_side[0][0], y)),
                )
            elif snap.direction == GapDirection.SIDE_RIGHT:
                segments = (
                    ((start.max_x, y), (end.min_x, y)),
                    ((end.max_x, y), (min_x, y)),
                )
            else:
                segments = (
                    ((max_x, y), (start.min_x, y)),
                    ((start.max_x, y), (end.min_x, y)),
                )
            lines.append(GapSnapLine(direction="horizontal", points=segments))
            continue

        intersection = range_intersection((min_x, max_x), gap.overlap)
        if intersection is None:
            continue
        x = (intersection[0] + intersection[1]) / 2

        if snap.direction == GapDirection.CENTER_VERTICAL:
            segments = (
                ((x, gap.start_side[0][1]), (x, min_y)),
                ((x, max_y), (x, gap.end_side[0][1])),
            )
        elif snap.direction == GapDirection.SIDE_TOP:
            segments = (
                ((x, max_y), (x, start.min_y)),
                ((x, start.max_y), (x, end.min_y)),
            )
        else:
            segments = (
                ((x, start.max_y), (x, end.min_y)),
                ((x, end.max_y), (x, min_y)),
            )
        lines.append(GapSnapLine(direction="vertical", points=segments))

    return lines
