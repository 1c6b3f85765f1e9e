"""Point-to-point snap detection."""

from snapline.constraints.nearest import SnapAccumulator
from snapline.dsl.schema import Point, PointSnap


def get_point_snaps(
    selection_points: list[Point],
    reference_points: list[Point],
    nearest: SnapAccumulator,
) -> SnapAccumulator:
    """Find the nearest point alignments on each axis.

    Every selection point is paired with every reference point; the X and Y
    offsets of a pair are offered to their axes independently.

    Args:
        selection_points: Snap points of the moving selection.
        reference_points: Pooled snap points of the reference groups.
        nearest: Candidates accumulated so far in this phase.

    Returns:
        The accumulator with the point candidates folded in.
    """
    x_snaps = nearest.x
    y_snaps = nearest.y

    for this_point in selection_points:
        for other_point in reference_points:
            offset_x = other_point[0] - this_point[0]
            offset_y = other_point[1] - this_point[1]

            # Skip building candidates that cannot be accepted
            if abs(offset_x) <= x_snaps.threshold:
                x_snaps = x_snaps.offer(PointSnap(points=(this_point, other_point), offset=offset_x))
            if abs(offset_y) <= y_snaps.threshold:
                y_snaps = y_snaps.offer(PointSnap(points=(this_point, other_point), offset=offset_y))

    return SnapAccumulator(x=x_snaps, y=y_snaps)
