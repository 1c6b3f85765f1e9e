"""Gap snap detection: equal spacing and centering between reference boxes."""

from snapline.constraints.geometry import ranges_overlap
from snapline.constraints.nearest import NearestSnaps, SnapAccumulator
from snapline.dsl.schema import BoundingBox, Gap, GapDirection, GapSnap, VisibleGaps


def _offer_first(
    nearest: NearestSnaps, gap: Gap, candidates: list[tuple[GapDirection, float, bool]]
) -> NearestSnaps:
    # A gap yields at most one candidate: the first one the axis accepts
    for direction, offset, applicable in candidates:
        if not applicable:
            continue
        updated = nearest.offer(GapSnap(direction=direction, gap=gap, offset=offset))
        if updated is not nearest:
            return updated
    return nearest


def _horizontal_gap_snaps(bounds: BoundingBox, gaps: list[Gap], nearest: NearestSnaps) -> NearestSnaps:
    center_x = (bounds.min_x + bounds.max_x) / 2

    for gap in gaps:
        if not ranges_overlap((bounds.min_y, bounds.max_y), gap.overlap):
            continue

        gap_mid_x = gap.start_side[0][0] + gap.length / 2

        # Side offsets continue the gap's spacing past its end or before its start
        distance_to_end = bounds.min_x - gap.end_bounds.max_x
        distance_to_start = gap.start_bounds.min_x - bounds.max_x

        nearest = _offer_first(
            nearest,
            gap,
            [
                (GapDirection.CENTER_HORIZONTAL, gap_mid_x - center_x, gap.length > bounds.width),
                (GapDirection.SIDE_RIGHT, gap.length - distance_to_end, True),
                (GapDirection.SIDE_LEFT, distance_to_start - gap.length, True),
            ],
        )

    return nearest


def _vertical_gap_snaps(bounds: BoundingBox, gaps: list[Gap], nearest: NearestSnaps) -> NearestSnaps:
    center_y = (bounds.min_y + bounds.max_y) / 2

    for gap in gaps:
        if not ranges_overlap((bounds.min_x, bounds.max_x), gap.overlap):
            continue

        gap_mid_y = gap.start_side[0][1] + gap.length / 2
        distance_to_start = gap.start_bounds.min_y - bounds.max_y
        distance_to_end = bounds.min_y - gap.end_bounds.max_y

        nearest = _offer_first(
            nearest,
            gap,
            [
                (GapDirection.CENTER_VERTICAL, gap_mid_y - center_y, gap.length > bounds.height),
                (GapDirection.SIDE_TOP, distance_to_start - gap.length, True),
                (GapDirection.SIDE_BOTTOM, gap.length - distance_to_end, True),
            ],
        )

    return nearest


def get_gap_snaps(
    selection_bounds: BoundingBox,
    visible_gaps: VisibleGaps,
    nearest: SnapAccumulator,
) -> SnapAccumulator:
    """Find the nearest gap alignments on each axis.

    Args:
        selection_bounds: Box of the moving selection at the candidate offset.
        visible_gaps: Gap catalog for the interaction.
        nearest: Candidates accumulated so far in this phase.

    Returns:
        The accumulator with the gap candidates folded in.
    """
    return SnapAccumulator(
        x=_horizontal_gap_snaps(selection_bounds, visible_gaps.horizontal_gaps, nearest.x),
        y=_vertical_gap_snaps(selection_bounds, visible_gaps.vertical_gaps, nearest.y),
    )
