"""Gap catalog: empty spans between reference boxes.

A horizontal gap exists between two boxes when one ends before the other
begins on the X axis and their Y extents overlap; vertical gaps are the
same with the axes swapped. Discovery is quadratic in the number of
reference groups, so callers compute the catalog once per interaction
(see ``SnapSession``) rather than once per pointer sample.
"""

import logging

from snapline.constraints.bounds import get_common_bounds
from snapline.constraints.geometry import range_intersection
from snapline.constraints.reference import get_reference_groups
from snapline.dsl.schema import BoundingBox, Gap, ShapeSummary, ViewState, VisibleGaps

logger = logging.getLogger(__name__)


def _horizontal_gaps(bounds: list[BoundingBox]) -> list[Gap]:
    ordered = sorted(bounds, key=lambda b: b.min_x)
    gaps = []

    for i, start in enumerate(ordered):
        for end in ordered[i + 1:]:
            if start.max_x >= end.min_x:
                continue
            overlap = range_intersection((start.min_y, start.max_y), (end.min_y, end.max_y))
            if overlap is None:
                continue

            gaps.append(
                Gap(
                    start_bounds=start,
                    end_bounds=end,
                    start_side=((start.max_x, start.min_y), (start.max_x, start.max_y)),
                    end_side=((end.min_x, end.min_y), (end.min_x, end.max_y)),
                    overlap=overlap,
                    length=end.min_x - start.max_x,
                )
            )

    return gaps


def _vertical_gaps(bounds: list[BoundingBox]) -> list[Gap]:
    ordered = sorted(bounds, key=lambda b: b.min_y)
    gaps = []

    for i, start in enumerate(ordered):
        for end in ordered[i + 1:]:
            if start.max_y >= end.min_y:
                continue
            overlap = range_intersection((start.min_x, start.max_x), (end.min_x, end.max_x))
            if overlap is None:
                continue

            gaps.append(
                Gap(
                    start_bounds=start,
                    end_bounds=end,
                    start_side=((start.min_x, start.max_y), (start.max_x, start.max_y)),
                    end_side=((end.min_x, end.min_y), (end.max_x, end.min_y)),
                    overlap=overlap,
                    length=end.min_y - start.max_y,
                )
            )

    return gaps


def find_gaps(bounds: list[BoundingBox]) -> VisibleGaps:
    """Enumerate horizontal and vertical gaps between boxes.

    Args:
        bounds: One box per reference group.

    Returns:
        VisibleGaps with gaps ordered by their start box.
    """
    return VisibleGaps(
        horizontal_gaps=_horizontal_gaps(bounds),
        vertical_gaps=_vertical_gaps(bounds),
    )


def get_visible_gaps(
    shapes: list[ShapeSummary],
    selected: list[ShapeSummary],
    view_state: ViewState,
) -> VisibleGaps:
    """Build the gap catalog for an interaction on the given selection."""
    bounds = [get_common_bounds(group) for group in get_reference_groups(shapes, selected, view_state)]
    gaps = find_gaps(bounds)

    logger.debug(
        f"Gap catalog: {len(bounds)} groups, "
        f"{len(gaps.horizontal_gaps)} horizontal, {len(gaps.vertical_gaps)} vertical"
    )
    return gaps
