"""Snapping engine module - alignment and equal spacing while shapes move."""

from snapline.constraints.bounds import (
    get_common_bounds,
    get_dragged_elements_bounds,
    get_element_bounds,
    get_elements_corners,
)
from snapline.constraints.gap_snaps import get_gap_snaps
from snapline.constraints.gaps import find_gaps, get_visible_gaps
from snapline.constraints.guides import create_gap_snap_lines, create_point_snap_lines
from snapline.constraints.nearest import NearestSnaps, SnapAccumulator
from snapline.constraints.point_snaps import get_point_snaps
from snapline.constraints.reference import (
    get_maximum_groups,
    get_reference_elements,
    get_reference_groups,
    get_reference_snap_points,
    get_visible_and_non_selected_elements,
)
from snapline.constraints.snapping import (
    SnapSession,
    get_snap_distance,
    get_snap_lines_at_pointer,
    is_active_tool_non_linear_snappable,
    is_snapping_enabled,
    snap_dragged_elements,
    snap_new_element,
    snap_resizing_elements,
)

__all__ = [
    # Orchestration
    "SnapSession",
    "get_snap_distance",
    "get_snap_lines_at_pointer",
    "is_active_tool_non_linear_snappable",
    "is_snapping_enabled",
    "snap_dragged_elements",
    "snap_new_element",
    "snap_resizing_elements",
    # Bounds
    "get_common_bounds",
    "get_dragged_elements_bounds",
    "get_element_bounds",
    "get_elements_corners",
    # Reference set
    "get_maximum_groups",
    "get_reference_elements",
    "get_reference_groups",
    "get_reference_snap_points",
    "get_visible_and_non_selected_elements",
    # Gaps
    "find_gaps",
    "get_visible_gaps",
    # Detectors
    "NearestSnaps",
    "SnapAccumulator",
    "get_gap_snaps",
    "get_point_snaps",
    # Guide lines
    "create_gap_snap_lines",
    "create_point_snap_lines",
]
