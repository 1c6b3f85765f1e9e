"""Snap orchestration for moving, resizing and drawing shapes.

Every interaction runs detection twice. The first pass, at the raw drag
offset, decides how far to nudge the selection. The second pass repeats
detection at the nudged position with a threshold of the snap precision so
the guide lines are built against where the selection really ends up;
lines from the first pass would drift from the applied offset.
"""

import logging

from snapline.config import SnapSettings, get_snap_settings
from snapline.constraints.bounds import (
    get_common_bounds,
    get_dragged_elements_bounds,
    get_elements_corners,
)
from snapline.constraints.gap_snaps import get_gap_snaps
from snapline.constraints.gaps import get_visible_gaps
from snapline.constraints.geometry import are_roughly_equal
from snapline.constraints.guides import create_gap_snap_lines, create_point_snap_lines
from snapline.constraints.nearest import SnapAccumulator
from snapline.constraints.point_snaps import get_point_snaps
from snapline.constraints.reference import (
    get_reference_groups,
    get_reference_snap_points,
    get_visible_and_non_selected_elements,
)
from snapline.dsl.schema import (
    LINEAR_KINDS,
    BoundingBox,
    GapSnap,
    Point,
    PointerSnapLine,
    PointerSnapResult,
    PointSnap,
    ShapeSummary,
    SnapResult,
    TransformHandle,
    Vector,
    ViewState,
    VisibleGaps,
)

logger = logging.getLogger(__name__)

NON_LINEAR_SNAPPABLE_TOOLS = frozenset({"rectangle", "ellipse", "diamond", "frame", "image"})


def get_snap_distance(zoom: float, settings: SnapSettings | None = None) -> float:
    """Snap distance in scene units for the given zoom."""
    settings = settings or get_snap_settings()
    return settings.distance / zoom


def is_snapping_enabled(
    view_state: ViewState,
    selected: list[ShapeSummary],
    modifier_held: bool | None = None,
) -> bool:
    """Whether snapping applies to this input sample.

    The modifier key inverts the persistent snap mode. A lone arrow or line
    never snaps, leaving the pointer free for binding.

    Args:
        view_state: Current view state.
        selected: Shapes being manipulated.
        modifier_held: Modifier key state, or None outside of an input event.
    """
    if len(selected) == 1 and selected[0].kind in LINEAR_KINDS:
        logger.debug(f"Snapping disabled for lone {selected[0].kind.value} {selected[0].id}")
        return False

    enabled = view_state.objects_snap_mode_enabled != bool(modifier_held)
    if not enabled:
        logger.debug(
            f"Snapping disabled: snap mode {view_state.objects_snap_mode_enabled}, modifier {modifier_held}"
        )
    return enabled


def is_active_tool_non_linear_snappable(tool: str) -> bool:
    """Whether shapes drawn with this tool snap while being created."""
    return tool in NON_LINEAR_SNAPPABLE_TOOLS


def _split_snaps(nearest: SnapAccumulator) -> tuple[list[PointSnap], list[GapSnap]]:
    point_snaps = [snap for snap in nearest.snaps if isinstance(snap, PointSnap)]
    gap_snaps = [snap for snap in nearest.snaps if isinstance(snap, GapSnap)]
    return point_snaps, gap_snaps


def snap_dragged_elements(
    shapes: list[ShapeSummary],
    selected: list[ShapeSummary],
    drag_offset: Vector,
    view_state: ViewState,
    modifier_held: bool | None = None,
    visible_gaps: VisibleGaps | None = None,
    settings: SnapSettings | None = None,
) -> SnapResult:
    """Snap a moving selection to reference corners and gaps.

    Args:
        shapes: All scene shapes.
        selected: Shapes being moved, at their pre-drag position.
        drag_offset: Raw pointer displacement since the drag began.
        view_state: Current view state.
        modifier_held: Modifier key state for this sample.
        visible_gaps: Cached gap catalog; computed when omitted.
        settings: Snap settings; the cached environment settings when omitted.

    Returns:
        SnapResult with the offset to add to ``drag_offset`` and guide lines.
    """
    settings = settings or get_snap_settings()

    if not selected:
        logger.debug("Drag snap skipped: empty selection")
        return SnapResult()
    if not is_snapping_enabled(view_state, selected, modifier_held):
        return SnapResult()

    reference_points = get_reference_snap_points(shapes, selected, view_state)
    if visible_gaps is None:
        visible_gaps = get_visible_gaps(shapes, selected, view_state)

    def detect(offset: Vector, threshold: float) -> SnapAccumulator:
        nearest = SnapAccumulator.start(threshold, settings.precision)
        nearest = get_point_snaps(
            get_elements_corners(selected, drag_offset=offset),
            reference_points,
            nearest,
        )
        return get_gap_snaps(get_dragged_elements_bounds(selected, offset), visible_gaps, nearest)

    nearest = detect(drag_offset, get_snap_distance(view_state.zoom, settings))
    snap_offset = Vector(x=nearest.x.offset, y=nearest.y.offset)

    snapped_offset = drag_offset + snap_offset
    nearest = detect(snapped_offset, settings.precision)

    point_snaps, gap_snaps = _split_snaps(nearest)
    snap_lines = [
        *create_point_snap_lines(point_snaps),
        *create_gap_snap_lines(get_dragged_elements_bounds(selected, snapped_offset), gap_snaps),
    ]

    logger.debug(
        f"Drag snap offset ({snap_offset.x:.2f}, {snap_offset.y:.2f}), "
        f"{len(point_snaps)} point and {len(gap_snaps)} gap snaps"
    )
    return SnapResult(snap_offset=snap_offset, snap_lines=snap_lines)


def _move_handle_edges(
    bounds: BoundingBox, handle: TransformHandle, offset: Vector
) -> tuple[float, float, float, float]:
    """Box edges after moving the ones a handle controls."""
    min_x, min_y, max_x, max_y = bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y

    if "e" in handle.value:
        max_x += offset.x
    elif "w" in handle.value:
        min_x += offset.x

    if "n" in handle.value:
        min_y += offset.y
    elif "s" in handle.value:
        max_y += offset.y

    return min_x, min_y, max_x, max_y


def _handle_snap_points(bounds: BoundingBox, handle: TransformHandle, offset: Vector) -> list[Point]:
    """Points a handle moves, at the dragged position."""
    min_x, min_y, max_x, max_y = _move_handle_edges(bounds, handle, offset)

    points = {
        TransformHandle.E: [(max_x, min_y), (max_x, max_y)],
        TransformHandle.W: [(min_x, min_y), (min_x, max_y)],
        TransformHandle.N: [(min_x, min_y), (max_x, min_y)],
        TransformHandle.S: [(min_x, max_y), (max_x, max_y)],
        TransformHandle.NE: [(max_x, min_y)],
        TransformHandle.NW: [(min_x, min_y)],
        TransformHandle.SE: [(max_x, max_y)],
        TransformHandle.SW: [(min_x, max_y)],
    }
    return points[handle]


def snap_resizing_elements(
    shapes: list[ShapeSummary],
    selected: list[ShapeSummary],
    drag_offset: Vector,
    view_state: ViewState,
    transform_handle: TransformHandle | None,
    modifier_held: bool | None = None,
    settings: SnapSettings | None = None,
) -> SnapResult:
    """Snap the edges a resize handle moves to reference corners.

    Args:
        shapes: All scene shapes.
        selected: Shapes being resized, at their size before the resize began.
        drag_offset: Handle displacement since the resize began.
        view_state: Current view state.
        transform_handle: The handle being dragged, or None.
        modifier_held: Modifier key state for this sample.
        settings: Snap settings; the cached environment settings when omitted.

    Returns:
        SnapResult whose offset only has the components the handle controls.
    """
    settings = settings or get_snap_settings()

    if not selected or transform_handle is None:
        logger.debug("Resize snap skipped: no selection or handle")
        return SnapResult()
    if not is_snapping_enabled(view_state, selected, modifier_held):
        return SnapResult()
    if len(selected) == 1 and not are_roughly_equal(selected[0].angle, 0, settings.precision):
        logger.debug(f"Snapping disabled for rotated resize of {selected[0].id}")
        return SnapResult()

    bounds = get_common_bounds(selected)
    reference_points = get_reference_snap_points(shapes, selected, view_state)

    nearest = get_point_snaps(
        _handle_snap_points(bounds, transform_handle, drag_offset),
        reference_points,
        SnapAccumulator.start(get_snap_distance(view_state.zoom, settings), settings.precision),
    )
    snap_offset = Vector(
        x=nearest.x.offset if transform_handle.controls_x else 0.0,
        y=nearest.y.offset if transform_handle.controls_y else 0.0,
    )

    # Dragging past the opposite edge flips the box
    min_x, min_y, max_x, max_y = _move_handle_edges(bounds, transform_handle, drag_offset + snap_offset)
    resized = BoundingBox.from_points([(min_x, min_y), (max_x, max_y)])
    nearest = get_point_snaps(
        resized.corners,
        reference_points,
        SnapAccumulator.start(settings.precision, settings.precision),
    )

    point_snaps, _ = _split_snaps(nearest)
    logger.debug(
        f"Resize snap via {transform_handle.value}: offset ({snap_offset.x:.2f}, {snap_offset.y:.2f})"
    )
    return SnapResult(snap_offset=snap_offset, snap_lines=create_point_snap_lines(point_snaps))


def snap_new_element(
    shapes: list[ShapeSummary],
    new_shape: ShapeSummary,
    origin: Vector,
    drag_offset: Vector,
    view_state: ViewState,
    modifier_held: bool | None = None,
    settings: SnapSettings | None = None,
) -> SnapResult:
    """Snap the dragged corner of a shape being drawn.

    Args:
        shapes: All scene shapes.
        new_shape: The shape being drawn; excluded from the reference set.
        origin: Where drawing started.
        drag_offset: Pointer displacement from the origin.
        view_state: Current view state.
        modifier_held: Modifier key state for this sample.
        settings: Snap settings; the cached environment settings when omitted.
    """
    settings = settings or get_snap_settings()

    if not is_snapping_enabled(view_state, [new_shape], modifier_held):
        return SnapResult()

    reference_points = get_reference_snap_points(shapes, [new_shape], view_state)
    corner = (origin.x + drag_offset.x, origin.y + drag_offset.y)

    nearest = get_point_snaps(
        [corner],
        reference_points,
        SnapAccumulator.start(get_snap_distance(view_state.zoom, settings), settings.precision),
    )
    snap_offset = Vector(x=nearest.x.offset, y=nearest.y.offset)

    snapped_corner = (corner[0] + snap_offset.x, corner[1] + snap_offset.y)
    nearest = get_point_snaps(
        [snapped_corner],
        reference_points,
        SnapAccumulator.start(settings.precision, settings.precision),
    )

    point_snaps, _ = _split_snaps(nearest)
    return SnapResult(snap_offset=snap_offset, snap_lines=create_point_snap_lines(point_snaps))


def get_snap_lines_at_pointer(
    shapes: list[ShapeSummary],
    view_state: ViewState,
    pointer: Vector,
    modifier_held: bool | None = None,
    settings: SnapSettings | None = None,
) -> PointerSnapResult:
    """Align a bare pointer with the corners of nearby shapes.

    Returns:
        PointerSnapResult with the offset that moves the pointer onto the
        nearest corner on each axis, and one line per matched corner.
    """
    settings = settings or get_snap_settings()

    if not is_snapping_enabled(view_state, [], modifier_held):
        return PointerSnapResult()

    pointer_point = (pointer.x, pointer.y)
    corners = [
        corner
        for shape in get_visible_and_non_selected_elements(shapes, [], view_state)
        for corner in get_elements_corners([shape])
    ]

    nearest = get_point_snaps(
        [pointer_point],
        corners,
        SnapAccumulator.start(get_snap_distance(view_state.zoom, settings), settings.precision),
    )

    vertical_lines = [
        PointerSnapLine(direction="vertical", points=(snap.points[1], (snap.points[1][0], pointer.y)))
        for snap in nearest.x.snaps
    ]
    horizontal_lines = [
        PointerSnapLine(direction="horizontal", points=(snap.points[1], (pointer.x, snap.points[1][1])))
        for snap in nearest.y.snaps
    ]

    return PointerSnapResult(
        origin_offset=Vector(x=nearest.x.offset, y=nearest.y.offset),
        snap_lines=[*vertical_lines, *horizontal_lines],
    )


class SnapSession:
    """Snapping state for one continuous drag.

    Holds the gap catalog between pointer samples and rebuilds it when the
    reference groups change (shapes added, removed, moved or regrouped
    mid-drag, or a label losing its container).
    """

    def __init__(self, selected: list[ShapeSummary], settings: SnapSettings | None = None) -> None:
        """Initialize the session.

        Args:
            selected: Shapes being dragged, at their pre-drag position.
            settings: Snap settings; the cached environment settings when omitted.
        """
        self.selected = selected
        self.settings = settings or get_snap_settings()
        self._fingerprint: tuple | None = None
        self._visible_gaps: VisibleGaps | None = None

    def _reference_fingerprint(self, shapes: list[ShapeSummary], view_state: ViewState) -> tuple:
        groups = get_reference_groups(shapes, self.selected, view_state)
        return (
            view_state.viewport,
            tuple(
                tuple((s.id, s.kind, s.x, s.y, s.width, s.height, s.angle) for s in group)
                for group in groups
            ),
        )

    def get_visible_gaps(self, shapes: list[ShapeSummary], view_state: ViewState) -> VisibleGaps:
        """Cached gap catalog, rebuilt when the reference shapes change."""
        fingerprint = self._reference_fingerprint(shapes, view_state)
        if self._visible_gaps is None or fingerprint != self._fingerprint:
            logger.debug("Rebuilding gap catalog for snap session")
            self._visible_gaps = get_visible_gaps(shapes, self.selected, view_state)
            self._fingerprint = fingerprint
        return self._visible_gaps

    def invalidate(self) -> None:
        """Drop the cached gap catalog."""
        self._fingerprint = None
        self._visible_gaps = None

    def snap(
        self,
        shapes: list[ShapeSummary],
        drag_offset: Vector,
        view_state: ViewState,
        modifier_held: bool | None = None,
    ) -> SnapResult:
        """Snap the session's selection for one pointer sample."""
        if not self.selected or not is_snapping_enabled(view_state, self.selected, modifier_held):
            return SnapResult()

        return snap_dragged_elements(
            shapes,
            self.selected,
            drag_offset,
            view_state,
            modifier_held=modifier_held,
            visible_gaps=self.get_visible_gaps(shapes, view_state),
            settings=self.settings,
        )
