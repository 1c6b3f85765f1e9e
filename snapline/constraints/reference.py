"""Selection of the shapes that may act as snap targets."""

from snapline.constraints.bounds import get_element_bounds, get_elements_corners
from snapline.dsl.schema import Point, ShapeKind, ShapeSummary, ViewState


def get_visible_and_non_selected_elements(
    shapes: list[ShapeSummary],
    selected: list[ShapeSummary],
    view_state: ViewState,
) -> list[ShapeSummary]:
    """Live, visible shapes that are not part of the selection.

    Args:
        shapes: All scene shapes.
        selected: Shapes being manipulated.
        view_state: Current view state; its viewport limits visibility.

    Returns:
        Shapes in scene order.
    """
    selected_ids = {shape.id for shape in selected}
    visible = []

    for shape in shapes:
        if shape.is_deleted or not shape.is_visible or shape.id in selected_ids:
            continue
        if view_state.viewport is not None and not get_element_bounds(shape).intersects(view_state.viewport):
            continue
        visible.append(shape)

    return visible


def get_reference_elements(
    shapes: list[ShapeSummary],
    selected: list[ShapeSummary],
    view_state: ViewState,
) -> list[ShapeSummary]:
    """Shapes eligible as snap targets for the current interaction.

    Children of a frame that is itself being moved travel with it and are
    never targets.
    """
    selected_frames = {shape.id for shape in selected if shape.kind == ShapeKind.FRAME}

    return [
        shape
        for shape in get_visible_and_non_selected_elements(shapes, selected, view_state)
        if not (shape.frame_id and shape.frame_id in selected_frames)
    ]


def get_maximum_groups(shapes: list[ShapeSummary]) -> list[list[ShapeSummary]]:
    """Partition shapes by their outermost group, in first-seen order."""
    groups: dict[str, list[ShapeSummary]] = {}
    for shape in shapes:
        groups.setdefault(shape.maximal_group_id, []).append(shape)
    return list(groups.values())


def get_reference_groups(
    shapes: list[ShapeSummary],
    selected: list[ShapeSummary],
    view_state: ViewState,
) -> list[list[ShapeSummary]]:
    """Reference shapes collapsed into rigid groups.

    A label bound to a container that is still in the scene snaps through
    its container, so it is dropped as a standalone target.
    """
    present_ids = {shape.id for shape in shapes if not shape.is_deleted}
    reference = get_reference_elements(shapes, selected, view_state)

    return [
        group
        for group in get_maximum_groups(reference)
        if not (len(group) == 1 and group[0].container_id in present_ids)
    ]


def get_reference_snap_points(
    shapes: list[ShapeSummary],
    selected: list[ShapeSummary],
    view_state: ViewState,
) -> list[Point]:
    """Pooled corner sets of every reference group."""
    points: list[Point] = []
    for group in get_reference_groups(shapes, selected, view_state):
        points.extend(get_elements_corners(group))
    return points
