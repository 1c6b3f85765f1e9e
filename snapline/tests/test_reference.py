"""Tests for reference set selection."""

from snapline.constraints.reference import (
    get_maximum_groups,
    get_reference_elements,
    get_reference_groups,
    get_reference_snap_points,
    get_visible_and_non_selected_elements,
)
from snapline.dsl.schema import BoundingBox, ShapeKind, ViewState


class TestVisibleAndNonSelected:
    """Tests for visibility and selection filtering."""

    def test_excludes_selected_deleted_and_hidden(self, make_shape, snap_view) -> None:
        """Test only live, visible, unselected shapes remain."""
        moving = make_shape("moving", 0, 0)
        shapes = [
            moving,
            make_shape("kept", 20, 0),
            make_shape("deleted", 40, 0, is_deleted=True),
            make_shape("hidden", 60, 0, is_visible=False),
        ]
        result = get_visible_and_non_selected_elements(shapes, [moving], snap_view)
        assert [s.id for s in result] == ["kept"]

    def test_viewport_filter(self, make_shape) -> None:
        """Test shapes outside the viewport are not targets."""
        view = ViewState(viewport=BoundingBox(min_x=0, min_y=0, max_x=100, max_y=100))
        shapes = [make_shape("inside", 50, 50), make_shape("outside", 500, 500)]
        result = get_visible_and_non_selected_elements(shapes, [], view)
        assert [s.id for s in result] == ["inside"]


class TestReferenceElements:
    """Tests for the frame rule."""

    def test_children_of_moving_frame_excluded(self, make_shape, snap_view) -> None:
        """Test a moving frame does not snap to its own children."""
        frame = make_shape("frame", 0, 0, width=100, height=100, kind=ShapeKind.FRAME)
        child = make_shape("child", 10, 10, frame_id="frame")
        other_child = make_shape("other", 200, 10, frame_id="frame2")
        result = get_reference_elements([frame, child, other_child], [frame], snap_view)
        assert [s.id for s in result] == ["other"]

    def test_children_kept_when_frame_not_selected(self, make_shape, snap_view) -> None:
        """Test frame children are targets when the frame stays put."""
        frame = make_shape("frame", 0, 0, width=100, height=100, kind=ShapeKind.FRAME)
        child = make_shape("child", 10, 10, frame_id="frame")
        moving = make_shape("moving", 300, 300)
        result = get_reference_elements([frame, child, moving], [moving], snap_view)
        assert [s.id for s in result] == ["frame", "child"]


class TestMaximumGroups:
    """Tests for rigid group partitioning."""

    def test_groups_by_outermost_id(self, make_shape) -> None:
        """Test nested groups collapse into their outermost group."""
        shapes = [
            make_shape("a", 0, 0, group_path=["g1", "inner"]),
            make_shape("b", 20, 0),
            make_shape("c", 40, 0, group_path=["g1"]),
        ]
        groups = get_maximum_groups(shapes)
        assert [[s.id for s in g] for g in groups] == [["a", "c"], ["b"]]


class TestReferenceGroups:
    """Tests for container-bound label handling."""

    def test_bound_label_dropped_with_container_present(self, make_shape, snap_view) -> None:
        """Test a label snaps through its container."""
        container = make_shape("box", 0, 0, width=50, height=50)
        label = make_shape("label", 10, 20, width=30, height=10, kind=ShapeKind.TEXT, container_id="box")
        groups = get_reference_groups([container, label], [], snap_view)
        assert [[s.id for s in g] for g in groups] == [["box"]]

    def test_bound_label_kept_without_container(self, make_shape, snap_view) -> None:
        """Test an orphaned label is still a target."""
        label = make_shape("label", 10, 20, kind=ShapeKind.TEXT, container_id="gone")
        groups = get_reference_groups([label], [], snap_view)
        assert len(groups) == 1

    def test_snap_points_pooled(self, make_shape, snap_view) -> None:
        """Test a lone shape and a two-shape group give five points each."""
        shapes = [
            make_shape("a", 0, 0),
            make_shape("b", 20, 0, group_path=["g"]),
            make_shape("c", 40, 0, group_path=["g"]),
        ]
        points = get_reference_snap_points(shapes, [], snap_view)
        assert len(points) == 10
        assert (20, 0) in points
        assert (50, 10) in points
        assert (35.0, 5.0) in points
