"""Pydantic v2 models for the snapping engine's inputs and outputs.

Shapes reach the engine as geometric summaries only: position, size, rotation
and the memberships that decide whether a shape may act as a snap target.
Everything the engine returns (offsets, candidates, guide lines) is a frozen
model as well, so one detector stage can hand its output to the next without
copying. All coordinates are scene units; angles are radians.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


Point = tuple[float, float]
PointPair = tuple[Point, Point]


class ShapeKind(str, Enum):
    """Supported shape kinds."""

    RECTANGLE = "rectangle"
    DIAMOND = "diamond"
    ELLIPSE = "ellipse"
    TEXT = "text"
    IMAGE = "image"
    FRAME = "frame"
    EMBEDDABLE = "embeddable"
    ARROW = "arrow"
    LINE = "line"
    FREEDRAW = "freedraw"


# Kinds drawn as a polyline between endpoints; a lone one never snaps
LINEAR_KINDS = frozenset({ShapeKind.ARROW, ShapeKind.LINE})


class TransformHandle(str, Enum):
    """Resize handles around a selection."""

    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"

    @property
    def controls_x(self) -> bool:
        """Whether dragging this handle moves a vertical edge."""
        return "e" in self.value or "w" in self.value

    @property
    def controls_y(self) -> bool:
        """Whether dragging this handle moves a horizontal edge."""
        return "n" in self.value or "s" in self.value


# ============================================================================
# Geometry Models
# ============================================================================


class Vector(BaseModel):
    """A 2D displacement in scene units."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(x=self.x + other.x, y=self.y + other.y)


class BoundingBox(BaseModel):
    """Axis-aligned bounding box in scene units."""

    model_config = ConfigDict(frozen=True)

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @model_validator(mode="after")
    def _check_extent(self) -> "BoundingBox":
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError("min must not exceed max on either axis")
        return self

    @classmethod
    def from_points(cls, points: list[Point]) -> "BoundingBox":
        """Smallest box containing every point."""
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return cls(min_x=min(xs), min_y=min(ys), max_x=max(xs), max_y=max(ys))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    @property
    def corners(self) -> list[Point]:
        """Top-left, top-right, bottom-left and bottom-right corners."""
        return [
            (self.min_x, self.min_y),
            (self.max_x, self.min_y),
            (self.min_x, self.max_y),
            (self.max_x, self.max_y),
        ]

    def translate(self, offset: Vector) -> "BoundingBox":
        """Return the box moved by an offset."""
        return BoundingBox(
            min_x=self.min_x + offset.x,
            min_y=self.min_y + offset.y,
            max_x=self.max_x + offset.x,
            max_y=self.max_y + offset.y,
        )

    def union(self, other: "BoundingBox") -> "BoundingBox":
        """Return the smallest box containing both boxes."""
        return BoundingBox(
            min_x=min(self.min_x, other.min_x),
            min_y=min(self.min_y, other.min_y),
            max_x=max(self.max_x, other.max_x),
            max_y=max(self.max_y, other.max_y),
        )

    def intersects(self, other: "BoundingBox") -> bool:
        """Whether the boxes share at least one point."""
        return (
            self.min_x <= other.max_x
            and other.min_x <= self.max_x
            and self.min_y <= other.max_y
            and other.min_y <= self.max_y
        )


# ============================================================================
# Shape & View Models
# ============================================================================


class ShapeSummary(BaseModel):
    """Geometric summary of a single scene shape."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique shape identifier")
    kind: ShapeKind = Field(description="Shape kind")

    # Geometry of the unrotated shape
    x: float = Field(description="Left position")
    y: float = Field(description="Top position")
    width: float = Field(ge=0, description="Width")
    height: float = Field(ge=0, description="Height")
    angle: float = Field(default=0.0, description="Rotation about the center in radians")

    # Memberships
    group_path: list[str] = Field(
        default_factory=list,
        description="Enclosing group ids, outermost first",
    )
    container_id: Optional[str] = Field(default=None, description="Container this label is bound to")
    frame_id: Optional[str] = Field(default=None, description="Frame this shape belongs to")

    is_visible: bool = True
    is_deleted: bool = False

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def maximal_group_id(self) -> str:
        """Id of the outermost group, or the shape's own id when ungrouped."""
        return self.group_path[0] if self.group_path else self.id


class ViewState(BaseModel):
    """Application view state consumed by the engine."""

    model_config = ConfigDict(frozen=True)

    zoom: float = Field(default=1.0, gt=0, description="Zoom factor")
    objects_snap_mode_enabled: bool = Field(default=False, description="Persistent snap mode toggle")
    viewport: Optional[BoundingBox] = Field(
        default=None,
        description="Visible scene area; shapes outside it are not snap targets",
    )


# ============================================================================
# Gap Models
# ============================================================================


class Gap(BaseModel):
    """Empty space between two non-overlapping reference boxes on one axis.

    ``start_side`` and ``end_side`` are the facing edges of the two boxes and
    ``overlap`` is the shared extent on the perpendicular axis.
    """

    model_config = ConfigDict(frozen=True)

    start_bounds: BoundingBox
    end_bounds: BoundingBox
    start_side: PointPair
    end_side: PointPair
    overlap: tuple[float, float]
    length: float = Field(gt=0)


class VisibleGaps(BaseModel):
    """Gap catalog for one interaction."""

    model_config = ConfigDict(frozen=True)

    horizontal_gaps: list[Gap] = Field(default_factory=list)
    vertical_gaps: list[Gap] = Field(default_factory=list)


# ============================================================================
# Snap Candidates
# ============================================================================


class GapDirection(str, Enum):
    """How a selection lines up with a gap."""

    CENTER_HORIZONTAL = "center_horizontal"
    CENTER_VERTICAL = "center_vertical"
    SIDE_LEFT = "side_left"
    SIDE_RIGHT = "side_right"
    SIDE_TOP = "side_top"
    SIDE_BOTTOM = "side_bottom"


class PointSnap(BaseModel):
    """A selection point paired with a reference point on one axis."""

    model_config = ConfigDict(frozen=True)

    type: Literal["point"] = "point"
    points: PointPair = Field(description="(selection point, reference point)")
    offset: float


class GapSnap(BaseModel):
    """A gap alignment on one axis."""

    model_config = ConfigDict(frozen=True)

    type: Literal["gap"] = "gap"
    direction: GapDirection
    gap: Gap
    offset: float


Snap = Annotated[
    Union[PointSnap, GapSnap],
    Field(discriminator="type"),
]


# ============================================================================
# Guide Lines
# ============================================================================


class PointSnapLine(BaseModel):
    """Line between two aligned points."""

    model_config = ConfigDict(frozen=True)

    type: Literal["points"] = "points"
    points: PointPair


class GapSnapLine(BaseModel):
    """Two segments bracketing equal spacing."""

    model_config = ConfigDict(frozen=True)

    type: Literal["gap"] = "gap"
    direction: Literal["horizontal", "vertical"]
    points: tuple[PointPair, PointPair]


class PointerSnapLine(BaseModel):
    """Line from a reference corner to the pointer."""

    model_config = ConfigDict(frozen=True)

    type: Literal["pointer"] = "pointer"
    direction: Literal["horizontal", "vertical"]
    points: PointPair


SnapLine = Annotated[
    Union[PointSnapLine, GapSnapLine, PointerSnapLine],
    Field(discriminator="type"),
]


class SnapResult(BaseModel):
    """Offset to apply plus the guide lines to render."""

    model_config = ConfigDict(frozen=True)

    snap_offset: Vector = Field(default_factory=Vector)
    snap_lines: list[SnapLine] = Field(default_factory=list)


class PointerSnapResult(BaseModel):
    """Offset that moves a bare pointer onto nearby corners."""

    model_config = ConfigDict(frozen=True)

    origin_offset: Vector = Field(default_factory=Vector)
    snap_lines: list[PointerSnapLine] = Field(default_factory=list)
