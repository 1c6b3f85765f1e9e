"""Pytest configuration and fixtures."""

from typing import Callable

import pytest

from snapline.config import SnapSettings
from snapline.dsl.schema import ShapeKind, ShapeSummary, ViewState


ShapeFactory = Callable[..., ShapeSummary]


@pytest.fixture
def make_shape() -> ShapeFactory:
    """Factory for shape summaries with rectangle defaults."""

    def _make(
        id: str,
        x: float,
        y: float,
        width: float = 10,
        height: float = 10,
        kind: ShapeKind = ShapeKind.RECTANGLE,
        **kwargs,
    ) -> ShapeSummary:
        return ShapeSummary(id=id, kind=kind, x=x, y=y, width=width, height=height, **kwargs)

    return _make


@pytest.fixture
def snap_view() -> ViewState:
    """View with persistent snapping on at zoom 1."""
    return ViewState(zoom=1.0, objects_snap_mode_enabled=True)


@pytest.fixture
def settings() -> SnapSettings:
    """Default settings, independent of the environment."""
    return SnapSettings(distance=8.0, precision=0.01)
