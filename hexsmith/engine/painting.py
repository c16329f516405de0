"""Drag-painting state machine.

Two states: ``IDLE`` and ``PAINTING``. Primary pointer-down enters
``PAINTING`` and paints under the pointer straight away; each motion event
while painting hit-tests and paints again; pointer-up or the pointer leaving
the surface returns to ``IDLE``. Secondary buttons never start a stroke.

The painter doesn't own the layout. The shell hands it the ``RasterLayout``
of the frame currently on screen, so a pointer position always maps back
through the same geometry it was drawn with.
"""

from __future__ import annotations

import enum
import logging

from .errors import InvalidBrush
from .geometry import RasterLayout
from .grid import HexGrid
from .hit_test import hit_test
from .types import (
    BRUSH_MARKER,
    BRUSH_TERRAIN,
    MARKER_KINDS,
    NO_MARKER,
    TERRAIN_KINDS,
    Brush,
)

log = logging.getLogger(__name__)

PRIMARY_BUTTON = 1


class PaintState(enum.Enum):
    IDLE = "idle"
    PAINTING = "painting"


def check_brush(brush: Brush) -> Brush:
    if brush.mode == BRUSH_TERRAIN:
        if brush.value not in TERRAIN_KINDS:
            raise InvalidBrush(brush.mode, brush.value)
    elif brush.mode == BRUSH_MARKER:
        if brush.value not in MARKER_KINDS and brush.value != NO_MARKER:
            raise InvalidBrush(brush.mode, brush.value)
    else:
        raise InvalidBrush(brush.mode, brush.value)
    return brush


def apply_brush(grid: HexGrid, column: int, row: int, brush: Brush) -> bool:
    """Paint one cell. Returns True if the tile changed."""
    if brush.mode == BRUSH_TERRAIN:
        return grid.set_terrain(column, row, brush.value)
    return grid.set_marker(column, row, brush.value)


class Painter:
    def __init__(self, grid: HexGrid, brush: Brush | None = None):
        self.grid = grid
        self._brush = check_brush(brush or Brush())
        self.layout: RasterLayout | None = None
        self.state = PaintState.IDLE

    @property
    def brush(self) -> Brush:
        return self._brush

    @brush.setter
    def brush(self, brush: Brush) -> None:
        self._brush = check_brush(brush)

    @property
    def is_painting(self) -> bool:
        return self.state is PaintState.PAINTING

    def _paint_at(self, x: float, y: float) -> bool:
        if self.layout is None:
            return False
        cell = hit_test(self.layout, x, y)
        if cell is None:
            return False
        return apply_brush(self.grid, cell[0], cell[1], self._brush)

    def pointer_down(
        self, x: float, y: float, button: int = PRIMARY_BUTTON
    ) -> bool:
        """Start a stroke. Returns True if the grid changed."""
        if button != PRIMARY_BUTTON:
            return False
        self.state = PaintState.PAINTING
        log.debug("Painting started with %s", self._brush)
        return self._paint_at(x, y)

    def pointer_move(self, x: float, y: float) -> bool:
        if self.state is not PaintState.PAINTING:
            return False
        return self._paint_at(x, y)

    def pointer_up(self) -> None:
        if self.state is PaintState.PAINTING:
            log.debug("Painting stopped")
        self.state = PaintState.IDLE

    def pointer_leave(self) -> None:
        self.pointer_up()
