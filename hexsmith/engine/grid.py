"""Editable tile grid.

The grid is dense: exactly one ``Tile`` per (column, row), stored in raster
order (row-major, so index = row * width + column). Tiles are frozen and
are replaced, never mutated, when painted.

Resizing is destructive. ``reset`` throws away every tile and builds a fresh
random-plains grid at the new size; paint never survives a resize.

Paint calls with coordinates outside the current shape are silently
dropped. A drag that was in progress when the grid shrank can still
resolve to a cell from the old, larger shape, and that must not raise.
"""

from __future__ import annotations

import dataclasses
import logging
import random

from .errors import InvalidDimension
from .generate import initial_tiles
from .types import (
    AI_MARKER,
    MARKER_KINDS,
    NO_MARKER,
    TERRAIN_KINDS,
    GridShape,
    MarkerCount,
    Tile,
)

log = logging.getLogger(__name__)

MIN_DIMENSION = 1
MAX_DIMENSION = 50


def check_dimension(dimension: str, value: int) -> int:
    if not MIN_DIMENSION <= value <= MAX_DIMENSION:
        raise InvalidDimension(dimension, value, MIN_DIMENSION, MAX_DIMENSION)
    return value


class HexGrid:
    def __init__(
        self, width: int = 20, height: int = 20, seed: int | None = None
    ):
        self._rng = random.Random(seed)
        self.shape = GridShape(0, 0)
        self.tiles: list[Tile] = []
        self.reset(width, height)

    @property
    def width(self) -> int:
        return self.shape.width

    @property
    def height(self) -> int:
        return self.shape.height

    def reset(self, width: int, height: int) -> None:
        """Replace every tile with a fresh random-plains grid of the new size.

        Raises InvalidDimension (leaving the grid untouched) if either
        dimension is outside [1, 50].
        """
        check_dimension("width", width)
        check_dimension("height", height)
        self.tiles = initial_tiles(width, height, self._rng)
        self.shape = GridShape(width, height)
        log.info("Grid reset to %dx%d", width, height)

    def load_tiles(self, shape: GridShape, tiles: list[Tile]) -> None:
        """Adopt an existing tile list (e.g. a generated sample map)."""
        check_dimension("width", shape.width)
        check_dimension("height", shape.height)
        by_pos = {(t.column, t.row): t for t in tiles}
        expected = shape.width * shape.height
        if len(by_pos) != len(tiles) or len(tiles) != expected:
            raise ValueError(
                f"Tiles do not cover a {shape.width}x{shape.height} grid "
                "exactly"
            )
        self.tiles = [
            by_pos[(col, row)]
            for row in range(shape.height)
            for col in range(shape.width)
        ]
        self.shape = shape

    def _index(self, column: int, row: int) -> int | None:
        if not self.shape.contains(column, row):
            return None
        return row * self.shape.width + column

    def tile_at(self, column: int, row: int) -> Tile | None:
        idx = self._index(column, row)
        return None if idx is None else self.tiles[idx]

    def _replace(self, column: int, row: int, **changes) -> bool:
        idx = self._index(column, row)
        if idx is None:
            log.debug(
                "Dropped paint at out-of-bounds cell (%d, %d)", column, row
            )
            return False
        old = self.tiles[idx]
        new = dataclasses.replace(old, **changes)
        if new == old:
            return False
        self.tiles[idx] = new
        return True

    def set_terrain(self, column: int, row: int, kind: str) -> bool:
        """Returns True if the tile changed."""
        if kind not in TERRAIN_KINDS:
            raise ValueError(f"Unknown terrain kind: {kind!r}")
        return self._replace(column, row, type=kind)

    def set_marker(self, column: int, row: int, kind: str | None) -> bool:
        """Set or clear (``None`` / ``"none"``) a tile's marker.

        Returns True if the tile changed.
        """
        if kind == NO_MARKER:
            kind = None
        if kind is not None and kind not in MARKER_KINDS:
            raise ValueError(f"Unknown marker kind: {kind!r}")
        return self._replace(column, row, marker=kind)

    def count_markers(self) -> MarkerCount:
        """Distinct player marker colours in use.

        AI (white) starts are not players and are ignored. A colour placed on
        several tiles counts once. Values are listed in raster order of first
        appearance.
        """
        seen: dict[str, None] = {}
        for tile in self.tiles:
            if tile.marker and tile.marker != AI_MARKER:
                seen.setdefault(tile.marker, None)
        return MarkerCount(count=len(seen), values=tuple(seen))

    def to_dict(self) -> dict:
        return {
            "grid_shape": self.shape.to_dict(),
            "tiles": [t.to_dict() for t in self.tiles],
        }
