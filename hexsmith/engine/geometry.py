"""Pointy-top hex geometry for odd-row offset grids.

Every length here derives from one base radius ``HEX_SIZE`` (center to
corner). Odd rows are shifted right by half a cell width so the rows
interlock. Coordinates are raster pixels: x grows right, y grows down.

A cell's center sits at

    x = column * HEX_WIDTH * scale  (+ HEX_WIDTH * scale / 2 on odd rows)
    y = row * HEX_VERT_DISTANCE * scale

plus half the rendering padding (one cell width by one cell height), so the
hexes in column 0 and row 0 are never clipped at the raster's top-left.

``RasterLayout`` bundles a fitted scale with the offset of the grid inside
its raster. The render pipeline draws through it and hit-testing reads back
through the same instance, so screen space and hit-test space can't drift.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

HEX_SIZE = 30.0
HEX_WIDTH = 2 * HEX_SIZE * math.cos(math.pi / 6)
HEX_HEIGHT = 2 * HEX_SIZE
HEX_HORIZ_DISTANCE = HEX_WIDTH
HEX_VERT_DISTANCE = HEX_HEIGHT * 0.75
HEX_ROW_OFFSET = HEX_WIDTH / 2

# Fraction of the viewport left empty after fitting.
FIT_MARGIN = 0.05

Point = tuple[float, float]


def cell_center(column: int, row: int, scale: float) -> Point:
    x = column * HEX_HORIZ_DISTANCE * scale
    if row % 2:
        x += HEX_ROW_OFFSET * scale
    y = row * HEX_VERT_DISTANCE * scale
    return x + HEX_WIDTH * scale / 2, y + HEX_HEIGHT * scale / 2


def cell_centers(
    grid_width: int, grid_height: int, scale: float
) -> tuple[np.ndarray, np.ndarray]:
    """Vectorised ``cell_center`` for a whole grid, in raster order."""
    rows = np.repeat(np.arange(grid_height), grid_width)
    cols = np.tile(np.arange(grid_width), grid_height)
    xs = (cols * HEX_HORIZ_DISTANCE + (rows % 2) * HEX_ROW_OFFSET) * scale
    ys = rows * HEX_VERT_DISTANCE * scale
    return xs + HEX_WIDTH * scale / 2, ys + HEX_HEIGHT * scale / 2


def cell_corners(
    center_x: float, center_y: float, radius: float
) -> list[Point]:
    """Six corners of a pointy-top hexagon, clockwise from lower-right."""
    corners = []
    for i in range(6):
        angle = math.pi / 3 * i + math.pi / 6
        corners.append(
            (
                center_x + radius * math.cos(angle),
                center_y + radius * math.sin(angle),
            )
        )
    return corners


def grid_extent(grid_width: int, grid_height: int) -> Point:
    """Padded bounding box (width, height) of a whole grid at scale 1."""
    if grid_width < 1 or grid_height < 1:
        raise ValueError(
            f"Grid must be at least 1x1 (got {grid_width}x{grid_height})"
        )
    w = grid_width * HEX_WIDTH
    if grid_height > 1:
        w += HEX_ROW_OFFSET
    h = (grid_height - 1) * HEX_VERT_DISTANCE + HEX_HEIGHT
    return w, h


def fit_scale(
    grid_width: int,
    grid_height: int,
    viewport_width: float,
    viewport_height: float,
) -> float:
    """Largest scale that fits the whole grid in the viewport, less FIT_MARGIN.

    Returns 0.0 for an empty viewport (e.g. a canvas that hasn't been laid
    out yet); callers should skip drawing in that case.
    """
    ext_w, ext_h = grid_extent(grid_width, grid_height)
    if viewport_width <= 0 or viewport_height <= 0:
        return 0.0
    return min(viewport_width / ext_w, viewport_height / ext_h) * (
        1.0 - FIT_MARGIN
    )


@dataclass(frozen=True)
class RasterLayout:
    """Where a grid of a given shape lands inside a raster of a given size."""

    grid_width: int
    grid_height: int
    scale: float
    width: int
    height: int
    origin_x: float = 0.0
    origin_y: float = 0.0

    @staticmethod
    def fit(
        grid_width: int,
        grid_height: int,
        viewport_width: int,
        viewport_height: int,
    ) -> RasterLayout:
        """Fit the grid to the viewport and center it."""
        scale = fit_scale(
            grid_width, grid_height, viewport_width, viewport_height
        )
        ext_w, ext_h = grid_extent(grid_width, grid_height)
        return RasterLayout(
            grid_width=grid_width,
            grid_height=grid_height,
            scale=scale,
            width=int(viewport_width),
            height=int(viewport_height),
            origin_x=(viewport_width - ext_w * scale) / 2,
            origin_y=(viewport_height - ext_h * scale) / 2,
        )

    @property
    def radius(self) -> float:
        return HEX_SIZE * self.scale

    @property
    def is_empty(self) -> bool:
        return self.scale <= 0 or self.width <= 0 or self.height <= 0

    def center(self, column: int, row: int) -> Point:
        x, y = cell_center(column, row, self.scale)
        return x + self.origin_x, y + self.origin_y

    def centers(self) -> tuple[np.ndarray, np.ndarray]:
        xs, ys = cell_centers(self.grid_width, self.grid_height, self.scale)
        return xs + self.origin_x, ys + self.origin_y

    def bounds(self) -> tuple[float, float, float, float]:
        """(left, top, right, bottom) of the grid's padded bounding box."""
        ext_w, ext_h = grid_extent(self.grid_width, self.grid_height)
        return (
            self.origin_x,
            self.origin_y,
            self.origin_x + ext_w * self.scale,
            self.origin_y + ext_h * self.scale,
        )

    def scaled(self, factor: float) -> RasterLayout:
        """Same placement on a raster ``factor`` times larger."""
        return RasterLayout(
            grid_width=self.grid_width,
            grid_height=self.grid_height,
            scale=self.scale * factor,
            width=int(round(self.width * factor)),
            height=int(round(self.height * factor)),
            origin_x=self.origin_x * factor,
            origin_y=self.origin_y * factor,
        )
