"""Rasterises a hex grid to a Pillow image."""

from __future__ import annotations

import logging

from PIL import Image, ImageDraw

from .geometry import RasterLayout, cell_corners
from .types import Tile

log = logging.getLogger(__name__)

BACKGROUND = "#1a1a2e"
HEX_OUTLINE = "#333333"
MARKER_OUTLINE = "#000000"
FALLBACK_TERRAIN_COLOR = "#795548"  # brown

TERRAIN_COLORS = {
    "water": "#1e88e5",
    "plains_light": "#66bb6a",
    "plains_medium": "#43a047",
    "plains_dark": "#2e7d32",
    "mountain": "#757575",
    "forest": "#1b5e20",
}

# None means transparent: nothing is drawn for that marker.
MARKER_COLORS = {
    "red": "#e53935",
    "blue": "#1e88e5",
    "green": "#43a047",
    "orange": "#fb8c00",
    "purple": "#8e24aa",
    "yellow": "#fdd835",
    "white": "#ffffff",
    "none": None,
}

MARKER_RADIUS_RATIO = 0.5


def terrain_color(kind: str) -> str:
    return TERRAIN_COLORS.get(kind, FALLBACK_TERRAIN_COLOR)


def marker_color(kind: str | None) -> str | None:
    if kind is None:
        return None
    return MARKER_COLORS.get(kind)


class HexMapRenderer:
    """Draws every tile of a grid through a ``RasterLayout``.

    Pillow polygons aren't antialiased, so the grid is drawn ``supersample``
    times larger and scaled down with LANCZOS. Stroke widths are given in
    output pixels and may be fractional; they are scaled up with the
    supersample factor before drawing.
    """

    def __init__(
        self,
        supersample: int = 4,
        outline_width: float = 1.0,
        marker_outline_width: float = 1.5,
        background: str = BACKGROUND,
    ):
        self.supersample = supersample
        self.outline_width = outline_width
        self.marker_outline_width = marker_outline_width
        self.background = background

    def _lw(self, base_width: float) -> int:
        return max(1, round(base_width * self.supersample))

    def render(self, tiles: list[Tile], layout: RasterLayout) -> Image.Image:
        if layout.is_empty:
            size = (max(1, layout.width), max(1, layout.height))
            return Image.new("RGB", size, self.background)

        big = layout.scaled(self.supersample)
        img = Image.new("RGB", (big.width, big.height), self.background)
        draw = ImageDraw.Draw(img)
        hex_lw = self._lw(self.outline_width)
        marker_lw = self._lw(self.marker_outline_width)

        skipped = 0
        for tile in tiles:
            # Tiles from a larger, stale grid can outlive a shrink for a frame.
            if tile.column >= big.grid_width or tile.row >= big.grid_height:
                skipped += 1
                continue
            cx, cy = big.center(tile.column, tile.row)
            draw.polygon(
                cell_corners(cx, cy, big.radius),
                fill=terrain_color(tile.type),
                outline=HEX_OUTLINE,
                width=hex_lw,
            )
            fill = marker_color(tile.marker)
            if fill is not None:
                draw.polygon(
                    cell_corners(cx, cy, big.radius * MARKER_RADIUS_RATIO),
                    fill=fill,
                    outline=MARKER_OUTLINE,
                    width=marker_lw,
                )
        if skipped:
            log.debug(
                "Skipped %d tiles outside the %dx%d layout",
                skipped,
                big.grid_width,
                big.grid_height,
            )

        if self.supersample == 1:
            return img
        return img.resize(
            (layout.width, layout.height), Image.Resampling.LANCZOS
        )
