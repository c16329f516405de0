"""Tests for grid rasterisation."""

import pytest
from PIL import ImageColor

from hexsmith.engine.geometry import RasterLayout
from hexsmith.engine.grid import HexGrid
from hexsmith.engine.render import (
    BACKGROUND,
    FALLBACK_TERRAIN_COLOR,
    MARKER_COLORS,
    TERRAIN_COLORS,
    HexMapRenderer,
    marker_color,
    terrain_color,
)
from hexsmith.engine.types import MARKER_KINDS, TERRAIN_KINDS, Tile


def _rgb(hex_color):
    return ImageColor.getrgb(hex_color)


def _close(a, b, tol=12):
    return all(abs(x - y) <= tol for x, y in zip(a, b))


def _pixel_at(img, point):
    x, y = point
    return img.getpixel((int(x), int(y)))


class TestColors:
    def test_every_terrain_has_a_color(self):
        for kind in TERRAIN_KINDS:
            assert terrain_color(kind) == TERRAIN_COLORS[kind]

    def test_unknown_terrain_falls_back(self):
        assert terrain_color("lava") == FALLBACK_TERRAIN_COLOR

    def test_every_marker_has_a_color(self):
        for kind in MARKER_KINDS:
            assert marker_color(kind) == MARKER_COLORS[kind]

    def test_no_marker_is_transparent(self):
        assert marker_color(None) is None
        assert marker_color("none") is None


class TestHexMapRenderer:
    def test_output_matches_layout_size(self):
        grid = HexGrid(20, 20)
        layout = RasterLayout.fit(20, 20, 640, 480)
        img = HexMapRenderer().render(grid.tiles, layout)
        assert img.size == (640, 480)

    def test_cell_center_has_terrain_color(self):
        grid = HexGrid(5, 5)
        grid.set_terrain(2, 3, "water")
        layout = RasterLayout.fit(5, 5, 400, 400)
        img = HexMapRenderer().render(grid.tiles, layout)
        water = _rgb(TERRAIN_COLORS["water"])
        assert _close(_pixel_at(img, layout.center(2, 3)), water)

    def test_marker_drawn_at_center(self):
        grid = HexGrid(5, 5)
        grid.set_terrain(1, 1, "mountain")
        grid.set_marker(1, 1, "red")
        layout = RasterLayout.fit(5, 5, 400, 400)
        img = HexMapRenderer().render(grid.tiles, layout)
        x, y = layout.center(1, 1)
        assert _close(_pixel_at(img, (x, y)), _rgb(MARKER_COLORS["red"]))
        # Just inside the hex but outside the half-size marker: terrain.
        edge_x = int(x + layout.radius * 0.7)
        assert _close(
            img.getpixel((edge_x, int(y))), _rgb(TERRAIN_COLORS["mountain"])
        )

    def test_background_outside_grid(self):
        grid = HexGrid(3, 3)
        layout = RasterLayout.fit(3, 3, 400, 400)
        img = HexMapRenderer().render(grid.tiles, layout)
        assert img.getpixel((1, 1)) == _rgb(BACKGROUND)

    def test_empty_layout(self):
        layout = RasterLayout.fit(3, 3, 0, 0)
        img = HexMapRenderer().render(HexGrid(3, 3).tiles, layout)
        assert img.size == (1, 1)

    def test_skips_tiles_outside_layout(self):
        """Tiles of a larger grid don't raise against a smaller layout."""
        tiles = [Tile("water", 9, 9), Tile("forest", 0, 0)]
        layout = RasterLayout.fit(2, 2, 200, 200)
        img = HexMapRenderer(supersample=1).render(tiles, layout)
        forest = _rgb(TERRAIN_COLORS["forest"])
        assert _close(_pixel_at(img, layout.center(0, 0)), forest)

    def test_no_supersample(self):
        grid = HexGrid(4, 4)
        layout = RasterLayout.fit(4, 4, 123, 77)
        img = HexMapRenderer(supersample=1).render(grid.tiles, layout)
        assert img.size == (123, 77)

    @pytest.mark.parametrize("supersample", [4, 1])
    def test_same_input_same_pixels(self, supersample):
        grid = HexGrid(13, 7, seed=5)
        grid.set_terrain(3, 2, "water")
        grid.set_marker(6, 3, "blue")
        layout = RasterLayout.fit(13, 7, 333, 211)
        renderer = HexMapRenderer(supersample=supersample)
        first = renderer.render(grid.tiles, layout)
        second = renderer.render(grid.tiles, layout)
        assert first.size == second.size
        assert first.tobytes() == second.tobytes()
