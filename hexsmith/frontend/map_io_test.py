"""Tests for the full-resolution PNG export."""

import json

import pytest
from PIL import Image

from ..engine.geometry import grid_extent
from ..engine.grid import HexGrid
from .map_io import METADATA_KEY, export_map_png, full_layout


@pytest.fixture
def grid():
    g = HexGrid(6, 4, seed=2)
    g.set_terrain(2, 1, "water")
    g.set_marker(0, 0, "red")
    g.set_marker(5, 3, "white")
    return g


def _embedded(path):
    with Image.open(path) as img:
        return json.loads(img.text[METADATA_KEY])


class TestFullLayout:
    def test_raster_is_grid_extent(self, grid):
        ext_w, ext_h = grid_extent(6, 4)
        layout = full_layout(grid)
        assert (layout.width, layout.height) == (round(ext_w), round(ext_h))
        assert (layout.origin_x, layout.origin_y) == (0.0, 0.0)

    def test_scale(self, grid):
        ext_w, ext_h = grid_extent(6, 4)
        layout = full_layout(grid, 2.0)
        assert (layout.width, layout.height) == (
            round(ext_w * 2),
            round(ext_h * 2),
        )


class TestExportMapPng:
    def test_image_size(self, grid, tmp_path):
        path = str(tmp_path / "map.png")
        img = export_map_png(grid, path)
        layout = full_layout(grid)
        assert img.size == (layout.width, layout.height)
        with Image.open(path) as saved:
            assert saved.format == "PNG"
            assert saved.size == img.size

    def test_embeds_grid_and_form_fields(self, grid, tmp_path):
        path = str(tmp_path / "map.png")
        export_map_png(
            grid,
            path,
            name="  Coastline ",
            description="Draft\n",
            required_players=3,
        )
        doc = _embedded(path)
        assert doc["name"] == "Coastline"
        assert doc["description"] == "Draft"
        assert doc["required_players"] == 3
        assert doc["grid_shape"] == {"width": 6, "height": 4}
        assert doc["tiles"] == grid.to_dict()["tiles"]

    def test_unvalidated_snapshot(self, grid, tmp_path):
        """Blank fields and a player mismatch still export."""
        path = str(tmp_path / "draft.png")
        export_map_png(grid, path, required_players=6)
        doc = _embedded(path)
        assert doc["name"] == ""
        markers = {t.get("marker") for t in doc["tiles"]} - {None}
        assert markers == {"red", "white"}

    def test_no_extension_still_png(self, grid, tmp_path):
        path = str(tmp_path / "map")
        export_map_png(grid, path)
        with Image.open(path) as saved:
            assert saved.format == "PNG"
