"""Full-resolution PNG export of the map being edited.

The export draws the whole grid at a fixed scale (not fitted to any window)
and stores the grid document in a PNG tEXt chunk under ``hexsmith_map``: the
shape, every tile, and whatever name / description / player count the form
currently holds. It is a snapshot for sharing and is not validated; saving
to the store goes through ``engine.export`` instead.
"""

import json
import logging

from PIL import Image
from PIL.PngImagePlugin import PngInfo

from ..engine.geometry import RasterLayout, grid_extent
from ..engine.grid import HexGrid
from ..engine.render import HexMapRenderer

log = logging.getLogger(__name__)

METADATA_KEY = "hexsmith_map"
EXPORT_SCALE = 1.0


def full_layout(grid: HexGrid, scale: float = EXPORT_SCALE) -> RasterLayout:
    """Layout whose raster is exactly the grid's padded extent."""
    ext_w, ext_h = grid_extent(grid.width, grid.height)
    return RasterLayout(
        grid_width=grid.width,
        grid_height=grid.height,
        scale=scale,
        width=max(1, round(ext_w * scale)),
        height=max(1, round(ext_h * scale)),
    )


def export_document(
    grid: HexGrid, name: str, description: str, required_players: int
) -> dict:
    return {
        "name": name.strip(),
        "description": description.strip(),
        "required_players": required_players,
        **grid.to_dict(),
    }


def export_map_png(
    grid: HexGrid,
    path: str,
    name: str = "",
    description: str = "",
    required_players: int = 2,
    scale: float = EXPORT_SCALE,
) -> Image.Image:
    """Render the grid and write it to ``path`` with the document embedded."""
    img = HexMapRenderer().render(grid.tiles, full_layout(grid, scale))
    info = PngInfo()
    document = export_document(grid, name, description, required_players)
    info.add_text(METADATA_KEY, json.dumps(document))
    img.save(path, format="PNG", pnginfo=info)
    log.info(
        "Exported %dx%d map to %s (%dx%d px)",
        grid.width,
        grid.height,
        path,
        img.width,
        img.height,
    )
    return img
