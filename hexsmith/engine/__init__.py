from .editor import MapEditor
from .errors import (
    InvalidBrush,
    InvalidDimension,
    InvalidPlayerCount,
    MapEditorError,
    MissingField,
    NotAuthorized,
    PlayerCountMismatch,
    SaveFailed,
    SaveInProgress,
)
from .geometry import RasterLayout, cell_center, cell_corners, fit_scale
from .grid import HexGrid
from .hit_test import hit_test
from .painting import Painter, PaintState
from .types import Brush, MapDocument, Operator, Tile

__all__ = [
    "Brush",
    "HexGrid",
    "InvalidBrush",
    "InvalidDimension",
    "InvalidPlayerCount",
    "MapDocument",
    "MapEditor",
    "MapEditorError",
    "MissingField",
    "NotAuthorized",
    "Operator",
    "PaintState",
    "Painter",
    "PlayerCountMismatch",
    "RasterLayout",
    "SaveFailed",
    "SaveInProgress",
    "Tile",
    "cell_center",
    "cell_corners",
    "fit_scale",
    "hit_test",
]
