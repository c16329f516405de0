"""Data types for hex maps and their persisted documents.

Dict shapes produced by ``to_dict`` are what the document store holds and
what the PNG export embeds, so field names here are part of the on-disk
format.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from datetime import datetime, timezone

TERRAIN_KINDS = (
    "plains_light",
    "plains_medium",
    "plains_dark",
    "water",
    "mountain",
    "forest",
)
PLAINS_VARIANTS = ("plains_light", "plains_medium", "plains_dark")

# Player colours in the order they are handed out; "white" marks an AI start.
PLAYER_MARKERS = ("red", "blue", "green", "orange", "purple", "yellow")
AI_MARKER = "white"
NO_MARKER = "none"
MARKER_KINDS = PLAYER_MARKERS + (AI_MARKER,)

BRUSH_TERRAIN = "terrain"
BRUSH_MARKER = "marker"
BRUSH_MODES = (BRUSH_TERRAIN, BRUSH_MARKER)


@dataclass(frozen=True)
class Tile:
    type: str
    column: int
    row: int
    marker: str | None = None

    @staticmethod
    def from_dict(d: dict) -> Tile:
        marker = d.get("marker")
        return Tile(
            type=d["type"],
            column=d["column"],
            row=d["row"],
            marker=None if marker in (None, NO_MARKER) else marker,
        )

    def to_dict(self) -> dict:
        d: dict = {"type": self.type, "column": self.column, "row": self.row}
        if self.marker:
            d["marker"] = self.marker
        return d


@dataclass(frozen=True)
class GridShape:
    width: int
    height: int

    @staticmethod
    def from_dict(d: dict) -> GridShape:
        return GridShape(width=d["width"], height=d["height"])

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}

    def contains(self, column: int, row: int) -> bool:
        return 0 <= column < self.width and 0 <= row < self.height


@dataclass(frozen=True)
class Brush:
    """Currently selected paint value and the tile field it targets."""

    mode: str = BRUSH_TERRAIN
    value: str = "plains_medium"


@dataclass(frozen=True)
class MarkerCount:
    count: int
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class Operator:
    """Capability handed to the editor by whoever signed the operator in."""

    user_id: str
    is_admin: bool = False


@dataclass
class MapDocument:
    name: str
    description: str
    tiles: list[Tile]
    grid_shape: GridShape
    required_players: int
    thumbnail: bytes
    created_by: str
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @staticmethod
    def from_dict(d: dict) -> MapDocument:
        return MapDocument(
            name=d["name"],
            description=d["description"],
            tiles=[Tile.from_dict(t) for t in d["tiles"]],
            grid_shape=GridShape.from_dict(d["grid_shape"]),
            required_players=d["required_players"],
            thumbnail=base64.b64decode(d.get("thumbnail_png", "")),
            created_by=d["created_by"],
            created_at=datetime.fromisoformat(d["created_at"]),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "tiles": [t.to_dict() for t in self.tiles],
            "grid_shape": self.grid_shape.to_dict(),
            "hexagonal": True,
            "required_players": self.required_players,
            "thumbnail_png": base64.b64encode(self.thumbnail).decode("ascii"),
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
        }
