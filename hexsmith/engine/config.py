"""Editor settings: defaults, validation, and JSON load/save."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from .errors import InvalidPlayerCount
from .grid import check_dimension
from .painting import check_brush
from .types import Brush

MIN_PLAYERS = 2
MAX_PLAYERS = 6


def check_player_count(value: int) -> int:
    if not MIN_PLAYERS <= value <= MAX_PLAYERS:
        raise InvalidPlayerCount(value, MIN_PLAYERS, MAX_PLAYERS)
    return value


@dataclass
class EditorSettings:
    grid_width: int = 20
    grid_height: int = 20
    required_players: int = 2
    brush_mode: str = "terrain"
    brush_value: str = "plains_medium"
    thumbnail_width: int = 300
    thumbnail_height: int = 200
    seed: int | None = None
    store_dir: str = "maps_store"

    def __post_init__(self):
        check_dimension("width", self.grid_width)
        check_dimension("height", self.grid_height)
        check_player_count(self.required_players)
        check_brush(self.brush)
        if self.thumbnail_width <= 0 or self.thumbnail_height <= 0:
            raise ValueError(
                "Thumbnail size must be positive "
                f"(got {self.thumbnail_width}x{self.thumbnail_height})"
            )

    @property
    def brush(self) -> Brush:
        return Brush(mode=self.brush_mode, value=self.brush_value)

    @staticmethod
    def from_dict(d: dict) -> EditorSettings:
        """Build settings from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(EditorSettings)}
        return EditorSettings(**{k: v for k, v in d.items() if k in known})

    def to_dict(self) -> dict:
        return asdict(self)


def load_settings(path: Path) -> EditorSettings:
    with open(path) as f:
        return EditorSettings.from_dict(json.load(f))


def save_settings(settings: EditorSettings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(settings.to_dict(), f, indent=2)
        f.write("\n")
