"""Terrain generation for fresh and sample grids.

``initial_tiles`` is what every resize produces: a random plains variant in
every cell and no markers. ``generate_themed_tiles`` builds the sample maps
that ``scripts/seed_maps.py`` writes to the store, and
``place_start_markers`` gives those maps one start marker per player so they
pass save-time validation.

All randomness comes from a caller-supplied ``random.Random`` so a seeded
grid reproduces exactly.
"""

from __future__ import annotations

import math
import random
from typing import TYPE_CHECKING

from .types import PLAINS_VARIANTS, PLAYER_MARKERS, Tile

if TYPE_CHECKING:
    from .grid import HexGrid

# Per-theme probability that a cell becomes (water, mountain, forest).
# Checked in that order; a cell that passes none of them is plains.
THEME_ODDS = {
    "plains": (0.05, 0.10, 0.15),
    "forest": (0.05, 0.10, 0.60),
    "mountain": (0.10, 0.50, 0.20),
    "water": (None, 0.05, 0.15),
    "mixed": (0.15, 0.20, 0.30),
}
THEMES = tuple(THEME_ODDS)


def initial_tiles(width: int, height: int, rng: random.Random) -> list[Tile]:
    return [
        Tile(type=rng.choice(PLAINS_VARIANTS), column=col, row=row)
        for row in range(height)
        for col in range(width)
    ]


def _water_odds(col: int, row: int, width: int, height: int) -> float:
    """Water theme: likelier near the middle of the map, 0.7 at dead center."""
    cx = width / 2
    cy = height / 2
    dist = math.hypot(col - cx, row - cy)
    max_dist = math.hypot(width, height) / 2
    return 0.7 - (dist / max_dist) * 0.4


def generate_themed_tiles(
    width: int, height: int, theme: str, rng: random.Random
) -> list[Tile]:
    if theme not in THEME_ODDS:
        raise ValueError(
            f"Unknown theme {theme!r} (expected one of {', '.join(THEMES)})"
        )
    water, mountain, forest = THEME_ODDS[theme]
    tiles = []
    for row in range(height):
        for col in range(width):
            p_water = (
                _water_odds(col, row, width, height)
                if water is None
                else water
            )
            if rng.random() < p_water:
                kind = "water"
            elif rng.random() < mountain:
                kind = "mountain"
            elif rng.random() < forest:
                kind = "forest"
            else:
                kind = rng.choice(PLAINS_VARIANTS)
            tiles.append(Tile(type=kind, column=col, row=row))
    return tiles


def perimeter_cells(width: int, height: int) -> list[tuple[int, int]]:
    """Rim cells clockwise from the top-left corner, each listed once."""
    cells: list[tuple[int, int]] = []
    seen: set[tuple[int, int]] = set()

    def add(col, row):
        if (col, row) not in seen:
            seen.add((col, row))
            cells.append((col, row))

    for col in range(width):
        add(col, 0)
    for row in range(1, height):
        add(width - 1, row)
    for col in range(width - 2, -1, -1):
        add(col, height - 1)
    for row in range(height - 2, 0, -1):
        add(0, row)
    return cells


def place_start_markers(grid: HexGrid, players: int) -> list[tuple[int, int]]:
    """Spread one distinct player marker per player evenly around the rim.

    Returns the (column, row) of each placed marker, in player order.
    """
    if players > len(PLAYER_MARKERS):
        raise ValueError(
            f"At most {len(PLAYER_MARKERS)} players have marker colours"
        )
    rim = perimeter_cells(grid.width, grid.height)
    if players > len(rim):
        raise ValueError(
            f"A {grid.width}x{grid.height} grid has room for only "
            f"{len(rim)} start markers"
        )
    placed = []
    for i in range(players):
        col, row = rim[(i * len(rim)) // players]
        grid.set_marker(col, row, PLAYER_MARKERS[i])
        placed.append((col, row))
    return placed
