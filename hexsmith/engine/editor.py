"""One map-editing session.

``MapEditor`` ties the pieces together for a single operator: the live grid,
the painter that mutates it, the renderer that draws it, and the saver that
persists it. It is what the tkinter shell drives and what headless callers
(the seeding script, tests) use directly.

Editing requires an ``Operator`` carrying the admin capability. The check
happens once, at construction; nothing in the engine looks at ambient
sign-in state.
"""

from __future__ import annotations

import logging

from PIL import Image

from .config import EditorSettings, check_player_count
from .errors import NotAuthorized
from .export import MapSaver, MapStore, build_map_document
from .geometry import RasterLayout
from .grid import HexGrid
from .painting import Painter
from .render import HexMapRenderer
from .types import Brush, MapDocument, MarkerCount, Operator

log = logging.getLogger(__name__)


class MapEditor:
    def __init__(
        self,
        operator: Operator,
        store: MapStore,
        settings: EditorSettings | None = None,
    ):
        if not operator.is_admin:
            raise NotAuthorized(operator.user_id)
        self.operator = operator
        self.settings = settings or EditorSettings()
        self.grid = HexGrid(
            self.settings.grid_width,
            self.settings.grid_height,
            seed=self.settings.seed,
        )
        self.painter = Painter(self.grid, self.settings.brush)
        self.renderer = HexMapRenderer()
        self.saver = MapSaver(store)
        self._required_players = check_player_count(
            self.settings.required_players
        )

    # -- configuration --

    @property
    def required_players(self) -> int:
        return self._required_players

    @required_players.setter
    def required_players(self, value: int) -> None:
        self._required_players = check_player_count(value)

    @property
    def brush(self) -> Brush:
        return self.painter.brush

    def set_brush(self, mode: str, value: str) -> None:
        self.painter.brush = Brush(mode=mode, value=value)

    def resize(self, width: int, height: int) -> None:
        """Destructively re-initialise the grid at a new size.

        A stroke in progress keeps its old layout until the next render, so
        its next hit-tests may name cells the new grid doesn't have; those
        paints are dropped by the grid.
        """
        self.grid.reset(width, height)

    def count_markers(self) -> MarkerCount:
        return self.grid.count_markers()

    # -- rendering --

    def render(self, viewport_width: int, viewport_height: int) -> Image.Image:
        """Draw the grid fitted to the viewport and arm the painter with it."""
        layout = RasterLayout.fit(
            self.grid.width, self.grid.height, viewport_width, viewport_height
        )
        self.painter.layout = layout
        return self.renderer.render(self.grid.tiles, layout)

    # -- pointer events (raster coordinates) --

    def pointer_down(self, x: float, y: float, button: int = 1) -> bool:
        return self.painter.pointer_down(x, y, button)

    def pointer_move(self, x: float, y: float) -> bool:
        return self.painter.pointer_move(x, y)

    def pointer_up(self) -> None:
        self.painter.pointer_up()

    def pointer_leave(self) -> None:
        self.painter.pointer_leave()

    # -- saving --

    @property
    def saving(self) -> bool:
        return self.saver.in_flight

    def build_document(self, name: str, description: str) -> MapDocument:
        return build_map_document(
            self.grid,
            name,
            description,
            self._required_players,
            self.operator,
            (self.settings.thumbnail_width, self.settings.thumbnail_height),
        )

    def save(self, name: str, description: str) -> str:
        """Validate, render the thumbnail, and persist. Returns the new id."""
        document = self.build_document(name, description)
        return self.saver.save(document)

    def start_over(self) -> None:
        """Fresh grid at the current size, as after a successful save."""
        self.grid.reset(self.grid.width, self.grid.height)
