"""Save-time validation, thumbnail rendering, and map persistence.

A map is saved in three steps:

  1. ``validate_for_save`` runs the cheap checks first (name and description
     present), then compares the number of distinct player marker colours
     with the required player count.
  2. ``build_map_document`` renders a fixed-size thumbnail with its own fit
     scale and packages everything into a ``MapDocument``.
  3. ``MapSaver.save`` hands the document to the store's
     ``create_document("maps", ...)``. Only one save may be in flight at a
     time; the shell runs it off the UI thread.
"""

from __future__ import annotations

import io
import logging
import threading
from typing import Protocol

from .config import check_player_count
from .errors import (
    MissingField,
    PlayerCountMismatch,
    SaveFailed,
    SaveInProgress,
)
from .geometry import RasterLayout
from .grid import HexGrid
from .render import HexMapRenderer
from .types import MapDocument, MarkerCount, Operator

log = logging.getLogger(__name__)

MAPS_COLLECTION = "maps"
THUMBNAIL_SIZE = (300, 200)


class MapStore(Protocol):
    def create_document(self, collection: str, payload: dict) -> str: ...


def validate_for_save(
    name: str, description: str, required_players: int, grid: HexGrid
) -> MarkerCount:
    """Raise if the map can't be saved; return its marker count otherwise."""
    if not (name or "").strip():
        raise MissingField("name")
    if not (description or "").strip():
        raise MissingField("description")
    check_player_count(required_players)
    markers = grid.count_markers()
    if markers.count != required_players:
        raise PlayerCountMismatch(required_players, markers.count)
    return markers


def render_thumbnail(
    grid: HexGrid, size: tuple[int, int] = THUMBNAIL_SIZE
) -> bytes:
    """Render the whole grid into a small PNG, fitted independently."""
    layout = RasterLayout.fit(grid.width, grid.height, size[0], size[1])
    renderer = HexMapRenderer(outline_width=0.5, marker_outline_width=0.7)
    img = renderer.render(grid.tiles, layout)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def build_map_document(
    grid: HexGrid,
    name: str,
    description: str,
    required_players: int,
    operator: Operator,
    thumbnail_size: tuple[int, int] = THUMBNAIL_SIZE,
) -> MapDocument:
    validate_for_save(name, description, required_players, grid)
    return MapDocument(
        name=name.strip(),
        description=description.strip(),
        tiles=list(grid.tiles),
        grid_shape=grid.shape,
        required_players=required_players,
        thumbnail=render_thumbnail(grid, thumbnail_size),
        created_by=operator.user_id,
    )


class MapSaver:
    """Writes map documents to a store, one at a time."""

    def __init__(self, store: MapStore):
        self.store = store
        self._lock = threading.Lock()
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def save(self, document: MapDocument) -> str:
        """Persist the document and return its new id.

        Raises SaveInProgress if another save hasn't finished, and SaveFailed
        (chained to the store's error) if the store rejects the write. Both
        leave the saver ready for a retry.
        """
        with self._lock:
            if self._in_flight:
                raise SaveInProgress()
            self._in_flight = True
        try:
            doc_id = self.store.create_document(
                MAPS_COLLECTION, document.to_dict()
            )
        except Exception as e:
            log.exception("Saving map %r failed", document.name)
            raise SaveFailed(f"Error saving map: {e}") from e
        finally:
            with self._lock:
                self._in_flight = False
        log.info("Map %r created with id %s", document.name, doc_id)
        return doc_id
