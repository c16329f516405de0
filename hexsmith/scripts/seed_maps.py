#!/usr/bin/env python3
"""Seed the map store with a set of sample maps.

Usage:
    hexsmith-seed                        # add samples to ./maps_store
    hexsmith-seed --store-dir DIR        # ... to another store
    hexsmith-seed --clear                # delete existing maps first
    hexsmith-seed --dry-run              # generate and validate only
    hexsmith-seed --seed 7               # reproducible terrain

Each sample goes through the same validate / thumbnail / save pipeline the
editor uses, with one start marker per player spread around the rim so the
marker count matches the required player count.
"""

import argparse
import logging
import random
import sys
from dataclasses import dataclass

from ..engine.export import MAPS_COLLECTION, MapSaver, build_map_document
from ..engine.generate import generate_themed_tiles, place_start_markers
from ..engine.grid import HexGrid
from ..engine.types import GridShape, Operator
from ..frontend.store import DocumentStore, InMemoryStore, JsonDirectoryStore

log = logging.getLogger(__name__)

SEED_OPERATOR = Operator(user_id="seed-script", is_admin=True)

# Side length and player count per size class.
MAP_SIZES = {
    "small": (8, 2),
    "medium": (12, 4),
    "large": (16, 6),
}


@dataclass(frozen=True)
class SampleMap:
    name: str
    theme: str
    size: str
    description: str


SAMPLE_MAPS = [
    SampleMap(
        "Green Valley",
        "plains",
        "small",
        "A peaceful valley with green plains and scattered forests.",
    ),
    SampleMap(
        "Mountain Fortress",
        "mountain",
        "small",
        "Rugged mountain terrain perfect for defensive positions.",
    ),
    SampleMap(
        "Deep Woods",
        "forest",
        "small",
        "Dense forest with hidden paths and abundant resources.",
    ),
    SampleMap(
        "Island Archipelago",
        "water",
        "small",
        "Series of small islands separated by shallow waters.",
    ),
    SampleMap(
        "Mixed Terrain",
        "mixed",
        "small",
        "Varied landscape with a mix of all terrain types.",
    ),
    SampleMap(
        "Vast Plains",
        "plains",
        "medium",
        "Wide open plains with excellent visibility.",
    ),
    SampleMap(
        "Mountain Range",
        "mountain",
        "medium",
        "Extensive mountain range with valuable ore deposits.",
    ),
    SampleMap(
        "Grand Forest",
        "forest",
        "medium",
        "Ancient forest with tall trees and hidden clearings.",
    ),
    SampleMap(
        "Great Lakes",
        "water",
        "medium",
        "Region dominated by large interconnected lakes.",
    ),
    SampleMap(
        "Diverse Landscape",
        "mixed",
        "medium",
        "A balanced map featuring all terrain types in equal measure.",
    ),
    SampleMap(
        "Endless Plains",
        "plains",
        "large",
        "Massive plains stretching to the horizon.",
    ),
    SampleMap(
        "Mountain Empire",
        "mountain",
        "large",
        "Imposing mountain peaks with deep valleys between them.",
    ),
    SampleMap(
        "Ancient Woods",
        "forest",
        "large",
        "Sprawling primeval forest with centuries-old trees.",
    ),
    SampleMap(
        "Ocean Expanse",
        "water",
        "large",
        "Vast ocean with scattered islands and abundant marine resources.",
    ),
    SampleMap(
        "Complete Realm",
        "mixed",
        "large",
        "A complete realm with diverse regions and terrain types.",
    ),
]


def build_sample_grid(sample: SampleMap, rng: random.Random) -> HexGrid:
    side, players = MAP_SIZES[sample.size]
    grid = HexGrid(side, side, seed=rng.getrandbits(32))
    tiles = generate_themed_tiles(side, side, sample.theme, rng)
    grid.load_tiles(GridShape(side, side), tiles)
    place_start_markers(grid, players)
    return grid


def seed_store(
    store: DocumentStore,
    samples=SAMPLE_MAPS,
    seed: int | None = None,
    clear: bool = False,
) -> list[str]:
    """Write every sample map to the store and return their ids.

    If the store already holds maps and ``clear`` is not set, nothing is
    written and an empty list is returned.
    """
    existing = store.list_documents(MAPS_COLLECTION)
    if existing:
        log.info("Found %d existing maps", len(existing))
        if not clear:
            log.warning(
                "Maps already exist in the store; "
                "run with --clear to replace them"
            )
            return []
        for doc in existing:
            store.delete_document(MAPS_COLLECTION, doc["id"])
        log.info("Deleted %d existing maps", len(existing))

    rng = random.Random(seed)
    saver = MapSaver(store)
    ids = []
    for sample in samples:
        grid = build_sample_grid(sample, rng)
        _, players = MAP_SIZES[sample.size]
        document = build_map_document(
            grid, sample.name, sample.description, players, SEED_OPERATOR
        )
        doc_id = saver.save(document)
        log.info(
            'Added map "%s" (%s, %s) with id %s',
            sample.name,
            sample.size,
            sample.theme,
            doc_id,
        )
        ids.append(doc_id)
    return ids


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Add sample maps to the map store"
    )
    parser.add_argument(
        "--store-dir",
        default="maps_store",
        help="Directory of the JSON document store (default: maps_store)",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete existing maps before adding the samples",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate and validate into an in-memory store only",
    )
    parser.add_argument("--seed", type=int, help="Seed for terrain generation")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.dry_run:
        store = InMemoryStore()
    else:
        store = JsonDirectoryStore(args.store_dir)
    ids = seed_store(store, seed=args.seed, clear=args.clear)
    if not ids:
        return 1
    log.info("Added %d sample maps", len(ids))
    return 0


if __name__ == "__main__":
    sys.exit(main())
