"""Tests for the sample-map seeding script."""

import random

import pytest

from ..engine.types import MapDocument
from ..frontend.store import InMemoryStore, JsonDirectoryStore
from .seed_maps import (
    MAP_SIZES,
    SAMPLE_MAPS,
    build_sample_grid,
    main,
    seed_store,
)


class TestBuildSampleGrid:
    @pytest.mark.parametrize("sample", SAMPLE_MAPS[::5], ids=lambda s: s.name)
    def test_size_and_markers(self, sample):
        grid = build_sample_grid(sample, random.Random(0))
        side, players = MAP_SIZES[sample.size]
        assert (grid.width, grid.height) == (side, side)
        assert grid.count_markers().count == players


class TestSeedStore:
    def test_writes_every_sample(self):
        store = InMemoryStore()
        ids = seed_store(store, seed=1)
        assert len(ids) == len(SAMPLE_MAPS)
        docs = store.list_documents("maps")
        assert {d["name"] for d in docs} == {s.name for s in SAMPLE_MAPS}
        for d in docs:
            doc = MapDocument.from_dict(d)
            assert doc.thumbnail.startswith(b"\x89PNG")
            assert doc.created_by == "seed-script"

    def test_existing_maps_block_without_clear(self):
        store = InMemoryStore()
        store.create_document("maps", {"name": "Keep me"})
        assert seed_store(store, seed=1) == []
        assert len(store.list_documents("maps")) == 1

    def test_clear_replaces_existing(self):
        store = InMemoryStore()
        store.create_document("maps", {"name": "Old"})
        seed_store(store, samples=SAMPLE_MAPS[:2], seed=1, clear=True)
        names = [d["name"] for d in store.list_documents("maps")]
        assert sorted(names) == sorted(s.name for s in SAMPLE_MAPS[:2])


class TestMain:
    def test_writes_to_store_dir(self, tmp_path):
        assert main(["--store-dir", str(tmp_path), "--seed", "2"]) == 0
        store = JsonDirectoryStore(tmp_path)
        assert len(store.list_documents("maps")) == len(SAMPLE_MAPS)

    def test_dry_run_writes_nothing(self, tmp_path):
        assert main(["--store-dir", str(tmp_path), "--dry-run"]) == 0
        assert not (tmp_path / "maps").exists()

    def test_refuses_to_overwrite(self, tmp_path):
        main(["--store-dir", str(tmp_path), "--seed", "2"])
        assert main(["--store-dir", str(tmp_path)]) == 1
