"""Document stores the editor saves maps into.

The editor itself only ever calls ``create_document("maps", payload)``; the
rest of the interface (get/list/update/delete) is for the saved-maps panel
and the seeding script.

  * ``InMemoryStore``: a dict of dicts, for tests and dry runs.
  * ``JsonDirectoryStore``: one pretty-printed JSON file per document at
    ``<root>/<collection>/<id>.json``. Writes go to a temp file that is then
    renamed over the target, so a crash never leaves half a document.

Ids are uuid4 hex strings. Payloads read back carry their id under ``"id"``.
"""

from __future__ import annotations

import copy
import json
import logging
import uuid
from pathlib import Path
from typing import Protocol

log = logging.getLogger(__name__)


class DocumentStore(Protocol):
    def create_document(self, collection: str, payload: dict) -> str: ...

    def get_document(self, collection: str, doc_id: str) -> dict | None: ...

    def list_documents(
        self, collection: str, filter: dict | None = None
    ) -> list[dict]: ...

    def update_document(
        self, collection: str, doc_id: str, changes: dict
    ) -> None: ...

    def delete_document(self, collection: str, doc_id: str) -> None: ...


def _matches(payload: dict, filter: dict | None) -> bool:
    if not filter:
        return True
    return all(payload.get(k) == v for k, v in filter.items())


def _new_id() -> str:
    return uuid.uuid4().hex


class InMemoryStore:
    def __init__(self):
        self.collections: dict[str, dict[str, dict]] = {}

    def create_document(self, collection: str, payload: dict) -> str:
        doc_id = _new_id()
        self.collections.setdefault(collection, {})[doc_id] = copy.deepcopy(
            payload
        )
        return doc_id

    def get_document(self, collection: str, doc_id: str) -> dict | None:
        payload = self.collections.get(collection, {}).get(doc_id)
        if payload is None:
            return None
        return {**copy.deepcopy(payload), "id": doc_id}

    def list_documents(
        self, collection: str, filter: dict | None = None
    ) -> list[dict]:
        return [
            {**copy.deepcopy(p), "id": doc_id}
            for doc_id, p in self.collections.get(collection, {}).items()
            if _matches(p, filter)
        ]

    def update_document(
        self, collection: str, doc_id: str, changes: dict
    ) -> None:
        docs = self.collections.get(collection, {})
        if doc_id not in docs:
            raise KeyError(f"No document {doc_id!r} in {collection!r}")
        docs[doc_id].update(copy.deepcopy(changes))

    def delete_document(self, collection: str, doc_id: str) -> None:
        docs = self.collections.get(collection, {})
        if doc_id not in docs:
            raise KeyError(f"No document {doc_id!r} in {collection!r}")
        del docs[doc_id]


class JsonDirectoryStore:
    def __init__(self, root: Path | str):
        self.root = Path(root)

    def _path(self, collection: str, doc_id: str) -> Path:
        return self.root / collection / f"{doc_id}.json"

    def _write(self, path: Path, payload: dict) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        tmp.replace(path)

    def _read(self, path: Path) -> dict:
        return json.loads(path.read_text(encoding="utf-8"))

    def create_document(self, collection: str, payload: dict) -> str:
        doc_id = _new_id()
        self._write(self._path(collection, doc_id), payload)
        log.info("Wrote %s/%s", collection, doc_id)
        return doc_id

    def get_document(self, collection: str, doc_id: str) -> dict | None:
        path = self._path(collection, doc_id)
        if not path.exists():
            return None
        return {**self._read(path), "id": doc_id}

    def list_documents(
        self, collection: str, filter: dict | None = None
    ) -> list[dict]:
        folder = self.root / collection
        if not folder.is_dir():
            return []
        docs = []
        for path in sorted(folder.glob("*.json")):
            try:
                payload = self._read(path)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                log.warning("Skipping unreadable document %s: %s", path, e)
                continue
            if not isinstance(payload, dict):
                log.warning("Skipping non-object document %s", path)
                continue
            if _matches(payload, filter):
                docs.append({**payload, "id": path.stem})
        return docs

    def update_document(
        self, collection: str, doc_id: str, changes: dict
    ) -> None:
        path = self._path(collection, doc_id)
        if not path.exists():
            raise KeyError(f"No document {doc_id!r} in {collection!r}")
        self._write(path, {**self._read(path), **changes})

    def delete_document(self, collection: str, doc_id: str) -> None:
        path = self._path(collection, doc_id)
        if not path.exists():
            raise KeyError(f"No document {doc_id!r} in {collection!r}")
        path.unlink()
        log.info("Deleted %s/%s", collection, doc_id)
