"""In-memory map document store keyed by map id.

Stands in for the persistence collaborator: the HTTP layer reads and writes
documents here and hands the routing engine deep-copied snapshots, so engine
calls never observe a half-applied update.
"""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable


class MapNotFound(KeyError):
    """Raised when a map id is not in the store."""


class MapAlreadyExists(ValueError):
    """Raised when creating a map whose id is already stored."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class MapStore:
    """Thread-safe dictionary of map documents."""

    _maps: dict[str, dict[str, Any]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __len__(self) -> int:
        with self._lock:
            return len(self._maps)

    def __contains__(self, map_id: object) -> bool:
        with self._lock:
            return map_id in self._maps

    def list_maps(self) -> list[dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(self._maps[map_id]) for map_id in sorted(self._maps)]

    def get(self, map_id: str) -> dict[str, Any]:
        with self._lock:
            if map_id not in self._maps:
                raise MapNotFound(f"Map '{map_id}' not found")
            return copy.deepcopy(self._maps[map_id])

    def create(self, document: dict[str, Any]) -> dict[str, Any]:
        map_id = str(document["id"])
        timestamp = _now()
        stored = {**copy.deepcopy(document), "id": map_id, "createdAt": timestamp, "updatedAt": timestamp}
        with self._lock:
            if map_id in self._maps:
                raise MapAlreadyExists(f"Map with id '{map_id}' already exists")
            self._maps[map_id] = stored
        return copy.deepcopy(stored)

    def update(self, map_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        """Replace the given top-level fields of a stored map."""
        with self._lock:
            if map_id not in self._maps:
                raise MapNotFound(f"Map '{map_id}' not found")
            stored = self._maps[map_id]
            stored.update(copy.deepcopy(changes))
            stored["id"] = map_id
            stored["updatedAt"] = _now()
            return copy.deepcopy(stored)

    def delete(self, map_id: str) -> None:
        with self._lock:
            if map_id not in self._maps:
                raise MapNotFound(f"Map '{map_id}' not found")
            del self._maps[map_id]

    def replace_all(self, documents: Iterable[dict[str, Any]], clear_existing: bool = True) -> int:
        """Bulk write documents, optionally dropping everything stored first."""
        timestamp = _now()
        prepared = {
            str(doc["id"]): {**copy.deepcopy(doc), "createdAt": timestamp, "updatedAt": timestamp}
            for doc in documents
        }
        with self._lock:
            if clear_existing:
                self._maps.clear()
            self._maps.update(prepared)
        return len(prepared)

    def clear(self) -> None:
        with self._lock:
            self._maps.clear()

    def snapshot(self) -> dict[str, dict[str, Any]]:
        """Deep copy of every document, keyed by map id, for one routing request."""
        with self._lock:
            return copy.deepcopy(self._maps)
