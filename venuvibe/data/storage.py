"""
VenuVibe — JSON storage layer.

Reads and writes JSON documents under fixed keys of a KeyValueStore.
Absent keys read as empty; anything that fails to decode is raised as
CorruptedDataError instead of being treated as empty.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from venuvibe.data.errors import CorruptedDataError
from venuvibe.ports.storage_port import KeyValueStore

logger = logging.getLogger(__name__)


class StorageKeys:
    CURRENT_USER = "venuvibe_user"
    USERS = "venuvibe_users"
    CREDENTIALS = "venuvibe_credentials"
    EVENTS = "venuvibe_events"
    GUESTS = "venuvibe_guests"
    BUDGET_ITEMS = "venuvibe_budget_items"
    TASKS = "venuvibe_tasks"
    VENDORS = "venuvibe_vendors"


class JsonStorage:
    """JSON codec plus per-key locking on top of a raw key-value store."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @contextmanager
    def locked(self, key: str) -> Iterator[None]:
        """Hold the lock for key across a read-modify-write cycle."""
        with self._locks_guard:
            lock = self._locks.setdefault(key, threading.RLock())
        with lock:
            yield

    def _decode(self, key: str) -> object | None:
        raw = self._store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptedDataError(key, f"invalid JSON ({exc.msg})") from exc

    def read_list(self, key: str) -> list[dict]:
        """Return the JSON array stored under key; [] when absent."""
        value = self._decode(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise CorruptedDataError(key, f"expected a list, got {type(value).__name__}")
        return value

    def write_list(self, key: str, items: list[dict]) -> None:
        self._store.set(key, json.dumps(items))
        logger.debug("Wrote %d records to %s", len(items), key)

    def read_object(self, key: str) -> dict | None:
        """Return the JSON object stored under key; None when absent."""
        value = self._decode(key)
        if value is None:
            return None
        if not isinstance(value, dict):
            raise CorruptedDataError(key, f"expected an object, got {type(value).__name__}")
        return value

    def write_object(self, key: str, obj: dict) -> None:
        self._store.set(key, json.dumps(obj))

    def remove(self, key: str) -> None:
        self._store.remove(key)
