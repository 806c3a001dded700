"""Storage adapter factory — creates the right key-value store based on config."""

from __future__ import annotations

from venuvibe.config import settings
from venuvibe.ports.storage_port import KeyValueStore


def create_key_value_store(db_path: str | None = None) -> KeyValueStore:
    """Return the key-value store matching the STORAGE_BACKEND setting.

    Args:
        db_path: SQLite file override. Ignored by the memory backend.
    """
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "sqlite":
        from venuvibe.adapters.sqlite_store import SQLiteKeyValueStore

        return SQLiteKeyValueStore(db_path=db_path)

    if backend == "memory":
        from venuvibe.adapters.memory_store import MemoryKeyValueStore

        return MemoryKeyValueStore()

    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")
