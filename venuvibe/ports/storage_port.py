"""Storage port — abstract interface for the persistent key-value store.

The JSON layer and repositories depend on this protocol, never on a
specific backend.
"""

from __future__ import annotations

from typing import Protocol


class StorageError(Exception):
    """Raised when any storage backend operation fails."""


class KeyValueStore(Protocol):
    """Raw string key-value storage. A write replaces the whole value."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...
