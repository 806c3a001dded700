"""In-memory key-value adapter — implements KeyValueStore.

Lives for the lifetime of the process. Used by tests and by
STORAGE_BACKEND=memory.
"""

from __future__ import annotations


class MemoryKeyValueStore:
    """Dict-backed implementation of KeyValueStore."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
