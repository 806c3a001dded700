"""Shared test fixtures and configuration.

Sets up environment variables before any venuvibe imports so settings
load with a fast bcrypt cost and the in-memory backend, and provides
common fixtures like stores and repositories.
"""

import os

# Patch env vars BEFORE any venuvibe imports
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_PATH", ":memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest


@pytest.fixture
def memory_store():
    """Return an empty in-memory key-value store."""
    from venuvibe.adapters.memory_store import MemoryKeyValueStore
    return MemoryKeyValueStore()


@pytest.fixture
def sqlite_store(tmp_path):
    """Return a SQLiteKeyValueStore backed by a temp file."""
    from venuvibe.adapters.sqlite_store import SQLiteKeyValueStore
    return SQLiteKeyValueStore(db_path=str(tmp_path / "test_venuvibe.db"))


@pytest.fixture
def storage(memory_store):
    """Return a JsonStorage over the in-memory store."""
    from venuvibe.data.storage import JsonStorage
    return JsonStorage(memory_store)


@pytest.fixture
def event_db(storage):
    from venuvibe.data.db import EventDB
    return EventDB(storage)


@pytest.fixture
def guest_db(storage):
    from venuvibe.data.db import GuestDB
    return GuestDB(storage)


@pytest.fixture
def budget_db(storage):
    from venuvibe.data.db import BudgetItemDB
    return BudgetItemDB(storage)


@pytest.fixture
def task_db(storage):
    from venuvibe.data.db import TaskDB
    return TaskDB(storage)


@pytest.fixture
def vendor_db(storage):
    from venuvibe.data.db import VendorDB
    return VendorDB(storage)


@pytest.fixture
def user_db(storage):
    from venuvibe.data.db import UserDB
    return UserDB(storage)


@pytest.fixture
def auth(storage):
    """Return an AuthService with the cheapest bcrypt cost."""
    from venuvibe.core.auth import AuthService
    return AuthService(storage, bcrypt_rounds=4)
