"""
VenuVibe — Repositories.

Each repository owns one JSON collection in the key-value store. Every
operation loads the whole collection, changes an in-memory copy and writes
the whole collection back, holding the key's lock for the full cycle.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from venuvibe.data.errors import CorruptedDataError, NotFoundError
from venuvibe.data.ids import new_id, utc_timestamp
from venuvibe.data.models import (
    BudgetItem,
    BudgetItemCreate,
    Credential,
    Event,
    EventCreate,
    Guest,
    GuestCreate,
    Task,
    TaskCreate,
    User,
    Vendor,
    VendorCreate,
)
from venuvibe.data.storage import JsonStorage, StorageKeys

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _default_storage() -> JsonStorage:
    from venuvibe.adapters.store_factory import create_key_value_store
    return JsonStorage(create_key_value_store())


class _CollectionDB(Generic[RecordT]):
    """Shared read-modify-write plumbing for a collection of records with an `id`."""

    key: str
    model: type[RecordT]
    label: str

    def __init__(
        self,
        storage: JsonStorage | None = None,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._storage = storage if storage is not None else _default_storage()
        self._new_id = id_factory

    def _load(self) -> list[RecordT]:
        rows = self._storage.read_list(self.key)
        try:
            return [self.model.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise CorruptedDataError(self.key, f"invalid {self.label} record") from exc

    def _save(self, records: list[RecordT]) -> None:
        self._storage.write_list(self.key, [r.to_json_dict() for r in records])

    @staticmethod
    def _draft_fields(draft: BaseModel) -> dict:
        """Caller-supplied fields of a draft. Empty optionals stay out of storage."""
        return draft.model_dump(exclude={"id", "created_at"}, exclude_none=True)

    def list_all(self) -> list[RecordT]:
        """All records in storage order."""
        return self._load()

    def get(self, record_id: str) -> RecordT | None:
        """Fetch a single record by id."""
        for record in self._load():
            if record.id == record_id:
                return record
        return None

    def _append(self, record: RecordT) -> RecordT:
        with self._storage.locked(self.key):
            records = self._load()
            records.append(record)
            self._save(records)
        logger.info("%s created: %s", self.label.capitalize(), record.id)
        return record

    def update(self, record: RecordT) -> RecordT:
        """Replace the stored record with the same id. Full overwrite, not a merge."""
        with self._storage.locked(self.key):
            records = self._load()
            for index, existing in enumerate(records):
                if existing.id == record.id:
                    records[index] = record
                    break
            else:
                raise NotFoundError(f"{self.label.capitalize()} {record.id} not found")
            self._save(records)
        logger.info("%s updated: %s", self.label.capitalize(), record.id)
        return record

    def delete(self, record_id: str) -> bool:
        """Remove the record with this id. Absent ids are a no-op returning False."""
        with self._storage.locked(self.key):
            records = self._load()
            remaining = [r for r in records if r.id != record_id]
            if len(remaining) == len(records):
                return False
            self._save(remaining)
        logger.info("%s deleted: %s", self.label.capitalize(), record_id)
        return True


class _EventScopedDB(_CollectionDB[RecordT]):
    """Collection whose records belong to an event through `event_id`."""

    def list_for_event(self, event_id: str) -> list[RecordT]:
        return [r for r in self._load() if r.event_id == event_id]

    def delete_for_event(self, event_id: str) -> int:
        """Remove every record owned by the event. Returns how many were removed."""
        with self._storage.locked(self.key):
            records = self._load()
            remaining = [r for r in records if r.event_id != event_id]
            removed = len(records) - len(remaining)
            if removed:
                self._save(remaining)
        if removed:
            logger.info("Removed %d %s records of event %s", removed, self.label, event_id)
        return removed


class EventDB(_CollectionDB[Event]):
    """Events, scoped to their owning user by `user_id`."""

    key = StorageKeys.EVENTS
    model = Event
    label = "event"

    def list_for_user(self, user_id: str) -> list[Event]:
        """Every event owned by user_id, in insertion order."""
        return [e for e in self._load() if e.user_id == user_id]

    def create(self, draft: EventCreate) -> Event:
        """Assign id and created_at, append and persist. Returns the stored record."""
        event = Event(
            **self._draft_fields(draft),
            id=self._new_id(),
            created_at=utc_timestamp(),
        )
        return self._append(event)


class GuestDB(_EventScopedDB[Guest]):
    key = StorageKeys.GUESTS
    model = Guest
    label = "guest"

    def create(self, draft: GuestCreate) -> Guest:
        return self._append(Guest(**self._draft_fields(draft), id=self._new_id()))


class BudgetItemDB(_EventScopedDB[BudgetItem]):
    key = StorageKeys.BUDGET_ITEMS
    model = BudgetItem
    label = "budget item"

    def create(self, draft: BudgetItemCreate) -> BudgetItem:
        return self._append(BudgetItem(**self._draft_fields(draft), id=self._new_id()))


class TaskDB(_EventScopedDB[Task]):
    key = StorageKeys.TASKS
    model = Task
    label = "task"

    def create(self, draft: TaskCreate) -> Task:
        return self._append(Task(**self._draft_fields(draft), id=self._new_id()))


class VendorDB(_CollectionDB[Vendor]):
    """Vendor directory shared by all users."""

    key = StorageKeys.VENDORS
    model = Vendor
    label = "vendor"

    def create(self, draft: VendorCreate) -> Vendor:
        vendor = Vendor(
            **self._draft_fields(draft),
            id=self._new_id(),
            created_at=utc_timestamp(),
        )
        return self._append(vendor)


class UserDB:
    """All known users plus their password hashes."""

    def __init__(self, storage: JsonStorage | None = None) -> None:
        self._storage = storage if storage is not None else _default_storage()

    def _load_users(self) -> list[User]:
        rows = self._storage.read_list(StorageKeys.USERS)
        try:
            return [User.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise CorruptedDataError(StorageKeys.USERS, "invalid user record") from exc

    def _load_credentials(self) -> list[Credential]:
        rows = self._storage.read_list(StorageKeys.CREDENTIALS)
        try:
            return [Credential.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise CorruptedDataError(StorageKeys.CREDENTIALS, "invalid credential record") from exc

    def list_users(self) -> list[User]:
        """Return all registered users in sign-up order."""
        return self._load_users()

    def get_user(self, user_id: str) -> User | None:
        for user in self._load_users():
            if user.id == user_id:
                return user
        return None

    def find_by_email(self, email: str) -> User | None:
        """Exact email match by linear scan."""
        for user in self._load_users():
            if user.email == email:
                return user
        return None

    def add_user(self, user: User) -> User:
        """Append a user. Uniqueness is the caller's concern."""
        with self._storage.locked(StorageKeys.USERS):
            users = self._load_users()
            users.append(user)
            self._storage.write_list(StorageKeys.USERS, [u.to_json_dict() for u in users])
        logger.info("User registered: %s <%s>", user.id, user.email)
        return user

    def set_password_hash(self, user_id: str, password_hash: str) -> None:
        """Insert or replace the credential for user_id."""
        with self._storage.locked(StorageKeys.CREDENTIALS):
            credentials = [c for c in self._load_credentials() if c.user_id != user_id]
            credentials.append(Credential(user_id=user_id, password_hash=password_hash))
            self._storage.write_list(
                StorageKeys.CREDENTIALS, [c.to_json_dict() for c in credentials],
            )
        logger.info("Credential stored for user %s", user_id)

    def register(self, user: User, password_hash: str) -> User:
        """Add a user together with its credential.

        Both collections are loaded before either is written, so a corrupted
        collection fails the call with nothing stored. The credential goes in
        first; without a user record it can never be matched.
        """
        with self._storage.locked(StorageKeys.USERS):
            with self._storage.locked(StorageKeys.CREDENTIALS):
                users = self._load_users()
                credentials = [c for c in self._load_credentials() if c.user_id != user.id]
                credentials.append(Credential(user_id=user.id, password_hash=password_hash))
                users.append(user)
                self._storage.write_list(
                    StorageKeys.CREDENTIALS, [c.to_json_dict() for c in credentials],
                )
                self._storage.write_list(StorageKeys.USERS, [u.to_json_dict() for u in users])
        logger.info("User registered: %s <%s>", user.id, user.email)
        return user

    def get_password_hash(self, user_id: str) -> str | None:
        for credential in self._load_credentials():
            if credential.user_id == user_id:
                return credential.password_hash
        return None


if __name__ == "__main__":
    from venuvibe.adapters.sqlite_store import SQLiteKeyValueStore
    from venuvibe.config import settings

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    storage = JsonStorage(SQLiteKeyValueStore(db_path="data/test_venuvibe.db"))
    events = EventDB(storage)
    party = events.create(EventCreate(title="Launch Party", date="2025-09-01", user_id="u1"))
    print(f"Created: {party}")

    guests = GuestDB(storage)
    guests.create(GuestCreate(event_id=party.id, name="Dana", email="dana@example.com", plus_ones=1))
    print(f"Guests: {guests.list_for_event(party.id)}")

    print(f"\nEvents for u1: {events.list_for_user('u1')}")
    events.delete(party.id)
    guests.delete_for_event(party.id)
    print(f"After delete: {events.list_for_user('u1')}")
