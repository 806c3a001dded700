"""Tests for venuvibe.data.db — EventDB (full-collection read-modify-write)."""

import pytest

from venuvibe.data.db import EventDB
from venuvibe.data.errors import CorruptedDataError, NotFoundError
from venuvibe.data.models import EventCreate, EventStatus
from venuvibe.data.storage import JsonStorage, StorageKeys


def _draft(**overrides):
    fields = {"title": "Launch Party", "date": "2025-09-01", "user_id": "u1", "status": "planning"}
    fields.update(overrides)
    return EventCreate(**fields)


class TestEventDBCreateAndList:
    def test_create_assigns_id_and_created_at(self, event_db):
        event = event_db.create(_draft())
        assert event.id
        assert event.created_at
        assert event.title == "Launch Party"
        assert event.status == EventStatus.PLANNING

    def test_create_ids_are_unique(self, event_db):
        a = event_db.create(_draft())
        b = event_db.create(_draft())
        assert a.id != b.id

    def test_created_event_listed_for_owner_only(self, event_db):
        event = event_db.create(_draft())
        assert [e.id for e in event_db.list_for_user("u1")] == [event.id]
        assert event_db.list_for_user("u2") == []

    def test_list_for_user_keeps_insertion_order(self, event_db):
        titles = ["C", "A", "B"]
        for title in titles:
            event_db.create(_draft(title=title))
        assert [e.title for e in event_db.list_for_user("u1")] == titles

    def test_users_never_see_each_others_events(self, event_db):
        event_db.create(_draft(title="Mine", user_id="u1"))
        event_db.create(_draft(title="Theirs", user_id="u2"))
        event_db.create(_draft(title="Mine too", user_id="u1"))
        mine = {e.id for e in event_db.list_for_user("u1")}
        theirs = {e.id for e in event_db.list_for_user("u2")}
        assert len(mine) == 2
        assert len(theirs) == 1
        assert mine.isdisjoint(theirs)

    def test_list_for_user_empty_collection(self, event_db):
        assert event_db.list_for_user("u1") == []

    def test_injected_id_factory(self, storage):
        db = EventDB(storage, id_factory=lambda: "fixed-id")
        assert db.create(_draft()).id == "fixed-id"

    def test_created_record_round_trips_through_storage(self, storage, event_db):
        event = event_db.create(_draft(location="Rooftop"))
        reread = EventDB(storage).get(event.id)
        assert reread == event

    def test_unset_optionals_not_persisted(self, storage, event_db):
        event_db.create(_draft())
        row = storage.read_list(StorageKeys.EVENTS)[0]
        assert "description" not in row
        assert row["status"] == "planning"

    def test_caller_extra_fields_persisted(self, storage, event_db):
        event = event_db.create(_draft(guestCount=120))
        row = storage.read_list(StorageKeys.EVENTS)[0]
        assert row["guestCount"] == 120
        assert EventDB(storage).get(event.id) == event


class TestEventDBUpdate:
    def test_update_replaces_whole_record(self, event_db):
        event = event_db.create(_draft(description="Old", location="Hall"))
        changed = event.model_copy(update={"title": "Renamed", "location": None})
        event_db.update(changed)
        stored = event_db.get(event.id)
        assert stored.title == "Renamed"
        assert stored.location is None
        assert stored.description == "Old"

    def test_update_keeps_position(self, event_db):
        a = event_db.create(_draft(title="A"))
        event_db.create(_draft(title="B"))
        event_db.update(a.model_copy(update={"title": "A2"}))
        assert [e.title for e in event_db.list_all()] == ["A2", "B"]

    def test_update_nonexistent_raises_and_leaves_storage_unchanged(
        self, memory_store, event_db,
    ):
        event = event_db.create(_draft())
        before = memory_store.get(StorageKeys.EVENTS)
        ghost = event.model_copy(update={"id": "nonexistent"})
        with pytest.raises(NotFoundError):
            event_db.update(ghost)
        assert memory_store.get(StorageKeys.EVENTS) == before

    def test_update_on_empty_collection_raises(self, memory_store, event_db):
        from venuvibe.data.models import Event
        ghost = Event(id="nonexistent", created_at="x", title="T", date="2025-01-01", user_id="u1")
        with pytest.raises(NotFoundError):
            event_db.update(ghost)
        assert memory_store.get(StorageKeys.EVENTS) is None


class TestEventDBDelete:
    def test_delete_removes_exactly_one(self, event_db):
        a = event_db.create(_draft(title="A"))
        b = event_db.create(_draft(title="B", location="Park"))
        c = event_db.create(_draft(title="C", user_id="u2"))
        assert event_db.delete(a.id) is True
        remaining = event_db.list_all()
        assert remaining == [b, c]

    def test_delete_nonexistent_is_noop(self, memory_store, event_db):
        event_db.create(_draft())
        before = memory_store.get(StorageKeys.EVENTS)
        assert event_db.delete("nonexistent") is False
        assert memory_store.get(StorageKeys.EVENTS) == before

    def test_delete_on_absent_collection_is_noop(self, memory_store, event_db):
        assert event_db.delete("nonexistent") is False
        assert memory_store.get(StorageKeys.EVENTS) is None

    def test_delete_keeps_other_records_unchanged(self, storage, event_db):
        survivor = {
            "id": "b", "created_at": "t", "title": "B", "date": "2025-01-01",
            "user_id": "u1", "status": "planning", "description": None, "guestCount": 120,
        }
        storage.write_list(StorageKeys.EVENTS, [
            {"id": "a", "created_at": "t", "title": "A", "date": "2025-01-01", "user_id": "u1"},
            survivor,
        ])
        assert event_db.delete("a") is True
        assert storage.read_list(StorageKeys.EVENTS) == [survivor]

    def test_update_leaves_other_records_untouched(self, storage, event_db):
        untouched = {
            "id": "b", "created_at": "t", "title": "B", "date": "2025-01-01",
            "user_id": "u1", "location": None, "guestCount": 40,
        }
        storage.write_list(StorageKeys.EVENTS, [
            {"id": "a", "created_at": "t", "title": "A", "date": "2025-01-01", "user_id": "u1"},
            untouched,
        ])
        target = event_db.get("a")
        event_db.update(target.model_copy(update={"title": "A2"}))
        assert storage.read_list(StorageKeys.EVENTS)[1] == untouched


class TestEventDBCorruption:
    def test_invalid_json_propagates(self, memory_store):
        memory_store.set(StorageKeys.EVENTS, "not json")
        with pytest.raises(CorruptedDataError):
            EventDB(JsonStorage(memory_store)).list_for_user("u1")

    def test_invalid_record_propagates(self, memory_store):
        memory_store.set(StorageKeys.EVENTS, '[{"id": "e1", "title": "No date"}]')
        with pytest.raises(CorruptedDataError, match="invalid event record"):
            EventDB(JsonStorage(memory_store)).list_all()

    def test_create_does_not_overwrite_corrupted_collection(self, memory_store):
        memory_store.set(StorageKeys.EVENTS, "not json")
        with pytest.raises(CorruptedDataError):
            EventDB(JsonStorage(memory_store)).create(_draft())
        assert memory_store.get(StorageKeys.EVENTS) == "not json"


class TestEventDBOnSQLite:
    def test_events_persist_across_instances(self, sqlite_store):
        event = EventDB(JsonStorage(sqlite_store)).create(_draft())
        fresh = EventDB(JsonStorage(sqlite_store))
        assert fresh.list_for_user("u1") == [event]


class TestLaunchPartyScenario:
    def test_create_then_list(self, event_db):
        event = event_db.create(EventCreate(
            title="Launch Party", date="2025-09-01", user_id="u1", status="planning",
        ))
        assert event.id and event.created_at
        assert event in event_db.list_for_user("u1")
        assert event not in event_db.list_for_user("u2")
