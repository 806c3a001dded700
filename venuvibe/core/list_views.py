"""
VenuVibe — List View State.

In-memory controllers behind the event, guest, task and vendor lists.
Each one keeps a working copy of its records and derives filtered,
sorted views and counts from it. Given a repository, mutations are
written through before the working copy changes.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Generic, TypeVar

from pydantic import BaseModel

from venuvibe.data.errors import NotFoundError
from venuvibe.data.models import (
    Event,
    EventStatus,
    Guest,
    RsvpStatus,
    Task,
    TaskStatus,
    Vendor,
)

if TYPE_CHECKING:
    from venuvibe.data.db import EventDB, GuestDB, TaskDB

logger = logging.getLogger(__name__)

ALL = "all"

RecordT = TypeVar("RecordT", bound=BaseModel)


def parse_when(value: str | None) -> datetime | None:
    """Parse an ISO date or datetime into an aware UTC datetime.

    Date-only values are midnight UTC. Returns None for empty or
    unparseable input.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def matches_search(term: str | None, *fields: str | None) -> bool:
    """Case-insensitive substring match against any of the fields."""
    if not term:
        return True
    needle = term.lower()
    return any(f is not None and needle in f.lower() for f in fields)


def _is_all(value: object) -> bool:
    return value is None or value == ALL


class WorkingCopyView(Generic[RecordT]):
    """List of records owned by one view, addressed by id."""

    label = "record"

    def __init__(self, records: list[RecordT], repository=None) -> None:
        self._records: list[RecordT] = list(records)
        self._repository = repository

    @property
    def items(self) -> list[RecordT]:
        return list(self._records)

    def get(self, record_id: str) -> RecordT | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def _require(self, record_id: str) -> RecordT:
        record = self.get(record_id)
        if record is None:
            raise NotFoundError(f"{self.label.capitalize()} {record_id} not found")
        return record

    def _replace(self, record_id: str, **changes) -> RecordT:
        updated = self._require(record_id).model_copy(update=changes)
        if self._repository is not None:
            self._repository.update(updated)
        self._records = [updated if r.id == record_id else r for r in self._records]
        return updated

    def delete(self, record_id: str) -> None:
        """Drop a record from the view (and the repository, if attached)."""
        self._require(record_id)
        if self._repository is not None:
            self._repository.delete(record_id)
        self._records = [r for r in self._records if r.id != record_id]
        logger.info("%s %s removed from view", self.label.capitalize(), record_id)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class EventListView(WorkingCopyView[Event]):
    label = "event"

    def __init__(self, events: list[Event], repository: EventDB | None = None) -> None:
        super().__init__(events, repository)

    @classmethod
    def for_user(cls, repository: EventDB, user_id: str) -> EventListView:
        return cls(repository.list_for_user(user_id), repository)

    def filtered(
        self,
        search: str = "",
        event_type: str | None = ALL,
        status: str | None = ALL,
    ) -> list[Event]:
        """Events matching search (title, location), type and status."""
        return [
            e for e in self._records
            if matches_search(search, e.title, e.location)
            and (_is_all(event_type) or e.type == event_type)
            and (_is_all(status) or e.status == status)
        ]

    def status_counts(self) -> dict[str, int]:
        counts = {s.value: 0 for s in EventStatus}
        counts.update(Counter(e.status.value for e in self._records))
        return counts


# ---------------------------------------------------------------------------
# Guests
# ---------------------------------------------------------------------------


class GuestListView(WorkingCopyView[Guest]):
    label = "guest"

    def __init__(self, guests: list[Guest], repository: GuestDB | None = None) -> None:
        super().__init__(guests, repository)

    def filtered(self, search: str = "", status: str | None = ALL) -> list[Guest]:
        """Guests matching search (name, email) and RSVP status."""
        return [
            g for g in self._records
            if matches_search(search, g.name, g.email)
            and (_is_all(status) or g.rsvp_status == status)
        ]

    def update_status(self, guest_id: str, status: RsvpStatus | str) -> Guest:
        return self._replace(guest_id, rsvp_status=RsvpStatus(status))

    def total_headcount(self, guests: list[Guest] | None = None) -> int:
        """Guests plus their plus-ones."""
        pool = self._records if guests is None else guests
        return sum(1 + g.plus_ones for g in pool)

    def status_counts(self) -> dict[str, int]:
        counts = {s.value: 0 for s in RsvpStatus}
        counts.update(Counter(g.rsvp_status.value for g in self._records))
        return counts


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------

SORT_FIELDS = ("due_date", "priority")


class TaskListView(WorkingCopyView[Task]):
    label = "task"

    def __init__(self, tasks: list[Task], repository: TaskDB | None = None) -> None:
        super().__init__(tasks, repository)
        self.sort_by = "due_date"
        self.sort_direction = "asc"

    def toggle_sort(self, field: str) -> None:
        """Flip direction on the current field, or switch field and reset to asc."""
        if field not in SORT_FIELDS:
            raise ValueError(f"Unknown sort field: {field!r}")
        if field == self.sort_by:
            self.sort_direction = "desc" if self.sort_direction == "asc" else "asc"
        else:
            self.sort_by = field
            self.sort_direction = "asc"

    def _sorted(self, tasks: list[Task]) -> list[Task]:
        descending = self.sort_direction == "desc"
        if self.sort_by == "priority":
            return sorted(tasks, key=lambda t: t.priority.rank, reverse=descending)

        # Tasks without a due date stay at the end in both directions
        dated = [(parse_when(t.due_date), t) for t in tasks]
        with_date = [pair for pair in dated if pair[0] is not None]
        without_date = [t for when, t in dated if when is None]
        ordered = sorted(with_date, key=lambda pair: pair[0], reverse=descending)
        return [t for _, t in ordered] + without_date

    def filtered(
        self,
        search: str = "",
        priority: str | None = ALL,
        status: str | None = ALL,
    ) -> list[Task]:
        """Tasks matching search (title), priority and status, in sort order."""
        matching = [
            t for t in self._records
            if matches_search(search, t.title)
            and (_is_all(priority) or t.priority == priority)
            and (_is_all(status) or t.status == status)
        ]
        return self._sorted(matching)

    def toggle_status(self, task_id: str) -> Task:
        task = self._require(task_id)
        new_status = (
            TaskStatus.PENDING if task.status == TaskStatus.COMPLETED else TaskStatus.COMPLETED
        )
        return self._replace(task_id, status=new_status)

    def mark_complete(self, task_id: str) -> Task:
        return self._replace(task_id, status=TaskStatus.COMPLETED)

    def status_counts(self) -> dict[str, int]:
        counts = {s.value: 0 for s in TaskStatus}
        counts.update(Counter(t.status.value for t in self._records))
        return counts

    def completion_percentage(self) -> float:
        if not self._records:
            return 0.0
        done = sum(1 for t in self._records if t.status == TaskStatus.COMPLETED)
        return done / len(self._records) * 100


# ---------------------------------------------------------------------------
# Vendors
# ---------------------------------------------------------------------------


class VendorDirectory:
    """Read-only search over the shared vendor list."""

    def __init__(self, vendors: list[Vendor]) -> None:
        self._vendors = list(vendors)

    def filtered(
        self,
        search: str = "",
        category: str | None = ALL,
        min_rating: float = 0,
    ) -> list[Vendor]:
        return [
            v for v in self._vendors
            if matches_search(search, v.name, v.description)
            and (_is_all(category) or v.category == category)
            and (v.rating or 0) >= min_rating
        ]

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(v.category for v in self._vendors))

