"""
VenuVibe — Data Models.

Every persisted record is a pydantic model stored as a JSON object inside
a collection. Status and priority fields are closed enums, so an unknown
value is rejected when the record is built or loaded.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EventStatus(str, Enum):
    PLANNING = "planning"
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RsvpStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


class Record(BaseModel):
    """Base for stored records: keeps unknown keys, validates on assignment.

    Only fields that were set (loaded from storage, passed in, or assigned)
    are written back, so a record read and saved again keeps its exact keys,
    explicit nulls included.
    """

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    def to_json_dict(self) -> dict:
        """JSON-ready dict of the fields that were set."""
        return self.model_dump(mode="json", exclude_unset=True)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(Record):
    """A registered planner. Never carries a password or its hash."""

    # Legacy records may hold a plain `password`; it is never read or kept
    model_config = ConfigDict(extra="ignore")

    id: str
    email: str
    full_name: str | None = None
    avatar_url: str | None = None


class Credential(Record):
    """bcrypt hash for a user, stored apart from the user record."""

    user_id: str
    password_hash: str


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class EventCreate(Record):
    """Caller-supplied event fields; id and created_at are assigned by the store.

    JSON example:
    {
        "title": "Launch Party",
        "date": "2025-09-01",
        "user_id": "u1",
        "status": "planning"
    }
    """

    title: str
    description: str | None = None
    date: str                       # ISO date or datetime
    location: str | None = None
    user_id: str
    template_id: str | None = None
    banner_image: str | None = None
    type: str | None = None         # wedding, corporate, birthday, ...
    status: EventStatus = EventStatus.PLANNING


class Event(EventCreate):
    id: str
    created_at: str


# ---------------------------------------------------------------------------
# Per-event collections
# ---------------------------------------------------------------------------


class GuestCreate(Record):
    event_id: str
    name: str
    email: str
    phone: str | None = None
    rsvp_status: RsvpStatus = RsvpStatus.PENDING
    plus_ones: int = Field(default=0, ge=0)
    dietary_restrictions: str | None = None
    notes: str | None = None


class Guest(GuestCreate):
    id: str


class BudgetItemCreate(Record):
    event_id: str
    category: str                   # e.g. "Venue", "Catering"
    item: str
    estimated_cost: float = Field(ge=0)
    actual_cost: float | None = Field(default=None, ge=0)
    paid: bool = False
    vendor: str | None = None
    due_date: str | None = None
    notes: str | None = None


class BudgetItem(BudgetItemCreate):
    id: str


class TaskCreate(Record):
    event_id: str
    title: str
    description: str | None = None
    due_date: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    category: str | None = None
    assigned_to: str | None = None


class Task(TaskCreate):
    id: str


# ---------------------------------------------------------------------------
# Vendor directory (shared by all users)
# ---------------------------------------------------------------------------


class VendorCreate(Record):
    name: str
    category: str                   # venue, catering, florist, ...
    description: str | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    price: str | None = None        # "$", "$$", "$$$"
    contact_email: str | None = None
    contact_phone: str | None = None
    website: str | None = None
    image_url: str | None = None


class Vendor(VendorCreate):
    id: str
    created_at: str
