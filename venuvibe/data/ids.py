"""Identity generation and timestamps for new records."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_id() -> str:
    """Return a random UUID4 string, used as a primary key."""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2025-09-01T12:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
