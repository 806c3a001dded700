"""
VenuVibe — Dashboard.

Summary statistics across every event a user owns: upcoming events,
guest headcount, planned budget and task progress.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from venuvibe.core.list_views import parse_when
from venuvibe.data.models import TaskStatus

if TYPE_CHECKING:
    from venuvibe.data.db import BudgetItemDB, EventDB, GuestDB, TaskDB
    from venuvibe.data.models import Event

logger = logging.getLogger(__name__)


@dataclass
class DashboardStats:
    total_events: int = 0
    upcoming_events: int = 0
    total_guests: int = 0
    total_budget: float = 0.0
    completed_tasks: int = 0
    pending_tasks: int = 0


def upcoming(events: list[Event], now: datetime | None = None, limit: int = 3) -> list[Event]:
    """Events dated after now, soonest first."""
    now = now or datetime.now(timezone.utc)
    future = []
    for event in events:
        when = parse_when(event.date)
        if when is not None and when > now:
            future.append((when, event))
    future.sort(key=lambda pair: pair[0])
    return [e for _, e in future[:limit]]


def build_dashboard(
    user_id: str,
    event_db: EventDB,
    guest_db: GuestDB,
    budget_db: BudgetItemDB,
    task_db: TaskDB,
    now: datetime | None = None,
) -> DashboardStats:
    """Aggregate stats over the user's events and everything they own."""
    now = now or datetime.now(timezone.utc)
    events = event_db.list_for_user(user_id)
    event_ids = {e.id for e in events}

    guests = [g for g in guest_db.list_all() if g.event_id in event_ids]
    items = [i for i in budget_db.list_all() if i.event_id in event_ids]
    tasks = [t for t in task_db.list_all() if t.event_id in event_ids]

    completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    stats = DashboardStats(
        total_events=len(events),
        upcoming_events=len(upcoming(events, now, limit=len(events))),
        total_guests=sum(1 + g.plus_ones for g in guests),
        total_budget=sum(i.estimated_cost for i in items),
        completed_tasks=completed,
        pending_tasks=len(tasks) - completed,
    )
    logger.debug("Dashboard for %s: %s", user_id, stats)
    return stats
