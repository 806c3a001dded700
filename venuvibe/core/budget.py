"""
VenuVibe — Budget Tracker.

Groups an event's budget items by category and computes planned, actual
and remaining totals. Paid toggles and deletions can be written through
to the BudgetItemDB.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from venuvibe.core.list_views import WorkingCopyView
from venuvibe.data.models import BudgetItem

if TYPE_CHECKING:
    from venuvibe.data.db import BudgetItemDB


@dataclass
class BudgetCategory:
    """Items of one category with their summed costs."""

    name: str
    planned_amount: float = 0.0
    actual_amount: float = 0.0
    items: list[BudgetItem] = field(default_factory=list)


class BudgetTracker(WorkingCopyView[BudgetItem]):
    label = "budget item"

    def __init__(
        self, items: list[BudgetItem], repository: BudgetItemDB | None = None,
    ) -> None:
        super().__init__(items, repository)

    def categories(self) -> list[BudgetCategory]:
        """Items grouped by category, categories in first-seen order."""
        grouped: dict[str, BudgetCategory] = {}
        for item in self._records:
            category = grouped.setdefault(item.category, BudgetCategory(name=item.category))
            category.items.append(item)
            category.planned_amount += item.estimated_cost
            category.actual_amount += item.actual_cost or 0.0
        return list(grouped.values())

    def toggle_paid(self, item_id: str) -> BudgetItem:
        item = self._require(item_id)
        return self._replace(item_id, paid=not item.paid)

    def delete_item(self, item_id: str) -> None:
        self.delete(item_id)

    def total_planned(self) -> float:
        return sum(item.estimated_cost for item in self._records)

    def total_actual(self) -> float:
        return sum(item.actual_cost or 0.0 for item in self._records)

    def total_remaining(self) -> float:
        return self.total_planned() - self.total_actual()

    def progress_percentage(self) -> float:
        """Actual spend as a percentage of plan; 0.0 with nothing planned."""
        planned = self.total_planned()
        if planned == 0:
            return 0.0
        return self.total_actual() / planned * 100

    def paid_count(self) -> int:
        return sum(1 for item in self._records if item.paid)
