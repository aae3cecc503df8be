"""Mini README: Event budget planning store.

Structure:
    * BudgetStatus - planned, approved or spent.
    * BudgetItem - one estimated (and optionally actual) cost for an event.
    * BudgetManager - insert/update/delete/list plus totals for the summary cards.

Budget items are edited in place through ``update`` which accepts the same
raw form fields as ``insert``; unknown fields are rejected so typos in a
form do not silently vanish.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..logging_utils import get_logger
from .ledger import parse_amount

LOGGER = get_logger(__name__)

BUDGET_CATEGORIES: Tuple[str, ...] = (
    "Venue",
    "Catering",
    "Equipment",
    "Marketing",
    "Entertainment",
    "Decorations",
    "Transportation",
    "Staff",
    "Miscellaneous",
)

_EDITABLE_FIELDS = {
    "event_name",
    "category",
    "description",
    "estimated_amount",
    "actual_amount",
    "status",
}


class BudgetStatus(str, Enum):
    PLANNED = "planned"
    APPROVED = "approved"
    SPENT = "spent"

    @classmethod
    def from_str(cls, value: str) -> "BudgetStatus":
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported budget status: {value}") from error


@dataclass(slots=True)
class BudgetItem:
    """Planned spend for an event line item."""

    budget_id: str
    event_name: str
    category: str
    description: str
    estimated_amount: Decimal
    actual_amount: Optional[Decimal] = None
    status: BudgetStatus = BudgetStatus.PLANNED
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def as_dict(self) -> Dict[str, object]:
        return {
            "budget_id": self.budget_id,
            "event_name": self.event_name,
            "category": self.category,
            "description": self.description,
            "estimated_amount": float(self.estimated_amount),
            "actual_amount": float(self.actual_amount) if self.actual_amount is not None else None,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


def _parse_actual(value: object) -> Optional[Decimal]:
    """Blank actual amounts are stored as ``None``."""

    if value is None or str(value).strip() == "":
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as error:
        raise ValueError(f"Actual amount must be a number, got {value!r}") from error
    if not amount.is_finite() or amount < 0:
        raise ValueError("Actual amount must not be negative.")
    return amount.quantize(Decimal("0.01"))


def _coerce_fields(changes: Mapping[str, object]) -> Dict[str, object]:
    """Validate and coerce raw budget form fields."""

    coerced: Dict[str, object] = {}
    for key, value in changes.items():
        if key not in _EDITABLE_FIELDS:
            raise ValueError(f"Budget field '{key}' cannot be edited.")
        if key == "category":
            category = str(value).strip()
            if category not in BUDGET_CATEGORIES:
                raise ValueError(f"Unknown budget category: {value}")
            coerced[key] = category
        elif key in {"event_name", "description"}:
            text = str(value or "").strip()
            if not text:
                raise ValueError(f"Field '{key}' is required.")
            coerced[key] = text
        elif key == "estimated_amount":
            coerced[key] = parse_amount(value)
        elif key == "actual_amount":
            coerced[key] = _parse_actual(value)
        elif key == "status":
            coerced[key] = BudgetStatus.from_str(str(value))
    return coerced


class BudgetManager:
    """Manage event budget items."""

    def __init__(
        self,
        items: Optional[Iterable[BudgetItem]] = None,
        *,
        seed_demo: bool = False,
    ) -> None:
        self._items: Dict[str, BudgetItem] = {}
        self._sequence = 0
        for item in items or ():
            if item.budget_id in self._items:
                raise ValueError(f"Budget item {item.budget_id} already exists.")
            self._items[item.budget_id] = item
            suffix = item.budget_id.split("_")[-1]
            if suffix.isdigit():
                self._sequence = max(self._sequence, int(suffix))
        if seed_demo and not self._items:
            self.insert(
                {
                    "event_name": "Annual Tech Summit",
                    "category": "Venue",
                    "description": "Main hall and breakout rooms",
                    "estimated_amount": "45000",
                    "status": "approved",
                }
            )
            self.insert(
                {
                    "event_name": "Annual Tech Summit",
                    "category": "Catering",
                    "description": "Lunch and refreshments for 150 attendees",
                    "estimated_amount": "30000",
                    "actual_amount": "28750",
                    "status": "spent",
                }
            )
        LOGGER.debug("Budget manager initialised with %s items", len(self._items))

    def _next_id(self) -> str:
        self._sequence += 1
        return f"budget_{self._sequence:04d}"

    def insert(self, fields: Mapping[str, object]) -> BudgetItem:
        """Create a budget item from raw form fields."""

        required = ("event_name", "category", "description", "estimated_amount")
        missing = [key for key in required if key not in fields]
        if missing:
            raise ValueError(f"Missing budget fields: {', '.join(missing)}")
        coerced = _coerce_fields(fields)
        item = BudgetItem(budget_id=self._next_id(), **coerced)
        self._items[item.budget_id] = item
        LOGGER.info("Added budget item %s for %s", item.budget_id, item.event_name)
        return item

    def get(self, budget_id: str) -> BudgetItem:
        if budget_id not in self._items:
            raise KeyError(f"Budget item {budget_id} not found")
        return self._items[budget_id]

    def update(self, budget_id: str, changes: Mapping[str, object]) -> BudgetItem:
        """Apply edited fields to an existing budget item."""

        item = self.get(budget_id)
        coerced = _coerce_fields(changes)
        for key, value in coerced.items():
            setattr(item, key, value)
        item.updated_at = datetime.now()
        LOGGER.info("Updated budget item %s (%s)", budget_id, ", ".join(sorted(coerced)) or "no changes")
        return item

    def delete(self, budget_id: str) -> BudgetItem:
        item = self.get(budget_id)
        del self._items[budget_id]
        LOGGER.info("Deleted budget item %s", budget_id)
        return item

    def list(self) -> List[BudgetItem]:
        """Return budget items, most recently created first."""

        return sorted(
            self._items.values(),
            key=lambda item: (item.created_at, item.budget_id),
            reverse=True,
        )

    def totals(self) -> Dict[str, Decimal]:
        """Total estimated budget, total actually spent and what remains."""

        total_budget = sum((item.estimated_amount for item in self._items.values()), Decimal("0"))
        total_spent = sum(
            (item.actual_amount or Decimal("0") for item in self._items.values()), Decimal("0")
        )
        return {
            "total_budget": total_budget,
            "total_spent": total_spent,
            "remaining": total_budget - total_spent,
        }

    def __len__(self) -> int:
        return len(self._items)
