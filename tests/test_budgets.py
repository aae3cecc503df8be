"""Mini README: Tests for the event budget manager."""

from __future__ import annotations

from decimal import Decimal

import pytest

from fintrack.finance import BudgetManager, BudgetStatus


def add_item(manager: BudgetManager, **overrides: str):
    fields = {
        "event_name": "Freshers Night",
        "category": "Venue",
        "description": "Auditorium booking",
        "estimated_amount": "20000",
    }
    fields.update(overrides)
    return manager.insert(fields)


def test_insert_defaults_to_planned() -> None:
    manager = BudgetManager()
    item = add_item(manager)
    assert item.budget_id == "budget_0001"
    assert item.status is BudgetStatus.PLANNED
    assert item.estimated_amount == Decimal("20000.00")
    assert item.actual_amount is None
    assert manager.list() == [item]


def test_update_changes_status_and_actual_amount() -> None:
    manager = BudgetManager()
    item = add_item(manager)
    updated = manager.update(item.budget_id, {"status": "Spent", "actual_amount": "18500"})
    assert updated.status is BudgetStatus.SPENT
    assert updated.actual_amount == Decimal("18500.00")
    assert updated.updated_at >= updated.created_at


def test_totals_treat_missing_actuals_as_zero() -> None:
    manager = BudgetManager()
    add_item(manager, estimated_amount="20000", actual_amount="15000")
    add_item(manager, category="Catering", estimated_amount="5000")
    totals = manager.totals()
    assert totals["total_budget"] == Decimal("25000.00")
    assert totals["total_spent"] == Decimal("15000.00")
    assert totals["remaining"] == Decimal("10000.00")


def test_delete_removes_item() -> None:
    manager = BudgetManager()
    item = add_item(manager)
    manager.delete(item.budget_id)
    assert len(manager) == 0
    with pytest.raises(KeyError):
        manager.delete(item.budget_id)


@pytest.mark.parametrize(
    "changes",
    [
        {"category": "Fireworks"},
        {"status": "cancelled"},
        {"estimated_amount": "0"},
        {"actual_amount": "-1"},
        {"event_name": ""},
        {"budget_id": "budget_0100"},
    ],
)
def test_update_rejects_invalid_fields(changes: dict) -> None:
    manager = BudgetManager()
    item = add_item(manager)
    with pytest.raises(ValueError):
        manager.update(item.budget_id, changes)


def test_insert_requires_core_fields() -> None:
    with pytest.raises(ValueError):
        BudgetManager().insert({"event_name": "Gala"})


def test_demo_seed() -> None:
    manager = BudgetManager(seed_demo=True)
    assert len(manager) == 2
    assert manager.totals()["total_spent"] == Decimal("28750.00")
