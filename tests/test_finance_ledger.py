"""Mini README: Tests covering the transaction ledger.

Structure:
    * test_insert_expense_keeps_vendor - expense records keep their vendor.
    * test_insert_income_drops_vendor - vendors only apply to expenses.
    * test_insert_rejects_invalid_records - bad types, amounts and categories raise.
    * test_list_filters_by_type_and_date_range - inclusive date filtering, newest first.
    * test_summarise_totals_income_and_expenses - dashboard card totals.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from fintrack.finance import (
    Transaction,
    TransactionFilter,
    TransactionLedger,
    TransactionType,
    categories_for,
)


def build_ledger() -> TransactionLedger:
    ledger = TransactionLedger()
    ledger.insert(
        {"type": "income", "amount": "5000", "description": "Membership fees", "category": "Membership Fees", "date": "2024-03-01"}
    )
    ledger.insert(
        {"type": "expense", "amount": "1200.50", "description": "Snacks", "category": "Event Costs", "vendor": "Bakery", "date": "2024-03-10"}
    )
    ledger.insert(
        {"type": "income", "amount": "750", "description": "Bake sale", "category": "Event Earnings", "date": "2024-04-02"}
    )
    return ledger


def test_insert_expense_keeps_vendor() -> None:
    ledger = TransactionLedger()
    transaction = ledger.insert(
        {
            "type": "Expense",
            "amount": "1500",
            "description": "Projector rental",
            "category": "Equipment",
            "vendor": "AV Rentals",
            "date": "2024-06-01",
        },
        recorded_by="treasurer-1",
    )

    assert transaction.transaction_type is TransactionType.EXPENSE
    assert transaction.amount == Decimal("1500.00")
    assert transaction.vendor == "AV Rentals"
    assert transaction.occurred_on == date(2024, 6, 1)
    assert transaction.recorded_by == "treasurer-1"
    assert ledger.get(transaction.transaction_id) is transaction
    assert transaction.as_dict()["amount"] == pytest.approx(1500.0)


def test_insert_income_drops_vendor() -> None:
    ledger = TransactionLedger()
    transaction = ledger.insert(
        {
            "type": "income",
            "amount": "300",
            "description": "Donation",
            "category": "Donations",
            "vendor": "Ignored",
            "date": date(2024, 6, 2),
        }
    )
    assert transaction.vendor is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"type": "transfer"},
        {"amount": "0"},
        {"amount": "-5"},
        {"amount": "lots"},
        {"category": "Sponsorships"},
        {"description": "   "},
        {"date": "01/06/2024"},
    ],
)
def test_insert_rejects_invalid_records(overrides: dict) -> None:
    record = {
        "type": "expense",
        "amount": "10",
        "description": "Stationery",
        "category": "Office Supplies",
        "date": "2024-06-01",
    }
    record.update(overrides)
    with pytest.raises(ValueError):
        TransactionLedger().insert(record)


def test_list_filters_by_type_and_date_range() -> None:
    ledger = build_ledger()

    everything = ledger.list()
    assert [t.occurred_on for t in everything] == [date(2024, 4, 2), date(2024, 3, 10), date(2024, 3, 1)]

    income = ledger.list(TransactionFilter(transaction_type=TransactionType.INCOME))
    assert {t.description for t in income} == {"Membership fees", "Bake sale"}

    march = ledger.list(TransactionFilter(date_from=date(2024, 3, 1), date_to=date(2024, 3, 10)))
    assert len(march) == 2


def test_filter_rejects_inverted_range() -> None:
    with pytest.raises(ValueError):
        TransactionFilter(date_from=date(2024, 5, 1), date_to=date(2024, 4, 1))


def test_summarise_totals_income_and_expenses() -> None:
    summary = build_ledger().summarise()
    assert summary["total_income"] == Decimal("5750.00")
    assert summary["total_expenses"] == Decimal("1200.50")
    assert summary["balance"] == Decimal("4549.50")
    assert summary["transaction_count"] == 3
    assert summary["latest_transaction_date"] == "2024-04-02"


def test_get_unknown_transaction_raises_key_error() -> None:
    with pytest.raises(KeyError):
        TransactionLedger().get("txn_9999")


def test_existing_transactions_continue_the_id_sequence() -> None:
    ledger = TransactionLedger(
        transactions=[
            Transaction(
                transaction_id="txn_0007",
                transaction_type=TransactionType.INCOME,
                amount=Decimal("10.00"),
                description="Seed",
                category="Grants",
                occurred_on=date(2024, 1, 1),
            )
        ]
    )
    added = ledger.insert(
        {"type": "income", "amount": "5", "description": "Next", "category": "Grants", "date": "2024-01-02"}
    )
    assert added.transaction_id == "txn_0008"


def test_demo_seed_and_category_catalogues() -> None:
    ledger = TransactionLedger(seed_demo=True)
    assert len(ledger) == 4
    assert "Sponsorships" in categories_for(TransactionType.INCOME)
    assert "Travel" in categories_for(TransactionType.EXPENSE)
