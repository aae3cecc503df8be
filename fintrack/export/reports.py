"""Mini README: Transaction report export.

Structure:
    * build_transaction_report - date-ranged snapshot of the ledger.

The report lists every matching transaction newest first with the same
columns the export tab offers (date, type, description, category, vendor,
amount) and closes with income/expense totals. Leaving both dates empty
exports the whole ledger.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from ..finance.ledger import TransactionFilter, TransactionLedger
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

REPORT_COLUMNS = ("date", "type", "description", "category", "vendor", "amount")


def build_transaction_report(
    ledger: TransactionLedger,
    *,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> Dict[str, object]:
    """Export transactions between ``date_from`` and ``date_to`` inclusive."""

    criteria = TransactionFilter(date_from=date_from, date_to=date_to)
    rows: List[Dict[str, object]] = [
        {
            "date": transaction.occurred_on.isoformat(),
            "type": transaction.transaction_type.value,
            "description": transaction.description,
            "category": transaction.category,
            "vendor": transaction.vendor or "",
            "amount": float(transaction.amount),
        }
        for transaction in ledger.list(criteria)
    ]
    summary = ledger.summarise(criteria)
    LOGGER.info(
        "Built transaction report with %s rows (from=%s to=%s)", len(rows), date_from, date_to
    )
    return {
        "generated_on": date.today().isoformat(),
        "date_from": date_from.isoformat() if date_from else None,
        "date_to": date_to.isoformat() if date_to else None,
        "columns": list(REPORT_COLUMNS),
        "rows": rows,
        "totals": {
            "income": float(summary["total_income"]),
            "expenses": float(summary["total_expenses"]),
            "balance": float(summary["balance"]),
        },
    }
