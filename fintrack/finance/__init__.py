"""Mini README: Finance stores for the tracker.

This package groups the transaction ledger (income and expenses) and the
event budget manager. Both keep their records in memory and validate raw
form fields on the way in, so the web layer can hand submitted forms
straight through and translate ``ValueError``/``KeyError`` into HTTP errors.
"""

from .budgets import BUDGET_CATEGORIES, BudgetItem, BudgetManager, BudgetStatus
from .ledger import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    Transaction,
    TransactionFilter,
    TransactionLedger,
    TransactionType,
    categories_for,
)

__all__ = [
    "BUDGET_CATEGORIES",
    "BudgetItem",
    "BudgetManager",
    "BudgetStatus",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "Transaction",
    "TransactionFilter",
    "TransactionLedger",
    "TransactionType",
    "categories_for",
]
