"""Mini README: In-memory transaction store for income and expenses.

Structure:
    * TransactionType - enum representing income versus expense entries.
    * Transaction - dataclass storing one recorded transaction.
    * TransactionFilter - optional type and inclusive date-range filter.
    * TransactionLedger - insert/list/get operations plus dashboard totals.

Records are validated on the way in: amounts must be positive, categories
must come from the catalogue for the transaction type and vendors are only
kept for expenses. Listing returns the newest transactions first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class TransactionType(str, Enum):
    """Enumerate the supported transaction categories."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: str) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error


INCOME_CATEGORIES: Tuple[str, ...] = (
    "Membership Fees",
    "Sponsorships",
    "Event Earnings",
    "Donations",
    "Grants",
    "Other Income",
)

EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "Event Costs",
    "Office Supplies",
    "Marketing",
    "Equipment",
    "Travel",
    "Professional Services",
    "Other Expenses",
)


def categories_for(transaction_type: TransactionType) -> Tuple[str, ...]:
    """Return the category catalogue offered for ``transaction_type``."""

    if transaction_type is TransactionType.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


@dataclass(slots=True)
class Transaction:
    """Represent a ledger entry."""

    transaction_id: str
    transaction_type: TransactionType
    amount: Decimal
    description: str
    category: str
    occurred_on: date
    vendor: Optional[str] = None
    recorded_by: Optional[str] = None
    recorded_at: datetime = field(default_factory=datetime.now)

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with serialisable values."""

        return {
            "transaction_id": self.transaction_id,
            "transaction_type": self.transaction_type.value,
            "amount": float(self.amount),
            "description": self.description,
            "category": self.category,
            "vendor": self.vendor,
            "occurred_on": self.occurred_on.isoformat(),
            "recorded_by": self.recorded_by,
        }


@dataclass(slots=True)
class TransactionFilter:
    """Optional constraints applied when listing transactions."""

    transaction_type: Optional[TransactionType] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    def __post_init__(self) -> None:
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("The start date must not be after the end date.")

    def matches(self, transaction: Transaction) -> bool:
        if self.transaction_type and transaction.transaction_type is not self.transaction_type:
            return False
        if self.date_from and transaction.occurred_on < self.date_from:
            return False
        if self.date_to and transaction.occurred_on > self.date_to:
            return False
        return True


def parse_amount(value: object) -> Decimal:
    """Parse a positive monetary amount rounded to cents."""

    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as error:
        raise ValueError(f"Amount must be a number, got {value!r}") from error
    if not amount.is_finite() or amount <= 0:
        raise ValueError("Amount must be greater than zero.")
    return amount.quantize(Decimal("0.01"))


def parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects safely."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as error:
            raise ValueError(f"Dates must use the YYYY-MM-DD format, got {value!r}") from error
    raise ValueError("Dates must be provided as ISO strings or date/datetime instances.")


def _required_text(record: Mapping[str, object], key: str) -> str:
    value = record.get(key)
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValueError(f"Field '{key}' is required.")
    return text


class TransactionLedger:
    """Store transactions and answer filtered listings."""

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        *,
        seed_demo: bool = False,
    ) -> None:
        self._transactions: Dict[str, Transaction] = {}
        self._sequence = 0
        for transaction in transactions or ():
            self._register(transaction)
        if seed_demo and not self._transactions:
            self._seed_demo_transactions()
        LOGGER.debug("Transaction ledger initialised with %s transactions", len(self._transactions))

    def _seed_demo_transactions(self) -> None:
        """Populate the ledger with deterministic demo data."""

        demo_records = [
            {
                "type": "income",
                "amount": "25000",
                "description": "Annual membership drive",
                "category": "Membership Fees",
                "date": "2024-05-02",
            },
            {
                "type": "income",
                "amount": "40000",
                "description": "Hackathon sponsorship",
                "category": "Sponsorships",
                "date": "2024-05-10",
            },
            {
                "type": "expense",
                "amount": "12500.50",
                "description": "Hall booking for the tech talk",
                "category": "Event Costs",
                "vendor": "City Auditorium",
                "date": "2024-05-15",
            },
            {
                "type": "expense",
                "amount": "3200",
                "description": "Posters and flyers",
                "category": "Marketing",
                "vendor": "PrintHub",
                "date": "2024-05-18",
            },
        ]
        for record in demo_records:
            self.insert(record, recorded_by="demo")

    def _next_id(self) -> str:
        """Generate a deterministic transaction identifier."""

        self._sequence += 1
        return f"txn_{self._sequence:04d}"

    def _register(self, transaction: Transaction) -> None:
        """Store a transaction ensuring identifiers remain unique."""

        if transaction.transaction_id in self._transactions:
            raise ValueError(f"Transaction {transaction.transaction_id} already exists.")
        self._transactions[transaction.transaction_id] = transaction
        suffix = transaction.transaction_id.split("_")[-1]
        if suffix.isdigit():
            self._sequence = max(self._sequence, int(suffix))

    def insert(self, record: Mapping[str, object], *, recorded_by: Optional[str] = None) -> Transaction:
        """Validate a raw form record and store it as a new transaction."""

        transaction_type = TransactionType.from_str(str(record.get("type", "")))
        category = _required_text(record, "category")
        if category not in categories_for(transaction_type):
            raise ValueError(
                f"Category '{category}' is not valid for {transaction_type.value} transactions."
            )
        vendor = None
        if transaction_type is TransactionType.EXPENSE:
            vendor = str(record.get("vendor") or "").strip() or None

        transaction = Transaction(
            transaction_id=self._next_id(),
            transaction_type=transaction_type,
            amount=parse_amount(record.get("amount")),
            description=_required_text(record, "description"),
            category=category,
            occurred_on=parse_date(record.get("date") or date.today()),
            vendor=vendor,
            recorded_by=recorded_by,
        )
        self._register(transaction)
        LOGGER.info(
            "Recorded %s %s of %s (%s)",
            transaction.transaction_type.value,
            transaction.transaction_id,
            transaction.amount,
            transaction.category,
        )
        return transaction

    def list(self, criteria: Optional[TransactionFilter] = None) -> List[Transaction]:
        """Return matching transactions ordered by most recent date first."""

        criteria = criteria or TransactionFilter()
        matching = [item for item in self._transactions.values() if criteria.matches(item)]
        return sorted(
            matching,
            key=lambda transaction: (transaction.occurred_on, transaction.transaction_id),
            reverse=True,
        )

    def get(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction, raising informative errors when missing."""

        if transaction_id not in self._transactions:
            raise KeyError(f"Transaction {transaction_id} not found")
        return self._transactions[transaction_id]

    def summarise(self, criteria: Optional[TransactionFilter] = None) -> Dict[str, object]:
        """Aggregate income, expenses and balance for the dashboard cards."""

        transactions = self.list(criteria)
        income = sum(
            (t.amount for t in transactions if t.transaction_type is TransactionType.INCOME),
            Decimal("0"),
        )
        expenses = sum(
            (t.amount for t in transactions if t.transaction_type is TransactionType.EXPENSE),
            Decimal("0"),
        )
        return {
            "total_income": income,
            "total_expenses": expenses,
            "balance": income - expenses,
            "transaction_count": len(transactions),
            "latest_transaction_date": transactions[0].occurred_on.isoformat() if transactions else "",
        }

    def __len__(self) -> int:
        return len(self._transactions)
