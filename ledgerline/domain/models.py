"""Domain type definitions for ledgerline.

These types provide semantic clarity and help with type checking:
- Amount: Non-negative transaction magnitude (sign comes from the type)
- Timestamp: ISO-8601 UTC timestamp string
- Month: Month in YYYY-MM format
- TransactionType: income or expense
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NewType

# Amounts are magnitudes; income/expense decides the sign when displayed or summed
Amount = NewType("Amount", float)

# Timestamps are stored as text, e.g. "2024-03-05T10:15:00.000Z"
Timestamp = NewType("Timestamp", str)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)


class TransactionType(str, Enum):
    """The two kinds of ledger entry."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        """Capitalized label used in exports ("Income" / "Expense")."""
        return self.value.capitalize()


@dataclass(frozen=True)
class Transaction:
    """Immutable stored transaction."""

    id: int
    description: str
    amount: Amount
    type: TransactionType
    date: Timestamp
    created_at: Timestamp

    def as_dict(self) -> dict[str, Any]:
        """Serializable form used by the HTTP API."""
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "type": self.type.value,
            "date": self.date,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class Summary:
    """Income, expense and balance totals over a set of transactions."""

    income: Amount
    expenses: Amount
    balance: float

    def as_dict(self) -> dict[str, float]:
        return {"income": self.income, "expenses": self.expenses, "balance": self.balance}
