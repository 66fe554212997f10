"""Domain models and pure functions for ledgerline.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from ledgerline.domain.models import Amount, Month, Summary, Timestamp, Transaction, TransactionType

__all__ = ["Amount", "Month", "Summary", "Timestamp", "Transaction", "TransactionType"]
