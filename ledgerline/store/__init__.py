"""Database store layer - provides persistence for the application.

This module re-exports the public store API for easy importing.
"""

from ledgerline.store.ledger import MEMORY_DB, LedgerStore, row_to_transaction
from ledgerline.store.schema import init_schema

__all__ = [
    # Schema
    "init_schema",
    # Ledger
    "MEMORY_DB",
    "LedgerStore",
    "row_to_transaction",
]
