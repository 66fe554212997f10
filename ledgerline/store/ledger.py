"""SQLite-backed transaction ledger.

LedgerStore is the only reader and writer of persisted transactions. It owns
a single connection for its lifetime; callers construct it explicitly and
pass it to whichever layer needs it.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from ledgerline.dates import to_timestamp, utc_now
from ledgerline.domain.models import Amount, Summary, Timestamp, Transaction, TransactionType
from ledgerline.domain.transactions import validate_transaction_fields
from ledgerline.errors import NotFoundError, StorageError
from ledgerline.logging_utils import get_logger
from ledgerline.store.schema import init_schema

LOGGER = get_logger(__name__)

MEMORY_DB = ":memory:"

_COLUMNS = "id, description, amount, type, date, created_at"

# SQLite rowids are signed 64-bit integers
MAX_ROW_ID = 2**63 - 1


def row_to_transaction(row: sqlite3.Row) -> Transaction:
    """Convert a database row into a Transaction.

    Args:
        row: Row with the transactions table columns.

    Returns:
        Transaction instance.
    """
    return Transaction(
        id=row["id"],
        description=row["description"],
        amount=Amount(float(row["amount"])),
        type=TransactionType(row["type"]),
        date=Timestamp(row["date"]),
        created_at=Timestamp(row["created_at"]),
    )


class LedgerStore:
    """Validated CRUD and aggregation over the transactions table.

    Args:
        db_path: Database file, or ":memory:" for a private in-memory database.
        clock: Returns the current time; used for new transactions' date and created_at.

    Raises:
        StorageError: If the database cannot be opened or initialised.
    """

    def __init__(self, db_path: Path | str = MEMORY_DB, clock: Callable[[], datetime] = utc_now) -> None:
        self.db_path = db_path
        self._clock = clock

        try:
            if str(db_path) != MEMORY_DB:
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            init_schema(self._conn)
        except (sqlite3.Error, OSError) as e:
            LOGGER.error("Could not open ledger database %s: %s", db_path, e)
            raise StorageError(f"Could not open ledger database: {e}") from e

        LOGGER.debug("Ledger database ready at %s", db_path)

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def __enter__(self) -> "LedgerStore":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @contextmanager
    def _cursor(self, action: str, write: bool = False) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, translating database failures into StorageError.

        Writes are committed when the block finishes and rolled back on any error.
        """
        try:
            cursor = self._conn.cursor()
            try:
                yield cursor
                if write:
                    self._conn.commit()
            finally:
                cursor.close()
        except sqlite3.Error as e:
            if write:
                self._rollback()
            LOGGER.error("Database error while trying to %s: %s", action, e)
            raise StorageError(f"Failed to {action}") from e
        except BaseException:
            if write:
                self._rollback()
            raise

    def _rollback(self) -> None:
        try:
            self._conn.rollback()
        except sqlite3.Error as e:
            LOGGER.warning("Rollback failed: %s", e)

    def list(self) -> list[Transaction]:
        """Get all transactions, newest first.

        Returns:
            Transactions ordered by date, then created_at, both descending.

        Raises:
            StorageError: If the query fails.
        """
        with self._cursor("list transactions") as cursor:
            cursor.execute(f"SELECT {_COLUMNS} FROM transactions ORDER BY date DESC, created_at DESC, id DESC")
            return [row_to_transaction(row) for row in cursor.fetchall()]

    def _require_storable_id(self, transaction_id: int) -> None:
        """Raise NotFoundError for ids sqlite3 cannot bind, which can never exist."""
        if not -MAX_ROW_ID - 1 <= transaction_id <= MAX_ROW_ID:
            raise NotFoundError(transaction_id)

    def _fetch(self, cursor: sqlite3.Cursor, transaction_id: int) -> Transaction | None:
        cursor.execute(f"SELECT {_COLUMNS} FROM transactions WHERE id = ?", (transaction_id,))
        row = cursor.fetchone()
        return row_to_transaction(row) if row else None

    def get(self, transaction_id: int) -> Transaction:
        """Get a single transaction.

        Raises:
            NotFoundError: If no transaction has that id.
            StorageError: If the query fails.
        """
        self._require_storable_id(transaction_id)

        with self._cursor("fetch transaction") as cursor:
            transaction = self._fetch(cursor, transaction_id)

        if transaction is None:
            raise NotFoundError(transaction_id)
        return transaction

    def create(self, description: Any, amount: Any, type: Any) -> Transaction:
        """Validate and insert a new transaction dated now.

        Args:
            description: Transaction description.
            amount: Non-negative amount (number or numeric string).
            type: "income" or "expense".

        Returns:
            The stored transaction.

        Raises:
            ValidationError: If any field is missing or invalid; nothing is stored.
            StorageError: If the insert fails.
        """
        fields = validate_transaction_fields(description, amount, type)
        now = to_timestamp(self._clock())

        with self._cursor("create transaction", write=True) as cursor:
            cursor.execute(
                "INSERT INTO transactions (description, amount, type, date, created_at) VALUES (?, ?, ?, ?, ?)",
                (fields.description, fields.amount, fields.type.value, now, now),
            )
            transaction_id = cursor.lastrowid
            assert transaction_id is not None
            created = self._fetch(cursor, transaction_id)

        assert created is not None
        LOGGER.info("Created %s transaction %d", created.type.value, created.id)
        return created

    def update(self, transaction_id: int, description: Any, amount: Any, type: Any) -> Transaction:
        """Overwrite description, amount and type of an existing transaction.

        Date, id and created_at are left untouched.

        Returns:
            The refreshed transaction.

        Raises:
            ValidationError: If any field is missing or invalid.
            NotFoundError: If no transaction has that id.
            StorageError: If the update fails.
        """
        fields = validate_transaction_fields(description, amount, type)
        self._require_storable_id(transaction_id)

        with self._cursor("update transaction", write=True) as cursor:
            cursor.execute(
                "UPDATE transactions SET description = ?, amount = ?, type = ? WHERE id = ?",
                (fields.description, fields.amount, fields.type.value, transaction_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(transaction_id)
            updated = self._fetch(cursor, transaction_id)

        assert updated is not None
        LOGGER.info("Updated transaction %d", transaction_id)
        return updated

    def delete(self, transaction_id: int) -> None:
        """Permanently remove a transaction.

        Raises:
            NotFoundError: If no transaction has that id.
            StorageError: If the delete fails.
        """
        self._require_storable_id(transaction_id)

        with self._cursor("delete transaction", write=True) as cursor:
            cursor.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))
            if cursor.rowcount == 0:
                raise NotFoundError(transaction_id)

        LOGGER.info("Deleted transaction %d", transaction_id)

    def summary(self) -> Summary:
        """Total income, total expenses and balance across the whole ledger.

        Raises:
            StorageError: If the query fails.
        """
        with self._cursor("summarise transactions") as cursor:
            cursor.execute(
                """
                SELECT
                    COALESCE(SUM(CASE WHEN type = 'income' THEN amount END), 0),
                    COALESCE(SUM(CASE WHEN type = 'expense' THEN amount END), 0)
                FROM transactions
                """
            )
            income, expenses = cursor.fetchone()

        income = float(income)
        expenses = float(expenses)
        return Summary(income=Amount(income), expenses=Amount(expenses), balance=income - expenses)

    def transactions_between(self, since_date: str, until_date: str) -> list[Transaction]:
        """Get transactions dated within [since_date, until_date).

        Args:
            since_date: Inclusive lower bound (YYYY-MM-DD or full timestamp).
            until_date: Exclusive upper bound.

        Returns:
            Transactions ordered by date descending.

        Raises:
            StorageError: If the query fails.
        """
        with self._cursor("fetch transactions by date range") as cursor:
            cursor.execute(
                f"""
                SELECT {_COLUMNS} FROM transactions
                WHERE date >= ? AND date < ?
                ORDER BY date DESC, created_at DESC, id DESC
                """,
                (since_date, until_date),
            )
            return [row_to_transaction(row) for row in cursor.fetchall()]
