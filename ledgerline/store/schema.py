"""Database schema initialization."""

import sqlite3


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the transactions table and its indexes if they are missing.

    Safe to run against an existing database.

    Args:
        conn: Open database connection.

    Raises:
        sqlite3.Error: If schema creation fails.
    """
    cursor = conn.cursor()

    try:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                description TEXT NOT NULL,
                amount REAL NOT NULL CHECK(amount >= 0),
                type TEXT NOT NULL CHECK(type IN ('income', 'expense')),
                date TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
            )
        """
        )

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_txn_date ON transactions(date)")

        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise
