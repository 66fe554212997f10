"""ledgerline - a personal income and expense ledger with monthly reports."""

__version__ = "0.1.0"
