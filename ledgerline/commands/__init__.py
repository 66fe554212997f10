"""CLI command implementations."""

from rich.console import Console

from ledgerline.config import Settings, get_settings
from ledgerline.domain.models import Transaction, TransactionType
from ledgerline.logging_utils import configure_logging
from ledgerline.store import LedgerStore

console = Console()


def load_settings() -> Settings:
    """Load settings and apply the configured log level."""
    settings = get_settings()
    configure_logging(settings.log_level, force=True)
    return settings


def open_store(settings: Settings | None = None) -> LedgerStore:
    """Open the ledger at the configured database path."""
    if settings is None:
        settings = load_settings()
    return LedgerStore(settings.db_path)


def format_amount_display(transaction: Transaction, symbol: str) -> str:
    """Colored, signed amount for console output."""
    if transaction.type is TransactionType.INCOME:
        return f"[green]+{symbol}{transaction.amount:,.2f}[/green]"
    return f"[red]-{symbol}{transaction.amount:,.2f}[/red]"
