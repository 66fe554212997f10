"""Transaction management commands (add, list, show, edit, delete, summary)."""

import sys

import typer
from rich.markup import escape
from rich.table import Table

from ledgerline.commands import console, format_amount_display, load_settings, open_store
from ledgerline.dates import format_display_date
from ledgerline.domain.models import Transaction
from ledgerline.errors import NotFoundError, StorageError, ValidationError


def print_transaction(transaction: Transaction, symbol: str) -> None:
    """Print the fields of a single transaction."""
    console.print(f"  ID: {transaction.id}")
    console.print(f"  Date: {format_display_date(transaction.date)}")
    console.print(f"  Description: {escape(transaction.description)}")
    console.print(f"  Type: {transaction.type.label}")
    console.print(f"  Amount: {format_amount_display(transaction, symbol)}")


def print_validation_error(error: ValidationError) -> None:
    console.print("[red]Invalid transaction:[/red]")
    for field, problem in error.fields.items():
        console.print(f"  {field}: {problem}")


def add_command(description: str, amount: str, type: str) -> None:
    """Record a new transaction dated now.

    Args:
        description: Transaction description.
        amount: Amount as entered (must be a non-negative number).
        type: "income" or "expense".
    """
    settings = load_settings()

    try:
        with open_store(settings) as store:
            transaction = store.create(description, amount, type)
    except ValidationError as e:
        print_validation_error(e)
        sys.exit(1)
    except StorageError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Transaction added:")
    print_transaction(transaction, settings.currency_symbol)


def list_command() -> None:
    """List all transactions, newest first."""
    settings = load_settings()

    try:
        with open_store(settings) as store:
            transactions = store.list()
    except StorageError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    table = Table(title=f"Transactions ({len(transactions)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Type", style="magenta")
    table.add_column("Amount", justify="right")

    for txn in transactions:
        table.add_row(
            str(txn.id),
            format_display_date(txn.date),
            escape(txn.description),
            txn.type.label,
            format_amount_display(txn, settings.currency_symbol),
        )

    console.print(table)


def show_command(transaction_id: int) -> None:
    """Show a single transaction."""
    settings = load_settings()

    try:
        with open_store(settings) as store:
            transaction = store.get(transaction_id)
    except NotFoundError:
        console.print(f"[red]Transaction {transaction_id} not found[/red]")
        sys.exit(1)
    except StorageError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    print_transaction(transaction, settings.currency_symbol)


def edit_command(transaction_id: int, description: str, amount: str, type: str) -> None:
    """Replace description, amount and type of a transaction.

    The transaction's date is not changed.
    """
    settings = load_settings()

    try:
        with open_store(settings) as store:
            transaction = store.update(transaction_id, description, amount, type)
    except ValidationError as e:
        print_validation_error(e)
        sys.exit(1)
    except NotFoundError:
        console.print(f"[red]Transaction {transaction_id} not found[/red]")
        sys.exit(1)
    except StorageError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Updated transaction {transaction_id}:")
    print_transaction(transaction, settings.currency_symbol)


def delete_command(transaction_id: int, yes: bool = False) -> None:
    """Permanently delete a transaction, asking for confirmation unless yes is set."""
    settings = load_settings()

    try:
        with open_store(settings) as store:
            transaction = store.get(transaction_id)

            if not yes:
                print_transaction(transaction, settings.currency_symbol)
                if not typer.confirm("Delete this transaction?", default=False):
                    console.print("[dim]Cancelled[/dim]")
                    return

            store.delete(transaction_id)
    except NotFoundError:
        console.print(f"[red]Transaction {transaction_id} not found[/red]")
        sys.exit(1)
    except StorageError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted transaction {transaction_id}")


def summary_command() -> None:
    """Show total income, total expenses and balance."""
    settings = load_settings()
    symbol = settings.currency_symbol

    try:
        with open_store(settings) as store:
            summary = store.summary()
    except StorageError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    balance_color = "green" if summary.balance >= 0 else "red"
    console.print(f"[bold]Total income:[/bold] [green]{symbol}{summary.income:,.2f}[/green]")
    console.print(f"[bold]Total expenses:[/bold] [red]{symbol}{summary.expenses:,.2f}[/red]")
    console.print(f"[bold cyan]Balance:[/bold cyan] [{balance_color}]{symbol}{summary.balance:,.2f}[/{balance_color}]")
