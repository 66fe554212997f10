"""CLI entry point for ledgerline."""

import typer

from ledgerline.commands.admin import init_command, serve_command
from ledgerline.commands.report import report_command
from ledgerline.commands.transactions import (
    add_command,
    delete_command,
    edit_command,
    list_command,
    show_command,
    summary_command,
)

app = typer.Typer(
    name="ledgerline",
    help="ledgerline - a personal income and expense ledger",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """ledgerline - a personal income and expense ledger."""
    pass


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize the ledger database and configuration."""
    init_command(force)


@app.command()
def add(
    description: str,
    amount: str,
    type: str = typer.Option(..., "--type", "-t", help="'income' or 'expense'"),
) -> None:
    """Record a new transaction dated now."""
    add_command(description, amount, type)


@app.command(name="list")
def list_transactions() -> None:
    """List all your transactions, newest first."""
    list_command()


@app.command()
def show(transaction_id: int) -> None:
    """Show a single transaction."""
    show_command(transaction_id)


@app.command()
def edit(
    transaction_id: int,
    description: str,
    amount: str,
    type: str = typer.Option(..., "--type", "-t", help="'income' or 'expense'"),
) -> None:
    """Replace a transaction's description, amount and type."""
    edit_command(transaction_id, description, amount, type)


@app.command()
def delete(
    transaction_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Permanently delete a transaction."""
    delete_command(transaction_id, yes)


@app.command()
def summary() -> None:
    """Show your total income, expenses and balance."""
    summary_command()


@app.command(name="report")
def report(
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM, default: current month)"),
    format: str = typer.Option("table", "--format", help="'table', 'csv' or 'pdf'"),
    output: str = typer.Option(None, "--output", "-o", help="Output file for csv/pdf exports"),
) -> None:
    """Show or export your monthly income and expense report."""
    report_command(month, format, output)


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Host interface to bind"),
    port: int = typer.Option(None, "--port", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
) -> None:
    """Run the HTTP API."""
    serve_command(host, port, reload)


if __name__ == "__main__":
    app()
