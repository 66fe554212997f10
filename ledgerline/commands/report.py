"""Monthly report command for viewing and exporting a month of transactions."""

import sys
from datetime import datetime
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from ledgerline.commands import console, format_amount_display, load_settings, open_store
from ledgerline.dates import format_display_date, format_month_display, parse_month
from ledgerline.domain.models import Month
from ledgerline.domain.report import calculate_totals
from ledgerline.errors import ReportError, StorageError, ValidationError
from ledgerline.reports import ReportGenerator

REPORT_FORMATS = ("table", "csv", "pdf")


def resolve_report_month(month: Month | None) -> tuple[int, int]:
    """Parse a YYYY-MM month, defaulting to the current month.

    Args:
        month: Optional month string.

    Returns:
        Tuple of (year, month_number).

    Raises:
        ValueError: If the month is not in YYYY-MM format.
    """
    if month:
        return parse_month(month)

    now = datetime.now()
    return now.year, now.month


def render_month_table(generator: ReportGenerator, year: int, month: int) -> None:
    """Print a month's transactions and totals."""
    transactions = generator.monthly_transactions(year, month)
    symbol = generator.currency_symbol
    period = format_month_display(year, month)

    console.print(f"[bold cyan]{period}[/bold cyan]\n")

    if not transactions:
        console.print("[dim]No transactions for this month.[/dim]")
    else:
        table = Table(title=f"{period} ({len(transactions)} transactions)")
        table.add_column("Date", style="cyan")
        table.add_column("Description", style="white")
        table.add_column("Type", style="magenta")
        table.add_column("Amount", justify="right")

        for txn in transactions:
            table.add_row(
                format_display_date(txn.date),
                escape(txn.description),
                txn.type.label,
                format_amount_display(txn, symbol),
            )

        console.print(table)

    totals = calculate_totals(transactions)
    console.print(f"\n  [bold]Total income:[/bold] {symbol}{totals.income:,.2f}")
    console.print(f"  [bold]Total expenses:[/bold] {symbol}{totals.expenses:,.2f}")
    console.print(f"[bold cyan]Balance:[/bold cyan] {symbol}{totals.balance:,.2f}")


def report_command(
    month: str | None = None,
    format: str = "table",
    output: str | None = None,
) -> None:
    """Show or export a monthly report."""
    if format not in REPORT_FORMATS:
        console.print(f"[red]Unknown format '{format}' (choose from {', '.join(REPORT_FORMATS)})[/red]")
        sys.exit(1)

    try:
        year, month_number = resolve_report_month(Month(month) if month else None)
    except ValueError:
        console.print(f"[red]Invalid month '{month}' (expected YYYY-MM)[/red]")
        sys.exit(1)

    settings = load_settings()

    try:
        with open_store(settings) as store:
            generator = ReportGenerator(store, settings.currency_symbol, settings.pdf_font)

            if format == "table":
                render_month_table(generator, year, month_number)
                return

            if format == "csv":
                export = generator.monthly_csv(year, month_number)
            else:
                export = generator.monthly_pdf(year, month_number)

        output_path = Path(output).expanduser() if output else Path.cwd() / export.filename
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(export.content)

    except ValidationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except (ReportError, StorageError) as e:
        console.print(f"[red]Report failed: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Could not write report: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Report written to: {output_path}")
