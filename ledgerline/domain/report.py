"""Pure functions for monthly report calculations and layout.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Both export formats take their totals from calculate_totals so a CSV and a
PDF for the same month always agree.
"""

import csv
import io
from collections.abc import Sequence
from dataclasses import dataclass

from ledgerline.dates import format_display_date, format_month_display
from ledgerline.domain.models import Amount, Summary, Transaction, TransactionType

REPORT_TITLE = "Monthly Income & Expense Report"
EMPTY_MONTH_TEXT = "No transactions for this month."
CSV_HEADER = ("Date", "Description", "Type", "Amount")

# Font sizes in points
TITLE_SIZE = 20
SUBTITLE_SIZE = 16
HEADING_SIZE = 14
BODY_SIZE = 12
ENTRY_SIZE = 10

# Indents in points from the left margin
SUMMARY_INDENT = 20
ENTRY_INDENT = 20
DETAIL_INDENT = 40


@dataclass(frozen=True)
class DocumentLine:
    """One line of the document layout.

    space_after is measured in lines of the same font size.
    """

    text: str
    size: int
    align: str = "left"
    indent: int = 0
    underline: bool = False
    space_after: float = 0.0


def calculate_totals(transactions: Sequence[Transaction]) -> Summary:
    """Calculate income, expense and balance totals.

    Args:
        transactions: Transactions to total.

    Returns:
        Summary with income, expenses and balance (income - expenses).
    """
    income = sum(t.amount for t in transactions if t.type is TransactionType.INCOME)
    expenses = sum(t.amount for t in transactions if t.type is TransactionType.EXPENSE)
    return Summary(income=Amount(float(income)), expenses=Amount(float(expenses)), balance=float(income - expenses))


def format_currency(value: float, symbol: str) -> str:
    """Format a value with a currency symbol and 2 decimals, e.g. "₹50.00"."""
    return f"{symbol}{value:.2f}"


def format_signed_amount(transaction: Transaction, symbol: str) -> str:
    """Format an amount with the sign implied by its type, e.g. "-₹20.00"."""
    sign = "+" if transaction.type is TransactionType.INCOME else "-"
    return f"{sign}{format_currency(transaction.amount, symbol)}"


def report_filename(year: int, month: int, extension: str) -> str:
    """Attachment filename, e.g. "monthly-report-2024-03.csv"."""
    return f"monthly-report-{year}-{month:02d}.{extension}"


def summary_lines(totals: Summary, symbol: str) -> list[tuple[str, str]]:
    """Label and formatted value for each summary line."""
    return [
        ("Total Income", format_currency(totals.income, symbol)),
        ("Total Expenses", format_currency(totals.expenses, symbol)),
        ("Balance", format_currency(totals.balance, symbol)),
    ]


def render_csv(transactions: Sequence[Transaction], totals: Summary, symbol: str) -> str:
    """Render transactions and totals as CSV text.

    Layout: header row, one row per transaction, a blank line, a "Summary"
    line and the three total lines.

    Args:
        transactions: Transactions in display order.
        totals: Totals for the same transactions.
        symbol: Currency symbol used in the summary block.

    Returns:
        CSV text with "\\n" line endings.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow(CSV_HEADER)
    for transaction in transactions:
        writer.writerow(
            [
                format_display_date(transaction.date),
                transaction.description,
                transaction.type.label,
                f"{transaction.amount:.2f}",
            ]
        )

    writer.writerow([])
    writer.writerow(["Summary"])
    for label, value in summary_lines(totals, symbol):
        writer.writerow([label, value])

    return buffer.getvalue()


def build_document_lines(
    transactions: Sequence[Transaction],
    totals: Summary,
    year: int,
    month: int,
    symbol: str,
) -> list[DocumentLine]:
    """Lay out the monthly report document.

    Args:
        transactions: Transactions in display order.
        totals: Totals for the same transactions.
        year: Report year.
        month: Report month (1-12).
        symbol: Currency symbol.

    Returns:
        Ordered lines with font size, alignment, indent and spacing.
    """
    lines = [
        DocumentLine(REPORT_TITLE, TITLE_SIZE, align="center", space_after=1),
        DocumentLine(format_month_display(year, month), SUBTITLE_SIZE, align="center", space_after=2),
        DocumentLine("Summary", HEADING_SIZE, underline=True, space_after=0.5),
    ]

    totals_lines = summary_lines(totals, symbol)
    for index, (label, value) in enumerate(totals_lines):
        space_after = 2 if index == len(totals_lines) - 1 else 0
        lines.append(DocumentLine(f"{label}: {value}", BODY_SIZE, indent=SUMMARY_INDENT, space_after=space_after))

    lines.append(DocumentLine("Transactions", HEADING_SIZE, underline=True, space_after=0.5))

    if not transactions:
        lines.append(DocumentLine(EMPTY_MONTH_TEXT, BODY_SIZE, indent=SUMMARY_INDENT))
        return lines

    last = len(transactions) - 1
    for index, transaction in enumerate(transactions):
        lines.append(
            DocumentLine(
                f"{format_display_date(transaction.date)} - {transaction.type.label}",
                ENTRY_SIZE,
                indent=ENTRY_INDENT,
            )
        )
        lines.append(
            DocumentLine(
                f"{transaction.description}: {format_signed_amount(transaction, symbol)}",
                ENTRY_SIZE,
                indent=DETAIL_INDENT,
                space_after=0.3 if index < last else 0.0,
            )
        )

    return lines
