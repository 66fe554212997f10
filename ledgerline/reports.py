"""Monthly report generation.

ReportGenerator reads one calendar month from the ledger and hands the rows
to the pure functions in ledgerline.domain.report. Drawing the PDF is the
only side-effecting step and happens here with reportlab.
"""

import io
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from ledgerline.config import DEFAULT_CURRENCY_SYMBOL
from ledgerline.dates import calculate_month_date_range
from ledgerline.domain.models import Transaction
from ledgerline.domain.report import (
    DocumentLine,
    build_document_lines,
    calculate_totals,
    render_csv,
    report_filename,
)
from ledgerline.errors import ReportError, StorageError, ValidationError
from ledgerline.logging_utils import get_logger
from ledgerline.store import LedgerStore

LOGGER = get_logger(__name__)

CSV_MEDIA_TYPE = "text/csv"
PDF_MEDIA_TYPE = "application/pdf"

PAGE_MARGIN = 50
LINE_HEIGHT = 1.2
DEFAULT_FONT = "Helvetica"
CUSTOM_FONT = "LedgerlineFont"

# Drawn in place of symbols the standard PDF fonts have no glyph for
STANDARD_FONT_SYMBOLS = {"₹": "Rs.", "₽": "RUB", "₺": "TL", "₱": "PHP"}


@dataclass(frozen=True)
class ReportExport:
    """Exported report bytes with their media type and attachment filename."""

    content: bytes
    media_type: str
    filename: str


def register_font(font_path: Path | None) -> str:
    """Register a TrueType font for the PDF, falling back to Helvetica.

    Helvetica has no glyph for some currency symbols (e.g. the rupee sign),
    so pdf_currency_symbol spells those out. A TTF that has the glyph can be
    configured with the ``pdf_font`` setting.

    Args:
        font_path: Path to a .ttf file, or None.

    Returns:
        Font name to draw with.
    """
    if font_path is None:
        return DEFAULT_FONT
    if CUSTOM_FONT not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(CUSTOM_FONT, str(font_path)))
    return CUSTOM_FONT


def pdf_currency_symbol(symbol: str, font_name: str) -> str:
    """Currency symbol as it should be drawn with font_name.

    Symbols the standard fonts cannot draw are replaced with a text
    abbreviation; a registered TTF gets the symbol unchanged.
    """
    if font_name != DEFAULT_FONT:
        return symbol
    return STANDARD_FONT_SYMBOLS.get(symbol, symbol)


def render_pdf(lines: Sequence[DocumentLine], font_name: str = DEFAULT_FONT, title: str = "") -> bytes:
    """Draw document lines onto letter-sized pages.

    Lines wider than the page are wrapped; a new page starts whenever the
    next line would cross the bottom margin.

    Args:
        lines: Layout produced by build_document_lines.
        font_name: Registered font name.
        title: PDF metadata title.

    Returns:
        PDF document bytes.
    """
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=LETTER)
    pdf.setTitle(title)
    width, height = LETTER
    y = height - PAGE_MARGIN

    for line in lines:
        leading = line.size * LINE_HEIGHT
        x = PAGE_MARGIN + line.indent
        max_width = width - PAGE_MARGIN - x

        for chunk in simpleSplit(line.text, font_name, line.size, max_width) or [""]:
            if y - leading < PAGE_MARGIN:
                pdf.showPage()
                y = height - PAGE_MARGIN
            y -= leading

            pdf.setFont(font_name, line.size)
            if line.align == "center":
                pdf.drawCentredString(width / 2, y, chunk)
            else:
                pdf.drawString(x, y, chunk)
                if line.underline:
                    text_width = pdfmetrics.stringWidth(chunk, font_name, line.size)
                    pdf.line(x, y - 2, x + text_width, y - 2)

        y -= line.space_after * leading

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


class ReportGenerator:
    """Monthly views and exports over a LedgerStore.

    Args:
        store: Ledger to read from. Only its date range query is used.
        currency_symbol: Symbol prefixed to formatted amounts.
        font_path: Optional TTF used for the PDF export.
    """

    def __init__(
        self,
        store: LedgerStore,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
        font_path: Path | None = None,
    ) -> None:
        self.store = store
        self.currency_symbol = currency_symbol
        self.font_path = font_path

    def monthly_transactions(self, year: int, month: int) -> list[Transaction]:
        """Get a month's transactions, newest first.

        Raises:
            ValidationError: If month is not 1-12 or year is out of range.
            ReportError: If the ledger read fails.
        """
        if not 1 <= month <= 12:
            raise ValidationError({"month": "must be between 1 and 12"})
        try:
            since_date, until_date = calculate_month_date_range(year, month)
        except (ValueError, OverflowError) as e:
            raise ValidationError({"year": str(e)}) from e

        try:
            return self.store.transactions_between(since_date, until_date)
        except StorageError as e:
            raise ReportError(f"Failed to read transactions for {year}-{month:02d}") from e

    def monthly_csv(self, year: int, month: int) -> ReportExport:
        """Export a month as CSV.

        Raises:
            ValidationError: If the month is invalid.
            ReportError: If reading or rendering fails.
        """
        transactions = self.monthly_transactions(year, month)
        totals = calculate_totals(transactions)

        try:
            content = render_csv(transactions, totals, self.currency_symbol).encode("utf-8")
        except (ValueError, TypeError) as e:
            LOGGER.error("Error generating CSV for %d-%02d: %s", year, month, e)
            raise ReportError("Failed to generate CSV report") from e

        LOGGER.info("Generated CSV report for %d-%02d (%d transactions)", year, month, len(transactions))
        return ReportExport(content, CSV_MEDIA_TYPE, report_filename(year, month, "csv"))

    def monthly_pdf(self, year: int, month: int) -> ReportExport:
        """Export a month as a PDF document.

        Raises:
            ValidationError: If the month is invalid.
            ReportError: If reading or rendering fails.
        """
        transactions = self.monthly_transactions(year, month)
        totals = calculate_totals(transactions)

        try:
            font_name = register_font(self.font_path)
            symbol = pdf_currency_symbol(self.currency_symbol, font_name)
            lines = build_document_lines(transactions, totals, year, month, symbol)
            content = render_pdf(lines, font_name, title=lines[1].text)
        except Exception as e:
            LOGGER.error("Error generating PDF for %d-%02d: %s", year, month, e)
            raise ReportError("Failed to generate PDF report") from e

        LOGGER.info("Generated PDF report for %d-%02d (%d transactions)", year, month, len(transactions))
        return ReportExport(content, PDF_MEDIA_TYPE, report_filename(year, month, "pdf"))
