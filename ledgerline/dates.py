"""Date utilities for ledgerline.

Pure functions for date range calculations and formatting.
"""

from datetime import date, datetime, timezone

import pandas as pd

from ledgerline.domain.models import Month, Timestamp


def calculate_month_date_range(year: int, month: int) -> tuple[str, str]:
    """Calculate the half-open date range covering a calendar month.

    Args:
        year: Four digit year.
        month: Month number (1-12).

    Returns:
        Tuple of (since_date, until_date) in YYYY-MM-DD format where
        until_date is the first day of the following month.

    Raises:
        ValueError: If month is outside 1-12.
    """
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return start.isoformat(), end.isoformat()


def format_month_display(year: int, month: int) -> str:
    """Human-readable month, e.g. "March 2024"."""
    return date(year, month, 1).strftime("%B %Y")


def parse_month(month: Month) -> tuple[int, int]:
    """Split a YYYY-MM month into its year and month number.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (year, month_number).

    Raises:
        ValueError: If the month is not in YYYY-MM format.
    """
    dt = datetime.strptime(month, "%Y-%m")
    return dt.year, dt.month


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def to_timestamp(moment: datetime) -> Timestamp:
    """Format a datetime as a UTC ISO-8601 timestamp with millisecond precision.

    Naive datetimes are taken to be UTC already.

    Args:
        moment: Datetime to format.

    Returns:
        Timestamp such as "2024-03-05T10:15:00.000Z".
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return Timestamp(moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z")


def format_display_date(value: str) -> str:
    """Format a stored timestamp as day/month/year, e.g. "5/3/2024".

    Args:
        value: ISO-8601 timestamp or date string.

    Returns:
        Date without zero padding.
    """
    parsed = pd.to_datetime(value)
    return f"{parsed.day}/{parsed.month}/{parsed.year}"
