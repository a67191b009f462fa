"""Date parsing and calendar-month utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from duofin.domain.entities import validate_month
from duofin.domain.errors import InvalidDateError, invalid_date

# YYYY-MM-DD or YYYYMMDD, optionally followed by a time part
FULL_ISO_DATE = re.compile(r"^\d{4}-?\d{2}-?\d{2}(?:$|[T ])")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "next month", etc.

    Args:
        date_str: Date string in various formats
        today: Reference date for relative expressions (defaults to today)

    Returns:
        Date object

    Raises:
        InvalidDateError: If date string cannot be parsed
    """
    if not isinstance(date_str, str) or not date_str.strip():
        raise InvalidDateError(invalid_date(date_str, "empty or not a string"))

    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        elif period == "week":
            return today + timedelta(days=(7 - today.weekday()))

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise InvalidDateError(invalid_date(date_str, str(e))) from e


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO 8601 date or timestamp.

    Unlike ``parse_date`` this never fills in missing parts from today, so
    "2024-02", "March" or "yesterday" are rejected.

    Raises:
        InvalidDateError: If value is not a full ISO 8601 calendar date
    """
    if not isinstance(value, str) or not FULL_ISO_DATE.match(value.strip()):
        raise InvalidDateError(invalid_date(value, "expected an ISO date such as 2024-01-15"))
    try:
        return isoparse(value.strip())
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(invalid_date(value, str(e))) from e


def coerce_date(value) -> date:
    """Return ``value`` as a date, parsing ISO strings strictly.

    Raises:
        InvalidDateError: If value is neither a date nor a full ISO date string
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_timestamp(value).date()
    raise InvalidDateError(invalid_date(value, f"unsupported type {type(value).__name__}"))


def month_key(value: date) -> tuple[int, int]:
    """Return the (year, month) bucket key of a date."""
    return (value.year, value.month)


def add_months(year: int, month: int, delta: int) -> tuple[int, int]:
    """Shift a (year, month) pair by ``delta`` months, wrapping years."""
    validate_month(month, year)
    shifted = date(year, month, 1) + relativedelta(months=delta)
    return (shifted.year, shifted.month)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a calendar month."""
    validate_month(month, year)
    start = date(year, month, 1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return (start, end)


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (this-month, this-year, last-month, last-year,
            last-3-months, last-6-months)
        today: Reference date (defaults to today)

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        InvalidDateError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period in ("last-3-months", "last-6-months"):
        # Window includes the current month, matching the reports page default
        months = 3 if period == "last-3-months" else 6
        start_date = (today - relativedelta(months=months - 1)).replace(day=1)
        return (start_date, today)

    else:
        raise InvalidDateError(
            f"Unknown period: '{period}'. Supported periods: this-month, this-year, "
            "last-month, last-year, last-3-months, last-6-months"
        )
