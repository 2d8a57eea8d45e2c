"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("today", "this-week", "this-month", "this-year", "last-week", "last-month", "last-year")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Accepts ISO dates ("2024-03-15"), Brazilian day-first dates
    ("15/03/2024") and a few relative words ("today", "yesterday").

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    # Slashed dates are written day-first in the hotel's sheets
    dayfirst = "/" in date_str
    try:
        return date_parser.parse(date_str, dayfirst=dayfirst).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_day_id(day_id: str) -> date:
    """Parse the ISO date string used as a day record's id."""
    try:
        return date.fromisoformat(day_id[:10])
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid day id '{day_id}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of ``PERIODS``

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()
    monday = today - timedelta(days=today.weekday())

    if period == "today":
        return (today, today)
    if period == "this-week":
        return (monday, today)
    if period == "this-month":
        return (today.replace(day=1), today)
    if period == "this-year":
        return (today.replace(month=1, day=1), today)
    if period == "last-week":
        start = monday - timedelta(days=7)
        return (start, start + timedelta(days=6))
    if period == "last-month":
        start = (today - relativedelta(months=1)).replace(day=1)
        return (start, today.replace(day=1) - timedelta(days=1))
    if period == "last-year":
        start = today.replace(month=1, day=1) - relativedelta(years=1)
        return (start, today.replace(month=1, day=1) - timedelta(days=1))

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")


def month_key(day: date) -> str:
    """Return the ``YYYY-MM`` key a day belongs to."""
    return day.strftime("%Y-%m")
