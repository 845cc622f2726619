"""
Shared utility functions for cycle-related services.

These helpers normalise dates to day granularity and pull usable dates out
of a period log without letting one corrupted record break a calculation.
"""
from typing import Iterable, List, Optional
from datetime import date, datetime, timedelta

from aws_lambda_powertools import Logger

from src.models.record import PeriodRecord

logger = Logger()

def to_day(value) -> Optional[date]:
    """
    Normalise a date-like value to a calendar date.

    Args:
        value: date, datetime or ISO formatted string (``YYYY-MM-DD``,
            optionally followed by a time component)

    Returns:
        The calendar date, or None if the value cannot be interpreted

    Example:
        >>> to_day(datetime(2024, 1, 1, 23, 59))
        datetime.date(2024, 1, 1)
        >>> to_day("not a date") is None
        True
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None

def get_period_dates(logs: Iterable[PeriodRecord]) -> List[date]:
    """
    Collect the distinct, valid dates of a period log in chronological order.

    Records whose date cannot be parsed are skipped with a warning.

    Args:
        logs: Period records in any order

    Returns:
        Sorted list of unique dates
    """
    dates = set()
    for record in logs:
        raw = getattr(record, "date", None)
        day = to_day(raw)
        if day is None:
            logger.warning("Skipping period record with invalid date", extra={
                "date": repr(raw)
            })
            continue
        dates.add(day)
    return sorted(dates)

def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end is earlier)."""
    return (end - start).days

def shift_days(day: date, days: int) -> Optional[date]:
    """
    Move a date by a number of days.

    Returns:
        The shifted date, or None when it falls outside the supported
        calendar range
    """
    try:
        return day + timedelta(days=days)
    except OverflowError:
        return None
