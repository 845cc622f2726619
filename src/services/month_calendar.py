"""
Service module for month calendar rendering.

Each day of a month is marked with its projected phase, whether a period
was logged, whether a period is predicted and whether it falls in a
fertile window. Predictions are projected from the last logged period
start for a bounded number of future cycles.
"""
import calendar
from typing import List, Optional
from datetime import date

from aws_lambda_powertools import Logger

from src.models.calendar import CalendarDay
from src.models.user_data import UserData
from src.services.constants import CALENDAR_HORIZON_CYCLES
from src.services.cycle import is_in_fertile_window
from src.services.phase import phase_on_date
from src.services.statistics import find_episode_starts, average_cycle_length
from src.services.utils import to_day, days_between, shift_days

logger = Logger()

def get_month_days(year: int, month: int) -> List[date]:
    """
    List every date of a month.

    Raises:
        ValueError: If month is not in 1-12
    """
    _, last_day = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, last_day + 1)]

def is_predicted_period_day(
    target: date,
    last_start: date,
    avg_cycle_length: int,
    avg_period_length: int,
    horizon_cycles: int = CALENDAR_HORIZON_CYCLES
) -> bool:
    """
    Check whether a date falls in one of the projected future periods.
    
    Args:
        target: Date to test
        last_start: Most recent logged period start
        avg_cycle_length: Average cycle length in days
        avg_period_length: Average period length in days
        horizon_cycles: Number of future cycles to project
        
    Returns:
        True if the date is within the first avg_period_length days of a
        cycle starting last_start + k * avg_cycle_length, 1 <= k <= horizon
    """
    for offset in range(1, horizon_cycles + 1):
        projected_start = shift_days(last_start, offset * avg_cycle_length)
        if projected_start is None:
            break
        if 0 <= days_between(projected_start, target) < avg_period_length:
            return True
    return False

def is_projected_fertile_day(
    target: date,
    last_start: date,
    avg_cycle_length: int,
    horizon_cycles: int = CALENDAR_HORIZON_CYCLES
) -> bool:
    """
    Check whether a date falls in the fertile window of the current cycle
    or of one of the projected future cycles.
    """
    for offset in range(0, horizon_cycles + 1):
        reference = shift_days(last_start, offset * avg_cycle_length)
        if reference is None:
            break
        if not 0 <= days_between(reference, target) < avg_cycle_length:
            continue
        if is_in_fertile_window(target, reference, avg_cycle_length):
            return True
    return False

def build_month_calendar(
    year: int,
    month: int,
    user_data: UserData,
    today: Optional[date] = None,
    horizon_cycles: int = CALENDAR_HORIZON_CYCLES
) -> List[CalendarDay]:
    """
    Build the markers for every day of a month.
    
    Args:
        year: Calendar year
        month: Calendar month (1-12)
        user_data: The user's journal
        today: Date to flag as today, defaults to the current date
        horizon_cycles: Number of future cycles to project predictions into
        
    Returns:
        One CalendarDay per day of the month, in order
        
    Raises:
        ValueError: If month is not in 1-12
        
    Example:
        >>> days = build_month_calendar(2024, 3, user_data)
        >>> [d.date.day for d in days if d.is_fertile]
        [9, 10, 11, 12, 13, 14]
    """
    today = to_day(today) or date.today()
    logs = user_data.logs
    settings = user_data.settings
    avg_cycle = average_cycle_length(logs, settings.average_cycle_length)
    avg_period = settings.average_period_length

    logged = {}
    for record in logs:
        day = to_day(getattr(record, "date", None))
        if day is not None:
            logged[day] = record.intensity

    episode_starts = find_episode_starts(logs)
    last_start = episode_starts[-1] if episode_starts else None

    days = []
    for day in get_month_days(year, month):
        is_logged = day in logged
        predicted = fertile = False
        if last_start is not None:
            predicted = not is_logged and day > last_start and is_predicted_period_day(
                day, last_start, avg_cycle, avg_period, horizon_cycles
            )
            fertile = is_projected_fertile_day(day, last_start, avg_cycle, horizon_cycles)

        days.append(CalendarDay(
            date=day,
            phase=phase_on_date(day, logs, avg_cycle, avg_period),
            is_logged_period=is_logged,
            intensity=logged.get(day),
            is_predicted_period=predicted,
            is_fertile=fertile,
            is_today=day == today
        ))

    logger.debug("Built month calendar", extra={
        "year": year,
        "month": month,
        "predicted_days": sum(1 for d in days if d.is_predicted_period),
        "fertile_days": sum(1 for d in days if d.is_fertile)
    })
    return days
