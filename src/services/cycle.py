"""
Service module for menstrual cycle predictions.

This module answers the questions the dashboard and calendar ask about
today and the coming cycles: the current cycle day, the next expected
period and whether a date falls in the fertile window. Every function
degrades to a documented default instead of raising when history is
missing.

Typical usage:
    status = get_cycle_status(user_data)
    print(f"Day {status.cycle_day}, {status.phase.value} phase")
    print(f"Next period expected on {status.next_period_date}")
"""
from typing import Iterable, Optional
from datetime import date

from aws_lambda_powertools import Logger

from src.models.phase import CycleStatus
from src.models.record import PeriodRecord
from src.models.user_data import UserData
from src.services.constants import LUTEAL_PHASE_DAYS, FERTILE_DAYS_BEFORE_OVULATION
from src.services.phase import classify_phase, normalize_cycle_day
from src.services.statistics import find_episode_starts, average_cycle_length
from src.services.utils import to_day, days_between, shift_days

logger = Logger()

def next_period_date(logs: Iterable[PeriodRecord], avg_cycle_length: int) -> Optional[date]:
    """
    Predict the start of the next period.
    
    Args:
        logs: Period records in any order
        avg_cycle_length: Average cycle length in days
        
    Returns:
        Last episode start plus one average cycle, or None with no history
        or when the prediction falls past the last representable date
        
    Example:
        >>> next_period_date(logs, 28)
        datetime.date(2024, 1, 29)
    """
    episode_starts = find_episode_starts(logs)
    if not episode_starts:
        return None
    return shift_days(episode_starts[-1], avg_cycle_length)

def current_cycle_day(logs: Iterable[PeriodRecord], today: Optional[date] = None) -> int:
    """
    Calculate today's day in the current cycle.
    
    The count is not wrapped: a late period keeps counting past the
    average cycle length.
    
    Args:
        logs: Period records in any order
        today: Date to treat as today, defaults to the current date
        
    Returns:
        Days since the last episode start plus one, or 0 with no history
    """
    today = to_day(today) or date.today()
    episode_starts = find_episode_starts(logs)
    if not episode_starts:
        return 0
    return days_between(episode_starts[-1], today) + 1

def is_in_fertile_window(target: date, cycle_start_reference: date, avg_cycle_length: int) -> bool:
    """
    Check whether a date falls in the fertile window.
    
    The window is the FERTILE_DAYS_BEFORE_OVULATION days before the
    projected ovulation day plus the ovulation day itself.
    
    Args:
        target: Date to test
        cycle_start_reference: Start of the cycle the date is measured from
        avg_cycle_length: Average cycle length in days
        
    Returns:
        True if the date is inside the window
        
    Example:
        >>> is_in_fertile_window(date(2024, 1, 14), date(2024, 1, 1), 28)
        True
    """
    target, cycle_start_reference = to_day(target), to_day(cycle_start_reference)
    if target is None or cycle_start_reference is None or avg_cycle_length < 1:
        return False

    day = normalize_cycle_day(target, cycle_start_reference, avg_cycle_length)
    ovulation_day = avg_cycle_length - LUTEAL_PHASE_DAYS
    return ovulation_day - FERTILE_DAYS_BEFORE_OVULATION <= day <= ovulation_day

def days_until_next_period(
    logs: Iterable[PeriodRecord],
    avg_cycle_length: int,
    today: Optional[date] = None
) -> Optional[int]:
    """
    Count the days left until the predicted period.
    
    Returns:
        Days from today to the predicted start (negative when late), or None
        with no history
    """
    today = to_day(today) or date.today()
    predicted = next_period_date(logs, avg_cycle_length)
    if predicted is None:
        return None
    return days_between(today, predicted)

def get_cycle_status(user_data: UserData, today: Optional[date] = None) -> CycleStatus:
    """
    Build today's cycle snapshot for the dashboard.
    
    The average cycle length comes from history, falling back to the
    user's settings; the phase is classified from the unwrapped cycle day.
    
    Args:
        user_data: The user's journal
        today: Date to treat as today, defaults to the current date
        
    Returns:
        CycleStatus for the day
    """
    today = to_day(today) or date.today()
    logs = user_data.logs
    settings = user_data.settings

    avg_cycle = average_cycle_length(logs, settings.average_cycle_length)
    cycle_day = current_cycle_day(logs, today)
    phase = classify_phase(cycle_day, avg_cycle, settings.average_period_length)
    predicted = next_period_date(logs, avg_cycle)

    logger.debug("Calculated cycle status", extra={
        "cycle_day": cycle_day,
        "phase": phase.value,
        "average_cycle_length": avg_cycle
    })

    return CycleStatus(
        today=today,
        cycle_day=cycle_day,
        phase=phase,
        average_cycle_length=avg_cycle,
        next_period_date=predicted,
        days_until_next=days_until_next_period(logs, avg_cycle, today)
    )
