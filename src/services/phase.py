"""
Service module for menstrual cycle phase classification.

This module maps a day within a cycle to one of four phases and projects
that classification onto arbitrary calendar dates, before, inside or after
the logged history.

Typical usage:
    >>> phase = phase_on_date(date(2024, 3, 14), user_data.logs, 28, 5)
    >>> print(phase.value)
"""
from typing import Iterable, List
from datetime import date

from src.models.phase import CyclePhase
from src.models.record import PeriodRecord
from src.services.constants import LUTEAL_PHASE_DAYS, OVULATION_WINDOW_DAYS
from src.services.statistics import find_episode_starts
from src.services.utils import to_day, days_between

def classify_phase(day: int, avg_cycle_length: int, avg_period_length: int) -> CyclePhase:
    """
    Classify a day within the cycle.
    
    Ovulation is modelled LUTEAL_PHASE_DAYS before the next expected period
    with a symmetric window of OVULATION_WINDOW_DAYS on each side.
    
    Args:
        day: Day in the cycle (1-based); zero or negative means unknown
        avg_cycle_length: Average cycle length in days
        avg_period_length: Average period length in days
        
    Returns:
        The phase for that day
        
    Example:
        >>> classify_phase(3, 28, 5)
        <CyclePhase.MENSTRUAL: 'Menstrual'>
        >>> classify_phase(14, 28, 5)
        <CyclePhase.OVULATION: 'Ovulation'>
    """
    ovulation_day = avg_cycle_length - LUTEAL_PHASE_DAYS

    if day <= 0:
        return CyclePhase.FOLLICULAR
    if day <= avg_period_length:
        return CyclePhase.MENSTRUAL
    if day <= ovulation_day - OVULATION_WINDOW_DAYS:
        return CyclePhase.FOLLICULAR
    if day <= ovulation_day + OVULATION_WINDOW_DAYS:
        return CyclePhase.OVULATION
    return CyclePhase.LUTEAL

def normalize_cycle_day(target: date, cycle_start: date, avg_cycle_length: int) -> int:
    """
    Day of target within a cycle repeating every avg_cycle_length days.
    
    Works in both directions: a target before cycle_start is placed in an
    earlier hypothetical cycle, so the result is always in [1, length].
    
    Args:
        target: Date to place
        cycle_start: Any known cycle start
        avg_cycle_length: Cycle length used for wrapping
        
    Returns:
        1-based day in the cycle
    """
    return days_between(cycle_start, target) % avg_cycle_length + 1

def _governing_start(target: date, episode_starts: List[date]) -> date:
    """Latest start on or before target, or the earliest start when none is."""
    earlier = [start for start in episode_starts if start <= target]
    return earlier[-1] if earlier else episode_starts[0]

def cycle_day_on_date(
    target: date,
    logs: Iterable[PeriodRecord],
    avg_cycle_length: int
) -> int:
    """
    Get the normalised day in the cycle for any calendar date.
    
    Args:
        target: Date to evaluate
        logs: Period records in any order
        avg_cycle_length: Average cycle length in days
        
    Returns:
        Day in the cycle in [1, avg_cycle_length], or 0 when nothing is logged
    """
    target = to_day(target)
    episode_starts = find_episode_starts(logs)
    if target is None or not episode_starts or avg_cycle_length < 1:
        return 0

    cycle_start = _governing_start(target, episode_starts)
    return normalize_cycle_day(target, cycle_start, avg_cycle_length)

def phase_on_date(
    target: date,
    logs: Iterable[PeriodRecord],
    avg_cycle_length: int,
    avg_period_length: int
) -> CyclePhase:
    """
    Determine which phase was, is or will be active on a date.
    
    Dates after the last logged period wrap through hypothetical cycles of
    the average length; dates before the first logged period are projected
    backwards the same way.
    
    Args:
        target: Date to evaluate
        logs: Period records in any order
        avg_cycle_length: Average cycle length in days
        avg_period_length: Average period length in days
        
    Returns:
        Phase for the date; Follicular when nothing is logged
    """
    day = cycle_day_on_date(target, logs, avg_cycle_length)
    return classify_phase(day, avg_cycle_length, avg_period_length)
