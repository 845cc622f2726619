"""
Statistics calculation service for cycle tracking data.

This module reconstructs period episodes from single logged days and derives
the average cycle length from the gaps between episode starts.
"""
from typing import Iterable, List, Tuple
from datetime import date

from aws_lambda_powertools import Logger

from src.models.record import PeriodRecord
from src.services.constants import GAP_THRESHOLD_DAYS, DEFAULT_CYCLE_LENGTH
from src.services.utils import get_period_dates, days_between

logger = Logger()

def find_period_ranges(
    logs: Iterable[PeriodRecord],
    max_gap: int = GAP_THRESHOLD_DAYS
) -> List[Tuple[date, date]]:
    """
    Find start and end dates for each period.
    
    Args:
        logs: Period records in any order
        max_gap: Maximum distance in days between two logged days of the
            same period (default: 2)
        
    Returns:
        List of tuples containing (period_start_date, last_logged_date),
        oldest first
        
    Note:
        A logged day more than max_gap days after the previous logged day
        starts a new period. A single logged day is a period of its own.
    """
    period_ranges = []
    period_start = None
    last_date = None

    for day in get_period_dates(logs):
        if period_start is None:
            period_start = last_date = day
        elif days_between(last_date, day) > max_gap:
            period_ranges.append((period_start, last_date))
            period_start = last_date = day
        else:
            last_date = day

    if period_start is not None:
        period_ranges.append((period_start, last_date))

    return period_ranges

def find_episode_starts(
    logs: Iterable[PeriodRecord],
    max_gap: int = GAP_THRESHOLD_DAYS
) -> List[date]:
    """
    Reconstruct the start date of every period episode.

    Args:
        logs: Period records in any order
        max_gap: Maximum distance in days inside one episode

    Returns:
        Episode start dates in chronological order; empty for an empty log

    Example:
        >>> find_episode_starts(records)  # Jan 1-5 and Jan 29-Feb 2 logged
        [datetime.date(2024, 1, 1), datetime.date(2024, 1, 29)]
    """
    return [start for start, _ in find_period_ranges(logs, max_gap)]

def calculate_cycle_lengths(episode_starts: List[date]) -> List[int]:
    """Days between each pair of consecutive episode starts."""
    return [
        days_between(previous, current)
        for previous, current in zip(episode_starts, episode_starts[1:])
    ]

def average_cycle_length(
    logs: Iterable[PeriodRecord],
    fallback: int = DEFAULT_CYCLE_LENGTH
) -> int:
    """
    Calculate the average cycle length from logged history.
    
    Args:
        logs: Period records in any order
        fallback: Value returned when fewer than two episodes are known,
            normally the user's configured average
        
    Returns:
        Mean gap between consecutive episode starts, rounded half up
    """
    cycle_lengths = calculate_cycle_lengths(find_episode_starts(logs))
    if not cycle_lengths:
        return fallback

    total, count = sum(cycle_lengths), len(cycle_lengths)
    # Integer round-half-up of total / count
    average = (2 * total + count) // (2 * count)
    logger.debug("Calculated average cycle length", extra={
        "cycles": count,
        "average_cycle_length": average
    })
    return average
