"""
Service module for historical cycle data.

This module turns a period log into a list of past periods with their
durations and the length of the cycle each one started.

Typical usage:
    history = get_detailed_history(user_data.logs)
    for period in history:
        print(f"{period['start_date']}: {period['cycle_length'] or 'Ongoing'}")
"""
from typing import Any, Dict, Iterable, List, Optional

from src.models.record import PeriodRecord
from src.services.statistics import find_period_ranges
from src.services.utils import to_day, days_between

def get_detailed_history(
    logs: Iterable[PeriodRecord],
    periods: Optional[int] = None
) -> List[Dict[str, Any]]:
    """
    Get period history, most recent first.
    
    Args:
        logs: Period records in any order
        periods: Optional number of most recent periods to return
        
    Returns:
        List of period details containing:
        - start_date: First logged day of the period
        - end_date: Last logged day of the period
        - period_length: Days from start to end, inclusive
        - intensity: Intensity logged on the first day
        - cycle_length: Days until the next period started, None while the
          period is the most recent one
        
    Example:
        >>> history = get_detailed_history(logs, periods=3)
        >>> for period in history:
        ...     print(f"{period['start_date']} ({period['cycle_length']} days)")
    """
    logs = list(logs)
    intensities = {}
    for record in logs:
        day = to_day(getattr(record, "date", None))
        if day is not None:
            intensities[day] = record.intensity

    ranges = find_period_ranges(logs)
    history = []
    for index, (start, end) in enumerate(ranges):
        next_start = ranges[index + 1][0] if index + 1 < len(ranges) else None
        history.append({
            "start_date": start,
            "end_date": end,
            "period_length": days_between(start, end) + 1,
            "intensity": intensities.get(start),
            "cycle_length": days_between(start, next_start) if next_start else None
        })

    history.reverse()
    if periods is not None:
        history = history[:periods]
    return history
