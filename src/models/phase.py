"""
Phase model definitions for menstrual cycle phases.
"""
from enum import Enum
from datetime import date
from typing import Optional
from pydantic import BaseModel

class CyclePhase(str, Enum):
    """
    Coarse biological phases of a menstrual cycle.
    """
    MENSTRUAL = "Menstrual"
    FOLLICULAR = "Follicular"
    OVULATION = "Ovulation"
    LUTEAL = "Luteal"

class CycleStatus(BaseModel):
    """
    Snapshot of the cycle as seen on a given day.

    cycle_day is 0 and next_period_date is None when no period has been
    logged yet.
    """
    today: date
    cycle_day: int
    phase: CyclePhase
    average_cycle_length: int
    next_period_date: Optional[date] = None
    days_until_next: Optional[int] = None

    @property
    def is_tracking(self) -> bool:
        """Check if there is an active cycle to report on."""
        return self.cycle_day > 0
