"""
Calendar cell model for month rendering.
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel

from src.models.phase import CyclePhase
from src.models.record import Intensity

class CalendarDay(BaseModel):
    """
    Markers for a single calendar day.
    """
    date: date
    phase: CyclePhase
    is_logged_period: bool = False
    intensity: Optional[Intensity] = None
    is_predicted_period: bool = False
    is_fertile: bool = False
    is_today: bool = False
