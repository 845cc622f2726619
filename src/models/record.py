"""
Record models for logged period and symptom days.
"""
from enum import Enum
from datetime import date
from typing import List
from pydantic import BaseModel, ConfigDict, Field

class Intensity(str, Enum):
    """
    Period flow intensity for a logged day.
    """
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"

class PeriodRecord(BaseModel):
    """
    One logged calendar day with period flow.

    A log holds at most one record per date; a later write for the same
    date replaces the earlier one.
    """
    date: date
    intensity: Intensity = Intensity.MEDIUM

class SymptomRecord(BaseModel):
    """
    Mood and body notes for a single day.
    """
    model_config = ConfigDict(populate_by_name=True)

    date: date
    moods: List[str] = Field(default_factory=list)
    energy: int = Field(3, ge=1, le=5)
    physical_symptoms: List[str] = Field(default_factory=list, alias="physicalSymptoms")
    notes: str = ""
