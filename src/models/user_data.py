"""
Persisted document model: logs, symptoms and user settings.
"""
from typing import List
from pydantic import BaseModel, ConfigDict, Field

from src.models.record import PeriodRecord, SymptomRecord
from src.services.constants import DEFAULT_CYCLE_LENGTH, DEFAULT_PERIOD_LENGTH

class CycleSettings(BaseModel):
    """
    User-level cycle configuration.

    The cycle length is used until two periods have been logged; the
    period length bounds the menstrual phase.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    average_cycle_length: int = Field(DEFAULT_CYCLE_LENGTH, ge=1, alias="averageCycleLength")
    average_period_length: int = Field(DEFAULT_PERIOD_LENGTH, ge=1, alias="averagePeriodLength")

class UserData(BaseModel):
    """
    The whole journal as stored on disk or in the cloud.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    logs: List[PeriodRecord] = Field(default_factory=list)
    symptoms: List[SymptomRecord] = Field(default_factory=list)
    settings: CycleSettings = Field(default_factory=CycleSettings)

    @property
    def record_count(self) -> int:
        """Total number of period and symptom records."""
        return len(self.logs) + len(self.symptoms)
