"""
Partner snapshot model shared through the partner portal link.
"""
from typing import List
from pydantic import BaseModel, ConfigDict, Field

from src.models.phase import CyclePhase

class PartnerData(BaseModel):
    """
    Read-only view of the cycle shared with a partner.
    """
    model_config = ConfigDict(populate_by_name=True)

    phase: CyclePhase
    days_until_next: int = Field(..., alias="daysUntilNext")
    symptoms: List[str] = Field(default_factory=list)
    avg_cycle: int = Field(28, ge=1, alias="avgCycle")
