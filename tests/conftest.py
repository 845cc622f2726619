"""
Pytest configuration and shared fixtures.
"""
import pytest
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List

from src.models.record import PeriodRecord, SymptomRecord
from src.models.user_data import CycleSettings, UserData

def period_days(start: date, days: int = 5, intensity: str = "medium") -> List[PeriodRecord]:
    """Create consecutive period records starting on a date."""
    return [
        PeriodRecord(date=start + timedelta(days=i), intensity=intensity)
        for i in range(days)
    ]

@pytest.fixture
def make_period_days():
    """Factory for consecutive period records."""
    return period_days

@pytest.fixture
def regular_logs() -> List[PeriodRecord]:
    """Three 5-day periods starting Jan 1, Jan 29 and Feb 26 2024 (28-day cycles)."""
    return (
        period_days(date(2024, 1, 1))
        + period_days(date(2024, 1, 29))
        + period_days(date(2024, 2, 26))
    )

@pytest.fixture
def irregular_logs() -> List[PeriodRecord]:
    """Periods starting on day 0, 28 and 58 (gaps of 28 and 30 days)."""
    start = date(2024, 1, 1)
    return (
        period_days(start, 4)
        + period_days(start + timedelta(days=28), 6)
        + period_days(start + timedelta(days=58), 2)
    )

@pytest.fixture
def sample_user_data(regular_logs) -> UserData:
    """Journal with regular periods and a symptom entry."""
    return UserData(
        logs=regular_logs,
        symptoms=[
            SymptomRecord(
                date=date(2024, 3, 5),
                moods=["tired"],
                energy=2,
                physical_symptoms=["Cramps", "Bloating"],
                notes="Rough day"
            )
        ],
        settings=CycleSettings(average_cycle_length=30, average_period_length=5)
    )

@dataclass
class FakeLambdaContext:
    function_name: str = "test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:eu-west-1:123456789012:function:test"
    aws_request_id: str = "da658bd3-2d6f-4e7b-8ec2-937234644fdc"

@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    """Minimal Lambda context for handler tests."""
    return FakeLambdaContext()
