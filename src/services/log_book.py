"""
Service module for editing the journal.

Period and symptom records are keyed by date: saving a day replaces any
record already stored for that date, and clearing a day removes it. Every
function returns a new UserData and leaves its input untouched.

Typical usage:
    user_data = apply_log_entry(user_data, date(2024, 1, 1), period=record)
    store.save(user_data)
"""
from typing import Optional
from datetime import date

from aws_lambda_powertools import Logger

from src.models.record import PeriodRecord, SymptomRecord
from src.models.user_data import UserData

logger = Logger()

def upsert_period_record(user_data: UserData, record: PeriodRecord) -> UserData:
    """
    Store a period day, replacing any record for the same date.
    
    Args:
        user_data: Current journal
        record: Period record to store
        
    Returns:
        New journal with logs sorted by date
    """
    logs = [log for log in user_data.logs if log.date != record.date]
    logs.append(record)
    logs.sort(key=lambda x: x.date)
    return user_data.model_copy(update={"logs": logs})

def remove_period_record(user_data: UserData, day: date) -> UserData:
    """Remove the period record for a date, if any."""
    logs = [log for log in user_data.logs if log.date != day]
    return user_data.model_copy(update={"logs": logs})

def upsert_symptom_record(user_data: UserData, record: SymptomRecord) -> UserData:
    """
    Store symptom notes for a day, replacing any notes for the same date.
    """
    symptoms = [s for s in user_data.symptoms if s.date != record.date]
    symptoms.append(record)
    symptoms.sort(key=lambda x: x.date)
    return user_data.model_copy(update={"symptoms": symptoms})

def remove_symptom_record(user_data: UserData, day: date) -> UserData:
    """Remove the symptom notes for a date, if any."""
    symptoms = [s for s in user_data.symptoms if s.date != day]
    return user_data.model_copy(update={"symptoms": symptoms})

def apply_log_entry(
    user_data: UserData,
    day: date,
    period: Optional[PeriodRecord] = None,
    symptom: Optional[SymptomRecord] = None
) -> UserData:
    """
    Save everything logged for one day.
    
    A missing period or symptom clears whatever was stored for that day,
    which is how a user un-marks a period day.
    
    Args:
        user_data: Current journal
        day: The day being edited
        period: Period record for the day, or None to clear it
        symptom: Symptom notes for the day, or None to clear them
        
    Returns:
        New journal
        
    Raises:
        ValueError: If a record's date does not match day
    """
    for record in (period, symptom):
        if record is not None and record.date != day:
            raise ValueError(f"Record date {record.date} does not match {day}")

    updated = upsert_period_record(user_data, period) if period else remove_period_record(user_data, day)
    updated = upsert_symptom_record(updated, symptom) if symptom else remove_symptom_record(updated, day)

    logger.info("Saved log entry", extra={
        "date": str(day),
        "has_period": period is not None,
        "has_symptom": symptom is not None
    })
    return updated
