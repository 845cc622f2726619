"""Tests for date-keyed journal edits."""
from datetime import date

import pytest
from src.models.record import Intensity, PeriodRecord, SymptomRecord
from src.models.user_data import UserData
from src.services.log_book import (
    upsert_period_record,
    remove_period_record,
    upsert_symptom_record,
    apply_log_entry
)

def test_upsert_period_record_replaces_same_date():
    """A later write for a date replaces the earlier one."""
    user_data = UserData(logs=[
        PeriodRecord(date=date(2024, 1, 2), intensity="light"),
        PeriodRecord(date=date(2024, 1, 1), intensity="light"),
    ])

    updated = upsert_period_record(user_data, PeriodRecord(date=date(2024, 1, 2), intensity="heavy"))

    assert [log.date for log in updated.logs] == [date(2024, 1, 1), date(2024, 1, 2)]
    assert updated.logs[1].intensity == Intensity.HEAVY
    # Input is left untouched
    assert len(user_data.logs) == 2
    assert user_data.logs[0].intensity == Intensity.LIGHT

def test_remove_period_record():
    """Un-marking a day removes its record."""
    user_data = UserData(logs=[PeriodRecord(date=date(2024, 1, 1))])

    assert remove_period_record(user_data, date(2024, 1, 1)).logs == []
    assert remove_period_record(user_data, date(2024, 1, 5)).logs == user_data.logs

def test_upsert_symptom_record_sorted():
    """Symptom notes are kept one per day, in date order."""
    user_data = UserData(symptoms=[SymptomRecord(date=date(2024, 1, 3), moods=["calm"])])

    updated = upsert_symptom_record(user_data, SymptomRecord(date=date(2024, 1, 1), moods=["happy"]))
    updated = upsert_symptom_record(updated, SymptomRecord(date=date(2024, 1, 3), moods=["sad"]))

    assert [s.date for s in updated.symptoms] == [date(2024, 1, 1), date(2024, 1, 3)]
    assert updated.symptoms[1].moods == ["sad"]

def test_apply_log_entry_saves_and_clears():
    """Saving a day without a period clears the period for that day."""
    day = date(2024, 1, 1)
    user_data = apply_log_entry(
        UserData(),
        day,
        period=PeriodRecord(date=day, intensity="medium"),
        symptom=SymptomRecord(date=day, physical_symptoms=["Cramps"])
    )

    assert len(user_data.logs) == 1
    assert user_data.symptoms[0].physical_symptoms == ["Cramps"]

    cleared = apply_log_entry(user_data, day, period=None, symptom=user_data.symptoms[0])

    assert cleared.logs == []
    assert len(cleared.symptoms) == 1

def test_apply_log_entry_date_mismatch():
    """Records must belong to the day being edited."""
    with pytest.raises(ValueError, match="does not match"):
        apply_log_entry(UserData(), date(2024, 1, 1), period=PeriodRecord(date=date(2024, 1, 2)))
