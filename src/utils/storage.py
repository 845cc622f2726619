"""
JSON file persistence for the user's journal.

The journal is a single JSON document with ``logs``, ``symptoms`` and
``settings``. Loading normalises legacy record shapes and drops records
that cannot be read, so one corrupted entry never hides the rest of the
history from the cycle calculations.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Union

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from src.models.record import Intensity, PeriodRecord, SymptomRecord
from src.models.user_data import CycleSettings, UserData
from src.services.exceptions import StorageError
from src.services.utils import to_day

logger = Logger()

DEFAULT_DATA_PATH = "lunacycle_data.json"

def _parse_period_records(raw_logs: List[Any]) -> List[PeriodRecord]:
    """Normalise raw period entries, keeping the last entry per date."""
    records = {}
    for entry in raw_logs:
        if not isinstance(entry, dict):
            logger.warning("Skipping malformed period record", extra={"record": repr(entry)})
            continue
        # Older documents stored the day under startDate
        day = to_day(entry.get("date", entry.get("startDate")))
        try:
            intensity = Intensity(entry.get("intensity", Intensity.MEDIUM.value))
        except ValueError:
            intensity = None
        if day is None or intensity is None:
            logger.warning("Skipping unreadable period record", extra={"record": entry})
            continue
        records[day] = PeriodRecord(date=day, intensity=intensity)
    return [records[day] for day in sorted(records)]

def _parse_symptom_records(raw_symptoms: List[Any]) -> List[SymptomRecord]:
    """Validate raw symptom entries, keeping the last entry per date."""
    records = {}
    for entry in raw_symptoms:
        try:
            record = SymptomRecord.model_validate(entry)
        except ValidationError as e:
            logger.warning("Skipping unreadable symptom record", extra={
                "record": repr(entry),
                "error": str(e)
            })
            continue
        records[record.date] = record
    return [records[day] for day in sorted(records)]

def _record_list(raw: Dict[str, Any], key: str) -> List[Any]:
    """Get a record collection from the document, treating a non-list as empty."""
    records = raw.get(key) or []
    if not isinstance(records, list):
        logger.warning("Ignoring journal collection that is not a list", extra={
            "collection": key,
            "value_type": type(records).__name__
        })
        return []
    return records

def parse_user_data(raw: Dict[str, Any]) -> UserData:
    """
    Build a UserData from a raw JSON document.
    
    Args:
        raw: Decoded JSON object
        
    Returns:
        Normalised UserData
        
    Raises:
        StorageError: If the document is not a JSON object
    """
    if not isinstance(raw, dict):
        raise StorageError("Journal document must be a JSON object")

    try:
        settings = CycleSettings.model_validate(raw.get("settings") or {})
    except ValidationError as e:
        logger.warning("Invalid settings in journal, using defaults", extra={"error": str(e)})
        settings = CycleSettings()

    return UserData(
        logs=_parse_period_records(_record_list(raw, "logs")),
        symptoms=_parse_symptom_records(_record_list(raw, "symptoms")),
        settings=settings
    )

def serialize_user_data(user_data: UserData) -> Dict[str, Any]:
    """Convert a UserData to its JSON document shape."""
    return user_data.model_dump(mode="json", by_alias=True)

def merge_user_data(local: UserData, remote: UserData) -> UserData:
    """
    Pick the copy of the journal to keep after a sync.
    
    Args:
        local: Journal held on this device
        remote: Journal downloaded from the sync collaborator
        
    Returns:
        The remote copy when it has at least as many records, else local
    """
    if remote.record_count >= local.record_count:
        return remote
    logger.info("Keeping local journal over smaller remote copy", extra={
        "local_records": local.record_count,
        "remote_records": remote.record_count
    })
    return local

class UserDataStore:
    """Store for a journal kept in a JSON file."""
    
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @classmethod
    def from_env(cls) -> 'UserDataStore':
        """
        Create a store for the file named by CYCLE_DATA_PATH.
        
        Returns:
            UserDataStore for CYCLE_DATA_PATH, or lunacycle_data.json in the
            working directory when the variable is not set
        """
        return cls(os.environ.get("CYCLE_DATA_PATH", DEFAULT_DATA_PATH))

    def load(self) -> UserData:
        """
        Load the journal.
        
        Returns:
            The stored journal, or an empty one if the file does not exist
            
        Raises:
            StorageError: If the file cannot be read or is not valid JSON
        """
        if not self.path.exists():
            logger.info("No journal file found, starting empty", extra={"path": str(self.path)})
            return UserData()

        try:
            with self.path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not read journal from {self.path}: {e}") from e

        user_data = parse_user_data(raw)
        logger.info("Loaded journal", extra={
            "path": str(self.path),
            "logs": len(user_data.logs),
            "symptoms": len(user_data.symptoms)
        })
        return user_data

    def save(self, user_data: UserData) -> None:
        """
        Write the journal, replacing the file in a single step.
        
        Raises:
            StorageError: If the file cannot be written
        """
        document = json.dumps(serialize_user_data(user_data), indent=2)
        directory = self.path.parent
        temp_path = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=directory, delete=False, suffix=".tmp"
            ) as f:
                temp_path = f.name
                f.write(document)
            os.replace(temp_path, self.path)
        except OSError as e:
            if temp_path is not None and os.path.exists(temp_path):
                os.remove(temp_path)
            raise StorageError(f"Could not write journal to {self.path}: {e}") from e

        logger.info("Saved journal", extra={"path": str(self.path), "logs": len(user_data.logs)})
