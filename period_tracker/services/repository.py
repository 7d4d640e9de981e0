"""
Store-backed access to the period log and the cycle preferences.

Values are JSON strings under fixed keys. Reads never fail on bad data:
an absent key is empty or unset, and malformed JSON or a wrong shape is
logged and treated the same way.

Typical usage:
    repository = PeriodRepository(get_store())
    repository.save_record(DailyRecord(date=date.today(), flow="medium"))
    repository.set_cycle_length(30)
    history = repository.get_history()
"""
import json
from datetime import date
from typing import Any, List, Optional, Tuple
from pydantic import ValidationError

from period_tracker.models.preferences import CyclePreferences
from period_tracker.models.record import DailyRecord
from period_tracker.services.constants import (
    CYCLE_LENGTH_KEY,
    CYCLE_LENGTH_RANGE,
    MANUAL_PERIOD_START_KEY,
    PERIOD_HISTORY_KEY,
    PERIOD_LENGTH_KEY,
    PERIOD_LENGTH_RANGE
)
from period_tracker.services.period_log import (
    build_period_days,
    get_record_for_date,
    sort_records,
    upsert_record
)
from period_tracker.services.statistics import average_period_length
from period_tracker.services.utils import in_range
from period_tracker.utils.logging import logger
from period_tracker.utils.store import RecordStore

class PeriodRepository:
    """Reads and writes the tracker's persisted state through a record store."""

    def __init__(self, store: RecordStore):
        self.store = store

    def _load_json(self, key: str) -> Optional[Any]:
        raw = self.store.load(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.recovered("Malformed stored value, treating as unset", key)
            return None

    # Period history

    def get_history(self) -> List[DailyRecord]:
        """
        Load the period log, oldest first.

        Returns:
            Valid records, one per date; entries that fail validation are
            skipped and of several entries for a date the last one wins
        """
        payload = self._load_json(PERIOD_HISTORY_KEY)
        if payload is None:
            return []
        if not isinstance(payload, list):
            logger.recovered(
                "Period history is not a list, treating as empty",
                PERIOD_HISTORY_KEY,
                payload_type=type(payload).__name__
            )
            return []

        by_date = {}
        valid_count = 0
        for index, item in enumerate(payload):
            try:
                record = DailyRecord.model_validate(item)
            except ValidationError as e:
                logger.recovered(
                    "Skipping malformed period record",
                    PERIOD_HISTORY_KEY,
                    index=index,
                    error_count=e.error_count()
                )
                continue
            # Entries may collapse onto one calendar day; the later one wins
            by_date[record.date] = record
            valid_count += 1

        if len(by_date) < valid_count:
            logger.recovered(
                "Collapsed period records sharing a date",
                PERIOD_HISTORY_KEY,
                duplicates=valid_count - len(by_date)
            )
        return sort_records(list(by_date.values()))

    def _save_history(self, records: List[DailyRecord]) -> None:
        payload = [record.model_dump(mode="json") for record in records]
        self.store.save(PERIOD_HISTORY_KEY, json.dumps(payload))

    def save_record(self, record: DailyRecord) -> List[DailyRecord]:
        """
        Insert or replace the record for its date.

        Returns:
            The updated log, oldest first
        """
        records = upsert_record(self.get_history(), record)
        self._save_history(records)
        logger.info("Saved period record", extra={
            "date": record.date.isoformat(),
            "flow": record.flow.value
        })
        return records

    def log_period(self, start: date, length: Optional[int] = None) -> List[DailyRecord]:
        """
        Quickly add a whole period starting on a day.

        Args:
            start: First day of the period
            length: Days to log; defaults to the preferred period length
                or, without one, the average logged length

        Returns:
            The updated log, oldest first
        """
        if length is None:
            length = self.get_period_length_preference() or average_period_length(self.get_history())

        records = self.get_history()
        for record in build_period_days(start, length):
            records = upsert_record(records, record)
        self._save_history(records)
        logger.info("Logged period", extra={"start": start.isoformat(), "length": length})
        return records

    def get_record_for_date(self, day: date) -> Optional[DailyRecord]:
        """Return the record logged for a day, if any."""
        return get_record_for_date(self.get_history(), day)

    def has_record_for_date(self, day: date) -> bool:
        """Check if anything was logged for a day."""
        return self.get_record_for_date(day) is not None

    # Length preferences

    def _get_length(self, key: str, bounds: Tuple[int, int]) -> Optional[int]:
        value = self._load_json(key)
        if isinstance(value, bool) or not isinstance(value, int):
            if value is not None:
                logger.recovered("Ignoring non-integer length preference", key)
            return None
        if not in_range(value, bounds):
            logger.recovered("Ignoring out-of-range length preference", key, value=value)
            return None
        return value

    def _set_length(self, key: str, days: int, bounds: Tuple[int, int]) -> bool:
        if isinstance(days, bool) or not isinstance(days, int) or not in_range(days, bounds):
            logger.warning("Rejected length preference", extra={
                "key": key,
                "value": days,
                "allowed_range": list(bounds)
            })
            return False
        self.store.save(key, json.dumps(days))
        return True

    def get_cycle_length_preference(self) -> Optional[int]:
        """Stored cycle length, or None when unset or invalid."""
        return self._get_length(CYCLE_LENGTH_KEY, CYCLE_LENGTH_RANGE)

    def set_cycle_length(self, days: int) -> bool:
        """
        Store the preferred cycle length.

        Returns:
            True if written, False if rejected as out of range
        """
        return self._set_length(CYCLE_LENGTH_KEY, days, CYCLE_LENGTH_RANGE)

    def get_period_length_preference(self) -> Optional[int]:
        """Stored period length, or None when unset or invalid."""
        return self._get_length(PERIOD_LENGTH_KEY, PERIOD_LENGTH_RANGE)

    def set_period_length(self, days: int) -> bool:
        """
        Store the preferred period length.

        Returns:
            True if written, False if rejected as out of range
        """
        return self._set_length(PERIOD_LENGTH_KEY, days, PERIOD_LENGTH_RANGE)

    # Manual period start override

    def get_manual_period_start(self) -> Optional[date]:
        """Return the date the user marked as period start, if set."""
        value = self._load_json(MANUAL_PERIOD_START_KEY)
        if value is None:
            return None
        try:
            return date.fromisoformat(value)
        except (TypeError, ValueError):
            logger.recovered(
                "Ignoring malformed manual period start",
                MANUAL_PERIOD_START_KEY,
                value=str(value)
            )
            return None

    def set_manual_period_start(self, day: date) -> None:
        """Mark a date as the start of the latest period."""
        self.store.save(MANUAL_PERIOD_START_KEY, json.dumps(day.isoformat()))
        logger.info("Set manual period start", extra={"date": day.isoformat()})

    def clear_manual_period_start(self) -> None:
        """Drop the manual override and go back to the derived start."""
        self.store.remove(MANUAL_PERIOD_START_KEY)

    def get_preferences(self) -> CyclePreferences:
        """Collect the stored preferences and override."""
        return CyclePreferences(
            cycle_length_days=self.get_cycle_length_preference(),
            period_length_days=self.get_period_length_preference(),
            manual_period_start_date=self.get_manual_period_start()
        )
