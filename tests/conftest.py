"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date
from typing import List

from period_tracker.models.record import DailyRecord
from period_tracker.services.repository import PeriodRepository
from period_tracker.services.tracker import CycleTracker
from period_tracker.utils.store import InMemoryRecordStore
from tests.factories import make_period

@pytest.fixture
def regular_cycle_records() -> List[DailyRecord]:
    """Four 5-day periods, 28 days apart, starting 2024-01-01."""
    records = []
    for start in [date(2024, 1, 1), date(2024, 1, 29), date(2024, 2, 26), date(2024, 3, 25)]:
        records.extend(make_period(start))
    return records

@pytest.fixture
def store() -> InMemoryRecordStore:
    """Empty in-memory record store."""
    return InMemoryRecordStore()

@pytest.fixture
def repository(store) -> PeriodRepository:
    """Repository over the empty in-memory store."""
    return PeriodRepository(store)

@pytest.fixture
def tracker(repository) -> CycleTracker:
    """Tracker over the empty repository."""
    return CycleTracker(repository)
