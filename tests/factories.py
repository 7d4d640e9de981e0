"""
Record builders shared by the tests.
"""
from datetime import date, timedelta
from typing import List

from period_tracker.models.record import DailyRecord, Symptoms

def make_record(
    day: date,
    flow: str = "medium",
    cramps: str = "none",
    headache: str = "none",
    mood: str = "neutral",
    notes: str = ""
) -> DailyRecord:
    """Build a daily record from plain values."""
    return DailyRecord(
        date=day,
        flow=flow,
        symptoms=Symptoms(cramps=cramps, headache=headache, mood=mood, notes=notes)
    )

def make_period(start: date, length: int = 5, **kwargs) -> List[DailyRecord]:
    """Build consecutive flow records starting on a day."""
    return [make_record(start + timedelta(days=i), **kwargs) for i in range(length)]
