"""
Service module for the period log.

This module turns the raw, date-keyed set of daily records into discrete
period events. Everything here is a pure function of the records passed in.

Typical usage:
    records = upsert_record(records, new_record)
    starts = extract_period_starts(records)
    last_start = get_last_period_start(records, manual_override)
"""
from datetime import date
from typing import List, Optional

from period_tracker.models.record import (
    DailyRecord,
    FlowIntensity,
    PeriodEvent,
    default_record
)
from period_tracker.services.utils import add_days, days_between

def sort_records(records: List[DailyRecord]) -> List[DailyRecord]:
    """Return records ordered by date, oldest first."""
    return sorted(records, key=lambda r: r.date)

def upsert_record(records: List[DailyRecord], record: DailyRecord) -> List[DailyRecord]:
    """
    Insert a record or replace the one logged for the same date.

    Args:
        records: Current log
        record: Record to write; last write wins for its date

    Returns:
        New list sorted ascending by date. The input list is not modified.
    """
    updated = [r for r in records if r.date != record.date]
    updated.append(record)
    return sort_records(updated)

def extract_period_starts(records: List[DailyRecord]) -> List[date]:
    """
    Find the first day of every period event in a single scan.

    A record starts a new event when it has flow and either it is the first
    record, the previous record is not exactly one day earlier, or the
    previous record had no flow.

    Example:
        >>> extract_period_starts(records)  # flow on Jan 1-3, gap, Jan 29-31
        [date(2024, 1, 1), date(2024, 1, 29)]
    """
    starts = []
    previous = None

    for record in sort_records(records):
        if record.has_flow and (
            previous is None
            or days_between(previous.date, record.date) != 1
            or not previous.has_flow
        ):
            starts.append(record.date)
        previous = record

    return starts

def find_period_events(records: List[DailyRecord]) -> List[PeriodEvent]:
    """
    Group flow days into maximal runs of consecutive dates.

    Uses the same adjacency rule as extract_period_starts, so the events
    line up one-to-one with the extracted starts.
    """
    events = []
    run_start = None
    run_end = None

    for record in sort_records(records):
        if not record.has_flow:
            continue
        if run_start is not None and days_between(run_end, record.date) == 1:
            run_end = record.date
            continue
        if run_start is not None:
            events.append(_make_event(run_start, run_end))
        run_start = run_end = record.date

    if run_start is not None:
        events.append(_make_event(run_start, run_end))

    return events

def _make_event(start: date, end: date) -> PeriodEvent:
    return PeriodEvent(start_date=start, end_date=end, length=days_between(start, end) + 1)

def get_last_period_start(
    records: List[DailyRecord],
    manual_override: Optional[date] = None
) -> Optional[date]:
    """
    Resolve the start of the most recent period.

    Args:
        records: Daily records
        manual_override: Start date the user marked explicitly; wins when set

    Returns:
        The override, else the latest derived start, else None
    """
    if manual_override is not None:
        return manual_override
    starts = extract_period_starts(records)
    return starts[-1] if starts else None

def get_record_for_date(records: List[DailyRecord], day: date) -> Optional[DailyRecord]:
    """Return the record logged for a day, if any."""
    for record in records:
        if record.date == day:
            return record
    return None

def has_record_for_date(records: List[DailyRecord], day: date) -> bool:
    """Check if anything was logged for a day."""
    return get_record_for_date(records, day) is not None

def is_period_day(records: List[DailyRecord], day: date) -> bool:
    """Check if flow was logged for a day."""
    record = get_record_for_date(records, day)
    return record is not None and record.has_flow

def build_period_days(start: date, length: int) -> List[DailyRecord]:
    """
    Build the records for a quickly added period.

    Day one is logged heavy, day two medium and the rest light.

    Args:
        start: First day of the period
        length: Number of days to log

    Returns:
        List of records, oldest first
    """
    days = []
    for offset in range(length):
        if offset == 0:
            flow = FlowIntensity.HEAVY
        elif offset == 1:
            flow = FlowIntensity.MEDIUM
        else:
            flow = FlowIntensity.LIGHT
        days.append(default_record(add_days(start, offset), flow))
    return days

def current_cycle_day(last_period_start: date, today: date, cycle_length: int) -> int:
    """
    Return the 1-based day of the cycle, wrapping past the cycle length.

    Dates before the last start count as day 1.
    """
    delta = days_between(last_period_start, today)
    if delta < 0:
        return 1
    return (delta % cycle_length) + 1
