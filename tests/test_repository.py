"""Tests for the store-backed period repository."""
import json
from datetime import date

from period_tracker.models.record import DailyRecord, FlowIntensity
from period_tracker.services.constants import (
    CYCLE_LENGTH_KEY,
    MANUAL_PERIOD_START_KEY,
    PERIOD_HISTORY_KEY,
    PERIOD_LENGTH_KEY
)
from period_tracker.services.period_log import extract_period_starts
from period_tracker.services.statistics import average_period_length
from tests.factories import make_record

def test_empty_store(repository):
    """Test absent keys read as empty or unset."""
    assert repository.get_history() == []
    assert repository.get_cycle_length_preference() is None
    assert repository.get_period_length_preference() is None
    assert repository.get_manual_period_start() is None

    preferences = repository.get_preferences()
    assert preferences.cycle_length_days is None
    assert preferences.manual_period_start_date is None

def test_malformed_history_is_empty(repository, store):
    """Test corrupt JSON is treated as an empty log."""
    store.save(PERIOD_HISTORY_KEY, "{not json")
    assert repository.get_history() == []

def test_wrong_shape_history_is_empty(repository, store):
    """Test a non-list payload is treated as an empty log."""
    store.save(PERIOD_HISTORY_KEY, json.dumps({"date": "2024-01-01"}))
    assert repository.get_history() == []

def test_invalid_records_are_skipped(repository, store):
    """Test one bad entry does not discard the rest."""
    store.save(PERIOD_HISTORY_KEY, json.dumps([
        {"date": "2024-01-02", "flow": "heavy"},
        {"date": "not a date", "flow": "heavy"},
        {"date": "2024-01-01", "flow": "gushing"},
    ]))
    history = repository.get_history()
    assert len(history) == 1
    assert history[0].date == date(2024, 1, 2)
    assert history[0].flow == FlowIntensity.HEAVY

def test_record_round_trip(repository):
    """Test a record reads back equal to what was saved."""
    record = make_record(
        date(2024, 3, 5),
        flow="heavy",
        cramps="severe",
        headache="mild",
        mood="irritable",
        notes="Long day"
    )
    repository.save_record(record)
    assert repository.get_history() == [record]
    assert repository.get_record_for_date(date(2024, 3, 5)) == record
    assert repository.has_record_for_date(date(2024, 3, 5))
    assert not repository.has_record_for_date(date(2024, 3, 6))

def test_stored_json_shape(repository, store):
    """Test records are stored with ISO dates and nested symptoms."""
    repository.save_record(make_record(date(2024, 3, 5), flow="light"))
    payload = json.loads(store.load(PERIOD_HISTORY_KEY))
    assert payload == [{
        "date": "2024-03-05",
        "flow": "light",
        "symptoms": {"cramps": "none", "headache": "none", "mood": "neutral", "notes": ""}
    }]

def test_save_record_is_idempotent(repository, store):
    """Test saving an identical record twice leaves the same stored state."""
    record = make_record(date(2024, 3, 5))
    repository.save_record(record)
    first = store.load(PERIOD_HISTORY_KEY)
    repository.save_record(record)
    assert store.load(PERIOD_HISTORY_KEY) == first

def test_save_record_replaces_same_date(repository):
    """Test the last write for a date wins."""
    repository.save_record(make_record(date(2024, 3, 5), flow="light"))
    repository.save_record(make_record(date(2024, 3, 1), flow="none"))
    history = repository.save_record(make_record(date(2024, 3, 5), flow="heavy"))
    assert [r.date for r in history] == [date(2024, 3, 1), date(2024, 3, 5)]
    assert history[1].flow == FlowIntensity.HEAVY

def test_length_setters_validate_range(repository):
    """Test out-of-range lengths are rejected and the prior value kept."""
    assert repository.set_cycle_length(30)
    assert not repository.set_cycle_length(19)
    assert not repository.set_cycle_length(41)
    assert repository.get_cycle_length_preference() == 30

    assert repository.set_period_length(14)
    assert not repository.set_period_length(0)
    assert not repository.set_period_length(15)
    assert repository.get_period_length_preference() == 14

def test_length_getters_ignore_bad_stored_values(repository, store):
    """Test stored values outside the range or unparsable read as unset."""
    store.save(CYCLE_LENGTH_KEY, "99")
    store.save(PERIOD_LENGTH_KEY, "five")
    assert repository.get_cycle_length_preference() is None
    assert repository.get_period_length_preference() is None

def test_length_stored_as_plain_number(repository, store):
    """Test lengths are stored as bare numbers."""
    repository.set_cycle_length(29)
    assert store.load(CYCLE_LENGTH_KEY) == "29"

def test_manual_period_start(repository):
    """Test marking, reading and clearing the manual start."""
    repository.set_manual_period_start(date(2024, 5, 1))
    assert repository.get_manual_period_start() == date(2024, 5, 1)
    assert repository.get_preferences().manual_period_start_date == date(2024, 5, 1)

    repository.clear_manual_period_start()
    assert repository.get_manual_period_start() is None

def test_malformed_manual_period_start(repository, store):
    """Test an unparsable override reads as unset."""
    store.save(MANUAL_PERIOD_START_KEY, json.dumps("yesterday"))
    assert repository.get_manual_period_start() is None
    store.save(MANUAL_PERIOD_START_KEY, "{")
    assert repository.get_manual_period_start() is None

def test_log_period_uses_preferred_length(repository):
    """Test quick-adding a period uses the preferred length."""
    repository.set_period_length(3)
    history = repository.log_period(date(2024, 6, 1))
    assert [r.date for r in history] == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]
    assert history[0].flow == FlowIntensity.HEAVY

def test_log_period_default_length(repository):
    """Test quick-adding a period without a preference uses the average."""
    history = repository.log_period(date(2024, 6, 1))
    assert len(history) == 5

def test_log_period_overwrites_days(repository):
    """Test quick-added days replace records already logged on them."""
    repository.save_record(DailyRecord(date=date(2024, 6, 2), flow="none"))
    history = repository.log_period(date(2024, 6, 1), length=2)
    assert len(history) == 2
    assert history[1].flow == FlowIntensity.MEDIUM

def test_history_keeps_one_record_per_date(repository, store):
    """Test entries landing on the same calendar day collapse, last one winning."""
    store.save(PERIOD_HISTORY_KEY, json.dumps([
        {"date": "2024-01-01", "flow": "heavy"},
        {"date": "2024-01-01T10:00:00", "flow": "light"},
        {"date": "2024-01-02", "flow": "heavy"},
        {"date": "2024-01-03", "flow": "heavy"},
    ]))
    history = repository.get_history()

    assert [r.date for r in history] == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]
    assert history[0].flow == FlowIntensity.LIGHT
    assert extract_period_starts(history) == [date(2024, 1, 1)]
    assert average_period_length(history) == 3
