"""Tests for the cycle tracker facade."""
import pytest
from datetime import date

from period_tracker.models.phase import CyclePhase, TipCategory
from period_tracker.services.phase import get_food_recommendations, get_health_tips
from tests.factories import make_record

NOW = date(2024, 5, 3)

@pytest.fixture
def logged_tracker(tracker):
    """Tracker with one quick-added period on 2024-05-01 and a 30-day cycle."""
    tracker.repository.set_cycle_length(30)
    tracker.repository.set_period_length(5)
    tracker.repository.log_period(date(2024, 5, 1))
    return tracker

def test_empty_tracker(tracker):
    """Test an empty tracker predicts nothing and answers False everywhere."""
    snapshot = tracker.recompute(NOW)
    assert snapshot.last_period_start is None
    assert snapshot.current_cycle_day is None
    assert snapshot.prediction is None
    assert snapshot.projections == []
    assert snapshot.analytics.total_cycles == 0
    assert snapshot.analytics.prediction_confidence == 0

    assert tracker.get_last_period_start_date() is None
    assert tracker.predict_next_period(NOW) is None
    assert not tracker.is_date_in_predicted_period(NOW, NOW)
    assert not tracker.is_date_in_ovulation_window(NOW, NOW)
    assert not tracker.is_date_in_fertile_window(NOW, NOW)
    assert tracker.food_recommendations_for(NOW, NOW) == get_food_recommendations(TipCategory.BASELINE)

def test_recompute_after_logging(logged_tracker):
    """Test the snapshot reflects a quick-added period."""
    snapshot = logged_tracker.recompute(NOW)

    assert snapshot.last_period_start == date(2024, 5, 1)
    assert snapshot.current_cycle_day == 3
    assert len(snapshot.projections) == 3
    assert snapshot.prediction == snapshot.projections[0]
    assert snapshot.prediction.next_period_start == date(2024, 5, 31)
    assert snapshot.prediction.next_period_end == date(2024, 6, 4)
    assert snapshot.prediction.current_phase == CyclePhase.MENSTRUAL
    assert snapshot.analytics.average_period_length == 5

def test_recompute_sees_new_records(logged_tracker):
    """Test every recompute reads the latest store contents."""
    logged_tracker.recompute(NOW)
    logged_tracker.repository.save_record(make_record(date(2024, 5, 31), flow="heavy"))

    snapshot = logged_tracker.recompute(date(2024, 6, 1))
    assert snapshot.last_period_start == date(2024, 5, 31)
    assert snapshot.current_cycle_day == 2

def test_manual_start_overrides_and_clears(logged_tracker):
    """Test the manual start wins over the log until cleared."""
    logged_tracker.repository.set_manual_period_start(date(2024, 5, 10))
    assert logged_tracker.get_last_period_start_date() == date(2024, 5, 10)
    assert logged_tracker.predict_next_period(NOW).next_period_start == date(2024, 6, 9)

    logged_tracker.repository.clear_manual_period_start()
    assert logged_tracker.get_last_period_start_date() == date(2024, 5, 1)

def test_next_month_membership(logged_tracker):
    """Test day checks against the next projected cycle."""
    assert logged_tracker.is_date_in_predicted_period(date(2024, 5, 31), NOW)
    assert logged_tracker.is_date_in_predicted_period(date(2024, 6, 4), NOW)
    assert not logged_tracker.is_date_in_predicted_period(date(2024, 6, 5), NOW)

    assert logged_tracker.is_date_in_ovulation_window(date(2024, 5, 16), NOW)
    assert logged_tracker.is_date_in_ovulation_window(date(2024, 5, 18), NOW)
    assert not logged_tracker.is_date_in_ovulation_window(date(2024, 5, 19), NOW)

    assert logged_tracker.is_date_in_fertile_window(date(2024, 5, 12), NOW)
    assert not logged_tracker.is_date_in_fertile_window(date(2024, 5, 11), NOW)

def test_later_month_membership(logged_tracker):
    """Test day checks against the second and third projected cycles."""
    assert logged_tracker.is_date_in_second_month_period(date(2024, 6, 30), NOW)
    assert not logged_tracker.is_date_in_second_month_period(date(2024, 5, 31), NOW)
    assert logged_tracker.is_date_in_third_month_period(date(2024, 8, 3), NOW)

    assert logged_tracker.is_date_in_second_month_ovulation(date(2024, 6, 16), NOW)
    assert logged_tracker.is_date_in_third_month_ovulation(date(2024, 7, 16), NOW)

    assert logged_tracker.is_date_in_second_month_fertile_window(date(2024, 6, 11), NOW)
    assert logged_tracker.is_date_in_third_month_fertile_window(date(2024, 7, 11), NOW)
    assert not logged_tracker.is_date_in_third_month_fertile_window(date(2024, 6, 11), NOW)

def test_tips_follow_predicted_cycle(logged_tracker):
    """Test tips resolve by where a day falls in the next cycle."""
    assert logged_tracker.food_recommendations_for(date(2024, 6, 1), NOW) == \
        get_food_recommendations(TipCategory.PERIOD)
    assert logged_tracker.health_tips_for(date(2024, 5, 17), NOW) == \
        get_health_tips(TipCategory.OVULATION)
    assert logged_tracker.health_tips_for(date(2024, 5, 13), NOW) == \
        get_health_tips(TipCategory.FERTILE)
    assert logged_tracker.health_tips_for(date(2024, 5, 25), NOW) == \
        get_health_tips(TipCategory.BASELINE)
