"""
Recompute facade over the repository and the engine.

Callers invoke recompute() after every change to the log or the
preferences and hand the snapshot to whatever depends on it. The tracker
keeps no state of its own; every call re-derives from the store.

Typical usage:
    tracker = CycleTracker(PeriodRepository(get_store()))
    tracker.repository.save_record(record)
    snapshot = tracker.recompute(date.today())
"""
from datetime import date
from typing import List, Optional
from aws_lambda_powertools import Logger

from period_tracker.models.analytics import CycleAnalytics
from period_tracker.models.prediction import CycleSnapshot, PredictionResult
from period_tracker.services.constants import PROJECTION_MONTHS
from period_tracker.services.period_log import current_cycle_day, get_last_period_start
from period_tracker.services.phase import (
    get_food_recommendations,
    get_health_tips,
    tip_category_for_date
)
from period_tracker.services.prediction import (
    effective_cycle_length,
    is_date_in_fertile_window,
    is_date_in_ovulation_window,
    is_date_in_predicted_period,
    predict_cycles
)
from period_tracker.services.repository import PeriodRepository
from period_tracker.services.statistics import calculate_cycle_analytics

logger = Logger()

class CycleTracker:
    """Entry point answering every read the views make."""

    def __init__(self, repository: PeriodRepository):
        self.repository = repository

    def get_last_period_start_date(self) -> Optional[date]:
        """Manual override if set, else the latest derived period start."""
        return get_last_period_start(
            self.repository.get_history(),
            self.repository.get_manual_period_start()
        )

    def analytics(self) -> CycleAnalytics:
        """Statistics for the stored log."""
        return calculate_cycle_analytics(
            self.repository.get_history(),
            self.repository.get_preferences()
        )

    def predict_cycles(self, now: date, months: int = PROJECTION_MONTHS) -> List[PredictionResult]:
        """Projections for the next cycles, empty when no period start is known."""
        return predict_cycles(
            self.repository.get_history(),
            self.repository.get_preferences(),
            now,
            months=months
        )

    def predict_next_period(self, now: date) -> Optional[PredictionResult]:
        """Projection for the next cycle, None when no period start is known."""
        projections = self.predict_cycles(now, months=1)
        return projections[0] if projections else None

    def recompute(self, now: date) -> CycleSnapshot:
        """
        Derive everything the views show from the current store contents.

        Args:
            now: Reference day for countdowns and the current phase

        Returns:
            CycleSnapshot with analytics, the next prediction and the
            multi-month projections
        """
        records = self.repository.get_history()
        preferences = self.repository.get_preferences()
        analytics = calculate_cycle_analytics(records, preferences)
        projections = predict_cycles(records, preferences, now, analytics=analytics)
        last_start = get_last_period_start(records, preferences.manual_period_start_date)

        cycle_day = None
        if last_start is not None:
            cycle_day = current_cycle_day(
                last_start, now, effective_cycle_length(analytics, preferences)
            )

        logger.debug("Recomputed cycle snapshot", extra={
            "records": len(records),
            "has_prediction": bool(projections)
        })

        return CycleSnapshot(
            analytics=analytics,
            last_period_start=last_start,
            current_cycle_day=cycle_day,
            prediction=projections[0] if projections else None,
            projections=projections
        )

    def is_date_in_predicted_period(self, day: date, now: date) -> bool:
        return is_date_in_predicted_period(day, self.predict_cycles(now), month=1)

    def is_date_in_second_month_period(self, day: date, now: date) -> bool:
        return is_date_in_predicted_period(day, self.predict_cycles(now), month=2)

    def is_date_in_third_month_period(self, day: date, now: date) -> bool:
        return is_date_in_predicted_period(day, self.predict_cycles(now), month=3)

    def is_date_in_ovulation_window(self, day: date, now: date) -> bool:
        return is_date_in_ovulation_window(day, self.predict_cycles(now), month=1)

    def is_date_in_second_month_ovulation(self, day: date, now: date) -> bool:
        return is_date_in_ovulation_window(day, self.predict_cycles(now), month=2)

    def is_date_in_third_month_ovulation(self, day: date, now: date) -> bool:
        return is_date_in_ovulation_window(day, self.predict_cycles(now), month=3)

    def is_date_in_fertile_window(self, day: date, now: date) -> bool:
        return is_date_in_fertile_window(day, self.predict_cycles(now), month=1)

    def is_date_in_second_month_fertile_window(self, day: date, now: date) -> bool:
        return is_date_in_fertile_window(day, self.predict_cycles(now), month=2)

    def is_date_in_third_month_fertile_window(self, day: date, now: date) -> bool:
        return is_date_in_fertile_window(day, self.predict_cycles(now), month=3)

    def food_recommendations_for(self, day: date, now: date) -> List[str]:
        """Food suggestions for where a day falls in the next cycle."""
        return get_food_recommendations(tip_category_for_date(day, self.predict_next_period(now)))

    def health_tips_for(self, day: date, now: date) -> List[str]:
        """Health tips for where a day falls in the next cycle."""
        return get_health_tips(tip_category_for_date(day, self.predict_next_period(now)))
