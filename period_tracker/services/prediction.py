"""
Service module for projecting future periods, ovulation and fertile windows.

Each call is a pure computation from the log, the stored preferences and
"now". The most recent period start anchors every projection; month N of a
multi-month projection is anchored N effective cycle lengths after it.

Typical usage:
    prediction = predict_next_period(records, preferences, today)
    projections = predict_cycles(records, preferences, today)
    if is_date_in_fertile_window(day, projections, month=2):
        ...
"""
from datetime import date
from typing import List, Optional
from aws_lambda_powertools import Logger

from period_tracker.models.analytics import CycleAnalytics
from period_tracker.models.phase import ConfidenceLevel, CycleTrend
from period_tracker.models.prediction import DateWindow, PredictionResult
from period_tracker.models.preferences import CyclePreferences
from period_tracker.models.record import DailyRecord
from period_tracker.services.constants import (
    CONFIDENCE_DECAY_PER_MONTH,
    FERTILE_DAYS_BEFORE_OVULATION,
    HIGH_CONFIDENCE_THRESHOLD,
    LUTEAL_PHASE_DAYS,
    MEDIUM_CONFIDENCE_THRESHOLD,
    OVULATION_WINDOW_RADIUS,
    PMS_WINDOW_OFFSETS,
    PROJECTION_MONTHS
)
from period_tracker.services.period_log import get_last_period_start
from period_tracker.services.phase import classify_phase, recommended_actions, risk_factors
from period_tracker.services.statistics import calculate_cycle_analytics
from period_tracker.services.utils import add_days, days_between

logger = Logger()

def confidence_level(score: int) -> ConfidenceLevel:
    """
    Band a numeric confidence score.

    Example:
        >>> confidence_level(80)
        <ConfidenceLevel.HIGH: 'high'>
    """
    if score >= HIGH_CONFIDENCE_THRESHOLD:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_CONFIDENCE_THRESHOLD:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW

def month_confidence_score(base_score: int, month: int) -> int:
    """Confidence for a projection month, decaying with distance."""
    return max(0, base_score - CONFIDENCE_DECAY_PER_MONTH * (month - 1))

def trend_adjustment(trend: CycleTrend, month: int = 1) -> int:
    """
    Days to add to the cycle length for a trending history.

    Month 1 moves one day in the trend direction; month N moves N // 2 days
    from month 2 on.
    """
    if trend == CycleTrend.STABLE:
        return 0
    magnitude = max(1, month // 2)
    return magnitude if trend == CycleTrend.INCREASING else -magnitude

def base_cycle_length(analytics: CycleAnalytics, preferences: CyclePreferences) -> int:
    """Preferred cycle length, else the statistical average (which carries the default)."""
    if preferences.cycle_length_days is not None:
        return preferences.cycle_length_days
    return analytics.average_cycle_length

def effective_cycle_length(
    analytics: CycleAnalytics,
    preferences: CyclePreferences,
    month: int = 1
) -> int:
    """Cycle length used to project a month, trend nudge included."""
    return base_cycle_length(analytics, preferences) + trend_adjustment(analytics.cycle_trend, month)

def effective_period_length(analytics: CycleAnalytics, preferences: CyclePreferences) -> int:
    """Preferred period length, else the statistical average."""
    if preferences.period_length_days is not None:
        return preferences.period_length_days
    return analytics.average_period_length

def project_cycle(
    last_period_start: date,
    analytics: CycleAnalytics,
    preferences: CyclePreferences,
    now: date,
    month: int = 1
) -> PredictionResult:
    """
    Project one future cycle.

    Args:
        last_period_start: Anchor date
        analytics: Statistics of the log
        preferences: Stored preferences
        now: Reference day for countdowns and the current phase
        month: 1 for the next cycle, 2 and 3 for the ones after

    Returns:
        PredictionResult for the month
    """
    cycle_length = effective_cycle_length(analytics, preferences, month)
    period_length = effective_period_length(analytics, preferences)

    period_start = add_days(last_period_start, cycle_length * month)
    period_end = add_days(period_start, period_length - 1)
    ovulation = add_days(period_start, -LUTEAL_PHASE_DAYS)
    pms_start_offset, pms_end_offset = PMS_WINDOW_OFFSETS

    score = month_confidence_score(analytics.prediction_confidence, month)
    current_phase = classify_phase(now, [last_period_start], period_length, cycle_length)

    return PredictionResult(
        month=month,
        next_period_start=period_start,
        next_period_end=period_end,
        next_ovulation=ovulation,
        ovulation_window=DateWindow(
            start=add_days(ovulation, -OVULATION_WINDOW_RADIUS),
            end=add_days(ovulation, OVULATION_WINDOW_RADIUS)
        ),
        fertile_window_start=add_days(ovulation, -FERTILE_DAYS_BEFORE_OVULATION),
        fertile_window_end=ovulation,
        pms_window=DateWindow(
            start=add_days(period_start, -pms_start_offset),
            end=add_days(period_start, -pms_end_offset)
        ),
        days_until_period=max(0, days_between(now, period_start)),
        days_until_ovulation=max(0, days_between(now, ovulation)),
        confidence=confidence_level(score),
        confidence_score=score,
        cycle_length=cycle_length,
        current_phase=current_phase,
        recommended_actions=recommended_actions(current_phase, analytics) if current_phase else [],
        risk_factors=risk_factors(analytics)
    )

def predict_next_period(
    records: List[DailyRecord],
    preferences: Optional[CyclePreferences],
    now: date,
    analytics: Optional[CycleAnalytics] = None
) -> Optional[PredictionResult]:
    """
    Predict the next cycle.

    Args:
        records: Daily records
        preferences: Stored preferences and manual override
        now: Reference day
        analytics: Precomputed analytics for the same records, if available

    Returns:
        Month-1 PredictionResult, or None when no period start is known
    """
    projections = predict_cycles(records, preferences, now, months=1, analytics=analytics)
    return projections[0] if projections else None

def predict_cycles(
    records: List[DailyRecord],
    preferences: Optional[CyclePreferences],
    now: date,
    months: int = PROJECTION_MONTHS,
    analytics: Optional[CycleAnalytics] = None
) -> List[PredictionResult]:
    """
    Project the next cycles, month 1 first.

    Returns:
        Ordered projections, empty when no period start is known
    """
    preferences = preferences or CyclePreferences()
    last_start = get_last_period_start(records, preferences.manual_period_start_date)
    if last_start is None:
        logger.debug("No period start known, skipping prediction")
        return []

    analytics = analytics or calculate_cycle_analytics(records, preferences)
    return [
        project_cycle(last_start, analytics, preferences, now, month)
        for month in range(1, months + 1)
    ]

def _projection_for(projections: List[PredictionResult], month: int) -> Optional[PredictionResult]:
    for projection in projections:
        if projection.month == month:
            return projection
    return None

def is_date_in_predicted_period(day: date, projections: List[PredictionResult], month: int = 1) -> bool:
    """Check a day against the predicted period of one projection month."""
    projection = _projection_for(projections, month)
    return projection is not None and projection.period_window.contains(day)

def is_date_in_ovulation_window(day: date, projections: List[PredictionResult], month: int = 1) -> bool:
    """Check a day against the ovulation window of one projection month."""
    projection = _projection_for(projections, month)
    return projection is not None and projection.ovulation_window.contains(day)

def is_date_in_fertile_window(day: date, projections: List[PredictionResult], month: int = 1) -> bool:
    """Check a day against the fertile window of one projection month."""
    projection = _projection_for(projections, month)
    return projection is not None and projection.fertile_window.contains(day)
