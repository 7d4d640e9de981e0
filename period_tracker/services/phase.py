"""
Service module for classifying cycle phases and attaching guidance.

Phases are entered and left purely by the number of days elapsed since
the nearest preceding period start; nothing is persisted.

Typical usage:
    >>> phase = classify_phase(today, period_starts, period_length=5, cycle_length=28)
    >>> actions = recommended_actions(phase, analytics)
    >>> risks = risk_factors(analytics)
"""
from bisect import bisect_right
from datetime import date
from typing import List, Optional

from period_tracker.models.analytics import CycleAnalytics, SymptomSeverity
from period_tracker.models.phase import CyclePhase, CycleTrend, TipCategory
from period_tracker.models.prediction import PredictionResult
from period_tracker.services.constants import (
    FOOD_RECOMMENDATIONS,
    HEALTH_TIPS,
    LOW_HEALTH_SCORE_THRESHOLD,
    OVULATION_PHASE_END,
    OVULATION_PHASE_START,
    PHASE_RECOMMENDATIONS,
    PHASE_SEVERITY_RECOMMENDATIONS,
    RISK_IRREGULAR,
    RISK_LOW_HEALTH,
    RISK_TREND
)
from period_tracker.services.utils import days_between

def phase_for_offset(days_since_start: int, period_length: int) -> CyclePhase:
    """
    Map days elapsed since a period start to a phase.

    Args:
        days_since_start: 0 on the first day of the period
        period_length: Length of the menstrual phase in days

    Returns:
        Phase for that offset

    Example:
        >>> phase_for_offset(0, 5)
        <CyclePhase.MENSTRUAL: 'menstrual'>
        >>> phase_for_offset(15, 5)
        <CyclePhase.OVULATION: 'ovulation'>
    """
    if days_since_start < period_length:
        return CyclePhase.MENSTRUAL
    if days_since_start < OVULATION_PHASE_START:
        return CyclePhase.FOLLICULAR
    if days_since_start <= OVULATION_PHASE_END:
        return CyclePhase.OVULATION
    return CyclePhase.LUTEAL

def days_since_period_start(
    day: date,
    period_starts: List[date],
    cycle_length: int
) -> Optional[int]:
    """
    Days elapsed since the nearest period start on or before a day.

    Past the most recent start the count wraps by the cycle length, so
    dates in future cycles land on the projected cycle day. Between two
    known starts it does not wrap: a late cycle stays in its luteal phase.

    Returns:
        Offset in days, or None if no start precedes the day
    """
    index = bisect_right(period_starts, day)
    if index == 0:
        return None

    offset = days_between(period_starts[index - 1], day)
    if index == len(period_starts) and offset >= cycle_length:
        offset %= cycle_length
    return offset

def classify_phase(
    day: date,
    period_starts: List[date],
    period_length: int,
    cycle_length: int
) -> Optional[CyclePhase]:
    """
    Classify a calendar day into a cycle phase.

    Args:
        day: Day to classify
        period_starts: Ascending period start dates, as extract_period_starts
            returns them
        period_length: Current period length
        cycle_length: Effective cycle length

    Returns:
        Phase, or None when no period start precedes the day
    """
    offset = days_since_period_start(day, period_starts, cycle_length)
    if offset is None:
        return None
    return phase_for_offset(offset, period_length)

def recommended_actions(phase: CyclePhase, analytics: CycleAnalytics) -> List[str]:
    """
    Short advice list for a phase.

    One extra item is added when the health score is low or the symptoms
    logged in this phase run high.
    """
    actions = list(PHASE_RECOMMENDATIONS[phase])

    pattern = analytics.pattern_for(phase)
    elevated = analytics.health_score < LOW_HEALTH_SCORE_THRESHOLD or (
        pattern is not None and pattern.severity == SymptomSeverity.HIGH
    )
    if elevated:
        actions.append(PHASE_SEVERITY_RECOMMENDATIONS[phase])

    return actions

def risk_factors(analytics: CycleAnalytics) -> List[str]:
    """
    Human-readable flags, ordered irregularity, health, trend.
    """
    risks = []
    if not analytics.is_regular:
        risks.append(RISK_IRREGULAR)
    if analytics.health_score < LOW_HEALTH_SCORE_THRESHOLD:
        risks.append(RISK_LOW_HEALTH)
    if analytics.cycle_trend != CycleTrend.STABLE:
        risks.append(RISK_TREND.format(trend=analytics.cycle_trend.value))
    return risks

def tip_category_for_date(day: date, prediction: Optional[PredictionResult]) -> TipCategory:
    """
    Resolve which tip list applies to a day.

    Precedence is period, then ovulation, then fertile window, then baseline.
    """
    if prediction is None:
        return TipCategory.BASELINE
    if prediction.period_window.contains(day):
        return TipCategory.PERIOD
    if prediction.ovulation_window.contains(day):
        return TipCategory.OVULATION
    if prediction.fertile_window.contains(day):
        return TipCategory.FERTILE
    return TipCategory.BASELINE

def get_food_recommendations(category: TipCategory) -> List[str]:
    """Food suggestions for a tip category."""
    return list(FOOD_RECOMMENDATIONS[category])

def get_health_tips(category: TipCategory) -> List[str]:
    """Health tips for a tip category."""
    return list(HEALTH_TIPS[category])
