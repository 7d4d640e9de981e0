"""
Statistics calculation service for cycle tracking data.

This module provides functionality for calculating menstrual cycle statistics,
including cycle intervals, period lengths, regularity, trend, symptom
patterns and an overall health score.
"""
from collections import Counter
from datetime import date
from statistics import mean, pvariance
from typing import Dict, List, Optional
from aws_lambda_powertools import Logger

from period_tracker.models.analytics import CycleAnalytics, SymptomPattern, SymptomSeverity
from period_tracker.models.phase import CyclePhase, CycleTrend
from period_tracker.models.preferences import CyclePreferences
from period_tracker.models.record import DailyRecord, Mood, SymptomIntensity
from period_tracker.services.constants import (
    CONFIDENCE_INTERVAL_WEIGHT,
    CONFIDENCE_RECORD_WEIGHT,
    CONFIDENCE_REGULARITY_WEIGHT,
    DEFAULT_CYCLE_LENGTH,
    DEFAULT_PERIOD_LENGTH,
    HEALTH_SCORE_MAX,
    HIGH_SEVERITY_OCCURRENCES,
    MEDIUM_SEVERITY_OCCURRENCES,
    MIN_INTERVALS_FOR_CONFIDENCE,
    REGULAR_THRESHOLD,
    REGULARITY_LABELS,
    REGULARITY_TOLERANCE_DAYS,
    SEVERE_SYMPTOM_PENALTY_CAP,
    SEVERE_SYMPTOM_PENALTY_FACTOR,
    TOP_SYMPTOMS_PER_PHASE,
    TREND_STABLE_DELTA,
    TREND_WINDOW,
    VALID_INTERVAL_RANGE,
    VALID_PERIOD_RUN_RANGE,
    VARIANCE_PENALTY_CAP
)
from period_tracker.services.period_log import extract_period_starts, find_period_events
from period_tracker.services.phase import classify_phase
from period_tracker.services.utils import clamp, days_between, in_range, round_half_up

logger = Logger()

def cycle_intervals(period_starts: List[date]) -> List[int]:
    """
    Day counts between consecutive period starts, outliers removed.

    Args:
        period_starts: Ascending period start dates

    Returns:
        Intervals within the valid range, in order

    Example:
        >>> cycle_intervals([date(2024, 1, 1), date(2024, 1, 29), date(2024, 3, 1)])
        [28, 32]
    """
    intervals = []
    for previous, current in zip(period_starts, period_starts[1:]):
        interval = days_between(previous, current)
        if in_range(interval, VALID_INTERVAL_RANGE):
            intervals.append(interval)
        else:
            logger.debug("Excluding outlier cycle interval", extra={
                "previous_start": str(previous),
                "current_start": str(current),
                "interval": interval
            })
    return intervals

def average_cycle_length(intervals: List[int], preferred: Optional[int] = None) -> int:
    """
    Rounded mean of the valid intervals.

    Falls back to the preferred cycle length, then to the default.
    """
    if intervals:
        return round_half_up(mean(intervals))
    return preferred if preferred is not None else DEFAULT_CYCLE_LENGTH

def regularity_score(intervals: List[int]) -> int:
    """
    Percentage of intervals within the tolerance of the rounded mean.
    """
    if not intervals:
        return 0
    average = round_half_up(mean(intervals))
    close = [i for i in intervals if abs(i - average) <= REGULARITY_TOLERANCE_DAYS]
    return round_half_up(len(close) / len(intervals) * 100)

def is_regular(score: int) -> bool:
    return score >= REGULAR_THRESHOLD

def regularity_label(score: int) -> str:
    """Describe a regularity score in words."""
    for threshold, label in REGULARITY_LABELS:
        if score >= threshold:
            return label
    return REGULARITY_LABELS[-1][1]

def cycle_trend(intervals: List[int]) -> CycleTrend:
    """
    Compare the last three intervals to the ones before them.

    Needs at least three intervals plus at least one earlier interval to
    compare against; otherwise the trend is stable.
    """
    if len(intervals) < TREND_WINDOW:
        return CycleTrend.STABLE

    recent = intervals[-TREND_WINDOW:]
    earlier = intervals[-2 * TREND_WINDOW:-TREND_WINDOW]
    if not earlier:
        return CycleTrend.STABLE

    delta = mean(recent) - mean(earlier)
    if abs(delta) < TREND_STABLE_DELTA:
        return CycleTrend.STABLE
    return CycleTrend.INCREASING if delta > 0 else CycleTrend.DECREASING

def prediction_confidence(interval_count: int, regularity: int, record_count: int) -> int:
    """
    Heuristic 0-100 confidence in the predictions.

    Zero until there are enough intervals to judge.
    """
    if interval_count < MIN_INTERVALS_FOR_CONFIDENCE:
        return 0
    score = (
        CONFIDENCE_INTERVAL_WEIGHT * interval_count
        + CONFIDENCE_REGULARITY_WEIGHT * regularity
        + CONFIDENCE_RECORD_WEIGHT * record_count
    )
    return round_half_up(clamp(score, 0, 100))

def period_lengths(records: List[DailyRecord]) -> List[int]:
    """Lengths of the logged periods, outliers removed."""
    return [
        event.length
        for event in find_period_events(records)
        if in_range(event.length, VALID_PERIOD_RUN_RANGE)
    ]

def average_period_length(records: List[DailyRecord]) -> int:
    """Rounded mean period length, or the default when nothing usable was logged."""
    lengths = period_lengths(records)
    if not lengths:
        return DEFAULT_PERIOD_LENGTH
    return round_half_up(mean(lengths))

def _symptom_labels(record: DailyRecord) -> List[str]:
    symptoms = record.symptoms
    labels = []
    if symptoms.cramps != SymptomIntensity.NONE:
        labels.append("cramps")
    if symptoms.headache != SymptomIntensity.NONE:
        labels.append("headache")
    if symptoms.mood != Mood.NEUTRAL:
        labels.append(symptoms.mood.value)
    return labels

def _severity_for(occurrences: int) -> SymptomSeverity:
    if occurrences > HIGH_SEVERITY_OCCURRENCES:
        return SymptomSeverity.HIGH
    if occurrences > MEDIUM_SEVERITY_OCCURRENCES:
        return SymptomSeverity.MEDIUM
    return SymptomSeverity.LOW

def symptom_patterns(
    records: List[DailyRecord],
    period_starts: List[date],
    period_length: int,
    cycle_length: int
) -> List[SymptomPattern]:
    """
    Aggregate logged symptoms by the phase each day fell into.

    Args:
        records: Daily records
        period_starts: Ascending period start dates
        period_length: Length bounding the menstrual phase
        cycle_length: Effective cycle length

    Returns:
        One pattern per phase that has symptoms, in phase order, each with
        its most frequent labels
    """
    counters: Dict[CyclePhase, Counter] = {}

    for record in records:
        labels = _symptom_labels(record)
        if not labels:
            continue
        phase = classify_phase(record.date, period_starts, period_length, cycle_length)
        if phase is None:
            continue
        counters.setdefault(phase, Counter()).update(labels)

    patterns = []
    for phase in CyclePhase:
        counter = counters.get(phase)
        if not counter:
            continue
        occurrences = sum(counter.values())
        patterns.append(SymptomPattern(
            phase=phase,
            symptoms=[label for label, _ in counter.most_common(TOP_SYMPTOMS_PER_PHASE)],
            severity=_severity_for(occurrences),
            occurrences=occurrences
        ))
    return patterns

def health_score(intervals: List[int], records: List[DailyRecord]) -> int:
    """
    Overall 0-100 score from cycle variability and severe symptoms.

    Starts at 100, loses up to 20 points for interval variance and up to 30
    for the share of logged days with severe cramps or headache.
    """
    score = float(HEALTH_SCORE_MAX)

    if len(intervals) >= 2:
        score -= min(VARIANCE_PENALTY_CAP, pvariance(intervals))

    if records:
        severe_days = sum(
            1 for r in records
            if SymptomIntensity.SEVERE in (r.symptoms.cramps, r.symptoms.headache)
        )
        severe_percentage = severe_days / len(records) * 100
        score -= min(SEVERE_SYMPTOM_PENALTY_CAP, severe_percentage * SEVERE_SYMPTOM_PENALTY_FACTOR)

    return max(0, round_half_up(score))

def calculate_cycle_analytics(
    records: List[DailyRecord],
    preferences: Optional[CyclePreferences] = None
) -> CycleAnalytics:
    """
    Calculate every statistic for the log in one pass.

    Args:
        records: Daily records, any order
        preferences: Stored preferences used as fallbacks and for phase bounds

    Returns:
        CycleAnalytics for the log
    """
    preferences = preferences or CyclePreferences()

    starts = extract_period_starts(records)
    intervals = cycle_intervals(starts)
    average = average_cycle_length(intervals, preferences.cycle_length_days)
    regularity = regularity_score(intervals)
    average_period = average_period_length(records)
    phase_period_length = preferences.period_length_days or average_period
    phase_cycle_length = preferences.cycle_length_days or average

    logger.debug("Calculated cycle intervals", extra={
        "period_starts": len(starts),
        "valid_intervals": len(intervals),
        "records": len(records)
    })

    return CycleAnalytics(
        average_cycle_length=average,
        min_cycle_length=min(intervals) if intervals else None,
        max_cycle_length=max(intervals) if intervals else None,
        total_cycles=len(intervals),
        regularity_score=regularity,
        is_regular=is_regular(regularity),
        cycle_trend=cycle_trend(intervals),
        average_period_length=average_period,
        prediction_confidence=prediction_confidence(len(intervals), regularity, len(records)),
        symptom_patterns=symptom_patterns(records, starts, phase_period_length, phase_cycle_length),
        health_score=health_score(intervals, records)
    )
