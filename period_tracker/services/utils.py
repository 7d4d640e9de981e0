"""
Shared utility functions for cycle-related services.

These utilities are used across multiple service modules to handle common
operations like day arithmetic, rounding and range checks.
"""
import math
from datetime import date, timedelta
from typing import Tuple

def days_between(start: date, end: date) -> int:
    """
    Whole calendar days from start to end (negative if end is earlier).

    Example:
        >>> days_between(date(2024, 1, 1), date(2024, 1, 29))
        28
    """
    return (end - start).days

def add_days(day: date, days: int) -> date:
    """Shift a date by a number of days."""
    return day + timedelta(days=days)

def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up.

    The builtin round() uses banker's rounding, so 28.5 would become 28.
    """
    return int(math.floor(value + 0.5))

def in_range(value: int, bounds: Tuple[int, int]) -> bool:
    """Check an integer against an inclusive (low, high) range."""
    low, high = bounds
    return low <= value <= high

def clamp(value: float, low: float, high: float) -> float:
    """Bound a value to [low, high]."""
    return max(low, min(high, value))

def format_date_for_display(day: date) -> str:
    """
    Format a date the way the calendar views show it.

    Example:
        >>> format_date_for_display(date(2024, 5, 1))
        'May 1, 2024'
    """
    return f"{day.strftime('%B')} {day.day}, {day.year}"
