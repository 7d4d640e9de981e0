"""
Phase model definitions for menstrual cycle phases.
"""
from enum import Enum

class CyclePhase(str, Enum):
    """
    Traditional menstrual cycle phases.
    """
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATION = "ovulation"
    LUTEAL = "luteal"

class CycleTrend(str, Enum):
    """
    Direction in which recent cycle lengths are moving.
    """
    STABLE = "stable"
    INCREASING = "increasing"
    DECREASING = "decreasing"

class ConfidenceLevel(str, Enum):
    """
    Qualitative banding of the numeric prediction confidence.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class TipCategory(str, Enum):
    """
    Where a date falls relative to the predicted windows, for tip lookup.
    """
    PERIOD = "period"
    OVULATION = "ovulation"
    FERTILE = "fertile"
    BASELINE = "baseline"
