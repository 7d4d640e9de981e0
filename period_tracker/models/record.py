"""
Daily record model definitions for the period log.
"""
from datetime import date, datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

class FlowIntensity(str, Enum):
    """
    Logged menstrual flow for a day.
    """
    NONE = "none"
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"

class SymptomIntensity(str, Enum):
    """
    Intensity of a physical symptom.
    """
    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"

class Mood(str, Enum):
    """
    Mood logged for a day.
    """
    NEUTRAL = "neutral"
    HAPPY = "happy"
    SAD = "sad"
    IRRITABLE = "irritable"
    ANXIOUS = "anxious"
    TIRED = "tired"

class Symptoms(BaseModel):
    """
    Symptoms logged alongside the flow of a day.
    """
    cramps: SymptomIntensity = SymptomIntensity.NONE
    headache: SymptomIntensity = SymptomIntensity.NONE
    mood: Mood = Mood.NEUTRAL
    notes: str = ""

class DailyRecord(BaseModel):
    """
    One log entry per calendar date. The date is the natural key.
    """
    date: date
    flow: FlowIntensity = FlowIntensity.NONE
    symptoms: Symptoms = Field(default_factory=Symptoms)

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_to_day(cls, value):
        """
        Keep only the calendar day of a timestamp.

        The day is the one written in the value; no timezone conversion is
        applied, so "2024-04-30T22:00:00.000Z" is 30 April whatever zone the
        writer was in.
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value

    @property
    def has_flow(self) -> bool:
        """Check if menstrual flow was logged for this day."""
        return self.flow != FlowIntensity.NONE

class PeriodEvent(BaseModel):
    """
    A maximal run of consecutive days with logged flow.
    """
    start_date: date
    end_date: date
    length: int = Field(..., ge=1)

def default_record(day: date, flow: Optional[FlowIntensity] = None) -> DailyRecord:
    """
    Build the empty record for a date.

    Args:
        day: Calendar date of the record
        flow: Optional flow to log instead of none

    Returns:
        DailyRecord with neutral symptoms
    """
    return DailyRecord(date=day, flow=flow or FlowIntensity.NONE)
