"""
User-settable cycle preferences.
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

class CyclePreferences(BaseModel):
    """
    Stored length preferences and the manual period start override.

    Lengths outside their ranges never reach this model; the repository
    drops them when reading and refuses them when writing.
    """
    cycle_length_days: Optional[int] = Field(None, ge=20, le=40)
    period_length_days: Optional[int] = Field(None, ge=1, le=14)
    manual_period_start_date: Optional[date] = None
