"""
Prediction models for projected periods, ovulation and fertile windows.
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field

from period_tracker.models.analytics import CycleAnalytics
from period_tracker.models.phase import ConfidenceLevel, CyclePhase

class DateWindow(BaseModel):
    """
    Inclusive range of calendar days.
    """
    start: date
    end: date

    def contains(self, day: date) -> bool:
        """Check if a day falls inside the window, both ends included."""
        return self.start <= day <= self.end

class PredictionResult(BaseModel):
    """
    Projection of one upcoming cycle.
    """
    month: int = Field(1, ge=1)
    next_period_start: date
    next_period_end: date
    next_ovulation: date
    ovulation_window: DateWindow
    fertile_window_start: date
    fertile_window_end: date
    pms_window: DateWindow
    days_until_period: int = Field(..., ge=0)
    days_until_ovulation: int = Field(..., ge=0)
    confidence: ConfidenceLevel
    confidence_score: int = Field(..., ge=0, le=100)
    cycle_length: int
    current_phase: Optional[CyclePhase] = None
    recommended_actions: List[str] = Field(default_factory=list)
    risk_factors: List[str] = Field(default_factory=list)

    @property
    def period_window(self) -> DateWindow:
        """Predicted period as a window."""
        return DateWindow(start=self.next_period_start, end=self.next_period_end)

    @property
    def fertile_window(self) -> DateWindow:
        """Predicted fertile window, ovulation day included."""
        return DateWindow(start=self.fertile_window_start, end=self.fertile_window_end)

class CycleSnapshot(BaseModel):
    """
    Everything a view needs after a mutation of the log or the preferences.
    """
    analytics: CycleAnalytics
    last_period_start: Optional[date] = None
    current_cycle_day: Optional[int] = None
    prediction: Optional[PredictionResult] = None
    projections: List[PredictionResult] = Field(default_factory=list)
