"""
Analytics models derived from the period log.
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from period_tracker.models.phase import CyclePhase, CycleTrend

class SymptomSeverity(str, Enum):
    """
    Severity tier of a phase's symptom volume.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class SymptomPattern(BaseModel):
    """
    Symptoms aggregated over every logged day that fell into one phase.
    """
    phase: CyclePhase
    symptoms: List[str]
    severity: SymptomSeverity
    occurrences: int = Field(..., ge=0)

class CycleAnalytics(BaseModel):
    """
    Statistical descriptors of the log, recomputed on demand.
    """
    average_cycle_length: int
    min_cycle_length: Optional[int] = None
    max_cycle_length: Optional[int] = None
    total_cycles: int = Field(..., ge=0)
    regularity_score: int = Field(..., ge=0, le=100)
    is_regular: bool
    cycle_trend: CycleTrend = CycleTrend.STABLE
    average_period_length: int
    prediction_confidence: int = Field(..., ge=0, le=100)
    symptom_patterns: List[SymptomPattern] = Field(default_factory=list)
    health_score: int = Field(..., ge=0, le=100)

    def pattern_for(self, phase: CyclePhase) -> Optional[SymptomPattern]:
        """Return the symptom pattern recorded for a phase, if any."""
        for pattern in self.symptom_patterns:
            if pattern.phase == phase:
                return pattern
        return None
