"""
Constants and shared data for cycle-related services.
"""
from typing import Dict, List
from period_tracker.models.phase import CyclePhase, TipCategory

# Storage keys
PERIOD_HISTORY_KEY = "period_tracker_history"
CYCLE_LENGTH_KEY = "period_tracker_cycle_length"
PERIOD_LENGTH_KEY = "period_tracker_period_length"
MANUAL_PERIOD_START_KEY = "period_tracker_manual_period_start"

DEFAULT_CYCLE_LENGTH = 28
DEFAULT_PERIOD_LENGTH = 5

# Accepted preference ranges (inclusive)
CYCLE_LENGTH_RANGE = (20, 40)
PERIOD_LENGTH_RANGE = (1, 14)

# Data cleaning bounds (inclusive)
VALID_INTERVAL_RANGE = (15, 45)
VALID_PERIOD_RUN_RANGE = (1, 10)

REGULARITY_TOLERANCE_DAYS = 3
REGULAR_THRESHOLD = 70
TREND_WINDOW = 3
TREND_STABLE_DELTA = 1

# Prediction confidence weights
MIN_INTERVALS_FOR_CONFIDENCE = 3
CONFIDENCE_INTERVAL_WEIGHT = 15
CONFIDENCE_REGULARITY_WEIGHT = 0.6
CONFIDENCE_RECORD_WEIGHT = 2
HIGH_CONFIDENCE_THRESHOLD = 75
MEDIUM_CONFIDENCE_THRESHOLD = 50
CONFIDENCE_DECAY_PER_MONTH = 20

PROJECTION_MONTHS = 3

LUTEAL_PHASE_DAYS = 14
FERTILE_DAYS_BEFORE_OVULATION = 5
OVULATION_WINDOW_RADIUS = 1
PMS_WINDOW_OFFSETS = (10, 5)

# Phase boundaries in days since period start
OVULATION_PHASE_START = 14
OVULATION_PHASE_END = 16

# Health score
HEALTH_SCORE_MAX = 100
VARIANCE_PENALTY_CAP = 20
SEVERE_SYMPTOM_PENALTY_CAP = 30
SEVERE_SYMPTOM_PENALTY_FACTOR = 0.5
LOW_HEALTH_SCORE_THRESHOLD = 60

# Symptom pattern volume tiers
HIGH_SEVERITY_OCCURRENCES = 10
MEDIUM_SEVERITY_OCCURRENCES = 5
TOP_SYMPTOMS_PER_PHASE = 5

REGULARITY_LABELS = [
    (80, "Very Regular"),
    (60, "Regular"),
    (40, "Somewhat Regular"),
    (0, "Irregular"),
]

PHASE_RECOMMENDATIONS: Dict[CyclePhase, List[str]] = {
    CyclePhase.MENSTRUAL: [
        "Rest and prioritize sleep",
        "Use a warm compress for cramps",
        "Eat iron-rich foods",
    ],
    CyclePhase.FOLLICULAR: [
        "Try higher-intensity workouts",
        "Start new projects while energy rises",
        "Eat fresh vegetables and lean proteins",
    ],
    CyclePhase.OVULATION: [
        "Stay well hydrated",
        "Eat antioxidant-rich foods",
        "Track fertility signs if relevant",
    ],
    CyclePhase.LUTEAL: [
        "Favor complex carbohydrates",
        "Choose moderate exercise like yoga",
        "Reduce caffeine and salt",
    ],
}

# Added when the phase's symptoms run high or the health score is low
PHASE_SEVERITY_RECOMMENDATIONS: Dict[CyclePhase, str] = {
    CyclePhase.MENSTRUAL: "Consider talking to a doctor about painful periods",
    CyclePhase.FOLLICULAR: "Log symptoms daily to spot what triggers them",
    CyclePhase.OVULATION: "Mention mid-cycle pain to a healthcare provider",
    CyclePhase.LUTEAL: "Ask a healthcare provider about managing PMS",
}

RISK_IRREGULAR = "Irregular cycle lengths detected"
RISK_LOW_HEALTH = "Cycle health score is below the healthy range"
RISK_TREND = "Cycle length is {trend} over recent cycles"

FOOD_RECOMMENDATIONS: Dict[TipCategory, List[str]] = {
    TipCategory.PERIOD: [
        "Iron-rich foods: spinach, lentils, red meat",
        "Warm soups and herbal teas",
        "Dark chocolate in moderation",
        "Bananas for potassium",
        "Ginger to ease cramps",
    ],
    TipCategory.OVULATION: [
        "Antioxidant-rich berries",
        "Leafy greens",
        "Whole grains",
        "Nuts and seeds",
        "Plenty of water",
    ],
    TipCategory.FERTILE: [
        "Folate-rich foods: beans, asparagus, avocado",
        "Omega-3 sources: salmon, walnuts, flax",
        "Colorful vegetables",
        "Eggs and lean proteins",
        "Citrus fruits",
    ],
    TipCategory.BASELINE: [
        "Balanced meals with protein and fiber",
        "Fresh fruits and vegetables",
        "Whole grains",
        "Healthy fats: olive oil, avocado",
        "Stay hydrated",
    ],
}

HEALTH_TIPS: Dict[TipCategory, List[str]] = {
    TipCategory.PERIOD: [
        "Rest when you need to",
        "Use a heating pad for cramps",
        "Gentle stretching or walking can help",
        "Change period products regularly",
        "Track your flow and symptoms",
    ],
    TipCategory.OVULATION: [
        "Energy peaks, a good time for intense workouts",
        "Watch for mild one-sided pelvic pain",
        "Stay hydrated",
        "Note changes in cervical mucus",
    ],
    TipCategory.FERTILE: [
        "This is your most fertile time",
        "Use protection if avoiding pregnancy",
        "Track basal body temperature for accuracy",
        "Keep a regular sleep schedule",
    ],
    TipCategory.BASELINE: [
        "Exercise regularly",
        "Get 7-9 hours of sleep",
        "Manage stress with relaxation techniques",
        "Log symptoms to improve predictions",
    ],
}
