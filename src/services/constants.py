"""
Constants shared by the cycle inference services.
"""

# Symptom value domains (inclusive upper bounds, lower bound is always 0)
BLEEDING_INTENSITY_MAX = 5
SYMPTOM_SCALE_MAX = 3
NOTES_MAX_LENGTH = 1000

SYMPTOM_FIELD_LIMITS = {
    "bleeding_intensity": BLEEDING_INTENSITY_MAX,
    "mood": SYMPTOM_SCALE_MAX,
    "abdominal_pressure": SYMPTOM_SCALE_MAX,
    "bloating": SYMPTOM_SCALE_MAX,
    "energy": SYMPTOM_SCALE_MAX,
}

# Bleeding days at most this many days apart belong to the same period
PERIOD_GAP_THRESHOLD_DAYS = 2

# Spread (max - min) of cycle lengths above which predictions are flagged
HIGH_VARIABILITY_THRESHOLD_DAYS = 7

MIN_PERIODS_FOR_PREDICTION = 2

DATE_FORMAT = "%Y-%m-%d"
