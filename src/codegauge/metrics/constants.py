"""Calibrated coefficients for the composite scores.

These values come from the scoring model downstream dashboards were
tuned against. They are heuristics, not measured quantities; change them
here and nowhere else.
"""

# Maintainability index (classic 3-metric form, no comment term)
MI_BASE = 171.0
MI_VOLUME_WEIGHT = 5.2
MI_COMPLEXITY_WEIGHT = 0.23
MI_LOC_WEIGHT = 16.2
MI_MIN = 0
MI_MAX = 100

# Halstead
HALSTEAD_STROUD_NUMBER = 18  # elementary mental discriminations per second
HALSTEAD_BUG_DIVISOR = 3000

# Duplication
MIN_DUPLICATE_BLOCK_LINES = 3

# Technical debt (hours)
DEBT_COMPLEXITY_THRESHOLD = 20
DEBT_PER_COMPLEXITY_POINT = 0.5
DEBT_DUPLICATION_THRESHOLD = 10.0
DEBT_PER_DUPLICATION_POINT = 0.3
DEBT_MAINTAINABILITY_THRESHOLD = 50
DEBT_PER_MAINTAINABILITY_POINT = 0.2

VULNERABILITY_DEBT_HOURS = {
    "Critical": 4.0,
    "High": 2.0,
    "Medium": 1.0,
    "Low": 0.5,
}
DEFAULT_VULNERABILITY_DEBT_HOURS = 1.0

CODE_SMELL_DEBT_HOURS = {
    "High": 1.0,
    "Medium": 0.5,
    "Low": 0.25,
}
DEFAULT_CODE_SMELL_DEBT_HOURS = 0.5

# Quality score blend (weights sum to 1.0)
QUALITY_MAINTAINABILITY_WEIGHT = 0.4
QUALITY_COMPLEXITY_WEIGHT = 0.2
QUALITY_DUPLICATION_WEIGHT = 0.2
QUALITY_COMMENT_WEIGHT = 0.2
QUALITY_COMPLEXITY_PENALTY = 2  # points lost per complexity unit
QUALITY_DUPLICATION_PENALTY = 2  # points lost per duplication percent

# Fallback record for inputs the engine cannot measure
FALLBACK_CYCLOMATIC = 1
FALLBACK_COGNITIVE = 0
FALLBACK_MAINTAINABILITY = 50
FALLBACK_QUALITY = 50

# Ratings: (upper bound inclusive, level, color, score)
COMPLEXITY_RATINGS = (
    (5, "Low", "green", 90),
    (10, "Moderate", "yellow", 70),
    (20, "High", "orange", 50),
)
COMPLEXITY_RATING_WORST = ("Very High", "red", 20)

# Ratings: (lower bound inclusive, level, color)
MAINTAINABILITY_RATINGS = (
    (80, "Excellent", "green"),
    (60, "Good", "blue"),
    (40, "Fair", "yellow"),
    (20, "Poor", "orange"),
)
MAINTAINABILITY_RATING_WORST = ("Critical", "red")
