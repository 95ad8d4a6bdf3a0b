"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_MINUTES = 30
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
DEFAULT_EXPIRY_WARNING_DAYS = 30
MIN_PASSWORD_LENGTH = 6
DEFAULT_MAX_SCORE = 100.0

# Inclusive lower bounds, checked highest first.
GRADE_THRESHOLDS = (
    (90.0, "A+"),
    (80.0, "A"),
    (70.0, "B+"),
    (60.0, "B"),
    (50.0, "C"),
    (40.0, "D"),
)
FAILING_GRADE = "F"

# Inclusive (low, high) bounds for numeric input.
CGPA_RANGE = (0.0, 10.0)
SEMESTER_RANGE = (1, 8)
METRIC_WEIGHTAGE_RANGE = (0.0, 100.0)
YEARS_OF_EXPERIENCE_RANGE = (0.0, 50.0)
