from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Herd composition
FOUNDERS_PER_UNIT = 2
MATURITY_AGE = 3  # Years before an animal breeds and produces
FOUNDER_MONTH_STAGGER = 6  # Second founder starts half a year after the first

MONTHS_PER_YEAR = 12
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Staggered lactation cycle (revenue per animal per month)
LANDING_PERIOD_MONTHS = 2
HIGH_REVENUE_PHASE = {"months": 5, "revenue": 9000}
MEDIUM_REVENUE_PHASE = {"months": 3, "revenue": 6000}
REST_PERIOD = {"months": 4, "revenue": 0}

# Default simulation parameters
DEFAULT_UNITS = 1
DEFAULT_YEARS = 10
DEFAULT_START_YEAR = 2026
DEFAULT_START_MONTH = 0  # January
