"""Transformation rules - lookup tables and thresholds used by the builders"""

# Gender codes already in canonical form
CANONICAL_GENDERS = {"F", "M"}

# Non-canonical codes mapped onto F/M; anything else falls back to DEFAULT_GENDER
GENDER_ALIASES = {
    "P": "F",
}
DEFAULT_GENDER = "M"

# Location name -> sales region
REGION_MAP = {
    "Cinema A": "North Region",
    "Cinema B": "South Region",
    "Online": "Online",
}
UNKNOWN_REGION = "Unknown"

# Case-sensitive
ONLINE_LOCATION = "Online"

# (upper bound exclusive, category); the last bucket has no upper bound
PRICE_CATEGORIES = [
    (4.5, "Budget"),
    (5.5, "Standard"),
    (None, "Premium"),
]

# Decimal places for fact measures
MEASURE_PRECISION = 2
