"""Configuration exports"""
from .warehouse_config import WAREHOUSE_CONFIG
from .quality_config import DQ_MIN_FACT_ROWS
from .etl_config import (
    CANONICAL_GENDERS, GENDER_ALIASES, DEFAULT_GENDER,
    REGION_MAP, UNKNOWN_REGION, ONLINE_LOCATION,
    PRICE_CATEGORIES, MEASURE_PRECISION
)

__all__ = [
    'WAREHOUSE_CONFIG',
    'DQ_MIN_FACT_ROWS',
    'CANONICAL_GENDERS',
    'GENDER_ALIASES',
    'DEFAULT_GENDER',
    'REGION_MAP',
    'UNKNOWN_REGION',
    'ONLINE_LOCATION',
    'PRICE_CATEGORIES',
    'MEASURE_PRECISION',
]
