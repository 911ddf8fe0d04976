"""
Dimension builders for the star schema.
"""

from .date import build_dim_date, to_calendar_date, date_key_for, encode_date_key
from .customer import build_dim_customer, normalize_gender
from .movie import build_dim_movie, price_category
from .location import build_dim_location, location_key_map, lookup_region, location_type

__all__ = [
    'build_dim_date',
    'to_calendar_date',
    'date_key_for',
    'encode_date_key',
    'build_dim_customer',
    'normalize_gender',
    'build_dim_movie',
    'price_category',
    'build_dim_location',
    'location_key_map',
    'lookup_region',
    'location_type',
]
