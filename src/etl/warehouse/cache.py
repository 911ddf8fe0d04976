"""
Dimension cache utilities.
"""

import logging
from typing import Dict

import pandas as pd

from .dimensions import location_key_map
from .exceptions import PreconditionViolation

logger = logging.getLogger(__name__)

REQUIRED_DIMENSIONS = ('dim_date', 'dim_customer', 'dim_movie', 'dim_location')


def init_dimension_caches(dimensions: Dict[str, pd.DataFrame]) -> Dict[str, Dict]:
    """
    Initialize caches for dimension lookups from already built dimensions.

    Returns dict with:
    - date: full_date (ISO) -> date_key
    - customer: customer_id -> customer_key
    - movie: movie_id -> movie_key
    - location: location_name -> location_key
    """
    for name in REQUIRED_DIMENSIONS:
        if name not in dimensions:
            raise PreconditionViolation('Dimension', name, "dimension not built")

    dim_date = dimensions['dim_date']
    dim_customer = dimensions['dim_customer']
    dim_movie = dimensions['dim_movie']

    caches = {
        'date': dict(zip(dim_date['full_date'], dim_date['date_key'].astype(int))),
        'customer': dict(zip(dim_customer['customer_id'], dim_customer['customer_key'].astype(int))),
        'movie': dict(zip(dim_movie['movie_id'], dim_movie['movie_key'].astype(int))),
        'location': location_key_map(dimensions['dim_location']),
    }

    logger.info(
        f"Caches initialized: dates={len(caches['date'])}, customers={len(caches['customer'])}, "
        f"movies={len(caches['movie'])}, locations={len(caches['location'])}"
    )
    return caches
