"""
DimLocation dimension builder.
"""

import logging
from typing import Dict, Sequence

import pandas as pd

from src.config.etl_config import REGION_MAP, UNKNOWN_REGION, ONLINE_LOCATION
from src.data_sources.cinema.models import Transaction
from ..exceptions import require_text

logger = logging.getLogger(__name__)

DIM_LOCATION_COLUMNS = ['location_key', 'location_name', 'location_type', 'region']


def location_type(name: str) -> str:
    return 'Online' if name == ONLINE_LOCATION else 'Physical'


def lookup_region(name: str) -> str:
    return REGION_MAP.get(name, UNKNOWN_REGION)


def build_dim_location(transactions: Sequence[Transaction]) -> pd.DataFrame:
    """
    Build DimLocation, one row per distinct transaction location.

    location_key is a surrogate assigned 1, 2, 3, ... in order of first
    appearance across transactions. The fact builder must reuse these
    keys (see location_key_map) rather than assigning its own.
    """
    keys: Dict[str, int] = {}
    for t in transactions:
        name = require_text(t.location, 'Transaction', t.id, 'location')
        if name not in keys:
            keys[name] = len(keys) + 1

    rows = [
        {
            'location_key': key,
            'location_name': name,
            'location_type': location_type(name),
            'region': lookup_region(name),
        }
        for name, key in keys.items()
    ]

    df = pd.DataFrame(rows, columns=DIM_LOCATION_COLUMNS)
    unknown = int((df['region'] == UNKNOWN_REGION).sum())
    logger.info(f"DimLocation: built={len(df)}, unknown_region={unknown}")
    return df


def location_key_map(dim_location: pd.DataFrame) -> Dict[str, int]:
    """location_name -> location_key from an already built DimLocation."""
    return {
        name: int(key)
        for name, key in zip(dim_location['location_name'], dim_location['location_key'])
    }
