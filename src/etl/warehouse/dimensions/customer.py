"""
DimCustomer dimension builder.
"""

import logging
from typing import Mapping, Optional, Sequence

import pandas as pd

from src.config.etl_config import CANONICAL_GENDERS, GENDER_ALIASES, DEFAULT_GENDER
from src.data_sources.cinema.models import Customer
from ..exceptions import PreconditionViolation, require_text

logger = logging.getLogger(__name__)

DIM_CUSTOMER_COLUMNS = ['customer_key', 'customer_id', 'customer_name', 'gender']


def normalize_gender(code: str, aliases: Optional[Mapping[str, str]] = None) -> str:
    """
    Reduce a raw gender code to 'F' or 'M'.

    'F' and 'M' pass through; other codes go through the alias table
    and fall back to DEFAULT_GENDER.
    """
    if code in CANONICAL_GENDERS:
        return code
    table = GENDER_ALIASES if aliases is None else aliases
    return table.get(code, DEFAULT_GENDER)


def build_dim_customer(customers: Sequence[Customer]) -> pd.DataFrame:
    """
    Build DimCustomer, one row per customer in input order.

    customer_key is the source id. Names are stripped, case untouched.
    """
    rows = []
    seen = set()

    for customer in customers:
        if customer.id in seen:
            raise PreconditionViolation('Customer', customer.id, "duplicate id", field='id')
        seen.add(customer.id)

        name = require_text(customer.name, 'Customer', customer.id, 'name')
        gender = require_text(customer.gender, 'Customer', customer.id, 'gender')

        rows.append({
            'customer_key': customer.id,
            'customer_id': customer.id,
            'customer_name': name.strip(),
            'gender': normalize_gender(gender),
        })

    df = pd.DataFrame(rows, columns=DIM_CUSTOMER_COLUMNS)
    logger.info(f"DimCustomer: built={len(df)}, genders={df['gender'].value_counts().to_dict()}")
    return df
