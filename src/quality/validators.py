"""Data Quality validators for the built star schema."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict

import pandas as pd

logger = logging.getLogger(__name__)

# fact column -> (dimension, dimension key column)
FOREIGN_KEYS = {
    'date_key': ('dim_date', 'date_key'),
    'customer_key': ('dim_customer', 'customer_key'),
    'movie_key': ('dim_movie', 'movie_key'),
    'location_key': ('dim_location', 'location_key'),
}


@dataclass
class IntegrityResult:
    """Star schema integrity result."""
    timestamp: datetime
    fact_rows: int
    dimension_rows: Dict[str, int] = field(default_factory=dict)
    duplicate_keys: Dict[str, int] = field(default_factory=dict)  # dimension -> count
    orphan_keys: Dict[str, int] = field(default_factory=dict)     # fact column -> count

    @property
    def total_orphans(self) -> int:
        return sum(self.orphan_keys.values())

    @property
    def total_duplicates(self) -> int:
        return sum(self.duplicate_keys.values())

    @property
    def is_complete(self) -> bool:
        return self.total_orphans == 0 and self.total_duplicates == 0


class StarSchemaValidator:
    """Check key uniqueness and referential completeness of built frames."""

    def validate(self, dimensions: Dict[str, pd.DataFrame], facts: pd.DataFrame) -> IntegrityResult:
        """Run all checks. Missing dimensions count every referencing fact row as orphan."""
        result = IntegrityResult(timestamp=datetime.now(), fact_rows=len(facts))

        for fact_col, (dim_name, key_col) in FOREIGN_KEYS.items():
            dim = dimensions.get(dim_name)
            if dim is None:
                result.orphan_keys[fact_col] = len(facts)
                continue

            result.dimension_rows[dim_name] = len(dim)
            result.duplicate_keys[dim_name] = int(dim[key_col].duplicated().sum())

            if fact_col in facts.columns:
                orphans = ~facts[fact_col].isin(dim[key_col])
                result.orphan_keys[fact_col] = int(orphans.sum())
            else:
                result.orphan_keys[fact_col] = len(facts)

        logger.info(
            f"Integrity validation: {result.fact_rows} facts, "
            f"orphans={result.total_orphans}, duplicate_keys={result.total_duplicates}"
        )
        return result
