"""
Fact builders for the star schema.
"""

from .sales import build_fact_sales, compute_measures, FACT_SALES_COLUMNS

__all__ = [
    'build_fact_sales',
    'compute_measures',
    'FACT_SALES_COLUMNS',
]
