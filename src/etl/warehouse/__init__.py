"""
DWH ETL Module.

Builds the cinema sales star schema from source records and loads it
into DuckDB.

Structure:
├── pipeline.py          - Main ETL orchestrator
├── cache.py             - Dimension key caches
├── exceptions.py        - Build errors
├── dimensions/          - Dimension builders
│   ├── date.py         - DimDate
│   ├── customer.py     - DimCustomer
│   ├── movie.py        - DimMovie
│   └── location.py     - DimLocation (surrogate keys)
└── facts/              - Fact builders
    └── sales.py        - FactSales

Storage: src/storage/warehouse.py
"""

from .pipeline import run_etl, build_star_schema
from .cache import init_dimension_caches
from .dimensions import (
    build_dim_date,
    build_dim_customer,
    build_dim_movie,
    build_dim_location,
    location_key_map
)
from .facts import build_fact_sales, compute_measures
from .exceptions import (
    StarSchemaError,
    ReferentialIntegrityViolation,
    ArithmeticViolation,
    PreconditionViolation
)

__all__ = [
    'run_etl',
    'build_star_schema',
    'init_dimension_caches',
    'build_dim_date',
    'build_dim_customer',
    'build_dim_movie',
    'build_dim_location',
    'location_key_map',
    'build_fact_sales',
    'compute_measures',
    'StarSchemaError',
    'ReferentialIntegrityViolation',
    'ArithmeticViolation',
    'PreconditionViolation',
]
