"""Storage module exports"""
from .warehouse import (
    get_duckdb_connection, setup_schema, load_table, load_star_schema,
    export_all_parquet, TABLE_KEYS, DIMENSION_TABLES
)

__all__ = [
    'get_duckdb_connection',
    'setup_schema',
    'load_table',
    'load_star_schema',
    'export_all_parquet',
    'TABLE_KEYS',
    'DIMENSION_TABLES',
]
