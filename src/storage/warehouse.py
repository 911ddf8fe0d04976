"""
DuckDB star schema storage.

Tables:
- dim_date, dim_customer, dim_movie, dim_location
- fact_sales (sales_id from seq_sales_id, in load order)
"""

import logging
import os
import re
from pathlib import Path
from typing import Dict

import duckdb
import pandas as pd

from src.config import WAREHOUSE_CONFIG

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).parent / 'sql' / 'star_schema.sql'

# table -> ordering key; dimensions first so facts load after their references
TABLE_KEYS = {
    'dim_date': 'date_key',
    'dim_customer': 'customer_key',
    'dim_movie': 'movie_key',
    'dim_location': 'location_key',
    'fact_sales': 'sales_id',
}
DIMENSION_TABLES = ['dim_date', 'dim_customer', 'dim_movie', 'dim_location']


def get_duckdb_connection(path: str = None) -> duckdb.DuckDBPyConnection:
    """Get DuckDB connection. Defaults to WAREHOUSE_CONFIG['duckdb_path']."""
    if path is None:
        path = WAREHOUSE_CONFIG["duckdb_path"]
    if path != ':memory:':
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
    return duckdb.connect(path)


def setup_schema(conn: duckdb.DuckDBPyConnection, schema_path=DEFAULT_SCHEMA_PATH) -> None:
    """
    Rebuild the star schema: drop existing tables, then create them.
    """
    logger.info(f"Creating star schema from {schema_path}")

    with open(schema_path, 'r', encoding='utf-8') as f:
        sql = f.read()

    # Remove comments
    sql = re.sub(r'--.*\n', '\n', sql)
    sql = re.sub(r'/\*.*?\*/', '', sql, flags=re.DOTALL)

    for stmt in [s.strip() for s in sql.split(';') if s.strip()]:
        conn.execute(stmt)

    logger.info("Schema setup complete")


def load_table(conn: duckdb.DuckDBPyConnection, table: str, df: pd.DataFrame) -> int:
    """Insert a frame into a star schema table, columns matched by name. Returns rows inserted."""
    if table not in TABLE_KEYS:
        raise ValueError(f"Unknown star schema table: {table}")
    if df.empty:
        logger.info(f"{table}: nothing to load")
        return 0

    cols = ', '.join('"{}"'.format(c) for c in df.columns)
    view = f"_load_{table}"
    conn.register(view, df)
    try:
        conn.execute(f"INSERT INTO {table} ({cols}) SELECT {cols} FROM {view}")
    finally:
        conn.unregister(view)

    logger.info(f"{table}: loaded {len(df)} rows")
    return len(df)


def load_star_schema(
    conn: duckdb.DuckDBPyConnection,
    dimensions: Dict[str, pd.DataFrame],
    facts: pd.DataFrame
) -> Dict[str, int]:
    """Load all dimensions, then the fact table, in one transaction."""
    stats = {}
    conn.execute("BEGIN TRANSACTION")
    try:
        for table in DIMENSION_TABLES:
            stats[table] = load_table(conn, table, dimensions[table])
        stats['fact_sales'] = load_table(conn, 'fact_sales', facts)
        conn.execute("COMMIT")
    except Exception as e:
        conn.execute("ROLLBACK")
        logger.error(f"Star schema load failed: {e}")
        raise
    return stats


def export_all_parquet(conn: duckdb.DuckDBPyConnection, output_dir: str) -> Dict[str, int]:
    """Export every star schema table to <output_dir>/<table>.parquet. Returns row counts."""
    os.makedirs(output_dir, exist_ok=True)
    stats = {}

    try:
        for table, key in TABLE_KEYS.items():
            df = conn.execute(f"SELECT * FROM {table} ORDER BY {key}").fetchdf()
            path = os.path.join(output_dir, f"{table}.parquet")
            df.to_parquet(path, index=False)
            stats[table] = len(df)
    except Exception as e:
        logger.error(f"Export Parquet error: {e}")
        raise

    logger.info(f"Exported {sum(stats.values())} records to Parquet in {output_dir}")
    return stats
