"""Read queries and tabular rendering over the star schema"""
import logging
from typing import List, Tuple

import duckdb
import pandas as pd

from src.storage.warehouse import TABLE_KEYS

logger = logging.getLogger(__name__)

SALES_DETAIL_QUERY = """
    SELECT
        fs.sales_id,
        dd.full_date,
        dc.customer_name AS name,
        dm.movie_title,
        dl.location_name,
        fs.quantity,
        fs.base_price AS price,
        fs.final_price AS total,
        fs.discount_percentage,
        fs.profit_margin AS profit
    FROM fact_sales fs
    JOIN dim_date dd ON fs.date_key = dd.date_key
    JOIN dim_customer dc ON fs.customer_key = dc.customer_key
    JOIN dim_movie dm ON fs.movie_key = dm.movie_key
    JOIN dim_location dl ON fs.location_key = dl.location_key
    ORDER BY fs.sales_id
"""

REPORT_SECTIONS = [
    ('DATE DIMENSION', 'dim_date'),
    ('CUSTOMER DIMENSION', 'dim_customer'),
    ('MOVIE DIMENSION', 'dim_movie'),
    ('LOCATION DIMENSION', 'dim_location'),
]


def fetch_table(conn: duckdb.DuckDBPyConnection, table: str) -> pd.DataFrame:
    """Whole table ordered by its key."""
    if table not in TABLE_KEYS:
        raise ValueError(f"Unknown star schema table: {table}")
    return conn.execute(f"SELECT * FROM {table} ORDER BY {TABLE_KEYS[table]}").fetchdf()


def fetch_sales_detail(conn: duckdb.DuckDBPyConnection) -> pd.DataFrame:
    """Sales facts joined with every dimension, in load order."""
    return conn.execute(SALES_DETAIL_QUERY).fetchdf()


def collect_report(conn: duckdb.DuckDBPyConnection) -> List[Tuple[str, pd.DataFrame]]:
    sections = [
        (f"{i}. {title} ({table})", fetch_table(conn, table))
        for i, (title, table) in enumerate(REPORT_SECTIONS, start=1)
    ]
    sections.append((f"{len(sections) + 1}. ALL FACT SALES TRANSACTIONS (fact_sales)", fetch_sales_detail(conn)))
    return sections


def render_report(conn: duckdb.DuckDBPyConnection) -> str:
    """Render all dimensions and the sales detail as titled text tables."""
    blocks = []
    for title, df in collect_report(conn):
        body = df.to_string(index=False) if not df.empty else "(empty)"
        blocks.append(f"{title}:\n{body}")
    logger.debug(f"Rendered report with {len(blocks)} sections")
    return "\n\n".join(blocks)
