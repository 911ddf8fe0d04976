"""Warehouse configuration (DuckDB star schema)"""
import os

WAREHOUSE_CONFIG = {
    "duckdb_path": os.getenv("DWH_DUCKDB_PATH", ":memory:"),
    "export_dir": os.getenv("DWH_EXPORT_DIR", ""),
}
