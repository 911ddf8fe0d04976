"""
ETL Pipeline: Source records to star schema.
Main orchestrator for ETL process.
"""

import logging
from datetime import datetime
from typing import Dict, Any, Optional, Tuple

import duckdb
import pandas as pd

from src.config import WAREHOUSE_CONFIG
from src.data_sources.cinema.models import SourceRecords
from src.monitoring import ETLMetricsLogger
from src.quality import StarSchemaValidator, QualityGate, ValidationHardFailError
from src.storage.warehouse import (
    get_duckdb_connection,
    setup_schema,
    load_star_schema,
    export_all_parquet
)
from .cache import init_dimension_caches
from .dimensions import (
    build_dim_date,
    build_dim_customer,
    build_dim_movie,
    build_dim_location
)
from .exceptions import StarSchemaError
from .facts import build_fact_sales

logger = logging.getLogger(__name__)

PIPELINE_ID = 'cinema_star_schema'


def build_star_schema(
    records: SourceRecords,
    metrics: Optional[ETLMetricsLogger] = None
) -> Tuple[Dict[str, pd.DataFrame], pd.DataFrame]:
    """
    Build all dimensions, then facts, from source records.

    Pure: nothing is written anywhere. Dimensions are complete before
    the fact builder runs, which reuses their keys through the caches.
    """
    metrics = metrics or ETLMetricsLogger()
    builders = [
        ('dim_date', build_dim_date, records.transactions),
        ('dim_customer', build_dim_customer, records.customers),
        ('dim_movie', build_dim_movie, records.movies),
        ('dim_location', build_dim_location, records.transactions),
    ]

    dimensions = {}
    for name, builder, source in builders:
        with metrics.track(PIPELINE_ID, name) as m:
            m.rows_in = len(source)
            dimensions[name] = builder(source)
            m.rows_out = len(dimensions[name])

    caches = init_dimension_caches(dimensions)

    with metrics.track(PIPELINE_ID, 'fact_sales') as m:
        m.rows_in = len(records.transaction_items)
        facts = build_fact_sales(records, caches)
        m.rows_out = len(facts)

    return dimensions, facts


def run_etl(
    records: Optional[SourceRecords] = None,
    db_path: Optional[str] = None,
    export_dir: Optional[str] = None,
    conn: Optional[duckdb.DuckDBPyConnection] = None
) -> Dict[str, Any]:
    """
    Run full ETL pipeline: Source records -> star schema (DuckDB).

    Flow:
    1. Build dimensions and facts in memory
    2. Validate referential completeness (quality gate)
    3. Rebuild the schema and load dimensions, then facts
    4. Export Parquet (optional)

    When conn is given it is used and left open; otherwise a connection
    to db_path (or the configured path) is opened and closed here.
    """
    start_time = datetime.now()
    result = {
        'success': False,
        'start_time': start_time.isoformat(),
        'stats': {}
    }
    metrics = ETLMetricsLogger(run_id=start_time.strftime('%Y%m%d_%H%M%S'))
    own_conn = conn is None

    try:
        logger.info("=" * 60)
        logger.info(f"ETL START: {start_time}")
        logger.info("=" * 60)

        if records is None:
            from src.data_sources.cinema.sample import load_sample_records
            records = load_sample_records()
        result['stats']['source'] = records.counts()

        # 1. Build
        logger.info("Building dimensions and facts...")
        dimensions, facts = build_star_schema(records, metrics)

        # 2. Validate before anything is written
        integrity = StarSchemaValidator().validate(dimensions, facts)
        result['stats']['quality'] = QualityGate().evaluate(integrity).message

        # 3. Persist
        if own_conn:
            conn = get_duckdb_connection(db_path)
        setup_schema(conn)
        result['stats']['loaded'] = load_star_schema(conn, dimensions, facts)

        # 4. Export
        export_dir = export_dir or WAREHOUSE_CONFIG['export_dir']
        if export_dir:
            result['stats']['parquet_export'] = export_all_parquet(conn, export_dir)
            result['export_dir'] = export_dir

        result['success'] = True
        result['message'] = 'ETL completed successfully'

    except (StarSchemaError, ValidationHardFailError) as e:
        logger.error(f"ETL aborted, nothing loaded from this run: {e}", exc_info=True)
        result['message'] = str(e)
        result['error_type'] = type(e).__name__

    except (duckdb.Error, OSError) as e:
        logger.error(f"ETL failed while writing: {e}", exc_info=True)
        result['message'] = str(e)
        result['error_type'] = type(e).__name__

    finally:
        if own_conn and conn is not None:
            conn.close()

        end_time = datetime.now()
        result['end_time'] = end_time.isoformat()
        result['duration_seconds'] = (end_time - start_time).total_seconds()
        result['stats']['stages'] = metrics.summary()

        logger.info("=" * 60)
        logger.info(f"ETL END: Duration {result['duration_seconds']:.2f}s")
        logger.info(f"Status: {'SUCCESS' if result['success'] else 'FAILED'}")
        logger.info("=" * 60)

    return result


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    from src.reporting import render_report

    with get_duckdb_connection() as conn:
        outcome = run_etl(conn=conn)
        if outcome['success']:
            print(render_report(conn))
        else:
            print(f"ETL process failed: {outcome['message']}")
