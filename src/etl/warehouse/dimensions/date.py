"""
DimDate dimension builder.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Sequence

import pandas as pd

from src.data_sources.cinema.models import Transaction
from ..exceptions import PreconditionViolation

logger = logging.getLogger(__name__)

DIM_DATE_COLUMNS = [
    'date_key', 'full_date', 'day', 'month', 'quarter', 'year',
    'day_of_week', 'day_name', 'month_name', 'is_weekend'
]

# Indexed by day_of_week (0=Sunday)
WEEKDAY_NAMES = ['Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday']
MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
]
WEEKEND_DAYS = {0, 6}


def to_calendar_date(ts: Any, key: Any = None) -> date:
    """
    Truncate a transaction timestamp to its calendar date.

    Naive timestamps are read as UTC wall-clock time; aware ones are
    converted to UTC first.
    """
    if not isinstance(ts, datetime):
        raise PreconditionViolation(
            'Transaction', key, f"expected datetime, got {type(ts).__name__}", field='timestamp'
        )
    if ts.tzinfo is not None and ts.utcoffset() is not None:
        ts = ts.astimezone(timezone.utc)
    return ts.date()


def encode_date_key(d: date) -> int:
    return d.year * 10000 + d.month * 100 + d.day


def date_key_for(ts: Any, key: Any = None) -> int:
    """YYYYMMDD integer key for a transaction timestamp."""
    return encode_date_key(to_calendar_date(ts, key))


def day_of_week(d: date) -> int:
    """0=Sunday .. 6=Saturday."""
    return (d.weekday() + 1) % 7


def date_row(d: date) -> dict:
    dow = day_of_week(d)
    return {
        'date_key': encode_date_key(d),
        'full_date': d.isoformat(),
        'day': d.day,
        'month': d.month,
        'quarter': (d.month + 2) // 3,
        'year': d.year,
        'day_of_week': dow,
        'day_name': WEEKDAY_NAMES[dow],
        'month_name': MONTH_NAMES[d.month - 1],
        'is_weekend': dow in WEEKEND_DAYS,
    }


def build_dim_date(transactions: Sequence[Transaction]) -> pd.DataFrame:
    """
    Build DimDate from the distinct calendar dates of all transactions.

    Calendar fields depend on the date alone. Rows are sorted by date_key.
    """
    dates = {to_calendar_date(t.timestamp, t.id) for t in transactions}
    rows = [date_row(d) for d in sorted(dates)]

    df = pd.DataFrame(rows, columns=DIM_DATE_COLUMNS)
    df['is_weekend'] = df['is_weekend'].astype(bool)

    if rows:
        logger.info(f"DimDate: built={len(df)}, range={rows[0]['full_date']}..{rows[-1]['full_date']}")
    else:
        logger.info("DimDate: built=0")
    return df
