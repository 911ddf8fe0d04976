"""
FactSales fact builder.

Design: Transaction line grain
- 1 row per transaction item (one ticket), quantity always 1
- Keys are resolved against already built dimensions through the
  dimension caches; location keys are never reassigned here
- Measures are computed in Decimal with ROUND_HALF_UP
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Sequence

import pandas as pd

from src.config.etl_config import MEASURE_PRECISION
from src.data_sources.cinema.models import SourceRecords, TransactionItem, Number
from ..dimensions import to_calendar_date
from ..exceptions import ArithmeticViolation, PreconditionViolation, ReferentialIntegrityViolation

logger = logging.getLogger(__name__)

FACT_SALES_COLUMNS = [
    'date_key', 'customer_key', 'movie_key', 'location_key', 'transaction_id',
    'quantity', 'base_price', 'discount_amount',
    'final_price', 'discount_percentage', 'profit_margin'
]

_QUANT = Decimal(1).scaleb(-MEASURE_PRECISION)
_HUNDRED = Decimal(100)


def _to_decimal(value: Number, field: str, key: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise PreconditionViolation(
            'TransactionItem', key, f"expected number, got {type(value).__name__}", field=field
        )
    # str() keeps the decimal text of floats (5.0 -> '5.0', not the binary expansion)
    number = value if isinstance(value, Decimal) else Decimal(str(value))
    if not number.is_finite():
        raise PreconditionViolation('TransactionItem', key, f"non-finite value {value!r}", field=field)
    return number


def _round(value: Decimal) -> Decimal:
    return value.quantize(_QUANT, rounding=ROUND_HALF_UP)


def compute_measures(price: Number, discount: Number, key: Any = None) -> Dict[str, float]:
    """
    Compute final_price, discount_percentage and profit_margin.

    Percentages are on a 0-100 scale. Raises ArithmeticViolation for a
    zero price and PreconditionViolation when discount is outside [0, price].
    """
    p = _to_decimal(price, 'price', key)
    d = _to_decimal(discount, 'discount', key)

    if p == 0:
        raise ArithmeticViolation(f"TransactionItem {key!r}: price is zero, cannot compute percentages")
    if d < 0 or d > p:
        raise PreconditionViolation(
            'TransactionItem', key, f"discount {d} outside [0, {p}]", field='discount'
        )

    final_price = _round(p - d)
    return {
        'final_price': float(final_price),
        'discount_percentage': float(_round(d / p * _HUNDRED)),
        'profit_margin': float(_round(final_price / p * _HUNDRED)),
    }


def _index_by_id(records: Iterable[Any], entity: str) -> Dict[int, Any]:
    index = {}
    for record in records:
        if record.id in index:
            raise PreconditionViolation(entity, record.id, "duplicate id", field='id')
        index[record.id] = record
    return index


def _lookup(cache: Dict, value: Any, entity: str, referenced_by: str) -> int:
    key = cache.get(value)
    if key is None:
        raise ReferentialIntegrityViolation(entity, value, referenced_by)
    return int(key)


def build_fact_sales(records: SourceRecords, caches: Dict[str, Dict]) -> pd.DataFrame:
    """
    Build FactSales, one row per transaction item in input order.

    Any dangling reference aborts the whole build with
    ReferentialIntegrityViolation naming the missing id.
    """
    transactions = _index_by_id(records.transactions, 'Transaction')
    customers = _index_by_id(records.customers, 'Customer')
    movies = _index_by_id(records.movies, 'Movie')

    rows = []
    for item in records.transaction_items:
        rows.append(_fact_row(item, transactions, customers, movies, caches))

    df = pd.DataFrame(rows, columns=FACT_SALES_COLUMNS)
    total = float(df['final_price'].sum()) if not df.empty else 0.0
    logger.info(f"FactSales: built={len(df)}, revenue={total:.2f}")
    return df


def _fact_row(
    item: TransactionItem,
    transactions: Dict[int, Any],
    customers: Dict[int, Any],
    movies: Dict[int, Any],
    caches: Dict[str, Dict]
) -> Dict[str, Any]:
    item_ref = f"TransactionItem(transaction_id={item.transaction_id}, movie_id={item.movie_id})"

    transaction = transactions.get(item.transaction_id)
    if transaction is None:
        raise ReferentialIntegrityViolation('Transaction', item.transaction_id, item_ref)

    customer = customers.get(transaction.customer_id)
    if customer is None:
        raise ReferentialIntegrityViolation('Customer', transaction.customer_id, f"Transaction {transaction.id}")

    movie = movies.get(item.movie_id)
    if movie is None:
        raise ReferentialIntegrityViolation('Movie', item.movie_id, item_ref)

    full_date = to_calendar_date(transaction.timestamp, transaction.id).isoformat()

    key = (item.transaction_id, item.movie_id)
    measures = compute_measures(item.price, item.discount, key=key)

    row = {
        'date_key': _lookup(caches['date'], full_date, 'DimDate', f"Transaction {transaction.id}"),
        'customer_key': _lookup(caches['customer'], customer.id, 'DimCustomer', f"Transaction {transaction.id}"),
        'movie_key': _lookup(caches['movie'], movie.id, 'DimMovie', item_ref),
        'location_key': _lookup(caches['location'], transaction.location, 'DimLocation', f"Transaction {transaction.id}"),
        'transaction_id': transaction.id,
        'quantity': 1,
        'base_price': float(_to_decimal(item.price, 'price', key)),
        'discount_amount': float(_to_decimal(item.discount, 'discount', key)),
    }
    row.update(measures)
    return row
