"""Parse raw source dicts into typed, immutable records"""
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Optional

import pandas as pd

from src.etl.warehouse.exceptions import PreconditionViolation, require_text
from .models import Customer, Movie, Transaction, TransactionItem, SourceRecords, Number

logger = logging.getLogger(__name__)


def _field(raw: Dict[str, Any], name: str, entity: str, key: Any) -> Any:
    if not isinstance(raw, dict):
        raise PreconditionViolation(entity, key, f"expected dict, got {type(raw).__name__}")
    if name not in raw or raw[name] is None:
        raise PreconditionViolation(entity, key, "missing required field", field=name)
    return raw[name]


def _to_int(value: Any, entity: str, key: Any, field: str) -> int:
    if isinstance(value, bool):
        raise PreconditionViolation(entity, key, "expected integer, got bool", field=field)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise PreconditionViolation(entity, key, f"expected integer, got {value!r}", field=field)


def _to_number(value: Any, entity: str, key: Any, field: str) -> Number:
    if isinstance(value, bool):
        raise PreconditionViolation(entity, key, "expected number, got bool", field=field)
    if isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            pass
    raise PreconditionViolation(entity, key, f"expected number, got {value!r}", field=field)


def _to_timestamp(value: Any, entity: str, key: Any, field: str) -> datetime:
    if isinstance(value, datetime):
        return value
    # pandas would read a bare number as an epoch offset
    if not isinstance(value, str):
        raise PreconditionViolation(
            entity, key, f"expected timestamp text, got {type(value).__name__}", field=field
        )
    parsed = pd.to_datetime(value, errors='coerce')
    if pd.isna(parsed):
        raise PreconditionViolation(entity, key, f"unparseable timestamp {value!r}", field=field)
    return parsed.to_pydatetime()


def parse_customer(raw: Dict[str, Any]) -> Customer:
    key = raw.get('id') if isinstance(raw, dict) else None
    return Customer(
        id=_to_int(_field(raw, 'id', 'Customer', key), 'Customer', key, 'id'),
        name=require_text(_field(raw, 'name', 'Customer', key), 'Customer', key, 'name'),
        gender=require_text(_field(raw, 'gender', 'Customer', key), 'Customer', key, 'gender'),
    )


def parse_movie(raw: Dict[str, Any]) -> Movie:
    key = raw.get('id') if isinstance(raw, dict) else None
    return Movie(
        id=_to_int(_field(raw, 'id', 'Movie', key), 'Movie', key, 'id'),
        title=require_text(_field(raw, 'title', 'Movie', key), 'Movie', key, 'title'),
        price=_to_number(_field(raw, 'price', 'Movie', key), 'Movie', key, 'price'),
    )


def parse_transaction(raw: Dict[str, Any]) -> Transaction:
    key = raw.get('id') if isinstance(raw, dict) else None
    # Source feeds name the timestamp column 'date'
    ts_field = 'timestamp' if isinstance(raw, dict) and 'timestamp' in raw else 'date'
    return Transaction(
        id=_to_int(_field(raw, 'id', 'Transaction', key), 'Transaction', key, 'id'),
        timestamp=_to_timestamp(_field(raw, ts_field, 'Transaction', key), 'Transaction', key, ts_field),
        location=require_text(_field(raw, 'location', 'Transaction', key), 'Transaction', key, 'location'),
        customer_id=_to_int(_field(raw, 'customer_id', 'Transaction', key), 'Transaction', key, 'customer_id'),
    )


def parse_transaction_item(raw: Dict[str, Any]) -> TransactionItem:
    key = None
    if isinstance(raw, dict):
        key = (raw.get('transaction_id'), raw.get('movie_id'))
    entity = 'TransactionItem'
    return TransactionItem(
        movie_id=_to_int(_field(raw, 'movie_id', entity, key), entity, key, 'movie_id'),
        transaction_id=_to_int(_field(raw, 'transaction_id', entity, key), entity, key, 'transaction_id'),
        price=_to_number(_field(raw, 'price', entity, key), entity, key, 'price'),
        discount=_to_number(_field(raw, 'discount', entity, key), entity, key, 'discount'),
    )


def build_source_records(
    customers: Optional[Iterable[Dict[str, Any]]] = None,
    movies: Optional[Iterable[Dict[str, Any]]] = None,
    transactions: Optional[Iterable[Dict[str, Any]]] = None,
    transaction_items: Optional[Iterable[Dict[str, Any]]] = None
) -> SourceRecords:
    """Parse the four raw collections into a SourceRecords bundle."""
    records = SourceRecords(
        customers=tuple(parse_customer(c) for c in customers or []),
        movies=tuple(parse_movie(m) for m in movies or []),
        transactions=tuple(parse_transaction(t) for t in transactions or []),
        transaction_items=tuple(parse_transaction_item(i) for i in transaction_items or []),
    )
    logger.debug(f"Parsed source records: {records.counts()}")
    return records
