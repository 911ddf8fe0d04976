"""Cinema source records module exports"""
from .models import Customer, Movie, Transaction, TransactionItem, SourceRecords
from .parser import (
    parse_customer, parse_movie, parse_transaction, parse_transaction_item,
    build_source_records
)
from .sample import load_sample_records

__all__ = [
    'Customer', 'Movie', 'Transaction', 'TransactionItem', 'SourceRecords',
    'parse_customer', 'parse_movie', 'parse_transaction', 'parse_transaction_item',
    'build_source_records', 'load_sample_records',
]
