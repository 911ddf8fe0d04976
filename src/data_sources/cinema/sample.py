"""Bundled sample corpus: 4 customers, 5 movies, 4 transactions, 7 items"""
from .models import SourceRecords
from .parser import build_source_records

CUSTOMERS = [
    {"id": 101, "name": "Alice", "gender": "P"},
    {"id": 102, "name": "Bob", "gender": "L"},
    {"id": 103, "name": "Charlie", "gender": "L"},
    {"id": 104, "name": "David", "gender": "M"},
]

MOVIES = [
    {"id": 201, "title": "Inception", "price": 5.0},
    {"id": 202, "title": "The Dark Knight", "price": 4.5},
    {"id": 203, "title": "Interstellar", "price": 6.0},
    {"id": 204, "title": "Tenet", "price": 5.5},
    {"id": 205, "title": "Dunkirk", "price": 4.0},
]

TRANSACTIONS = [
    {"id": 1, "date": "2023-10-01 10:00:00", "location": "Cinema A", "customer_id": 101},
    {"id": 2, "date": "2023-10-01 12:30:00", "location": "Cinema B", "customer_id": 102},
    {"id": 3, "date": "2023-10-02 15:00:00", "location": "Cinema A", "customer_id": 101},
    {"id": 4, "date": "2023-10-03 11:00:00", "location": "Online", "customer_id": 103},
]

TRANSACTION_ITEMS = [
    {"movie_id": 201, "transaction_id": 1, "price": 5.0, "discount": 0.5},
    {"movie_id": 202, "transaction_id": 1, "price": 4.5, "discount": 0.0},
    {"movie_id": 203, "transaction_id": 2, "price": 6.0, "discount": 0.5},
    {"movie_id": 202, "transaction_id": 2, "price": 4.5, "discount": 0.0},
    {"movie_id": 204, "transaction_id": 3, "price": 5.5, "discount": 0.25},
    {"movie_id": 205, "transaction_id": 3, "price": 4.0, "discount": 0.0},
    {"movie_id": 201, "transaction_id": 4, "price": 5.0, "discount": 0.75},
]


def load_sample_records() -> SourceRecords:
    """Return the sample corpus as typed records."""
    return build_source_records(
        customers=CUSTOMERS,
        movies=MOVIES,
        transactions=TRANSACTIONS,
        transaction_items=TRANSACTION_ITEMS,
    )
