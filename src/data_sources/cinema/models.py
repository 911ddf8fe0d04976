"""Typed source records for the cinema sales system"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Tuple, Union

Number = Union[int, float, Decimal]


@dataclass(frozen=True)
class Customer:
    id: int
    name: str
    gender: str


@dataclass(frozen=True)
class Movie:
    id: int
    title: str
    price: Number


@dataclass(frozen=True)
class Transaction:
    id: int
    timestamp: datetime
    location: str
    customer_id: int


@dataclass(frozen=True)
class TransactionItem:
    movie_id: int
    transaction_id: int
    price: Number
    discount: Number


@dataclass(frozen=True)
class SourceRecords:
    """Read-only bundle of the four source collections."""
    customers: Tuple[Customer, ...] = ()
    movies: Tuple[Movie, ...] = ()
    transactions: Tuple[Transaction, ...] = ()
    transaction_items: Tuple[TransactionItem, ...] = ()

    def counts(self):
        return {
            'customers': len(self.customers),
            'movies': len(self.movies),
            'transactions': len(self.transactions),
            'transaction_items': len(self.transaction_items),
        }
