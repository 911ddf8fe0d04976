"""
DimMovie dimension builder.
"""

import logging
from decimal import Decimal
from typing import Sequence

import pandas as pd

from src.config.etl_config import PRICE_CATEGORIES
from src.data_sources.cinema.models import Movie, Number
from ..exceptions import PreconditionViolation, require_text

logger = logging.getLogger(__name__)

DIM_MOVIE_COLUMNS = ['movie_key', 'movie_id', 'movie_title', 'base_price', 'price_category']


def price_category(price: Number) -> str:
    """Bucket a price: lower bound inclusive, upper bound exclusive."""
    for upper, category in PRICE_CATEGORIES:
        if upper is None or price < upper:
            return category
    # PRICE_CATEGORIES always ends with an open bucket
    return PRICE_CATEGORIES[-1][1]


def _require_price(movie: Movie) -> Number:
    price = movie.price
    if isinstance(price, bool) or not isinstance(price, (int, float, Decimal)):
        raise PreconditionViolation(
            'Movie', movie.id, f"expected number, got {type(price).__name__}", field='price'
        )
    number = price if isinstance(price, Decimal) else Decimal(str(price))
    if not number.is_finite() or number <= 0:
        raise PreconditionViolation('Movie', movie.id, f"price must be positive, got {price!r}", field='price')
    return price


def build_dim_movie(movies: Sequence[Movie]) -> pd.DataFrame:
    """Build DimMovie, one row per movie in input order; movie_key is the source id."""
    rows = []
    seen = set()

    for movie in movies:
        if movie.id in seen:
            raise PreconditionViolation('Movie', movie.id, "duplicate id", field='id')
        seen.add(movie.id)

        title = require_text(movie.title, 'Movie', movie.id, 'title')
        price = _require_price(movie)

        rows.append({
            'movie_key': movie.id,
            'movie_id': movie.id,
            'movie_title': title.strip(),
            'base_price': float(price),
            'price_category': price_category(price),
        })

    df = pd.DataFrame(rows, columns=DIM_MOVIE_COLUMNS)
    logger.info(f"DimMovie: built={len(df)}, categories={df['price_category'].value_counts().to_dict()}")
    return df
