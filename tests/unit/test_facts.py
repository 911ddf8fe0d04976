"""Unit tests for the sales fact builder."""
import pytest
import sys
import os
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from src.data_sources.cinema import TransactionItem, Transaction, load_sample_records
from src.etl.warehouse import build_star_schema, init_dimension_caches
from src.etl.warehouse.dimensions import (
    build_dim_date, build_dim_customer, build_dim_movie, build_dim_location
)
from src.etl.warehouse.facts import build_fact_sales, compute_measures
from src.etl.warehouse.exceptions import (
    ArithmeticViolation, PreconditionViolation, ReferentialIntegrityViolation
)


def _dimensions(records):
    return {
        'dim_date': build_dim_date(records.transactions),
        'dim_customer': build_dim_customer(records.customers),
        'dim_movie': build_dim_movie(records.movies),
        'dim_location': build_dim_location(records.transactions),
    }


def _facts(records):
    return build_fact_sales(records, init_dimension_caches(_dimensions(records)))


class TestComputeMeasures:
    """Tests for compute_measures."""

    def test_documented_example(self):
        """price 5.0, discount 0.5 -> 4.50 / 10.0 / 90.0."""
        m = compute_measures(5.0, 0.5)
        assert m == {'final_price': 4.5, 'discount_percentage': 10.0, 'profit_margin': 90.0}

    def test_no_discount(self):
        m = compute_measures(4.5, 0.0)
        assert m == {'final_price': 4.5, 'discount_percentage': 0.0, 'profit_margin': 100.0}

    def test_rounds_half_up(self):
        """0.25 / 5.5 = 4.5454..% -> 4.55; 5.25 / 5.5 = 95.4545..% -> 95.45."""
        m = compute_measures(5.5, 0.25)
        assert m['final_price'] == 5.25
        assert m['discount_percentage'] == 4.55
        assert m['profit_margin'] == 95.45

    def test_exact_half_rounds_up(self):
        """0.125 -> 0.13 (half-up, not half-even)."""
        m = compute_measures(Decimal('1'), Decimal('0.00125'))
        assert m['discount_percentage'] == 0.13

    def test_full_discount(self):
        m = compute_measures(6.0, 6.0)
        assert m == {'final_price': 0.0, 'discount_percentage': 100.0, 'profit_margin': 0.0}

    def test_zero_price_raises_arithmetic_violation(self):
        with pytest.raises(ArithmeticViolation):
            compute_measures(0.0, 0.0)

    def test_arithmetic_violation_is_arithmetic_error(self):
        with pytest.raises(ArithmeticError):
            compute_measures(0, 0)

    def test_discount_above_price_raises(self):
        with pytest.raises(PreconditionViolation):
            compute_measures(4.0, 4.5)

    def test_negative_discount_raises(self):
        with pytest.raises(PreconditionViolation):
            compute_measures(4.0, -0.5)

    @pytest.mark.parametrize("price,discount,field", [
        (float('nan'), 0.0, 'price'),
        (float('inf'), 0.0, 'price'),
        (Decimal('NaN'), Decimal('0'), 'price'),
        (5.0, float('nan'), 'discount'),
        (5.0, float('-inf'), 'discount'),
    ])
    def test_non_finite_values_raise(self, price, discount, field):
        with pytest.raises(PreconditionViolation) as exc:
            compute_measures(price, discount, key=(1, 201))
        assert exc.value.field == field
        assert exc.value.key == (1, 201)


class TestBuildFactSales:
    """Tests for build_fact_sales."""

    def setup_method(self):
        self.records = load_sample_records()

    def test_one_row_per_item(self):
        df = _facts(self.records)
        assert len(df) == 7
        assert (df['quantity'] == 1).all()

    def test_first_item(self):
        """Item {201, t1, 5.0, 0.5}."""
        row = _facts(self.records).iloc[0]
        assert row['date_key'] == 20231001
        assert row['customer_key'] == 101
        assert row['movie_key'] == 201
        assert row['location_key'] == 1
        assert row['transaction_id'] == 1
        assert row['base_price'] == 5.0
        assert row['discount_amount'] == 0.5
        assert row['final_price'] == 4.5
        assert row['discount_percentage'] == 10.0
        assert row['profit_margin'] == 90.0

    def test_measures_for_all_items(self):
        df = _facts(self.records)
        assert df['final_price'].tolist() == [4.5, 4.5, 5.5, 4.5, 5.25, 4.0, 4.25]
        assert df['discount_percentage'].tolist() == [10.0, 0.0, 8.33, 0.0, 4.55, 0.0, 15.0]
        assert df['profit_margin'].tolist() == [90.0, 100.0, 91.67, 100.0, 95.45, 100.0, 85.0]

    def test_location_keys_reuse_dimension(self):
        """Online transaction 4 gets the key the dimension assigned."""
        dims = _dimensions(self.records)
        df = build_fact_sales(self.records, init_dimension_caches(dims))
        online_key = dims['dim_location'].set_index('location_name').loc['Online', 'location_key']
        assert df.iloc[6]['location_key'] == online_key == 3

    def test_uses_supplied_location_keys(self):
        """Keys come from the caches, never recomputed."""
        caches = init_dimension_caches(_dimensions(self.records))
        caches['location'] = {'Cinema A': 10, 'Cinema B': 20, 'Online': 30}
        df = build_fact_sales(self.records, caches)
        assert df['location_key'].tolist() == [10, 10, 20, 20, 10, 10, 30]

    def test_referential_completeness(self):
        dims, facts = build_star_schema(self.records)
        assert facts['date_key'].isin(dims['dim_date']['date_key']).all()
        assert facts['customer_key'].isin(dims['dim_customer']['customer_key']).all()
        assert facts['movie_key'].isin(dims['dim_movie']['movie_key']).all()
        assert facts['location_key'].isin(dims['dim_location']['location_key']).all()

    def test_idempotent(self):
        dims1, facts1 = build_star_schema(self.records)
        dims2, facts2 = build_star_schema(self.records)
        assert facts1.equals(facts2)
        for name in dims1:
            assert dims1[name].equals(dims2[name])

    def test_missing_transaction_raises(self):
        records = replace(
            self.records,
            transaction_items=self.records.transaction_items + (
                TransactionItem(movie_id=201, transaction_id=99, price=5.0, discount=0.0),
            )
        )
        with pytest.raises(ReferentialIntegrityViolation) as exc:
            _facts(records)
        assert exc.value.entity == 'Transaction'
        assert exc.value.missing_id == 99
        assert '99' in str(exc.value)

    def test_missing_movie_raises(self):
        records = replace(
            self.records,
            transaction_items=(TransactionItem(movie_id=999, transaction_id=1, price=5.0, discount=0.0),)
        )
        with pytest.raises(ReferentialIntegrityViolation) as exc:
            _facts(records)
        assert exc.value.entity == 'Movie'
        assert exc.value.missing_id == 999

    def test_missing_customer_raises(self):
        records = replace(
            self.records,
            transactions=self.records.transactions + (
                Transaction(id=5, timestamp=datetime(2023, 10, 4, 9, 0), location="Online", customer_id=555),
            ),
            transaction_items=(TransactionItem(movie_id=201, transaction_id=5, price=5.0, discount=0.0),)
        )
        with pytest.raises(ReferentialIntegrityViolation) as exc:
            _facts(records)
        assert exc.value.entity == 'Customer'
        assert exc.value.missing_id == 555

    def test_location_missing_from_caches_raises(self):
        caches = init_dimension_caches(_dimensions(self.records))
        del caches['location']['Online']
        with pytest.raises(ReferentialIntegrityViolation) as exc:
            build_fact_sales(self.records, caches)
        assert exc.value.entity == 'DimLocation'

    def test_zero_price_item_raises(self):
        records = replace(
            self.records,
            transaction_items=(TransactionItem(movie_id=201, transaction_id=1, price=0.0, discount=0.0),)
        )
        with pytest.raises(ArithmeticViolation):
            _facts(records)

    @pytest.mark.parametrize("price", [None, "abc", "5.0"])
    def test_non_numeric_item_price_raises(self, price):
        """Bad prices surface as PreconditionViolation, not TypeError or ValueError."""
        records = replace(
            self.records,
            transaction_items=(TransactionItem(movie_id=201, transaction_id=1, price=price, discount=0.0),)
        )
        with pytest.raises(PreconditionViolation) as exc:
            _facts(records)
        assert exc.value.field == 'price'
        assert exc.value.key == (1, 201)

    def test_non_numeric_item_discount_raises(self):
        records = replace(
            self.records,
            transaction_items=(TransactionItem(movie_id=201, transaction_id=1, price=5.0, discount="x"),)
        )
        with pytest.raises(PreconditionViolation) as exc:
            _facts(records)
        assert exc.value.field == 'discount'

    def test_nan_item_price_raises(self):
        records = replace(
            self.records,
            transaction_items=(TransactionItem(movie_id=201, transaction_id=1, price=float('nan'), discount=0.0),)
        )
        with pytest.raises(PreconditionViolation):
            _facts(records)

    def test_no_items(self):
        records = replace(self.records, transaction_items=())
        df = _facts(records)
        assert df.empty
        assert 'final_price' in df.columns


class TestInitDimensionCaches:
    """Tests for init_dimension_caches."""

    def test_builds_lookups(self):
        caches = init_dimension_caches(_dimensions(load_sample_records()))
        assert caches['location'] == {'Cinema A': 1, 'Cinema B': 2, 'Online': 3}
        assert caches['date']['2023-10-02'] == 20231002
        assert caches['customer'][104] == 104
        assert caches['movie'][205] == 205

    def test_missing_dimension_raises(self):
        dims = _dimensions(load_sample_records())
        del dims['dim_location']
        with pytest.raises(PreconditionViolation):
            init_dimension_caches(dims)
