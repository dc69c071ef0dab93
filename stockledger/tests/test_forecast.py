"""
Tests for the sales-velocity forecast.
"""

from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest
from django.utils import timezone

from stockledger import ledger, StockError
from stockledger.models import StockRecord


pytestmark = pytest.mark.django_db

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def seasoned(make_record, catalog):
    """Factory for records old enough to have a full sales window."""
    def _make(variant_id, quantity, **kwargs):
        catalog.add(variant_id, f'Product {variant_id}')
        record = make_record(variant_id, quantity=quantity, **kwargs)
        StockRecord.objects.filter(pk=record.pk).update(created_at=NOW - timedelta(days=90))
        return record
    return _make


class TestForecast:
    """Tests for ledger.forecast()."""

    def test_worked_example(self, seasoned, sales):
        """60 sold in 30 days with 40 on hand."""
        seasoned('var-a', 40)
        sales.sold['var-a'] = 60

        f = ledger.forecast('var-a', now=NOW)

        assert f.average_daily_sales == Decimal('2.00')
        assert f.days_until_stockout == 20
        assert f.suggested_reorder_quantity == 60
        # reorder at 20% of stock: (40 - 8) / 2 = 16 days
        assert f.suggested_reorder_date == (NOW + timedelta(days=16)).date()
        assert f.total_sold == 60
        assert f.product_name == 'Product var-a'
        assert not f.low_confidence

    def test_fixed_thirty_day_window(self, seasoned, sales):
        """The sales backend is asked for exactly the trailing 30 days."""
        seasoned('var-a', 10)

        ledger.forecast('var-a', now=NOW)

        variant_id, since, until = sales.calls[-1]
        assert variant_id == 'var-a'
        assert until == NOW
        assert until - since == timedelta(days=30)

    def test_no_sales_sentinel(self, seasoned):
        """Zero velocity gives a finite sentinel, never a division error."""
        seasoned('var-a', 25)

        f = ledger.forecast('var-a', now=NOW)

        assert f.average_daily_sales == Decimal('0.00')
        assert f.days_until_stockout == 999
        assert f.suggested_reorder_quantity == 0
        assert f.suggested_reorder_date == (NOW + timedelta(days=999)).date()

    def test_sentinel_is_configurable(self, seasoned, settings):
        settings.STOCKLEDGER = {**settings.STOCKLEDGER, 'NO_SALES_SENTINEL_DAYS': 365}
        seasoned('var-a', 25)

        assert ledger.forecast('var-a', now=NOW).days_until_stockout == 365

    def test_fractional_velocity_floors_and_ceils(self, seasoned, sales):
        """7 sold: 0.2333/day. Days floor, reorder quantity ceils."""
        seasoned('var-a', 10)
        sales.sold['var-a'] = 7

        f = ledger.forecast('var-a', now=NOW)

        assert f.average_daily_sales == Decimal('0.23')
        assert f.days_until_stockout == 42       # 10 / (7/30) = 42.86
        assert f.suggested_reorder_quantity == 7
        assert f.suggested_reorder_date == (NOW + timedelta(days=34)).date()  # 8 / (7/30) = 34.29

    def test_exact_division_boundary(self, seasoned, sales):
        """30 sold with 10 on hand is exactly 10 days, not 9."""
        seasoned('var-a', 10)
        sales.sold['var-a'] = 30

        assert ledger.forecast('var-a', now=NOW).days_until_stockout == 10

    def test_backordered_stock_reports_zero_days(self, seasoned, sales):
        seasoned('var-a', -5, allow_backorders=True)
        sales.sold['var-a'] = 30

        f = ledger.forecast('var-a', now=NOW)

        assert f.days_until_stockout == 0
        assert f.suggested_reorder_date == NOW.date()
        assert f.suggested_reorder_quantity == 30

    def test_new_record_is_low_confidence(self, make_record, sales):
        """Less history than the window: same formula, flagged."""
        make_record('var-new', quantity=10)
        sales.sold['var-new'] = 3

        f = ledger.forecast('var-new', now=timezone.now())

        assert f.low_confidence
        assert f.days_until_stockout == 100

    def test_missing_catalog_entry(self, make_record):
        make_record('var-orphan', quantity=1)

        assert ledger.forecast('var-orphan').product_name == 'Unknown product'

    def test_untracked_rejected(self, make_record):
        make_record('var-unlimited', quantity=1, track_quantity=False)

        with pytest.raises(StockError) as exc:
            ledger.forecast('var-unlimited')

        assert exc.value.code == 'NOT_TRACKED'

    def test_unknown_variant(self, db):
        with pytest.raises(StockError) as exc:
            ledger.forecast('var-ghost')

        assert exc.value.code == 'VARIANT_NOT_FOUND'

    def test_as_dict(self, seasoned, sales):
        seasoned('var-a', 40)
        sales.sold['var-a'] = 60

        data = ledger.forecast('var-a', now=NOW).as_dict()

        assert data['average_daily_sales'] == '2.00'
        assert data['suggested_reorder_date'] == '2026-03-17'
        assert data['days_until_stockout'] == 20
