"""
Tests for the inventory rollup.
"""

from decimal import Decimal

import pytest

from stockledger import ledger


pytestmark = pytest.mark.django_db


class TestGetStats:
    """Tests for ledger.get_stats()."""

    def test_empty_store(self):
        stats = ledger.get_stats()

        assert stats.total_items == 0
        assert stats.total_value == Decimal('0')

    def test_buckets_add_up(self, make_record):
        make_record('var-a', quantity=0, threshold=5)
        make_record('var-b', quantity=3, threshold=5)
        make_record('var-c', quantity=5, threshold=5)
        make_record('var-d', quantity=6, threshold=5)
        make_record('var-e', quantity=-1, threshold=5, allow_backorders=True)

        stats = ledger.get_stats()

        assert stats.total_items == 5
        assert stats.out_of_stock == 2
        assert stats.low_stock == 2
        assert stats.in_stock == 1
        assert stats.in_stock + stats.low_stock + stats.out_of_stock == stats.total_items

    def test_untracked_records_counted(self, make_record):
        make_record('var-a', quantity=100, track_quantity=False)

        assert ledger.get_stats().in_stock == 1

    def test_value_uses_price_then_cost(self, make_record, catalog):
        catalog.add('var-priced', 'Tee', unit_price='19.90', unit_cost='7.00')
        catalog.add('var-costed', 'Mug', unit_cost='4.50')
        catalog.add('var-free', 'Sticker')
        make_record('var-priced', quantity=10)
        make_record('var-costed', quantity=4)
        make_record('var-free', quantity=100)
        make_record('var-orphan', quantity=50)

        stats = ledger.get_stats()

        # 10 * 19.90 + 4 * 4.50; the sticker and the orphan add nothing
        assert stats.total_value == Decimal('217.00')
        assert stats.total_items == 4

    def test_negative_stock_reduces_value(self, make_record, catalog):
        catalog.add('var-a', 'Tee', unit_price='10.00')
        catalog.add('var-b', 'Mug', unit_price='5.00')
        make_record('var-a', quantity=3)
        make_record('var-b', quantity=-2, allow_backorders=True)

        assert ledger.get_stats().total_value == Decimal('20.00')
