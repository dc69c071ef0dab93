"""
Tests for backend loading and the noop adapters.
"""

from decimal import Decimal

import pytest
from django.core.exceptions import ImproperlyConfigured

from stockledger import ledger
from stockledger.adapters import (
    NoopCatalog,
    NoopSalesHistory,
    get_catalog_backend,
    get_sales_backend,
)
from stockledger.protocols import CatalogBackend, SalesHistoryBackend, VariantInfo
from stockledger.tests.fakes import FakeCatalog


class TestLoader:

    def test_loads_configured_backends(self):
        assert isinstance(get_catalog_backend(), FakeCatalog)
        assert get_catalog_backend() is get_catalog_backend()

    def test_satisfies_protocols(self):
        assert isinstance(get_catalog_backend(), CatalogBackend)
        assert isinstance(get_sales_backend(), SalesHistoryBackend)

    def test_bad_path(self, settings):
        settings.STOCKLEDGER = {**settings.STOCKLEDGER, 'CATALOG_BACKEND': 'nowhere.Catalog'}

        with pytest.raises(ImproperlyConfigured, match='nowhere.Catalog'):
            get_catalog_backend()

    def test_empty_path(self, settings):
        settings.STOCKLEDGER = {**settings.STOCKLEDGER, 'SALES_HISTORY_BACKEND': ''}

        with pytest.raises(ImproperlyConfigured):
            get_sales_backend()


class TestNoopAdapters:

    def test_catalog_knows_everything(self):
        catalog = NoopCatalog()

        assert catalog.get_variant('var-1').name == 'var-1'
        assert set(catalog.get_variants(['var-1', 'var-2'])) == {'var-1', 'var-2'}
        assert catalog.search_variants('tee') == []

    def test_nothing_sold(self):
        assert NoopSalesHistory().units_sold('var-1', None, None) == 0

    @pytest.mark.django_db
    def test_ledger_runs_on_noop_defaults(self, settings, make_record):
        settings.STOCKLEDGER = {}
        make_record('var-1', quantity=2)

        assert ledger.scan_low_stock()[0].product_name == 'var-1'
        assert ledger.forecast('var-1').days_until_stockout == 999
        assert ledger.get_stats().total_value == Decimal('0')


class TestVariantInfo:

    def test_unit_value_fallbacks(self):
        assert VariantInfo('v', 'n', unit_price=Decimal('2'), unit_cost=Decimal('1')).unit_value == 2
        assert VariantInfo('v', 'n', unit_cost=Decimal('1')).unit_value == 1
        assert VariantInfo('v', 'n').unit_value == 0
