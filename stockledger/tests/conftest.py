"""
Pytest fixtures for Stockledger tests.
"""

import pytest
from django.contrib.auth import get_user_model

from stockledger.adapters import reset_backends
from stockledger.models import StockRecord
from stockledger.tests.fakes import FakeCatalog, FakeSalesHistory


User = get_user_model()


@pytest.fixture(autouse=True)
def _fresh_backends():
    """Empty fakes and a fresh backend cache for every test."""
    FakeCatalog.clear()
    FakeSalesHistory.clear()
    reset_backends()
    yield
    reset_backends()


@pytest.fixture
def catalog():
    return FakeCatalog


@pytest.fixture
def sales():
    return FakeSalesHistory


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='stockclerk',
        password='testpass123'
    )


@pytest.fixture
def make_record(db):
    """Factory for stock records created straight in the table (no audit)."""
    def _make(variant_id, quantity=0, reserved=0, threshold=5,
              allow_backorders=False, track_quantity=True, sku=None):
        return StockRecord.objects.create(
            variant_id=variant_id,
            sku=sku,
            quantity=quantity,
            reserved_quantity=reserved,
            low_stock_threshold=threshold,
            allow_backorders=allow_backorders,
            track_quantity=track_quantity,
        )
    return _make


@pytest.fixture
def record(make_record, catalog):
    """The canonical record: 10 on hand, 2 reserved, threshold 5."""
    catalog.add('var-tee-m', 'Basic Tee', sku='TEE-M', variant_name='M',
                unit_price='19.90')
    return make_record('var-tee-m', quantity=10, reserved=2, threshold=5, sku='TEE-M')


@pytest.fixture
def backorder_record(make_record, catalog):
    """A record that may go below zero."""
    catalog.add('var-mug', 'Enamel Mug', sku='MUG-01', unit_price='12.00')
    return make_record('var-mug', quantity=3, threshold=2, allow_backorders=True, sku='MUG-01')
