"""
Stockledger configuration.

Usage in settings.py:
    STOCKLEDGER = {
        "CATALOG_BACKEND": "catalog.adapters.ledger.CatalogLookup",
        "SALES_HISTORY_BACKEND": "orders.adapters.ledger.SalesHistory",
        "DEFAULT_LOW_STOCK_THRESHOLD": 5,
        "CONFLICT_RETRIES": 1,
    }
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from django.conf import settings


@dataclass
class StockLedgerSettings:
    """Stockledger configuration settings."""

    # Catalog lookup backend (dotted path)
    CATALOG_BACKEND: str = "stockledger.adapters.noop.NoopCatalog"

    # Order history backend (dotted path)
    SALES_HISTORY_BACKEND: str = "stockledger.adapters.noop.NoopSalesHistory"

    # Threshold assigned to new records when none is given
    DEFAULT_LOW_STOCK_THRESHOLD: int = 5

    # Trailing sales window and fixed velocity denominator, in days
    FORECAST_WINDOW_DAYS: int = 30

    # Days of sales a suggested reorder should cover
    REORDER_COVER_DAYS: int = 30

    # Fraction of current stock at which a reorder is suggested
    REORDER_POINT_RATIO: Decimal = Decimal("0.2")

    # Reported days-until-stockout when nothing sold in the window
    NO_SALES_SENTINEL_DAYS: int = 999

    # Automatic retries after a lost optimistic-concurrency race
    CONFLICT_RETRIES: int = 1

    # Default per-adjustment timeout in seconds (None = unbounded)
    ADJUSTMENT_TIMEOUT_SECONDS: float | None = None

    # Default number of audit entries returned by history()
    HISTORY_LIMIT: int = 50

    # Placeholder when the catalog has no entry for a variant
    UNKNOWN_PRODUCT_NAME: str = "Unknown product"


def get_stockledger_settings() -> StockLedgerSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STOCKLEDGER", {})
    return StockLedgerSettings(**{
        k: v for k, v in user_settings.items()
        if k in StockLedgerSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_stockledger_settings(), name)


ledger_settings = _LazySettings()
