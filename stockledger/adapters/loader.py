"""
Backend loader — resolves the configured catalog and sales history adapters.

Usage:
    from stockledger.adapters import get_catalog_backend

    catalog = get_catalog_backend()
    info = catalog.get_variant("var-001")

Settings:
    STOCKLEDGER = {
        "CATALOG_BACKEND": "catalog.adapters.ledger.CatalogLookup",
        "SALES_HISTORY_BACKEND": "orders.adapters.ledger.SalesHistory",
    }

Both default to the noop adapters. An empty or unimportable path raises
ImproperlyConfigured.
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from stockledger.conf import ledger_settings
from stockledger.protocols.catalog import CatalogBackend
from stockledger.protocols.sales import SalesHistoryBackend

logger = logging.getLogger(__name__)


# Cached backend instances
_lock = threading.Lock()
_catalog_backend: CatalogBackend | None = None
_sales_backend: SalesHistoryBackend | None = None


def _load(setting_name: str):
    path = getattr(ledger_settings, setting_name)
    if not path:
        raise ImproperlyConfigured(
            f"STOCKLEDGER['{setting_name}'] must be configured. "
            "Example: 'stockledger.adapters.noop.NoopCatalog'"
        )
    try:
        backend_class = import_string(path)
    except ImportError as e:
        raise ImproperlyConfigured(
            f"Failed to import {setting_name} '{path}': {e}"
        ) from e
    logger.debug("Loaded %s: %s", setting_name, path)
    return backend_class()


def get_catalog_backend() -> CatalogBackend:
    """
    Return the configured catalog backend.

    Raises:
        ImproperlyConfigured: If CATALOG_BACKEND is empty or import fails
    """
    global _catalog_backend

    if _catalog_backend is None:
        with _lock:
            if _catalog_backend is None:  # double-checked
                _catalog_backend = _load("CATALOG_BACKEND")

    return _catalog_backend


def get_sales_backend() -> SalesHistoryBackend:
    """
    Return the configured sales history backend.

    Raises:
        ImproperlyConfigured: If SALES_HISTORY_BACKEND is empty or import fails
    """
    global _sales_backend

    if _sales_backend is None:
        with _lock:
            if _sales_backend is None:
                _sales_backend = _load("SALES_HISTORY_BACKEND")

    return _sales_backend


def reset_backends() -> None:
    """Reset the cached backends. Useful for testing."""
    global _catalog_backend, _sales_backend
    with _lock:
        _catalog_backend = None
        _sales_backend = None
