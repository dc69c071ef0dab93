"""
Stockledger Adapters.

Implementations of protocols for external systems.
"""

from stockledger.adapters.loader import (
    get_catalog_backend,
    get_sales_backend,
    reset_backends,
)
from stockledger.adapters.noop import NoopCatalog, NoopSalesHistory

__all__ = [
    "get_catalog_backend",
    "get_sales_backend",
    "reset_backends",
    "NoopCatalog",
    "NoopSalesHistory",
]
