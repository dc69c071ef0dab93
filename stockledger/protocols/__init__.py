"""
Stockledger Protocols.

Defines interfaces for external system integration.
"""

from stockledger.protocols.catalog import CatalogBackend, VariantInfo
from stockledger.protocols.sales import SalesHistoryBackend

__all__ = [
    "CatalogBackend",
    "VariantInfo",
    "SalesHistoryBackend",
]
