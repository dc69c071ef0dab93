"""
Noop adapters — Stub catalog and sales history for development and testing.

These adapters implement the protocols with trivial defaults:
- Every variant is known, named after its id, with no price
- Nothing has ever been sold

Usage in settings.py:
    STOCKLEDGER = {
        "CATALOG_BACKEND": "stockledger.adapters.noop.NoopCatalog",
        "SALES_HISTORY_BACKEND": "stockledger.adapters.noop.NoopSalesHistory",
    }

WARNING: Do NOT use in production. Stock values will be zero and every
forecast will report the no-sales sentinel.
"""

from __future__ import annotations

from datetime import datetime

from stockledger.protocols.catalog import VariantInfo


class NoopCatalog:
    """
    No-operation catalog for development and testing.

    Every variant exists, every lookup returns placeholder data.
    """

    def get_variant(self, variant_id: str) -> VariantInfo | None:
        return VariantInfo(variant_id=variant_id, name=variant_id)

    def get_variants(self, variant_ids: list[str]) -> dict[str, VariantInfo]:
        return {vid: self.get_variant(vid) for vid in variant_ids}

    def search_variants(self, query: str, limit: int = 100) -> list[VariantInfo]:
        """No catalog to search, so this is a no-op."""
        return []


class NoopSalesHistory:
    """No-operation sales history. Nothing was ever sold."""

    def units_sold(self, variant_id: str, since: datetime, until: datetime) -> int:
        return 0
