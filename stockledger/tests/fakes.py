"""
In-memory catalog and sales history backends for tests.

State lives on the class so tests can seed it through fixtures while the
ledger loads its own instance from settings.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from stockledger.protocols.catalog import VariantInfo


class FakeCatalog:
    variants: dict[str, VariantInfo] = {}

    @classmethod
    def add(cls, variant_id, name, sku=None, variant_name=None,
            unit_price=None, unit_cost=None) -> VariantInfo:
        info = VariantInfo(
            variant_id=variant_id,
            name=name,
            sku=sku,
            variant_name=variant_name,
            unit_price=Decimal(unit_price) if unit_price is not None else None,
            unit_cost=Decimal(unit_cost) if unit_cost is not None else None,
        )
        cls.variants[variant_id] = info
        return info

    @classmethod
    def clear(cls):
        cls.variants = {}

    def get_variant(self, variant_id: str) -> VariantInfo | None:
        return self.variants.get(variant_id)

    def get_variants(self, variant_ids: list[str]) -> dict[str, VariantInfo]:
        return {vid: self.variants[vid] for vid in variant_ids if vid in self.variants}

    def search_variants(self, query: str, limit: int = 100) -> list[VariantInfo]:
        q = query.lower()
        hits = [
            info for info in self.variants.values()
            if q in info.name.lower()
            or (info.variant_name and q in info.variant_name.lower())
        ]
        return hits[:limit]


class FakeSalesHistory:
    sold: dict[str, int] = {}
    calls: list[tuple[str, datetime, datetime]] = []

    @classmethod
    def clear(cls):
        cls.sold = {}
        cls.calls = []

    def units_sold(self, variant_id: str, since: datetime, until: datetime) -> int:
        self.calls.append((variant_id, since, until))
        return self.sold.get(variant_id, 0)
