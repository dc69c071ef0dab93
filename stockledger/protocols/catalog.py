"""
Catalog Lookup Protocol — Interface for variant display data and prices.

Stockledger defines this protocol, the catalog app implements it.
The ledger only ever reads through it; variants are never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class VariantInfo:
    """Display and pricing data for one catalog variant."""

    variant_id: str
    name: str
    sku: str | None = None
    variant_name: str | None = None
    unit_price: Decimal | None = None
    unit_cost: Decimal | None = None

    @property
    def unit_value(self) -> Decimal:
        """Price, falling back to cost, falling back to zero."""
        if self.unit_price is not None:
            return self.unit_price
        if self.unit_cost is not None:
            return self.unit_cost
        return Decimal('0')


@runtime_checkable
class CatalogBackend(Protocol):
    """
    Protocol for catalog lookups.

    Implementations should provide methods to:
    - Fetch one variant's display name, SKU and price/cost
    - Fetch many at once (used by scans and stats)
    - Search variants by name or code (used by list filters)
    """

    def get_variant(self, variant_id: str) -> VariantInfo | None:
        """
        Get variant information.

        Args:
            variant_id: Catalog variant identifier

        Returns:
            VariantInfo or None if the variant no longer exists
        """
        ...

    def get_variants(self, variant_ids: list[str]) -> dict[str, VariantInfo]:
        """
        Get information for many variants.

        Args:
            variant_ids: Catalog variant identifiers

        Returns:
            Dict[variant_id, VariantInfo]; missing variants are omitted
        """
        ...

    def search_variants(self, query: str, limit: int = 100) -> list[VariantInfo]:
        """
        Search variants by product name, variant name or SKU.

        Args:
            query: Search term
            limit: Maximum results

        Returns:
            List of VariantInfo
        """
        ...
