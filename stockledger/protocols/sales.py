"""
Sales History Protocol — Interface for order history reads.

The orders app implements it; forecasts use it to measure sales velocity.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class SalesHistoryBackend(Protocol):
    """Read-only access to units sold per variant."""

    def units_sold(self, variant_id: str, since: datetime, until: datetime) -> int:
        """
        Sum of quantities sold for a variant.

        Only line items of completed orders created in [since, until]
        are counted.

        Args:
            variant_id: Catalog variant identifier
            since: Window start (inclusive)
            until: Window end (inclusive)

        Returns:
            Units sold (0 when nothing sold)
        """
        ...
