"""
Value objects exchanged with callers.

Requests come in as AdjustmentRequest (or the equivalent dict), everything
else is a derived, read-only snapshot. None of these are persisted.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from stockledger.exceptions import StockError


@dataclass(frozen=True)
class AdjustmentRequest:
    """One inbound adjustment: {variant_id, quantity, mode, reason}."""

    variant_id: str
    quantity: int
    mode: str
    reason: str

    @classmethod
    def coerce(cls, item: AdjustmentRequest | Mapping[str, Any]) -> AdjustmentRequest:
        """
        Build a request from an instance or a wire dict.

        Accepts snake_case or camelCase variant keys and the legacy
        ``adjust_type`` name for mode.

        Raises:
            StockError('INVALID_REQUEST'): If a field is missing
        """
        if isinstance(item, cls):
            return item
        if not isinstance(item, Mapping):
            raise StockError('INVALID_REQUEST', received=type(item).__name__)

        variant_id = item.get('variant_id', item.get('variantId'))
        mode = item.get('mode', item.get('adjust_type'))
        missing = [
            name for name, value in (
                ('variant_id', variant_id),
                ('quantity', item.get('quantity')),
                ('mode', mode),
            )
            if value is None
        ]
        if missing:
            raise StockError('INVALID_REQUEST', missing=', '.join(missing))

        return cls(
            variant_id=str(variant_id),
            quantity=item['quantity'],
            mode=mode,
            reason=item.get('reason') or '',
        )


@dataclass(frozen=True)
class AdjustmentResult:
    """Outcome of a successful adjustment."""

    variant_id: str
    previous: int
    new: int
    entry: Any = field(default=None, compare=False, repr=False)

    @property
    def change(self) -> int:
        return self.new - self.previous

    def as_dict(self) -> dict[str, Any]:
        return {'success': True, 'previous': self.previous, 'new': self.new}


@dataclass(frozen=True)
class ItemResult:
    """Per-item outcome inside a bulk adjustment."""

    variant_id: str | None
    success: bool
    previous: int | None = None
    new: int | None = None
    code: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, result: AdjustmentResult) -> ItemResult:
        return cls(
            variant_id=result.variant_id,
            success=True,
            previous=result.previous,
            new=result.new,
        )

    @classmethod
    def failure(cls, variant_id: str | None, exc: StockError) -> ItemResult:
        return cls(variant_id=variant_id, success=False, code=exc.code, error=exc.message)

    def as_dict(self) -> dict[str, Any]:
        if self.success:
            return {
                'variant_id': self.variant_id,
                'success': True,
                'data': {'previous': self.previous, 'new': self.new},
            }
        return {
            'variant_id': self.variant_id,
            'success': False,
            'error': self.error,
            'code': self.code,
        }


@dataclass(frozen=True)
class BulkResult:
    """Aggregate of a bulk adjustment. Counts always match results."""

    results: tuple[ItemResult, ...]

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    def as_dict(self) -> dict[str, Any]:
        return {
            'total': self.total,
            'succeeded': self.succeeded,
            'failed': self.failed,
            'results': [r.as_dict() for r in self.results],
        }


@dataclass(frozen=True)
class LowStockAlert:
    """Snapshot of a record in the low or out of stock bucket."""

    variant_id: str
    product_name: str
    current_stock: int
    threshold: int
    sku: str | None = None
    variant_name: str | None = None


@dataclass(frozen=True)
class StockForecast:
    """
    Depletion estimate from trailing sales velocity.

    Advisory only: a point estimate with no trend or seasonality.
    """

    variant_id: str
    product_name: str
    current_stock: int
    total_sold: int
    average_daily_sales: Decimal
    days_until_stockout: int
    suggested_reorder_date: date
    suggested_reorder_quantity: int
    low_confidence: bool = False

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['average_daily_sales'] = str(self.average_daily_sales)
        data['suggested_reorder_date'] = self.suggested_reorder_date.isoformat()
        return data


@dataclass(frozen=True)
class InventoryStats:
    """Store-wide rollup for dashboards."""

    total_items: int = 0
    in_stock: int = 0
    low_stock: int = 0
    out_of_stock: int = 0
    total_value: Decimal = Decimal('0')


@dataclass(frozen=True)
class InventoryItem:
    """One row of the inventory list: ledger numbers plus catalog labels."""

    variant_id: str
    product_name: str
    sku: str | None
    variant_name: str | None
    quantity: int
    reserved_quantity: int
    available_quantity: int
    low_stock_threshold: int
    allow_backorders: bool
    track_quantity: bool
    status: str


@dataclass(frozen=True)
class RecordPage:
    """A page of InventoryItem rows."""

    items: list[InventoryItem]
    page: int
    limit: int
    total: int
    total_pages: int
