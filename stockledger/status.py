"""
Stock status classification — isolated, testable, reusable.

One rule decides which bucket a record belongs to. The scanner, the stats
aggregator and the list filter all go through here so the boundaries never
drift apart.

Examples (threshold=5):
    - quantity 0 or less: out of stock
    - quantity 1..5: low stock
    - quantity 6+: in stock
"""

from django.db.models import F, Q

from stockledger.models.enums import StockStatus


def classify(quantity: int, threshold: int) -> StockStatus:
    """
    Classify a quantity against its low-stock threshold.

    Args:
        quantity: Units on hand (may be negative when backordered)
        threshold: Low stock threshold (>= 0)

    Returns:
        StockStatus bucket
    """
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= threshold:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def status_q(status: str) -> Q:
    """Q object selecting records in the given bucket."""
    if status == StockStatus.OUT_OF_STOCK:
        return Q(quantity__lte=0)
    if status == StockStatus.LOW_STOCK:
        return Q(quantity__gt=0, quantity__lte=F('low_stock_threshold'))
    if status == StockStatus.IN_STOCK:
        # threshold is never negative, so this also implies quantity > 0
        return Q(quantity__gt=F('low_stock_threshold'))
    raise ValueError(f"Unknown stock status: {status!r}")


def filter_by_status(records, status: str | None):
    """
    Filter a StockRecord queryset to one bucket.

    This is the queryset-level version of classify(). ``None`` or ``'all'``
    returns the queryset unchanged.
    """
    if status in (None, '', 'all'):
        return records
    return records.filter(status_q(status))
