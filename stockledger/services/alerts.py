"""
Stock alerts — low stock and out of stock scans.

Usage:
    from stockledger.services.alerts import scan_low_stock

    # Run periodically (cron, management command) or on dashboard load
    alerts = scan_low_stock()
    # Returns LowStockAlert list, most urgent first
"""

import logging

from stockledger.adapters.loader import get_catalog_backend
from stockledger.conf import ledger_settings
from stockledger.models.enums import StockStatus
from stockledger.models.record import StockRecord
from stockledger.results import LowStockAlert

logger = logging.getLogger('stockledger')


def scan_low_stock() -> list[LowStockAlert]:
    """
    Tracked records with 0 < quantity <= low_stock_threshold.

    Out of stock records are excluded; see scan_out_of_stock().

    Returns:
        LowStockAlert list sorted by current stock ascending.
    """
    return _scan(StockStatus.LOW_STOCK, "stock.alert.low")


def scan_out_of_stock() -> list[LowStockAlert]:
    """
    Tracked records with quantity <= 0 (the more urgent bucket).

    Returns:
        LowStockAlert list sorted by current stock ascending.
    """
    return _scan(StockStatus.OUT_OF_STOCK, "stock.alert.out")


def _scan(status: StockStatus, event: str) -> list[LowStockAlert]:
    records = list(
        StockRecord.objects.tracked()
        .with_status(status)
        .order_by('quantity', 'variant_id')
    )
    if not records:
        return []

    infos = get_catalog_backend().get_variants([r.variant_id for r in records])
    alerts = []

    for record in records:
        info = infos.get(record.variant_id)
        alert = LowStockAlert(
            variant_id=record.variant_id,
            product_name=info.name if info else ledger_settings.UNKNOWN_PRODUCT_NAME,
            current_stock=record.quantity,
            threshold=record.low_stock_threshold,
            sku=(info.sku if info and info.sku else record.sku),
            variant_name=info.variant_name if info else None,
        )
        alerts.append(alert)
        logger.warning(
            event,
            extra={
                "variant_id": record.variant_id,
                "current_stock": record.quantity,
                "threshold": record.low_stock_threshold,
            },
        )

    return alerts
