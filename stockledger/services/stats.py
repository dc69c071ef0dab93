"""
Stock stats — store-wide rollup for dashboards.
"""

from decimal import Decimal

from stockledger.adapters.loader import get_catalog_backend
from stockledger.models.enums import StockStatus
from stockledger.models.record import StockRecord
from stockledger.results import InventoryStats
from stockledger.status import classify


def get_stats() -> InventoryStats:
    """
    Count records per bucket and value the stock on hand.

    Single pass over every record, tracked or not. Value is
    quantity * unit price (falling back to unit cost, then zero) from the
    catalog; variants missing from the catalog contribute nothing.
    """
    rows = list(StockRecord.objects.values_list('variant_id', 'quantity', 'low_stock_threshold'))
    infos = get_catalog_backend().get_variants([row[0] for row in rows]) if rows else {}

    counts = {status: 0 for status in StockStatus}
    total_value = Decimal('0')

    for variant_id, quantity, threshold in rows:
        counts[classify(quantity, threshold)] += 1
        info = infos.get(variant_id)
        if info is not None:
            total_value += quantity * info.unit_value

    return InventoryStats(
        total_items=len(rows),
        in_stock=counts[StockStatus.IN_STOCK],
        low_stock=counts[StockStatus.LOW_STOCK],
        out_of_stock=counts[StockStatus.OUT_OF_STOCK],
        total_value=total_value,
    )
