"""
Ledger Service — The single public interface for all stock operations.

Usage:
    from stockledger import ledger, StockError

    ledger.register('var-001', sku='TSHIRT-M', quantity=40)
    ledger.adjust('var-001', 5, 'subtract', reason='Damaged in transit')
    ledger.scan_low_stock()
    ledger.forecast('var-001').days_until_stockout
"""

from stockledger.services.adjustments import StockAdjustments
from stockledger.services.alerts import scan_low_stock, scan_out_of_stock
from stockledger.services.forecast import forecast
from stockledger.services.queries import StockQueries
from stockledger.services.records import StockRecords
from stockledger.services.reservations import StockReservations
from stockledger.services.stats import get_stats


class Ledger(StockQueries, StockRecords, StockAdjustments, StockReservations):
    """
    Single interface for all ledger operations.

    Parameter convention: (variant_id, quantity, mode, reason, ...)
    Follows natural language: "Subtract 5 of var-001 because damaged"

    Stateless: every method is a classmethod or a plain function, safe to
    call from any number of threads or processes. Serialization of writes
    to the same record happens in the database (see StockAdjustments).
    """

    # ══════════════════════════════════════════════════════════════
    # READ MODELS
    # ══════════════════════════════════════════════════════════════

    scan_low_stock = staticmethod(scan_low_stock)
    scan_out_of_stock = staticmethod(scan_out_of_stock)
    forecast = staticmethod(forecast)
    get_stats = staticmethod(get_stats)
