"""
Stock services — modular organization of ledger operations.

    from stockledger.services import StockQueries, StockAdjustments, StockRecords, StockReservations
"""

from stockledger.services.adjustments import StockAdjustments
from stockledger.services.queries import StockQueries
from stockledger.services.records import StockRecords
from stockledger.services.reservations import StockReservations

__all__ = [
    'StockQueries',
    'StockAdjustments',
    'StockRecords',
    'StockReservations',
]
