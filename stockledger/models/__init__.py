"""
Stockledger Models.

Core models for the stock ledger:
- StockRecord: Quantity state per catalog variant
- AuditEntry: Immutable history of applied adjustments
"""

from stockledger.models.entry import AuditEntry
from stockledger.models.enums import AdjustmentMode, StockStatus
from stockledger.models.record import StockRecord

__all__ = [
    'AdjustmentMode',
    'StockStatus',
    'StockRecord',
    'AuditEntry',
]
