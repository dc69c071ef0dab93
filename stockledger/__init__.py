"""
Django Stockledger — Inventory stock ledger for a retail back-office.

Usage:
    from stockledger import ledger, StockError

    ledger.adjust('var-001', 12, 'subtract', reason='Damaged')
    ledger.scan_low_stock()
    ledger.forecast('var-001')
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'ledger':
        from stockledger.service import Ledger
        return Ledger
    elif name == 'StockError':
        from stockledger.exceptions import StockError
        return StockError
    elif name == 'StockRecord':
        from stockledger.models.record import StockRecord
        return StockRecord
    elif name == 'AuditEntry':
        from stockledger.models.entry import AuditEntry
        return AuditEntry
    elif name == 'AdjustmentMode':
        from stockledger.models.enums import AdjustmentMode
        return AdjustmentMode
    elif name == 'StockStatus':
        from stockledger.models.enums import StockStatus
        return StockStatus
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'ledger',
    'StockError',
    'StockRecord',
    'AuditEntry',
    'AdjustmentMode',
    'StockStatus',
]

__version__ = '0.1.0'
