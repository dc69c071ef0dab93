"""
Exceptions for Stockledger.

All errors are StockError with a structured code for programmatic handling.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from django.db import DatabaseError


class StockError(Exception):
    """
    Structured exception for ledger operations.

    Usage:
        try:
            ledger.adjust('var-1', 12, 'subtract', reason='Damaged')
        except StockError as e:
            if e.code == 'NEGATIVE_STOCK':
                print(e.message)  # "Enable backorders first"

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
        kind: Coarse category (not_found, validation, invalid_adjustment,
              conflict, storage, timeout)
    """

    _default_messages = {
        'VARIANT_NOT_FOUND': 'Stock record not found for variant',
        'REASON_REQUIRED': 'A reason is required',
        'REASON_TOO_LONG': 'Reason is too long',
        'INVALID_QUANTITY': 'Invalid quantity',
        'INVALID_MODE': 'Adjustment mode must be add, subtract or set',
        'INVALID_THRESHOLD': 'Low stock threshold must be zero or positive',
        'INVALID_REQUEST': 'Malformed adjustment request',
        'NOT_TRACKED': 'Quantity is not tracked for this variant',
        'NEGATIVE_STOCK': 'Cannot have negative stock. Enable backorders first.',
        'INSUFFICIENT_AVAILABLE': 'Requested quantity is not available',
        'CONCURRENT_MODIFICATION': 'Concurrent modification detected, retry',
        'STORAGE_ERROR': 'Stock storage failure',
        'TIMEOUT': 'Adjustment timed out, outcome unknown. Re-read the record.',
    }

    _kinds = {
        'VARIANT_NOT_FOUND': 'not_found',
        'REASON_REQUIRED': 'validation',
        'REASON_TOO_LONG': 'validation',
        'INVALID_QUANTITY': 'validation',
        'INVALID_MODE': 'validation',
        'INVALID_THRESHOLD': 'validation',
        'INVALID_REQUEST': 'validation',
        'NOT_TRACKED': 'validation',
        'NEGATIVE_STOCK': 'invalid_adjustment',
        'INSUFFICIENT_AVAILABLE': 'invalid_adjustment',
        'CONCURRENT_MODIFICATION': 'conflict',
        'STORAGE_ERROR': 'storage',
        'TIMEOUT': 'timeout',
    }

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return self._kinds.get(self.code, 'storage')

    @property
    def retryable(self) -> bool:
        """Conflicts can be retried as-is; everything else needs a change."""
        return self.kind == 'conflict'

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs). Mirrors AdjustmentResult.as_dict()."""
        return {
            'success': False,
            'error': self.message,
            'code': self.code,
            'kind': self.kind,
            'message': self.message,
            'data': {
                k: v if isinstance(v, (int, bool, type(None))) else str(v)
                for k, v in self.data.items()
            }
        }

    def __repr__(self) -> str:
        return f"StockError({self.code!r}, {self.data!r})"


# Postgres SQLSTATE for a statement cancelled by statement_timeout
QUERY_CANCELED = '57014'


def _is_timeout(exc: DatabaseError) -> bool:
    cause = exc.__cause__
    code = getattr(cause, 'pgcode', None) or getattr(cause, 'sqlstate', None)
    return code == QUERY_CANCELED


@contextmanager
def storage_errors(**context: Any) -> Iterator[None]:
    """
    Translate database failures into StockError.

    Statement timeouts become TIMEOUT (outcome unknown, caller must re-read);
    anything else becomes STORAGE_ERROR. The original error is chained.
    """
    try:
        yield
    except DatabaseError as e:
        if _is_timeout(e):
            raise StockError('TIMEOUT', **context) from e
        raise StockError('STORAGE_ERROR', detail=str(e), **context) from e
