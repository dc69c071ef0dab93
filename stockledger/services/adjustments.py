"""
Stock adjustments — the only path that changes quantity on hand.

Every successful adjustment is one version-guarded UPDATE on the
StockRecord plus one AuditEntry insert, inside one transaction.atomic().
"""

import logging

from django.db import connection, transaction
from django.db.models import ExpressionWrapper, F, IntegerField, Value
from django.utils import timezone

from stockledger.conf import ledger_settings
from stockledger.exceptions import StockError, storage_errors
from stockledger.models.entry import AuditEntry
from stockledger.models.enums import AdjustmentMode
from stockledger.models.record import QUANTITY_MAX, QUANTITY_MIN, StockRecord
from stockledger.results import AdjustmentRequest, AdjustmentResult, BulkResult, ItemResult

logger = logging.getLogger('stockledger')


class StockAdjustments:
    """Single and bulk quantity adjustments."""

    @classmethod
    def adjust(cls, variant_id, amount, mode, reason, user=None,
               timeout=None, **metadata):
        """
        Apply one quantity change and audit it.

        Modes:
            add:      quantity + amount
            subtract: quantity - amount
            set:      amount

        Returns:
            AdjustmentResult(previous, new, entry)

        Raises:
            StockError('REASON_REQUIRED'): If reason is empty
            StockError('REASON_TOO_LONG'): If reason exceeds the column length
            StockError('INVALID_MODE'): If mode is not add/subtract/set
            StockError('INVALID_QUANTITY'): If amount is not a non-negative int
                or the result falls outside the storable range
            StockError('VARIANT_NOT_FOUND'): If no record exists
            StockError('NEGATIVE_STOCK'): If the result would be negative
                and backorders are disabled (nothing is applied)
            StockError('CONCURRENT_MODIFICATION'): If the record kept
                changing underneath us after the automatic retries
            StockError('TIMEOUT'): If the statement timeout fired; the
                outcome is unknown and the record must be re-read
            StockError('STORAGE_ERROR'): On any other database failure

        Concurrency:
            - Reads the record without locking, under the same timeout
              as the write
            - Writes with UPDATE ... WHERE pk = ? AND version = ?
            - Zero rows updated means someone else won; retried
              CONFLICT_RETRIES times with a fresh read
        """
        mode = cls._validate(amount, mode, reason)
        retries = ledger_settings.CONFLICT_RETRIES
        if timeout is None:
            timeout = ledger_settings.ADJUSTMENT_TIMEOUT_SECONDS

        attempt = 0
        while True:
            try:
                return cls._attempt(variant_id, amount, mode, str(reason).strip(),
                                    user, timeout, metadata)
            except StockError as e:
                if not e.retryable or attempt >= retries:
                    raise
                attempt += 1
                logger.info(
                    "stock.adjust.retry",
                    extra={"variant_id": variant_id, "attempt": attempt},
                )

    @classmethod
    def adjust_bulk(cls, adjustments, user=None, timeout=None):
        """
        Apply a batch of independent adjustments.

        Items run in list order, each in its own transaction. A failing
        item is recorded in its result and never rolls back or blocks the
        others.

        Args:
            adjustments: AdjustmentRequest instances or dicts with
                variant_id, quantity, mode and reason
            user: Actor recorded on every audit entry
            timeout: Per-item timeout in seconds (None = setting default)

        Returns:
            BulkResult with total/succeeded/failed and per-item results
        """
        results = []
        for item in adjustments:
            results.append(cls._adjust_item(item, user, timeout))

        bulk = BulkResult(results=tuple(results))
        logger.info(
            "stock.adjust_bulk",
            extra={
                "total": bulk.total,
                "succeeded": bulk.succeeded,
                "failed": bulk.failed,
            },
        )
        return bulk

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _validate(cls, amount, mode, reason) -> AdjustmentMode:
        if not reason or not str(reason).strip():
            raise StockError('REASON_REQUIRED')
        max_length = AuditEntry._meta.get_field('reason').max_length
        if len(str(reason).strip()) > max_length:
            raise StockError(
                'REASON_TOO_LONG',
                f'Reason must be at most {max_length} characters',
                length=len(str(reason).strip()),
            )

        try:
            mode = AdjustmentMode(mode)
        except ValueError:
            raise StockError('INVALID_MODE', mode=mode) from None

        if isinstance(amount, bool) or not isinstance(amount, int):
            raise StockError('INVALID_QUANTITY', requested=amount)
        if amount < 0:
            raise StockError(
                'INVALID_QUANTITY',
                'Quantity must be zero or positive; use the mode for direction',
                requested=amount,
            )
        if amount > QUANTITY_MAX:
            raise StockError(
                'INVALID_QUANTITY',
                f'Quantity must not exceed {QUANTITY_MAX}',
                requested=amount,
            )
        return mode

    @classmethod
    def _compute(cls, current: int, amount: int, mode: AdjustmentMode) -> int:
        if mode == AdjustmentMode.ADD:
            return current + amount
        if mode == AdjustmentMode.SUBTRACT:
            return current - amount
        return amount

    @classmethod
    def _read(cls, variant_id) -> StockRecord:
        try:
            return StockRecord.objects.get(variant_id=variant_id)
        except StockRecord.DoesNotExist:
            raise StockError('VARIANT_NOT_FOUND', variant_id=variant_id) from None

    @classmethod
    def _attempt(cls, variant_id, amount, mode, reason, user, timeout, metadata):
        with storage_errors(variant_id=variant_id), transaction.atomic():
            cls._apply_timeout(timeout)
            record = cls._read(variant_id)
            new_quantity = cls._compute(record.quantity, amount, mode)

            if not (QUANTITY_MIN <= new_quantity <= QUANTITY_MAX
                    and QUANTITY_MIN <= new_quantity - record.reserved_quantity):
                raise StockError(
                    'INVALID_QUANTITY',
                    'Resulting quantity is out of range',
                    variant_id=variant_id,
                    current=record.quantity,
                    requested=new_quantity,
                )

            if new_quantity < 0 and not record.allow_backorders:
                logger.info(
                    "stock.adjust.rejected",
                    extra={
                        "variant_id": variant_id,
                        "current": record.quantity,
                        "requested": new_quantity,
                        "reason": reason,
                    },
                )
                raise StockError(
                    'NEGATIVE_STOCK',
                    variant_id=variant_id,
                    current=record.quantity,
                    requested=new_quantity,
                )

            entry = cls._write(record, new_quantity, mode, reason, user, metadata)

        logger.info(
            "stock.adjust",
            extra={
                "variant_id": variant_id,
                "mode": str(mode),
                "delta": entry.change_amount,
                "previous": entry.previous_quantity,
                "new": entry.new_quantity,
                "reason": reason,
            },
        )
        return AdjustmentResult(
            variant_id=variant_id,
            previous=entry.previous_quantity,
            new=entry.new_quantity,
            entry=entry,
        )

    @classmethod
    def _write(cls, record, new_quantity, mode, reason, user, metadata) -> AuditEntry:
        """Conditional write of a record snapshot. Must run inside atomic()."""
        updated = StockRecord.objects.filter(
            pk=record.pk,
            version=record.version,
        ).update(
            quantity=new_quantity,
            available_quantity=ExpressionWrapper(
                Value(new_quantity) - F('reserved_quantity'),
                output_field=IntegerField(),
            ),
            version=F('version') + 1,
            updated_at=timezone.now(),
        )

        if updated == 0:
            logger.warning(
                "stock.adjust.conflict",
                extra={"variant_id": record.variant_id, "version": record.version},
            )
            raise StockError(
                'CONCURRENT_MODIFICATION',
                variant_id=record.variant_id,
                version=record.version,
            )

        return AuditEntry.objects.create(
            record=record,
            variant_id=record.variant_id,
            mode=mode,
            change_amount=new_quantity - record.quantity,
            previous_quantity=record.quantity,
            new_quantity=new_quantity,
            reason=reason,
            user=user,
            metadata=metadata,
        )

    @classmethod
    def _apply_timeout(cls, timeout):
        """Bound the current transaction. Only PostgreSQL supports this."""
        if not timeout:
            return
        if connection.vendor != 'postgresql':
            logger.debug("stock.adjust.timeout_unsupported", extra={"vendor": connection.vendor})
            return
        with connection.cursor() as cursor:
            cursor.execute(
                "SELECT set_config('statement_timeout', %s, true)",
                [str(int(timeout * 1000))],
            )

    @classmethod
    def _adjust_item(cls, item, user, timeout) -> ItemResult:
        try:
            request = AdjustmentRequest.coerce(item)
        except StockError as e:
            variant_id = item.get('variant_id') if isinstance(item, dict) else None
            return ItemResult.failure(variant_id, e)

        try:
            result = cls.adjust(
                request.variant_id,
                request.quantity,
                request.mode,
                request.reason,
                user=user,
                timeout=timeout,
            )
        except StockError as e:
            logger.warning(
                "stock.adjust_bulk.item_failed",
                extra={"variant_id": request.variant_id, "code": e.code},
            )
            return ItemResult.failure(request.variant_id, e)

        return ItemResult.ok(result)
