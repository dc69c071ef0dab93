"""
Stock records — opening ledger rows and changing their settings.

Quantity never changes here except through the adjustment engine, so the
audit log stays complete from the very first unit.
"""

import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from stockledger.exceptions import StockError, storage_errors
from stockledger.models.enums import AdjustmentMode
from stockledger.models.record import QUANTITY_MAX, StockRecord

logger = logging.getLogger('stockledger')


class StockRecords:
    """Ledger row lifecycle and per-record settings."""

    @classmethod
    def register(cls, variant_id, sku=None, quantity=0, low_stock_threshold=None,
                 allow_backorders=False, track_quantity=True,
                 reason='Opening balance', user=None):
        """
        Open a ledger row for an existing catalog variant.

        Idempotent: an existing row is returned unchanged. A non-zero
        opening quantity is applied as an audited ``add`` adjustment.

        Raises:
            StockError('INVALID_REQUEST'): If variant_id is empty
            StockError('INVALID_THRESHOLD'): If threshold is negative
            StockError('INVALID_QUANTITY'): If quantity is negative
        """
        if not variant_id:
            raise StockError('INVALID_REQUEST', missing='variant_id')
        if low_stock_threshold is not None:
            cls._check_threshold(low_stock_threshold)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise StockError('INVALID_QUANTITY', requested=quantity)

        defaults = {
            'sku': sku,
            'allow_backorders': allow_backorders,
            'track_quantity': track_quantity,
        }
        if low_stock_threshold is not None:
            defaults['low_stock_threshold'] = low_stock_threshold

        with storage_errors(variant_id=variant_id), transaction.atomic():
            record, created = StockRecord.objects.get_or_create(
                variant_id=variant_id,
                defaults=defaults,
            )

            if created and quantity:
                from stockledger.services.adjustments import StockAdjustments
                StockAdjustments.adjust(variant_id, quantity, AdjustmentMode.ADD,
                                        reason, user=user)
                record.refresh_from_db()

        if created:
            logger.info(
                "stock.register",
                extra={"variant_id": variant_id, "sku": sku, "qty": quantity},
            )
        return record

    @classmethod
    def set_low_stock_threshold(cls, variant_id, threshold):
        """
        Change the reorder attention point of a variant.

        Raises:
            StockError('INVALID_THRESHOLD'): If threshold is negative
            StockError('VARIANT_NOT_FOUND'): If no record exists
        """
        cls._check_threshold(threshold)

        with storage_errors(variant_id=variant_id):
            updated = StockRecord.objects.for_variant(variant_id).update(
                low_stock_threshold=threshold,
                version=F('version') + 1,
                updated_at=timezone.now(),
            )
        if updated == 0:
            raise StockError('VARIANT_NOT_FOUND', variant_id=variant_id)

        logger.info(
            "stock.threshold",
            extra={"variant_id": variant_id, "threshold": threshold},
        )
        return StockRecord.objects.get(variant_id=variant_id)

    @classmethod
    def set_backorders(cls, variant_id, allowed: bool):
        """
        Enable or disable backorders.

        Disabling is refused while the record is below zero; the stock has
        to be brought back first.

        Raises:
            StockError('VARIANT_NOT_FOUND'): If no record exists
            StockError('NEGATIVE_STOCK'): If disabling with quantity < 0
        """
        qs = StockRecord.objects.for_variant(variant_id)
        if not allowed:
            qs = qs.filter(quantity__gte=0)

        with storage_errors(variant_id=variant_id):
            updated = qs.update(
                allow_backorders=allowed,
                version=F('version') + 1,
                updated_at=timezone.now(),
            )

        if updated == 0:
            record = cls._get(variant_id)
            raise StockError(
                'NEGATIVE_STOCK',
                'Stock is below zero. Bring it back to zero before disabling backorders.',
                variant_id=variant_id,
                current=record.quantity,
            )

        logger.info(
            "stock.backorders",
            extra={"variant_id": variant_id, "allowed": allowed},
        )
        return StockRecord.objects.get(variant_id=variant_id)

    @classmethod
    def set_tracking(cls, variant_id, tracked: bool):
        """
        Switch quantity tracking on or off.

        Untracked records are treated as unlimited and skipped by alerts
        and forecasts.

        Raises:
            StockError('VARIANT_NOT_FOUND'): If no record exists
        """
        with storage_errors(variant_id=variant_id):
            updated = StockRecord.objects.for_variant(variant_id).update(
                track_quantity=tracked,
                version=F('version') + 1,
                updated_at=timezone.now(),
            )
        if updated == 0:
            raise StockError('VARIANT_NOT_FOUND', variant_id=variant_id)
        return StockRecord.objects.get(variant_id=variant_id)

    @classmethod
    def _check_threshold(cls, threshold):
        if (isinstance(threshold, bool) or not isinstance(threshold, int)
                or not 0 <= threshold <= QUANTITY_MAX):
            raise StockError('INVALID_THRESHOLD', threshold=threshold)

    @classmethod
    def _get(cls, variant_id) -> StockRecord:
        try:
            return StockRecord.objects.get(variant_id=variant_id)
        except StockRecord.DoesNotExist:
            raise StockError('VARIANT_NOT_FOUND', variant_id=variant_id) from None
