"""
Stock reservations — allocate and free units for unfulfilled orders.

Reservations move units between available and reserved; quantity on hand
does not change, so no audit entry is written. Each operation is a single
guarded UPDATE, so concurrent reservations cannot oversell.
"""

import logging

from django.db.models import F, Q
from django.utils import timezone

from stockledger.exceptions import StockError, storage_errors
from stockledger.models.record import QUANTITY_MAX, StockRecord

logger = logging.getLogger('stockledger')


class StockReservations:
    """Reserved-quantity bookkeeping."""

    @classmethod
    def reserve(cls, variant_id, quantity):
        """
        Reserve units for an order.

        Raises:
            StockError('INVALID_QUANTITY'): If quantity <= 0
            StockError('VARIANT_NOT_FOUND'): If no record exists
            StockError('INSUFFICIENT_AVAILABLE'): If available < quantity
                and backorders are disabled

        Concurrency:
            - UPDATE ... WHERE available_quantity >= n OR allow_backorders
            - No read-then-write window
        """
        cls._check_quantity(quantity)

        with storage_errors(variant_id=variant_id):
            updated = StockRecord.objects.filter(
                Q(available_quantity__gte=quantity) | Q(allow_backorders=True),
                variant_id=variant_id,
            ).update(
                reserved_quantity=F('reserved_quantity') + quantity,
                available_quantity=F('available_quantity') - quantity,
                version=F('version') + 1,
                updated_at=timezone.now(),
            )

        if updated == 0:
            record = cls._get(variant_id)
            raise StockError(
                'INSUFFICIENT_AVAILABLE',
                variant_id=variant_id,
                available=record.available_quantity,
                requested=quantity,
            )

        logger.info(
            "stock.reserve",
            extra={"variant_id": variant_id, "qty": quantity},
        )
        return cls._get(variant_id)

    @classmethod
    def release_reservation(cls, variant_id, quantity):
        """
        Give reserved units back to available (order cancelled or fulfilled).

        Raises:
            StockError('INVALID_QUANTITY'): If quantity <= 0 or exceeds
                what is reserved
            StockError('VARIANT_NOT_FOUND'): If no record exists
        """
        cls._check_quantity(quantity)

        with storage_errors(variant_id=variant_id):
            updated = StockRecord.objects.filter(
                variant_id=variant_id,
                reserved_quantity__gte=quantity,
            ).update(
                reserved_quantity=F('reserved_quantity') - quantity,
                available_quantity=F('available_quantity') + quantity,
                version=F('version') + 1,
                updated_at=timezone.now(),
            )

        if updated == 0:
            record = cls._get(variant_id)
            raise StockError(
                'INVALID_QUANTITY',
                'Cannot release more than is reserved',
                variant_id=variant_id,
                reserved=record.reserved_quantity,
                requested=quantity,
            )

        logger.info(
            "stock.release",
            extra={"variant_id": variant_id, "qty": quantity},
        )
        return cls._get(variant_id)

    @classmethod
    def _check_quantity(cls, quantity):
        if (isinstance(quantity, bool) or not isinstance(quantity, int)
                or not 0 < quantity <= QUANTITY_MAX):
            raise StockError('INVALID_QUANTITY', requested=quantity)

    @classmethod
    def _get(cls, variant_id) -> StockRecord:
        try:
            return StockRecord.objects.get(variant_id=variant_id)
        except StockRecord.DoesNotExist:
            raise StockError('VARIANT_NOT_FOUND', variant_id=variant_id) from None
