"""
StockRecord model — One ledger row per sellable variant.
"""

from django.db import models
from django.db.models import F, Q
from django.utils.translation import gettext_lazy as _


# Signed 32-bit range of IntegerField on every supported backend
QUANTITY_MIN = -2147483648
QUANTITY_MAX = 2147483647


def default_low_stock_threshold() -> int:
    from stockledger.conf import ledger_settings
    return ledger_settings.DEFAULT_LOW_STOCK_THRESHOLD


class StockRecordQuerySet(models.QuerySet):
    """QuerySet with helper methods for StockRecord queries."""

    def tracked(self):
        """Only records whose quantity is tracked (excludes unlimited items)."""
        return self.filter(track_quantity=True)

    def for_variant(self, variant_id: str):
        return self.filter(variant_id=variant_id)

    def with_status(self, status: str | None):
        """Filter by derived bucket (in_stock, low_stock, out_of_stock, all)."""
        # Import here to avoid circular import
        from stockledger.status import filter_by_status
        return filter_by_status(self, status)


class StockRecord(models.Model):
    """
    Quantity state of one catalog variant.

    The variant itself belongs to the catalog; this row only mirrors its
    identity (variant_id, sku) and owns the numbers.

    Invariants (enforced by check constraints):
    - available_quantity == quantity - reserved_quantity
    - quantity >= 0 unless allow_backorders

    Writes:
    - Quantity changes go through the adjustment engine, which issues a
      version-guarded UPDATE and writes an AuditEntry in the same transaction
    - version increments on every write (optimistic concurrency)
    """

    variant_id = models.CharField(
        max_length=64,
        unique=True,
        verbose_name=_('Variant'),
        help_text=_('Catalog variant identifier. Never created here.'),
    )
    sku = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        db_index=True,
        verbose_name=_('SKU'),
    )

    quantity = models.IntegerField(
        default=0,
        verbose_name=_('Quantity on hand'),
    )
    reserved_quantity = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Reserved'),
        help_text=_('Allocated to unfulfilled orders.'),
    )
    available_quantity = models.IntegerField(
        default=0,
        editable=False,
        verbose_name=_('Available'),
        help_text=_('Always quantity - reserved.'),
    )

    low_stock_threshold = models.PositiveIntegerField(
        default=default_low_stock_threshold,
        verbose_name=_('Low stock threshold'),
    )
    allow_backorders = models.BooleanField(
        default=False,
        verbose_name=_('Allow backorders'),
        help_text=_('If set, quantity may go below zero.'),
    )
    track_quantity = models.BooleanField(
        default=True,
        verbose_name=_('Track quantity'),
        help_text=_('If unset, the item is treated as unlimited and ignored by alerts and forecasts.'),
    )

    version = models.PositiveIntegerField(default=0, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StockRecordQuerySet.as_manager()

    class Meta:
        verbose_name = _('Stock record')
        verbose_name_plural = _('Stock records')
        ordering = ['quantity', 'variant_id']
        constraints = [
            models.CheckConstraint(
                condition=Q(available_quantity=F('quantity') - F('reserved_quantity')),
                name='stockrecord_available_consistent',
            ),
            models.CheckConstraint(
                condition=Q(quantity__gte=0) | Q(allow_backorders=True),
                name='stockrecord_no_negative_without_backorders',
            ),
        ]
        indexes = [
            models.Index(fields=['track_quantity', 'quantity'], name='stockrecord_tracked_qty_idx'),
        ]

    # ══════════════════════════════════════════════════════════════
    # PROPERTIES
    # ══════════════════════════════════════════════════════════════

    @property
    def status(self):
        """Derived bucket, see stockledger.status.classify()."""
        from stockledger.status import classify
        return classify(self.quantity, self.low_stock_threshold)

    # ══════════════════════════════════════════════════════════════
    # METHODS
    # ══════════════════════════════════════════════════════════════

    def save(self, *args, **kwargs):
        """Keep available_quantity derived on every ORM save."""
        self.available_quantity = self.quantity - self.reserved_quantity
        update_fields = kwargs.get('update_fields')
        if update_fields is not None:
            fields = set(update_fields)
            if fields & {'quantity', 'reserved_quantity'}:
                fields.add('available_quantity')
            kwargs['update_fields'] = fields
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        label = self.sku or self.variant_id
        return f"{label}: {self.quantity} ({self.available_quantity} available)"
