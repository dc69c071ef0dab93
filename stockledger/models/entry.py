"""
AuditEntry model — Immutable history of applied adjustments.
"""

from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockledger.models.enums import AdjustmentMode


class AuditEntry(models.Model):
    """
    Immutable record of one applied adjustment.

    Rules:
    - NEVER update() or delete()
    - Written only by the adjustment engine, in the same transaction as
      the StockRecord write it describes
    - new_quantity - previous_quantity == change_amount
    - Corrections are new adjustments, never edits
    """

    record = models.ForeignKey(
        'stockledger.StockRecord',
        on_delete=models.PROTECT,
        related_name='entries',
        verbose_name=_('Stock record'),
    )
    # Denormalised so history reads don't need the join
    variant_id = models.CharField(max_length=64, db_index=True, verbose_name=_('Variant'))

    mode = models.CharField(
        max_length=10,
        choices=AdjustmentMode.choices,
        verbose_name=_('Mode'),
    )
    change_amount = models.IntegerField(
        verbose_name=_('Change'),
        help_text=_('Signed delta actually applied.'),
    )
    previous_quantity = models.IntegerField(verbose_name=_('Previous quantity'))
    new_quantity = models.IntegerField(verbose_name=_('New quantity'))

    reason = models.CharField(
        max_length=255,
        verbose_name=_('Reason'),
        help_text=_('Required. E.g. "Damaged in transit", "Restock PO-881"'),
    )
    metadata = models.JSONField(default=dict, blank=True, verbose_name=_('Metadata'))

    created_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Created at'))
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('User'),
    )

    class Meta:
        verbose_name = _('Audit entry')
        verbose_name_plural = _('Audit entries')
        ordering = ['created_at', 'pk']
        constraints = [
            models.CheckConstraint(
                condition=Q(change_amount=F('new_quantity') - F('previous_quantity')),
                name='auditentry_change_matches_quantities',
            ),
        ]
        indexes = [
            models.Index(fields=['variant_id', 'created_at'], name='auditentry_variant_created_idx'),
        ]

    def save(self, *args, **kwargs):
        # Immutability check
        if self.pk:
            raise ValueError(
                "Audit entries are immutable. "
                "To correct stock, apply a new adjustment."
            )

        if not self.reason or not self.reason.strip():
            raise ValueError("Reason is required")

        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Prevent deletion. Audit entries are immutable."""
        raise ValueError(
            "Audit entries are immutable. "
            "To revert, apply a new adjustment with the inverse change."
        )

    def __str__(self) -> str:
        signal = '+' if self.change_amount > 0 else ''
        return f"{self.variant_id} {signal}{self.change_amount} | {self.reason}"
