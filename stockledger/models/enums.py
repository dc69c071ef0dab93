"""
Enums for Stockledger models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class AdjustmentMode(models.TextChoices):
    """
    How an adjustment amount is applied to the current quantity.

    ADD:      quantity + amount
    SUBTRACT: quantity - amount
    SET:      amount (absolute count, e.g. after a physical inventory)
    """
    ADD = 'add', _('Add')
    SUBTRACT = 'subtract', _('Subtract')
    SET = 'set', _('Set')


class StockStatus(models.TextChoices):
    """Derived stock bucket (never persisted)."""
    IN_STOCK = 'in_stock', _('In stock')
    LOW_STOCK = 'low_stock', _('Low stock')
    OUT_OF_STOCK = 'out_of_stock', _('Out of stock')
