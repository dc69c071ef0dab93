"""
Stock forecast — days until stockout from trailing sales velocity.

    average_daily_sales = units sold in window / FORECAST_WINDOW_DAYS
    days_until_stockout = floor(stock / average)
    days_until_reorder  = floor((stock - stock * REORDER_POINT_RATIO) / average)
    reorder_quantity    = ceil(average * REORDER_COVER_DAYS)

The denominator is the full window even for variants with a shorter sales
history; such forecasts are flagged ``low_confidence``. When nothing sold,
both day counts report NO_SALES_SENTINEL_DAYS instead of dividing by zero.

Arithmetic is done on Fractions so boundaries are exact; only the reported
average is rounded (2 decimal places).
"""

import logging
import math
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction

from django.utils import timezone

from stockledger.adapters.loader import get_catalog_backend, get_sales_backend
from stockledger.conf import ledger_settings
from stockledger.exceptions import StockError
from stockledger.models.record import StockRecord
from stockledger.results import StockForecast

logger = logging.getLogger('stockledger')

CENTS = Decimal('0.01')


def forecast(variant_id: str, now=None) -> StockForecast:
    """
    Estimate depletion for one tracked variant.

    Args:
        variant_id: Catalog variant identifier
        now: Reference datetime (None = timezone.now())

    Returns:
        StockForecast snapshot (advisory, never triggers a reorder)

    Raises:
        StockError('VARIANT_NOT_FOUND'): If no record exists
        StockError('NOT_TRACKED'): If the record does not track quantity
    """
    try:
        record = StockRecord.objects.get(variant_id=variant_id)
    except StockRecord.DoesNotExist:
        raise StockError('VARIANT_NOT_FOUND', variant_id=variant_id) from None

    if not record.track_quantity:
        raise StockError('NOT_TRACKED', variant_id=variant_id)

    now = now or timezone.now()
    window = ledger_settings.FORECAST_WINDOW_DAYS
    since = now - timedelta(days=window)

    total_sold = max(int(get_sales_backend().units_sold(variant_id, since, now)), 0)
    current = record.quantity
    average = Fraction(total_sold, window)

    days_until_stockout = days_until(current, average)
    ratio = Fraction(str(ledger_settings.REORDER_POINT_RATIO))
    days_until_reorder = days_until(current - current * ratio, average)
    reorder_quantity = math.ceil(average * ledger_settings.REORDER_COVER_DAYS)

    info = get_catalog_backend().get_variant(variant_id)
    result = StockForecast(
        variant_id=variant_id,
        product_name=info.name if info else ledger_settings.UNKNOWN_PRODUCT_NAME,
        current_stock=current,
        total_sold=total_sold,
        average_daily_sales=(Decimal(total_sold) / Decimal(window)).quantize(CENTS, ROUND_HALF_UP),
        days_until_stockout=days_until_stockout,
        suggested_reorder_date=(now + timedelta(days=days_until_reorder)).date(),
        suggested_reorder_quantity=reorder_quantity,
        low_confidence=record.created_at > since,
    )

    logger.debug(
        "stock.forecast",
        extra={
            "variant_id": variant_id,
            "total_sold": total_sold,
            "days_until_stockout": days_until_stockout,
        },
    )
    return result


def days_until(stock, average: Fraction) -> int:
    """
    Whole days until ``stock`` is consumed at ``average`` units/day.

    Zero velocity reports the sentinel; stock already at or below zero
    reports 0.
    """
    if average <= 0:
        return ledger_settings.NO_SALES_SENTINEL_DAYS
    return max(math.floor(Fraction(stock) / average), 0)
