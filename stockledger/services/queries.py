"""
Stock queries — read-only operations.

All methods are classmethods and use no locking.
"""

from django.core.paginator import Paginator
from django.db.models import Q

from stockledger.adapters.loader import get_catalog_backend
from stockledger.conf import ledger_settings
from stockledger.exceptions import StockError
from stockledger.models.entry import AuditEntry
from stockledger.models.enums import StockStatus
from stockledger.models.record import StockRecord
from stockledger.results import InventoryItem, RecordPage


class StockQueries:
    """Read-only stock query methods."""

    @classmethod
    def get_record(cls, variant_id: str) -> StockRecord:
        """
        Ledger row for a variant.

        Raises:
            StockError('VARIANT_NOT_FOUND'): If no record exists
        """
        try:
            return StockRecord.objects.get(variant_id=variant_id)
        except StockRecord.DoesNotExist:
            raise StockError('VARIANT_NOT_FOUND', variant_id=variant_id) from None

    @classmethod
    def history(cls, variant_id: str, limit: int | None = None) -> list[AuditEntry]:
        """
        Audit entries for a variant, newest first.

        Args:
            variant_id: Catalog variant identifier
            limit: Maximum entries (None = HISTORY_LIMIT)

        Raises:
            StockError('INVALID_REQUEST'): If limit is not a positive int
            StockError('VARIANT_NOT_FOUND'): If no record exists
        """
        if limit is None:
            limit = ledger_settings.HISTORY_LIMIT
        cls._check_limit(limit)

        if not StockRecord.objects.for_variant(variant_id).exists():
            raise StockError('VARIANT_NOT_FOUND', variant_id=variant_id)

        return list(
            AuditEntry.objects.filter(variant_id=variant_id)
            .select_related('user')
            .order_by('-created_at', '-pk')[:limit]
        )

    @classmethod
    def list_records(cls, search: str | None = None, stock_status: str | None = 'all',
                     page: int = 1, limit: int = 50) -> RecordPage:
        """
        Paginated inventory list, lowest quantity first.

        Args:
            search: Matches SKU, variant id, or catalog product/variant name
            stock_status: in_stock, low_stock, out_of_stock or all
            page: 1-based page number (clamped to the last page)
            limit: Page size

        Raises:
            StockError('INVALID_REQUEST'): If stock_status is unknown or
                limit is not a positive int
        """
        if stock_status not in (None, '', 'all') and stock_status not in StockStatus.values:
            raise StockError('INVALID_REQUEST', stock_status=stock_status)
        cls._check_limit(limit)

        catalog = get_catalog_backend()
        qs = StockRecord.objects.with_status(stock_status)

        if search and search.strip():
            term = search.strip()
            matches = [info.variant_id for info in catalog.search_variants(term)]
            qs = qs.filter(
                Q(sku__icontains=term)
                | Q(variant_id__icontains=term)
                | Q(variant_id__in=matches)
            )

        paginator = Paginator(qs.order_by('quantity', 'variant_id'), limit)
        page_obj = paginator.get_page(page)
        records = list(page_obj.object_list)
        infos = catalog.get_variants([r.variant_id for r in records]) if records else {}

        return RecordPage(
            items=[cls._to_item(record, infos.get(record.variant_id)) for record in records],
            page=page_obj.number,
            limit=limit,
            total=paginator.count,
            total_pages=paginator.num_pages if paginator.count else 0,
        )

    @classmethod
    def _check_limit(cls, limit):
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise StockError('INVALID_REQUEST', 'Limit must be a positive integer', limit=limit)

    @classmethod
    def _to_item(cls, record: StockRecord, info) -> InventoryItem:
        return InventoryItem(
            variant_id=record.variant_id,
            product_name=info.name if info else ledger_settings.UNKNOWN_PRODUCT_NAME,
            sku=(info.sku if info and info.sku else record.sku),
            variant_name=info.variant_name if info else None,
            quantity=record.quantity,
            reserved_quantity=record.reserved_quantity,
            available_quantity=record.available_quantity,
            low_stock_threshold=record.low_stock_threshold,
            allow_backorders=record.allow_backorders,
            track_quantity=record.track_quantity,
            status=str(record.status),
        )
