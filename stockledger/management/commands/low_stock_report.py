"""
Management command to report low and out of stock variants.

Usage:
    python manage.py low_stock_report
    python manage.py low_stock_report --json
    python manage.py low_stock_report --fail-on-alerts   # exit 1 if any
"""

import json
from dataclasses import asdict

from django.core.management.base import BaseCommand, CommandError

from stockledger import ledger


class Command(BaseCommand):
    """Low stock digest command."""

    help = 'Lists low stock and out of stock variants, most urgent first'

    def add_arguments(self, parser):
        parser.add_argument(
            '--json',
            action='store_true',
            help='Print the report as JSON',
        )
        parser.add_argument(
            '--fail-on-alerts',
            action='store_true',
            help='Exit with an error when any variant needs attention',
        )

    def handle(self, *args, **options):
        out_of_stock = ledger.scan_out_of_stock()
        low_stock = ledger.scan_low_stock()

        if options['json']:
            self.stdout.write(json.dumps({
                'out_of_stock': [asdict(a) for a in out_of_stock],
                'low_stock': [asdict(a) for a in low_stock],
            }, indent=2))
        else:
            self._write_section('Out of stock', out_of_stock, self.style.ERROR)
            self._write_section('Low stock', low_stock, self.style.WARNING)
            if not out_of_stock and not low_stock:
                self.stdout.write(self.style.SUCCESS('All tracked variants are in stock'))

        if options['fail_on_alerts'] and (out_of_stock or low_stock):
            raise CommandError(
                f'{len(out_of_stock)} out of stock, {len(low_stock)} low stock'
            )

    def _write_section(self, title, alerts, style):
        if not alerts:
            return
        self.stdout.write(style(f'{title} ({len(alerts)})'))
        for alert in alerts:
            label = alert.product_name
            if alert.variant_name:
                label = f'{label} / {alert.variant_name}'
            sku = alert.sku or alert.variant_id
            self.stdout.write(
                f'  {sku:<20} {label:<40} {alert.current_stock:>6} (threshold {alert.threshold})'
            )
