"""
Initial migration for Stockledger models.
"""

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import stockledger.models.record


class Migration(migrations.Migration):
    """Create Stockledger models: StockRecord, AuditEntry."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='StockRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('variant_id', models.CharField(help_text='Catalog variant identifier. Never created here.', max_length=64, unique=True, verbose_name='Variant')),
                ('sku', models.CharField(blank=True, db_index=True, max_length=100, null=True, verbose_name='SKU')),
                ('quantity', models.IntegerField(default=0, verbose_name='Quantity on hand')),
                ('reserved_quantity', models.PositiveIntegerField(default=0, help_text='Allocated to unfulfilled orders.', verbose_name='Reserved')),
                ('available_quantity', models.IntegerField(default=0, editable=False, help_text='Always quantity - reserved.', verbose_name='Available')),
                ('low_stock_threshold', models.PositiveIntegerField(default=stockledger.models.record.default_low_stock_threshold, verbose_name='Low stock threshold')),
                ('allow_backorders', models.BooleanField(default=False, help_text='If set, quantity may go below zero.', verbose_name='Allow backorders')),
                ('track_quantity', models.BooleanField(default=True, help_text='If unset, the item is treated as unlimited and ignored by alerts and forecasts.', verbose_name='Track quantity')),
                ('version', models.PositiveIntegerField(default=0, editable=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Stock record',
                'verbose_name_plural': 'Stock records',
                'ordering': ['quantity', 'variant_id'],
            },
        ),
        migrations.CreateModel(
            name='AuditEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('variant_id', models.CharField(db_index=True, max_length=64, verbose_name='Variant')),
                ('mode', models.CharField(choices=[('add', 'Add'), ('subtract', 'Subtract'), ('set', 'Set')], max_length=10, verbose_name='Mode')),
                ('change_amount', models.IntegerField(help_text='Signed delta actually applied.', verbose_name='Change')),
                ('previous_quantity', models.IntegerField(verbose_name='Previous quantity')),
                ('new_quantity', models.IntegerField(verbose_name='New quantity')),
                ('reason', models.CharField(help_text='Required. E.g. "Damaged in transit", "Restock PO-881"', max_length=255, verbose_name='Reason')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadata')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Created at')),
                ('record', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='entries', to='stockledger.stockrecord', verbose_name='Stock record')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Audit entry',
                'verbose_name_plural': 'Audit entries',
                'ordering': ['created_at', 'pk'],
            },
        ),
        # Indexes
        migrations.AddIndex(
            model_name='stockrecord',
            index=models.Index(fields=['track_quantity', 'quantity'], name='stockrecord_tracked_qty_idx'),
        ),
        migrations.AddIndex(
            model_name='auditentry',
            index=models.Index(fields=['variant_id', 'created_at'], name='auditentry_variant_created_idx'),
        ),
        # Invariants
        migrations.AddConstraint(
            model_name='stockrecord',
            constraint=models.CheckConstraint(condition=models.Q(('available_quantity', models.F('quantity') - models.F('reserved_quantity'))), name='stockrecord_available_consistent'),
        ),
        migrations.AddConstraint(
            model_name='stockrecord',
            constraint=models.CheckConstraint(condition=models.Q(('quantity__gte', 0), ('allow_backorders', True), _connector='OR'), name='stockrecord_no_negative_without_backorders'),
        ),
        migrations.AddConstraint(
            model_name='auditentry',
            constraint=models.CheckConstraint(condition=models.Q(('change_amount', models.F('new_quantity') - models.F('previous_quantity'))), name='auditentry_change_matches_quantities'),
        ),
    ]
