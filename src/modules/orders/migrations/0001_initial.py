import django.db.models.deletion
import django.utils.timezone
import uuid6
from decimal import Decimal
from django.db import migrations, models

ORDER_STATUS_CHOICES = [
    ("confirmed", "Confirmed"),
    ("accepted", "Accepted"),
    ("assigned", "Assigned"),
    ("picked_up", "Picked up"),
    ("in_transit", "In transit"),
    ("delivered_to_store", "Delivered to store"),
    ("ready_to_dispatch", "Ready to dispatch"),
    ("shipped", "Shipped"),
    ("delivered", "Delivered"),
    ("cancelled", "Cancelled"),
]


def _timestamps():
    return [
        (
            "created_at",
            models.DateTimeField(db_index=True, default=django.utils.timezone.now),
        ),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


def _uuid_pk():
    return (
        "id",
        models.UUIDField(
            default=uuid6.uuid7, editable=False, primary_key=True, serialize=False
        ),
    )


def _optional_char(max_length):
    return models.CharField(blank=True, max_length=max_length, null=True)


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                *_timestamps(),
                (
                    "id",
                    models.CharField(max_length=64, primary_key=True, serialize=False),
                ),
                (
                    "courier_id",
                    models.CharField(blank=True, db_index=True, max_length=64, null=True),
                ),
                (
                    "total_amount",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True
                    ),
                ),
                ("payment_method", _optional_char(50)),
                ("payment_status", models.CharField(default="pending", max_length=50)),
                ("payment_id", _optional_char(128)),
                (
                    "order_status",
                    models.CharField(
                        choices=ORDER_STATUS_CHOICES, default="accepted", max_length=32
                    ),
                ),
                ("upstream_status", _optional_char(32)),
                ("pickup_date", models.DateField(blank=True, null=True)),
                ("pickup_slot_id", _optional_char(64)),
                ("pickup_slot_display_time", _optional_char(64)),
                ("pickup_slot_start_time", models.TimeField(blank=True, null=True)),
                ("pickup_slot_end_time", models.TimeField(blank=True, null=True)),
                ("original_pickup_slot_id", _optional_char(64)),
                ("delivery_date", models.DateField(blank=True, null=True)),
                ("delivery_slot_id", _optional_char(64)),
                ("delivery_slot_display_time", _optional_char(64)),
                ("delivery_slot_start_time", models.TimeField(blank=True, null=True)),
                ("delivery_slot_end_time", models.TimeField(blank=True, null=True)),
                ("original_delivery_slot_id", _optional_char(64)),
                ("delivery_type", _optional_char(32)),
                ("customer_name", _optional_char(200)),
                ("customer_phone", _optional_char(32)),
                ("delivery_address", models.TextField(blank=True, null=True)),
                ("address_details", models.JSONField(blank=True, default=dict)),
                ("store_address_id", _optional_char(64)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("applied_coupon_code", _optional_char(64)),
                (
                    "discount_amount",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True
                    ),
                ),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("cancellation_reason", models.TextField(blank=True, null=True)),
                ("can_be_cancelled", models.BooleanField(blank=True, null=True)),
                (
                    "source_system",
                    models.CharField(
                        choices=[
                            ("upstream", "Upstream order system"),
                            ("local", "Local platform"),
                        ],
                        default="upstream",
                        max_length=32,
                    ),
                ),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["order_status"], name="orders_status_idx"),
                    models.Index(fields=["-created_at"], name="orders_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                *_timestamps(),
                _uuid_pk(),
                ("product_id", _optional_char(64)),
                ("product_name", models.CharField(default="Item", max_length=255)),
                ("product_image", models.TextField(blank=True, default="")),
                (
                    "product_price",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=12
                    ),
                ),
                ("service_type", models.CharField(default="standard", max_length=64)),
                (
                    "service_price",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=12
                    ),
                ),
                ("quantity", models.PositiveIntegerField(default=1)),
                (
                    "total_price",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=12
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "order_items",
                "ordering": ["created_at"],
            },
        ),
        migrations.CreateModel(
            name="OrderStatusHistory",
            fields=[
                *_timestamps(),
                _uuid_pk(),
                (
                    "old_status",
                    models.CharField(
                        blank=True,
                        choices=ORDER_STATUS_CHOICES,
                        max_length=32,
                        null=True,
                    ),
                ),
                (
                    "new_status",
                    models.CharField(choices=ORDER_STATUS_CHOICES, max_length=32),
                ),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_history",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "order_status_history",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["order", "-created_at"], name="osh_order_created_idx"
                    ),
                ],
            },
        ),
    ]
