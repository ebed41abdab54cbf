"""Order, OrderItem, and OrderStatusHistory models.

Rules implemented:
- ``Order.id`` is the id assigned by the upstream order system.  It is the
  join key between both systems and is never generated locally.
- Imports upsert by that id, so re-importing overwrites instead of
  duplicating.
- Each ``order_status`` change generates a history record (signals).
- ``OrderItem`` rows are replaced wholesale on every import that carries
  line items.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from modules.core.models import BaseModel, TimestampedModel
from modules.orders.constants import OrderStatus, SourceSystem


class Order(TimestampedModel):
    """Local copy of an upstream order plus the local fulfillment status."""

    id: models.CharField = models.CharField(primary_key=True, max_length=64)
    courier_id: models.CharField = models.CharField(
        max_length=64, null=True, blank=True, db_index=True
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    payment_method: models.CharField = models.CharField(
        max_length=50, null=True, blank=True
    )
    payment_status: models.CharField = models.CharField(
        max_length=50, default="pending"
    )
    payment_id: models.CharField = models.CharField(
        max_length=128, null=True, blank=True
    )
    order_status: models.CharField = models.CharField(
        max_length=32,
        choices=OrderStatus.choices,
        default=OrderStatus.ACCEPTED,
    )
    upstream_status: models.CharField = models.CharField(
        max_length=32, null=True, blank=True
    )

    # Scheduling
    pickup_date: models.DateField = models.DateField(null=True, blank=True)
    pickup_slot_id: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )
    pickup_slot_display_time: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )
    pickup_slot_start_time: models.TimeField = models.TimeField(null=True, blank=True)
    pickup_slot_end_time: models.TimeField = models.TimeField(null=True, blank=True)
    original_pickup_slot_id: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )
    delivery_date: models.DateField = models.DateField(null=True, blank=True)
    delivery_slot_id: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )
    delivery_slot_display_time: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )
    delivery_slot_start_time: models.TimeField = models.TimeField(
        null=True, blank=True
    )
    delivery_slot_end_time: models.TimeField = models.TimeField(null=True, blank=True)
    original_delivery_slot_id: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )
    delivery_type: models.CharField = models.CharField(
        max_length=32, null=True, blank=True
    )

    # Customer and addresses
    customer_name: models.CharField = models.CharField(
        max_length=200, null=True, blank=True
    )
    customer_phone: models.CharField = models.CharField(
        max_length=32, null=True, blank=True
    )
    delivery_address: models.TextField = models.TextField(null=True, blank=True)
    address_details: models.JSONField = models.JSONField(default=dict, blank=True)
    store_address_id: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )
    # Free-form upstream extras; read only by the legacy store-id fallback.
    metadata: models.JSONField = models.JSONField(default=dict, blank=True)

    # Discounts and cancellation
    applied_coupon_code: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )
    discount_amount: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    cancelled_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    cancellation_reason: models.TextField = models.TextField(null=True, blank=True)
    can_be_cancelled: models.BooleanField = models.BooleanField(null=True, blank=True)

    source_system: models.CharField = models.CharField(
        max_length=32,
        choices=SourceSystem.choices,
        default=SourceSystem.UPSTREAM,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["order_status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.id} ({self.order_status})"


class OrderItem(BaseModel):
    """Line item snapshot copied from the upstream order."""

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product_id: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )
    product_name: models.CharField = models.CharField(max_length=255, default="Item")
    product_image: models.TextField = models.TextField(blank=True, default="")
    product_price: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    service_type: models.CharField = models.CharField(
        max_length=64, default="standard"
    )
    service_price: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(default=1)
    total_price: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    class Meta:
        db_table = "order_items"
        ordering = ["created_at"]

    def __str__(self) -> str:
        return f"{self.product_name} x{self.quantity}"


class OrderStatusHistory(BaseModel):
    """Append-only audit trail for ``Order.order_status`` transitions.

    Audit records are immutable.  Rows are written by the ``post_save``
    signal in ``modules.orders.signals``; ``notes`` may be provided by the
    writer through the transient ``_status_change_notes`` attribute.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status: models.CharField = models.CharField(  # noqa: DJ01
        max_length=32,
        choices=OrderStatus.choices,
        null=True,
        blank=True,
    )
    new_status: models.CharField = models.CharField(
        max_length=32,
        choices=OrderStatus.choices,
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_status_history"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["order", "-created_at"],
                name="osh_order_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order_id} : {self.old_status} -> {self.new_status}"
