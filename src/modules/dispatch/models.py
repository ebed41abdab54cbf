"""Assignment ("assigned order") model.

One row per order, keyed by the order id.  ``status`` is the courier-facing
sub-state and is deliberately separate from ``Order.order_status``.  The
order columns copied here (``SNAPSHOT_FIELDS``) are a denormalized display
snapshot, not the source of truth.
"""

from __future__ import annotations

from typing import Any, Dict

from django.db import models

from modules.core.models import TimestampedModel
from modules.dispatch.constants import SNAPSHOT_FIELDS, AssignmentStatus, AssignmentType


class Assignment(TimestampedModel):
    order: models.OneToOneField = models.OneToOneField(
        "orders.Order",
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="assignment",
    )
    courier_id: models.CharField = models.CharField(
        max_length=64, null=True, blank=True, db_index=True
    )
    courier_name: models.CharField = models.CharField(
        max_length=200, blank=True, default=""
    )
    status: models.CharField = models.CharField(
        max_length=32,
        choices=AssignmentStatus.choices,
        default=AssignmentStatus.ASSIGNED,
    )
    assignment_type: models.CharField = models.CharField(
        max_length=16,
        choices=AssignmentType.choices,
        default=AssignmentType.PICKUP,
    )
    store_address_id: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )

    # Snapshot of the order
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    payment_method: models.CharField = models.CharField(
        max_length=50, null=True, blank=True
    )
    payment_status: models.CharField = models.CharField(
        max_length=50, null=True, blank=True
    )
    pickup_date: models.DateField = models.DateField(null=True, blank=True)
    pickup_slot_display_time: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )
    delivery_date: models.DateField = models.DateField(null=True, blank=True)
    delivery_slot_display_time: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )
    delivery_address: models.TextField = models.TextField(null=True, blank=True)
    address_details: models.JSONField = models.JSONField(default=dict, blank=True)
    customer_name: models.CharField = models.CharField(
        max_length=200, null=True, blank=True
    )
    customer_phone: models.CharField = models.CharField(
        max_length=32, null=True, blank=True
    )

    class Meta:
        db_table = "assigned_orders"
        ordering = ["-updated_at"]
        indexes = [
            models.Index(fields=["status"], name="assigned_status_idx"),
        ]

    @staticmethod
    def snapshot_from(order: Any) -> Dict[str, Any]:
        """Order column values to copy onto the assignment."""
        return {field: getattr(order, field) for field in SNAPSHOT_FIELDS}

    def __str__(self) -> str:
        return f"{self.order_id} [{self.status}] -> {self.courier_name or self.courier_id}"
