"""Order DRF serializers for API input/output.

Business logic lives in the Service Layer, which receives Pydantic DTOs
from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderItem, OrderStatusHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class ImportOrderSerializer(serializers.Serializer):
    """Validates the ``POST /import-order`` payload."""

    orderId = serializers.CharField(max_length=64, trim_whitespace=True)
    source = serializers.CharField(
        max_length=64, required=False, allow_blank=True, allow_null=True
    )


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "product_image",
            "product_price",
            "service_type",
            "service_price",
            "quantity",
            "total_price",
        ]
        read_only_fields = fields


class StatusHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderStatusHistory
        fields = [
            "id",
            "old_status",
            "new_status",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for the order list (no nested relations)."""

    class Meta:
        model = Order
        fields = [
            "id",
            "order_status",
            "upstream_status",
            "courier_id",
            "customer_name",
            "total_amount",
            "payment_status",
            "pickup_date",
            "delivery_date",
            "source_system",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items and history."""

    items = OrderItemSerializer(many=True, read_only=True)
    status_history = StatusHistorySerializer(many=True, read_only=True)

    class Meta:
        model = Order
        exclude = ["metadata"]
