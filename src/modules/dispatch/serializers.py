"""Dispatch DRF serializers (input validation only).

Webhook payloads use the courier app's camelCase keys.  ``status`` is
accepted as an alias of ``event`` and ``riderId`` / ``riderName`` as
aliases of ``courierId`` / ``courierName``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.dispatch.constants import AssignmentType
from modules.upstream.client import normalize_order_id
from modules.upstream.constants import UpstreamStatus


class OrderIdField(serializers.CharField):
    """CharField that normalizes an order id and rejects a blank result."""

    default_error_messages = {"blank": "orderId is required."}

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("max_length", 64)
        super().__init__(**kwargs)

    def to_internal_value(self, data) -> str:
        value = normalize_order_id(super().to_internal_value(data))
        if not value:
            self.fail("blank")
        return value


class StatusUpdateSerializer(serializers.Serializer):
    orderId = OrderIdField()
    event = serializers.CharField(required=False, allow_blank=True)
    status = serializers.CharField(required=False, allow_blank=True)
    courierId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    courierName = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
    riderId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    riderName = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):
        event = (
            self.context.get("event") or attrs.get("event") or attrs.get("status")
        )
        if not event:
            raise serializers.ValidationError({"event": "event is required."})
        return {
            "order_id": attrs["orderId"],
            "event": event,
            "courier_id": attrs.get("courierId") or attrs.get("riderId"),
            "courier_name": attrs.get("courierName") or attrs.get("riderName"),
        }


class AssignSerializer(serializers.Serializer):
    orderId = OrderIdField()
    courierId = serializers.CharField(max_length=64)
    selectedAddressId = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
    assignmentType = serializers.ChoiceField(
        choices=AssignmentType.choices, default=AssignmentType.PICKUP
    )


class AssignmentContextQuerySerializer(serializers.Serializer):
    type = serializers.ChoiceField(
        choices=AssignmentType.choices, default=AssignmentType.PICKUP
    )


class OrderReferenceSerializer(serializers.Serializer):
    orderId = OrderIdField()


class OrderStatusSyncSerializer(serializers.Serializer):
    orderId = OrderIdField()
    status = serializers.ChoiceField(choices=UpstreamStatus.choices)
