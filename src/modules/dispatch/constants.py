"""Dispatch domain constants and the courier event mapping table.

Two status vocabularies meet here:

- ``OrderStatus`` (``modules.orders``): the coarse order lifecycle.
- ``AssignmentStatus``: the courier-facing sub-state of an assignment.

``EVENT_STATUS_MAP`` is the only place a courier-reported event is
translated into both local statuses and into the upstream system's
vocabulary.  Adding an event is a data change to this table.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from django.db import models

from modules.orders.constants import OrderStatus
from modules.upstream.constants import UpstreamStatus


class AssignmentStatus(models.TextChoices):
    ASSIGNED = "assigned", "Assigned"
    PICKED_UP = "picked_up", "Picked up"
    IN_TRANSIT = "in_transit", "In transit"
    REACHED = "reached", "Reached store"
    OUT_FOR_DELIVERY = "out_for_delivery", "Out for delivery"
    DELIVERED = "delivered", "Delivered"


class AssignmentType(models.TextChoices):
    PICKUP = "pickup", "Pickup (customer to store)"
    DELIVERY = "delivery", "Delivery (store to customer)"


@dataclass(frozen=True)
class StatusMapping:
    order_status: str
    assignment_status: str
    upstream_status: Optional[str]
    notification: Optional[str] = None


_PICKED_UP = StatusMapping(
    order_status=OrderStatus.PICKED_UP,
    assignment_status=AssignmentStatus.PICKED_UP,
    # The upstream operator confirms receipt explicitly; nothing is mirrored.
    upstream_status=None,
)
_IN_TRANSIT = StatusMapping(
    order_status=OrderStatus.IN_TRANSIT,
    assignment_status=AssignmentStatus.IN_TRANSIT,
    upstream_status=UpstreamStatus.WORKING_IN_PROGRESS,
)
_OUT_FOR_DELIVERY = StatusMapping(
    order_status=OrderStatus.SHIPPED,
    assignment_status=AssignmentStatus.OUT_FOR_DELIVERY,
    upstream_status=UpstreamStatus.SHIPPED,
    notification="Out for delivery",
)
_DELIVERED = StatusMapping(
    order_status=OrderStatus.DELIVERED,
    assignment_status=AssignmentStatus.DELIVERED,
    upstream_status=UpstreamStatus.DELIVERED,
    notification="Order completed",
)

EVENT_STATUS_MAP: Mapping[str, StatusMapping] = MappingProxyType(
    {
        # Pickup leg: customer -> store
        "picked_up": _PICKED_UP,
        "in_transit": _IN_TRANSIT,
        "reached": StatusMapping(
            order_status=OrderStatus.DELIVERED_TO_STORE,
            assignment_status=AssignmentStatus.REACHED,
            upstream_status=UpstreamStatus.REACHED,
        ),
        "delivered_to_store": StatusMapping(
            order_status=OrderStatus.DELIVERED_TO_STORE,
            assignment_status=AssignmentStatus.REACHED,
            upstream_status=UpstreamStatus.DELIVERED_TO_STORE,
        ),
        # Delivery leg: store -> customer
        "shipped": _OUT_FOR_DELIVERY,
        "out_for_delivery": _OUT_FOR_DELIVERY,
        "delivered": _DELIVERED,
        "delivered_to_customer": _DELIVERED,
    }
)

VALID_EVENTS: tuple[str, ...] = tuple(EVENT_STATUS_MAP)


def event_status(event: str) -> Optional[StatusMapping]:
    """Mapping entry for a courier-reported *event*, or ``None`` if unknown."""
    return EVENT_STATUS_MAP.get(event)


def upstream_status_for_assignment(status: str) -> Optional[str]:
    """Upstream status implied by an assignment entering *status*.

    Derived from the event of the same name, so ``picked_up`` and
    ``assigned`` imply nothing.
    """
    mapping = EVENT_STATUS_MAP.get(status)
    return mapping.upstream_status if mapping else None


# Order fields copied onto the assignment as a display snapshot.
SNAPSHOT_FIELDS = (
    "total_amount",
    "payment_method",
    "payment_status",
    "pickup_date",
    "pickup_slot_display_time",
    "delivery_date",
    "delivery_slot_display_time",
    "delivery_address",
    "address_details",
    "customer_name",
    "customer_phone",
)
