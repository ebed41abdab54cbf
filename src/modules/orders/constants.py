"""Order domain constants.

``OrderStatus`` is the coarse, customer-facing lifecycle of a local order.
The courier-facing sub-states live on the assignment
(``modules.dispatch.constants.AssignmentStatus``); the two are related only
through the event mapping table in ``modules.dispatch.constants``.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    CONFIRMED = "confirmed", "Confirmed"
    ACCEPTED = "accepted", "Accepted"
    ASSIGNED = "assigned", "Assigned"
    PICKED_UP = "picked_up", "Picked up"
    IN_TRANSIT = "in_transit", "In transit"
    DELIVERED_TO_STORE = "delivered_to_store", "Delivered to store"
    READY_TO_DISPATCH = "ready_to_dispatch", "Ready to dispatch"
    SHIPPED = "shipped", "Shipped"
    DELIVERED = "delivered", "Delivered"
    CANCELLED = "cancelled", "Cancelled"


class SourceSystem(models.TextChoices):
    UPSTREAM = "upstream", "Upstream order system"
    LOCAL = "local", "Local platform"


# Imports always land here, whatever the upstream reports.
IMPORTED_ORDER_STATUS = OrderStatus.ACCEPTED

# Legacy keys under ``Order.metadata`` that may carry the pickup store id.
LEGACY_STORE_ID_KEYS = ("store_address_id", "pickup_store_address_id")
