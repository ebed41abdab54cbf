"""Upstream order system vocabulary.

The upstream system tracks a single status field per order with its own
wording; nothing outside ``modules.dispatch.constants`` should translate
local statuses into these values.
"""

from django.db import models


class UpstreamStatus(models.TextChoices):
    CONFIRMED = "confirmed", "Confirmed"
    ACCEPTED = "accepted", "Accepted"
    ASSIGNED = "assigned", "Assigned"
    WORKING_IN_PROGRESS = "working_in_progress", "Working in progress"
    REACHED = "reached", "Reached"
    DELIVERED_TO_STORE = "delivered_to_store", "Delivered to store"
    READY_TO_DISPATCH = "ready_to_dispatch", "Ready to dispatch"
    SHIPPED = "shipped", "Shipped"
    DELIVERED = "delivered", "Delivered"


ORDERS_PATH = "api/admin/orders"
ORDER_DETAIL_PATH = "api/admin/orders/{order_id}"

# Status codes meaning "this endpoint shape is not supported", as opposed
# to "the order does not exist".
UNSUPPORTED_ENDPOINT_STATUSES = frozenset({404, 405, 501})
