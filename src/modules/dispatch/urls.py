"""Dispatch URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.dispatch.views import (
    AssignmentContextView,
    AssignView,
    OrderStatusSyncView,
    ReadyToDispatchView,
    RiderWebhookView,
    StatusUpdateView,
)

# alias path -> courier event
RIDER_WEBHOOK_ALIASES = {
    "picked-up": "picked_up",
    "shipped": "shipped",
    "delivered-to-store": "delivered_to_store",
    "delivered-to-customer": "delivered_to_customer",
}

urlpatterns = [
    path("status-update", StatusUpdateView.as_view(), name="status_update"),
    *[
        path(
            f"rider-webhooks/{alias}",
            RiderWebhookView.as_view(event=event),
            name=f"rider_webhook_{event}",
        )
        for alias, event in RIDER_WEBHOOK_ALIASES.items()
    ],
    path("ready-to-dispatch", ReadyToDispatchView.as_view(), name="ready_to_dispatch"),
    path("order-status-sync", OrderStatusSyncView.as_view(), name="order_status_sync"),
    path("assign", AssignView.as_view(), name="assign"),
    path(
        "assignment-context/<str:order_id>",
        AssignmentContextView.as_view(),
        name="assignment_context",
    ),
]
