"""Signals for automatic Order status history tracking."""

from __future__ import annotations

from typing import Optional, Protocol, cast

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from modules.orders.models import Order, OrderStatusHistory


class _OrderStatusAware(Protocol):
    _previous_status: str | None
    _status_change_notes: str | None


@receiver(pre_save, sender=Order)
def _capture_previous_status(sender, instance: Order, **kwargs) -> None:
    status_instance = cast(_OrderStatusAware, instance)
    # String primary keys are set before the first save, so ask the table.
    previous_status = (
        sender.objects.filter(pk=instance.pk)
        .values_list("order_status", flat=True)
        .first()
    )
    status_instance._previous_status = previous_status


@receiver(post_save, sender=Order)
def _create_status_history(sender, instance: Order, created: bool, **kwargs) -> None:
    update_fields = kwargs.get("update_fields")
    if update_fields is not None and "order_status" not in update_fields:
        _clear_transient_status_attrs(instance)
        return

    status_instance = cast(_OrderStatusAware, instance)
    previous_status: Optional[str] = getattr(status_instance, "_previous_status", None)
    notes = getattr(status_instance, "_status_change_notes", None)

    if not created and previous_status == instance.order_status:
        _clear_transient_status_attrs(instance)
        return

    if created and notes is None:
        notes = "Order imported"

    OrderStatusHistory.objects.create(
        order=instance,
        old_status=previous_status,
        new_status=instance.order_status,
        notes=notes or "",
    )

    _clear_transient_status_attrs(instance)


def _clear_transient_status_attrs(instance: Order) -> None:
    if hasattr(instance, "_previous_status"):
        delattr(instance, "_previous_status")
    if hasattr(instance, "_status_change_notes"):
        delattr(instance, "_status_change_notes")
