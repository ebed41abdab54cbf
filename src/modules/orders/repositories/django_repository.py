"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  Writes go
through ``Model.save()`` (never ``QuerySet.update()``) so the status
history signals fire for every ``order_status`` change.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

import structlog
from django.db import transaction
from django.db.models import QuerySet

from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        return (
            Order.objects.prefetch_related("items", "status_history")
            .filter(id=id)
            .first()
        )

    def exists(self, id: str) -> bool:
        return Order.objects.filter(id=id).exists()

    def queryset(self) -> QuerySet:
        return Order.objects.prefetch_related("items", "status_history")

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders; ``filters`` are passed to ``QuerySet.filter``."""
        queryset = Order.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        entity.save()
        logger.info("order.saved", order_id=entity.id)
        return entity

    @transaction.atomic
    def upsert(
        self,
        id: str,
        fields: Dict[str, Any],
        created_at: Any = None,
        notes: str = "",
    ) -> Tuple[Order, bool]:
        order = Order.objects.select_for_update().filter(id=id).first()
        created = order is None
        if created:
            order = Order(id=id)
            if created_at is not None:
                order.created_at = created_at

        for field, value in fields.items():
            setattr(order, field, value)
        if notes:
            order._status_change_notes = notes  # type: ignore[attr-defined]
        order.save()

        logger.info("order.upserted", order_id=id, created=created)
        return order, created

    @transaction.atomic
    def update_fields(
        self,
        id: str,
        fields: Dict[str, Any],
        notes: str = "",
    ) -> Optional[Order]:
        order = Order.objects.select_for_update().filter(id=id).first()
        if order is None:
            return None

        for field, value in fields.items():
            setattr(order, field, value)
        if notes:
            order._status_change_notes = notes  # type: ignore[attr-defined]
        order.save(update_fields=list(fields))

        logger.info("order.updated", order_id=id, fields=sorted(fields))
        return order

    @transaction.atomic
    def replace_items(
        self, order_id: str, items: Iterable[Dict[str, Any]]
    ) -> List[OrderItem]:
        deleted, _ = OrderItem.objects.filter(order_id=order_id).delete()
        created = OrderItem.objects.bulk_create(
            [OrderItem(order_id=order_id, **item) for item in items]
        )
        logger.info(
            "order.items_replaced",
            order_id=order_id,
            deleted=deleted,
            inserted=len(created),
        )
        return created
