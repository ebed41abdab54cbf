"""Order repository interface.

Extends ``IRepository[Order]`` with the upsert-by-id semantics every
writer relies on (imports, the upstream poll, courier status updates).

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Tuple

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.orders.models import Order, OrderItem


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate (Order + OrderItems)."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with prefetched items and status history."""

    @abstractmethod
    def exists(self, id: str) -> bool:
        """Return ``True`` when a local order row exists for *id*."""

    @abstractmethod
    def queryset(self) -> QuerySet:
        """Base queryset for read APIs (filtering happens in the view)."""

    @abstractmethod
    def upsert(
        self,
        id: str,
        fields: Dict[str, Any],
        created_at: Any = None,
        notes: str = "",
    ) -> Tuple[Order, bool]:
        """Insert or overwrite the order *id*; returns ``(order, created)``.

        *created_at* is only applied to new rows.  *notes* annotates the
        status history record when the write changes ``order_status``.
        """

    @abstractmethod
    def update_fields(
        self,
        id: str,
        fields: Dict[str, Any],
        notes: str = "",
    ) -> Optional[Order]:
        """Update the given columns; ``None`` when the order does not exist."""

    @abstractmethod
    def replace_items(self, order_id: str, items: Iterable[Dict[str, Any]]) -> list[OrderItem]:
        """Delete the order's line items and insert *items* in their place."""
