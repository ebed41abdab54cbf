"""Store address service layer.

Store resolution precedence for an order:

1. ``Order.store_address_id``.
2. Legacy ``Order.metadata`` keys (``store_address_id``,
   ``pickup_store_address_id``).  Kept only as a migration shim for orders
   imported before ``store_address_id`` became a column; every hit is
   logged so remaining callers can be found and the shim removed.
3. The default store (most recently created if several are flagged).
4. The earliest-created store.

With no store rows at all, ``NoStoreAddressConfigured`` is raised; there is
no synthesizable default.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import DatabaseError, transaction

from modules.orders.constants import LEGACY_STORE_ID_KEYS
from modules.stores.exceptions import NoStoreAddressConfigured, StoreAddressNotFound

if TYPE_CHECKING:
    from modules.orders.models import Order
    from modules.stores.dtos import CreateStoreAddressDTO
    from modules.stores.models import StoreAddress
    from modules.stores.repositories.interfaces import IStoreAddressRepository

logger = structlog.get_logger(__name__)


class StoreAddressService:
    def __init__(self, store_repository: IStoreAddressRepository) -> None:
        self._store_repo = store_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_address(self, dto: CreateStoreAddressDTO) -> StoreAddress:
        """Create a store address.

        When the new store is flagged default, other defaults are cleared
        first.  Clearing is best-effort: a failure is logged and the insert
        still happens.
        """
        if dto.is_default:
            try:
                with transaction.atomic():
                    cleared = self._store_repo.clear_defaults()
                logger.info("store_address.defaults_cleared", count=cleared)
            except DatabaseError as exc:
                logger.warning("store_address.clear_defaults_failed", error=str(exc))
        return self._store_repo.create(dto.model_dump())

    def delete_address(self, store_id: str) -> None:
        """Raises ``StoreAddressNotFound`` when *store_id* is unknown."""
        if not self._store_repo.delete(store_id):
            raise StoreAddressNotFound(f"Store address {store_id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_addresses(self) -> List[StoreAddress]:
        return self._store_repo.list()

    def get_address(self, store_id: str) -> StoreAddress:
        store = self._store_repo.get_by_id(store_id)
        if store is None:
            raise StoreAddressNotFound(f"Store address {store_id} not found.")
        return store

    def resolve_for_order(self, order: Order) -> StoreAddress:
        """Resolve the store an order is picked up to / delivered from.

        Raises:
            NoStoreAddressConfigured: no store address exists at all.
        """
        log = logger.bind(order_id=order.id)

        preferred_id = self._preferred_store_id(order)
        if preferred_id:
            store = self._store_repo.get_by_id(preferred_id)
            if store is not None:
                return store
            log.warning("store_address.preferred_missing", store_id=preferred_id)

        store = self._store_repo.get_default() or self._store_repo.get_earliest()
        if store is None:
            log.error("store_address.none_configured")
            raise NoStoreAddressConfigured("No store address is configured.")
        return store

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _preferred_store_id(order: Order) -> Optional[str]:
        if order.store_address_id:
            return order.store_address_id

        metadata = order.metadata if isinstance(order.metadata, dict) else {}
        for key in LEGACY_STORE_ID_KEYS:
            value = metadata.get(key)
            if value:
                logger.warning(
                    "store_address.legacy_metadata_key",
                    order_id=order.id,
                    key=key,
                )
                return str(value)
        return None
