"""Django ORM implementation of the store address repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError

from modules.stores.models import StoreAddress
from modules.stores.repositories.interfaces import IStoreAddressRepository

logger = structlog.get_logger(__name__)


class StoreAddressDjangoRepository(IStoreAddressRepository):
    def get_by_id(self, id: str) -> Optional[StoreAddress]:
        """Returns ``None`` for unknown or malformed ids."""
        try:
            return StoreAddress.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[StoreAddress]:
        queryset = StoreAddress.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: StoreAddress) -> StoreAddress:
        entity.save()
        return entity

    def create(self, data: Dict[str, Any]) -> StoreAddress:
        store = StoreAddress.objects.create(**data)
        logger.info("store_address.created", store_id=str(store.id))
        return store

    def delete(self, id: str) -> bool:
        store = self.get_by_id(id)
        if store is None:
            return False
        store.delete()
        logger.info("store_address.deleted", store_id=str(id))
        return True

    def get_default(self) -> Optional[StoreAddress]:
        return (
            StoreAddress.objects.filter(is_default=True)
            .order_by("-created_at")
            .first()
        )

    def get_earliest(self) -> Optional[StoreAddress]:
        return StoreAddress.objects.order_by("created_at").first()

    def clear_defaults(self, exclude_id: Any = None) -> int:
        queryset = StoreAddress.objects.filter(is_default=True)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.update(is_default=False)
