"""Django ORM implementation of the courier repository.

Couriers are local users that are not staff accounts.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from django.contrib.auth import get_user_model

from modules.couriers.repositories.interfaces import ICourierRepository


class CourierDjangoRepository(ICourierRepository):
    def _queryset(self):
        return (
            get_user_model()
            .objects.filter(is_staff=False, is_active=True)
            .select_related("courier_profile")
        )

    def get_by_id(self, id: str) -> Optional[Any]:
        """Returns ``None`` for unknown or malformed ids."""
        try:
            return self._queryset().filter(pk=id).first()
        except (TypeError, ValueError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Any]:
        queryset = self._queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: Any) -> Any:
        entity.save()
        return entity

    def pool(self, available_only: bool = False) -> List[Any]:
        queryset = self._queryset().order_by("-date_joined")
        if available_only:
            # exclude() keeps rows with no profile and NULL flags.
            queryset = queryset.exclude(courier_profile__is_active=False).exclude(
                courier_profile__is_available=False
            )
        return list(queryset)
