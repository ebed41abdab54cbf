"""Courier service layer: courier pool and display-name resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog

from modules.couriers.dtos import CourierDTO, courier_display_name
from modules.couriers.exceptions import CourierNotFound

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractUser

    from modules.couriers.repositories.interfaces import ICourierRepository

logger = structlog.get_logger(__name__)


class CourierService:
    def __init__(self, courier_repository: ICourierRepository) -> None:
        self._courier_repo = courier_repository

    def list_couriers(self, available_only: bool = False) -> List[CourierDTO]:
        return [
            CourierDTO.from_user(user)
            for user in self._courier_repo.pool(available_only=available_only)
        ]

    def get_courier(self, courier_id: str) -> AbstractUser:
        """Raises ``CourierNotFound`` when *courier_id* is unknown."""
        user = self._courier_repo.get_by_id(courier_id)
        if user is None:
            raise CourierNotFound(f"Courier {courier_id} not found.")
        return user

    def display_name(self, courier_id: Optional[str]) -> str:
        """Display name for *courier_id*; never raises."""
        if not courier_id:
            return "Rider"
        user = self._courier_repo.get_by_id(courier_id)
        if user is None:
            logger.info("courier.unknown_id", courier_id=courier_id)
            return f"Rider-{str(courier_id)[:8]}"
        return courier_display_name(user)
