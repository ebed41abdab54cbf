"""Store address repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.stores.models import StoreAddress


class IStoreAddressRepository(IRepository["StoreAddress"]):
    @abstractmethod
    def create(self, data: Dict[str, Any]) -> StoreAddress:
        """Insert a store address."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Delete by id; ``False`` when nothing was deleted."""

    @abstractmethod
    def get_default(self) -> Optional[StoreAddress]:
        """Most recently created store flagged ``is_default``."""

    @abstractmethod
    def get_earliest(self) -> Optional[StoreAddress]:
        """Earliest-created store, whatever its flags."""

    @abstractmethod
    def clear_defaults(self, exclude_id: Any = None) -> int:
        """Unset ``is_default`` on every store except *exclude_id*."""
