"""Courier repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractUser


class ICourierRepository(IRepository["AbstractUser"]):
    @abstractmethod
    def pool(self, available_only: bool = False) -> List[AbstractUser]:
        """Couriers, newest first; optionally only the assignable ones.

        Assignable means neither profile flag is ``False``; a missing
        profile or a ``NULL`` flag counts as ``True``.
        """
