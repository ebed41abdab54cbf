"""Assignment repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.dispatch.models import Assignment


class IAssignmentRepository(IRepository["Assignment"]):
    @abstractmethod
    def upsert(
        self, order_id: str, fields: Dict[str, Any]
    ) -> Tuple[Assignment, Optional[str]]:
        """Read-modify-write the assignment for *order_id*.

        Returns ``(assignment, previous_status)``; ``previous_status`` is
        ``None`` when the row was created.
        """
