"""Django ORM implementation of the assignment repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import structlog
from django.db import transaction

from modules.dispatch.models import Assignment
from modules.dispatch.repositories.interfaces import IAssignmentRepository

logger = structlog.get_logger(__name__)


class AssignmentDjangoRepository(IAssignmentRepository):
    def get_by_id(self, id: str) -> Optional[Assignment]:
        return Assignment.objects.filter(order_id=id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Assignment]:
        queryset = Assignment.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: Assignment) -> Assignment:
        entity.save()
        return entity

    @transaction.atomic
    def upsert(
        self, order_id: str, fields: Dict[str, Any]
    ) -> Tuple[Assignment, Optional[str]]:
        assignment = (
            Assignment.objects.select_for_update().filter(order_id=order_id).first()
        )
        previous_status = assignment.status if assignment else None
        if assignment is None:
            assignment = Assignment(order_id=order_id)

        for field, value in fields.items():
            setattr(assignment, field, value)
        assignment.save()

        logger.info(
            "assignment.saved",
            order_id=order_id,
            previous_status=previous_status,
            status=assignment.status,
        )
        return assignment, previous_status
