"""Assignment Synchronizer.

Every write to an assignment goes through ``AssignmentSynchronizer.save``.
A write that moves the assignment into a sub-state the upstream knows
about is followed by a call to the Upstream Mirror Client, so callers
(webhooks, the assign flow, the Django admin) never PATCH the upstream
themselves.

The assignment table is secondary to the order table: a failed write is
logged and reported in the result, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import DatabaseError, transaction

from modules.dispatch.constants import upstream_status_for_assignment
from shared.domain.results import SyncResult

if TYPE_CHECKING:
    from modules.dispatch.models import Assignment
    from modules.dispatch.repositories.interfaces import IAssignmentRepository
    from modules.upstream.mirror import UpstreamMirror

logger = structlog.get_logger(__name__)

# Sentinel: derive the upstream status from the assignment transition.
DERIVED = object()


@dataclass(frozen=True)
class AssignmentWriteResult:
    assignment: Optional[Assignment]
    write: SyncResult
    mirror: Optional[SyncResult] = None
    previous_status: Optional[str] = None

    @property
    def mirror_attempted(self) -> bool:
        return self.mirror is not None


class AssignmentSynchronizer:
    def __init__(
        self,
        assignment_repository: IAssignmentRepository,
        mirror: UpstreamMirror,
    ) -> None:
        self._assignment_repo = assignment_repository
        self._mirror = mirror

    def save(
        self,
        order_id: str,
        fields: Dict[str, Any],
        *,
        upstream_status: Any = DERIVED,
        context: str = "",
    ) -> AssignmentWriteResult:
        """Upsert the assignment for *order_id* and mirror the transition.

        ``upstream_status`` selects what is mirrored after a successful
        write: an explicit status is always mirrored, ``None`` mirrors
        nothing, and the default derives the status from the new
        assignment ``status`` when it actually changed.
        """
        log = logger.bind(order_id=order_id, context=context)
        try:
            with transaction.atomic():
                assignment, previous_status = self._assignment_repo.upsert(
                    order_id, fields
                )
        except DatabaseError as exc:
            log.error("assignment.write_failed", error=str(exc))
            return AssignmentWriteResult(
                assignment=None, write=SyncResult.failure(str(exc))
            )

        target = upstream_status
        if target is DERIVED:
            target = None
            if assignment.status != previous_status:
                target = upstream_status_for_assignment(assignment.status)

        mirror_result = None
        if target:
            mirror_result = self._mirror.mirror(order_id, target, context=context)
            if not mirror_result:
                log.warning(
                    "assignment.mirror_failed",
                    upstream_status=target,
                    error=mirror_result.error,
                )

        return AssignmentWriteResult(
            assignment=assignment,
            write=SyncResult.success(),
            mirror=mirror_result,
            previous_status=previous_status,
        )
