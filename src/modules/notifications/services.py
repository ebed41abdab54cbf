"""Best-effort notification writes.

A notification is never worth failing the operation that produced it:
database errors are logged and reported through ``SyncResult``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.db import DatabaseError, transaction

from modules.notifications.constants import Priority, RecipientType
from modules.notifications.models import Notification
from shared.domain.results import SyncResult

logger = structlog.get_logger(__name__)


def record_notification(
    *,
    notification_type: str,
    title: str,
    message: str = "",
    related_order_id: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
    recipient_type: str = RecipientType.ADMIN,
    priority: str = Priority.MEDIUM,
) -> SyncResult:
    try:
        # Savepoint: a failed insert must not poison the caller's transaction.
        with transaction.atomic():
            Notification.objects.create(
                recipient_type=recipient_type,
                notification_type=notification_type,
                title=title,
                message=message,
                data=data or {},
                priority=priority,
                related_order_id=related_order_id,
            )
    except DatabaseError as exc:
        logger.warning(
            "notification.insert_failed",
            notification_type=notification_type,
            order_id=related_order_id,
            error=str(exc),
        )
        return SyncResult.failure(str(exc))
    return SyncResult.success()
