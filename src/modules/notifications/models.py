"""Admin-facing notification records.

Rows are written best-effort by other modules (see
``modules.notifications.services``) and read by the dashboard.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.notifications.constants import Priority, RecipientType


class Notification(BaseModel):
    recipient_type: models.CharField = models.CharField(
        max_length=16,
        choices=RecipientType.choices,
        default=RecipientType.ADMIN,
    )
    recipient_id: models.CharField = models.CharField(
        max_length=64, null=True, blank=True
    )
    notification_type: models.CharField = models.CharField(max_length=64)
    title: models.CharField = models.CharField(max_length=255)
    message: models.TextField = models.TextField(blank=True, default="")
    data: models.JSONField = models.JSONField(default=dict, blank=True)
    priority: models.CharField = models.CharField(
        max_length=16,
        choices=Priority.choices,
        default=Priority.MEDIUM,
    )
    is_read: models.BooleanField = models.BooleanField(default=False)
    related_order_id: models.CharField = models.CharField(
        max_length=64, null=True, blank=True, db_index=True
    )

    class Meta:
        db_table = "notifications"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"[{self.recipient_type}] {self.title}"
