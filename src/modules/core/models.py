"""Base abstract models shared by every dispatch module.

Provides:
- ``TimestampedModel``: ``created_at`` / ``updated_at`` bookkeeping only.
  Used by records whose primary key is owned by the upstream system
  (``Order``, ``Assignment``) and therefore never generated locally.
- ``BaseModel``: Extends TimestampedModel with a UUIDv7 primary key for
  records that originate locally (store addresses, line items, history).

``created_at`` defaults to *now* instead of ``auto_now_add`` so imports can
preserve the creation timestamp reported by the upstream system.
"""

from __future__ import annotations

import uuid6
from django.db import models
from django.utils import timezone


class TimestampedModel(models.Model):
    """Abstract base with creation / modification timestamps."""

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)


class BaseModel(TimestampedModel):
    """Abstract base with a UUIDv7 primary key."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )

    class Meta:
        abstract = True
