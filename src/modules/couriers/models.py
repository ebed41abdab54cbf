"""Courier profile extension.

Couriers are regular local users.  The profile row is optional: a user
without one is treated as active and available, so a missing profile never
blocks assignment.  ``NULL`` flags are treated the same way.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import TimestampedModel


class CourierProfile(TimestampedModel):
    user: models.OneToOneField = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="courier_profile",
    )
    first_name: models.CharField = models.CharField(
        max_length=150, blank=True, default=""
    )
    last_name: models.CharField = models.CharField(
        max_length=150, blank=True, default=""
    )
    phone: models.CharField = models.CharField(max_length=32, blank=True, default="")
    is_active: models.BooleanField = models.BooleanField(
        null=True, blank=True, default=True
    )
    is_available: models.BooleanField = models.BooleanField(
        null=True, blank=True, default=True
    )

    class Meta:
        db_table = "courier_profiles"

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part).strip()

    def __str__(self) -> str:
        return self.full_name or str(self.user)
