"""Pickup / store addresses.

``is_default`` marks the store used when an order carries no store id.
Uniqueness of the default is advisory: writers clear other defaults before
setting a new one, and readers pick the most recently created default if
several are flagged.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class StoreAddress(BaseModel):
    name: models.CharField = models.CharField(max_length=200)
    address_line_1: models.CharField = models.CharField(max_length=255)
    address_line_2: models.CharField = models.CharField(
        max_length=255, blank=True, default=""
    )
    landmark: models.CharField = models.CharField(
        max_length=255, blank=True, default=""
    )
    city: models.CharField = models.CharField(max_length=100, blank=True, default="")
    state: models.CharField = models.CharField(max_length=100, blank=True, default="")
    pincode: models.CharField = models.CharField(max_length=20, blank=True, default="")
    latitude: models.FloatField = models.FloatField(null=True, blank=True)
    longitude: models.FloatField = models.FloatField(null=True, blank=True)
    contact_name: models.CharField = models.CharField(
        max_length=200, blank=True, default=""
    )
    contact_phone: models.CharField = models.CharField(
        max_length=32, blank=True, default=""
    )
    is_default: models.BooleanField = models.BooleanField(default=False)

    class Meta:
        db_table = "store_addresses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["is_default", "-created_at"],
                name="store_default_created_idx",
            ),
        ]

    @property
    def address_text(self) -> str:
        locality = ", ".join(part for part in (self.city, self.state, self.pincode) if part)
        return ", ".join(
            part for part in (self.address_line_1, self.address_line_2, locality) if part
        )

    def __str__(self) -> str:
        return f"{self.name}{' (default)' if self.is_default else ''}"
