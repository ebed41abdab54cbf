"""Courier DTOs for the Service Layer."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractUser


class CourierDTO(BaseModel):
    """Immutable courier view used by the assignment UI.

    ``is_active`` / ``is_available`` come from the optional profile and
    default to ``True`` when the profile or the flag is missing.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    full_name: str
    email: Optional[str]
    phone: Optional[str]
    is_active: bool
    is_available: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: AbstractUser) -> CourierDTO:
        profile = getattr(user, "courier_profile", None)
        return cls(
            id=str(user.pk),
            full_name=courier_display_name(user),
            email=user.email or None,
            phone=(profile.phone if profile else "") or None,
            is_active=_flag(profile, "is_active"),
            is_available=_flag(profile, "is_available"),
            created_at=user.date_joined,
        )


def courier_display_name(user: Optional[AbstractUser]) -> str:
    """Best available display name for a courier.

    Profile full name, then account full name, email, profile phone, a
    ``Rider-<id prefix>`` placeholder, and finally ``"Rider"``.
    """
    if user is None:
        return "Rider"
    profile = getattr(user, "courier_profile", None)
    candidates = (
        profile.full_name if profile else "",
        user.get_full_name(),
        user.email,
        profile.phone if profile else "",
    )
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return f"Rider-{str(user.pk)[:8]}" if user.pk is not None else "Rider"


def _flag(profile, name: str) -> bool:
    value = getattr(profile, name, None) if profile is not None else None
    return value is not False
