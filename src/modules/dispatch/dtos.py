"""Dispatch DTOs for the Service Layer."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from modules.dispatch.constants import AssignmentType
from modules.stores.dtos import AddressDTO
from modules.upstream.client import normalize_order_id


def _required_order_id(value: Any) -> str:
    normalized = normalize_order_id(value)
    if not normalized:
        raise ValueError("orderId is required.")
    return normalized


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class StatusUpdateDTO(BaseModel):
    """A courier-reported event for one order.

    The event is not validated here; the service rejects unknown events
    with the list of valid ones.
    """

    model_config = ConfigDict(frozen=True)

    order_id: str
    event: str
    courier_id: Optional[str] = None
    courier_name: Optional[str] = None

    @field_validator("order_id", mode="before")
    @classmethod
    def order_id_must_not_be_blank(cls, v: Any) -> str:
        return _required_order_id(v)

    @field_validator("event", mode="before")
    @classmethod
    def normalize_event(cls, v: Any) -> str:
        return str(v or "").strip().lower()

    @field_validator("courier_id", "courier_name", mode="before")
    @classmethod
    def blank_is_missing(cls, v: Any) -> Optional[str]:
        return _blank_to_none(v)


class StatusUpdateResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: str
    event: str
    local_order_status: str
    local_assignment_status: str
    upstream_status: Optional[str] = None
    upstream_synced: Optional[bool] = None
    assignment_synced: bool = True
    customer_notification: Optional[str] = None


class AssignOrderDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: str
    courier_id: str
    selected_address_id: Optional[str] = None
    assignment_type: AssignmentType = AssignmentType.PICKUP

    @field_validator("order_id", mode="before")
    @classmethod
    def order_id_must_not_be_blank(cls, v: Any) -> str:
        return _required_order_id(v)

    @field_validator("selected_address_id", mode="before")
    @classmethod
    def blank_is_missing(cls, v: Any) -> Optional[str]:
        return _blank_to_none(v)


class AssignmentContextDTO(BaseModel):
    """Pickup and dropoff sides of one leg."""

    model_config = ConfigDict(frozen=True)

    pickup: AddressDTO
    dropoff: AddressDTO
    type: AssignmentType


class ReadyToDispatchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: str
    local_order_status: str
    items_synced: int
    upstream_synced: bool
