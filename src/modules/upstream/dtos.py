"""Upstream order payload DTOs.

Pydantic v2 models describing the subset of the upstream order record this
platform stores.  ``extra="ignore"`` makes the field list an explicit
allow-list: unknown upstream fields are dropped, never copied.

Coercion mirrors the upstream's loose typing:

- numbers arrive as numbers or numeric strings; anything else becomes ``None``
- dates may be full ISO timestamps; only the date part is kept
- slot times may be ``H:MM``, ``HH:MM`` or ``HH:MM:SS``
- booleans may be JSON booleans or the strings ``"true"`` / ``"false"``
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from datetime import timezone as dt_timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from django.utils import timezone
from django.utils.dateparse import parse_datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

# Locally owned once set: an upstream refresh only writes them when it
# carries a value.
KEEP_LOCAL_WHEN_ABSENT = ("store_address_id", "metadata")


# ---------------------------------------------------------------------------
# Coercers
# ---------------------------------------------------------------------------


def coerce_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool) or value == "":
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def coerce_date(value: Any) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    parsed = parse_datetime(text)
    if parsed is not None:
        return parsed.date()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def coerce_datetime(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = parse_datetime(str(value).strip())
        except ValueError:
            return None
    if parsed is not None and timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


def coerce_time(value: Any) -> Optional[time]:
    if not value:
        return None
    if isinstance(value, time):
        return value
    match = _TIME_RE.match(str(value).strip())
    if not match:
        return None
    hours, minutes, seconds = (int(part or 0) for part in match.groups())
    try:
        return time(hours, minutes, seconds)
    except ValueError:
        return None


def coerce_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def coerce_int(value: Any, default: int = 0) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def render_address(value: Dict[str, Any]) -> str:
    """Flatten a structured address into a single display line."""
    parts = [
        value.get(key)
        for key in (
            "address_line_1",
            "address_line1",
            "line1",
            "address_line_2",
            "address_line2",
            "line2",
            "landmark",
            "city",
            "state",
            "pincode",
        )
    ]
    return ", ".join(str(part).strip() for part in parts if part and str(part).strip())


# ---------------------------------------------------------------------------
# Payload DTOs
# ---------------------------------------------------------------------------


class UpstreamOrderItem(BaseModel):
    """A single upstream line item, normalized for local storage."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    product_id: Optional[str] = None
    product_name: str = "Item"
    product_image: str = ""
    product_price: Decimal = Decimal("0")
    service_type: str = "standard"
    service_price: Decimal = Decimal("0")
    quantity: int = 1
    total_price: Decimal = Decimal("0")

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        product_price = (
            coerce_decimal(data.get("product_price", data.get("price"))) or Decimal("0")
        )
        service_price = coerce_decimal(data.get("service_price")) or Decimal("0")
        quantity = max(coerce_int(data.get("quantity", 1), default=0), 0)
        total = coerce_decimal(data.get("total_price"))
        if total is None:
            total = (product_price + service_price) * quantity
        name = str(
            data.get("product_name") or data.get("name") or data.get("title") or ""
        ).strip()
        product_id = data.get("product_id")
        return {
            "product_id": str(product_id) if product_id is not None else None,
            "product_name": name or "Item",
            "product_image": str(
                data.get("product_image") or data.get("image") or data.get("photo") or ""
            ),
            "product_price": product_price,
            "service_type": str(data.get("service_type") or data.get("service") or "standard"),
            "service_price": service_price,
            "quantity": quantity,
            "total_price": total,
        }


class UpstreamOrderPayload(BaseModel):
    """Allow-listed view of an upstream order record."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    total_amount: Optional[Decimal] = None
    payment_method: Optional[str] = None
    payment_status: str = "pending"
    payment_id: Optional[str] = None
    order_status: Optional[str] = None
    pickup_date: Optional[date] = None
    pickup_slot_id: Optional[str] = None
    delivery_date: Optional[date] = None
    delivery_slot_id: Optional[str] = None
    delivery_type: Optional[str] = None
    delivery_address: Optional[str] = None
    address_details: Optional[Dict[str, Any]] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    store_address_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    applied_coupon_code: Optional[str] = None
    discount_amount: Optional[Decimal] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    can_be_cancelled: Optional[bool] = None
    original_pickup_slot_id: Optional[str] = None
    original_delivery_slot_id: Optional[str] = None
    pickup_slot_display_time: Optional[str] = None
    pickup_slot_start_time: Optional[time] = None
    pickup_slot_end_time: Optional[time] = None
    delivery_slot_display_time: Optional[str] = None
    delivery_slot_start_time: Optional[time] = None
    delivery_slot_end_time: Optional[time] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: Optional[List[UpstreamOrderItem]] = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def _reshape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("order_status") is None and isinstance(data.get("status"), str):
            data["order_status"] = data["status"]
        address = data.get("delivery_address")
        if isinstance(address, dict):
            data["delivery_address"] = render_address(address) or None
            if not isinstance(data.get("address_details"), dict):
                data["address_details"] = address
        raw_items = data.get("order_items")
        if not isinstance(raw_items, list):
            raw_items = data.get("items")
        data["items"] = raw_items if isinstance(raw_items, list) else None
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> str:
        text = "" if value is None else str(value).strip().lstrip("#").strip()
        if not text:
            raise ValueError("Upstream order has no id.")
        return text

    @field_validator(
        "payment_method",
        "payment_id",
        "pickup_slot_id",
        "delivery_slot_id",
        "original_pickup_slot_id",
        "original_delivery_slot_id",
        "store_address_id",
        "customer_phone",
        mode="before",
    )
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @field_validator("payment_status", mode="before")
    @classmethod
    def _default_payment_status(cls, value: Any) -> str:
        return str(value) if value else "pending"

    @field_validator("address_details", "metadata", mode="before")
    @classmethod
    def _dict_or_none(cls, value: Any) -> Optional[Dict[str, Any]]:
        return value if isinstance(value, dict) else None

    @field_validator("total_amount", "discount_amount", mode="before")
    @classmethod
    def _decimal(cls, value: Any) -> Optional[Decimal]:
        return coerce_decimal(value)

    @field_validator("pickup_date", "delivery_date", mode="before")
    @classmethod
    def _date(cls, value: Any) -> Optional[date]:
        return coerce_date(value)

    @field_validator("cancelled_at", "created_at", "updated_at", mode="before")
    @classmethod
    def _datetime(cls, value: Any) -> Optional[datetime]:
        return coerce_datetime(value)

    @field_validator(
        "pickup_slot_start_time",
        "pickup_slot_end_time",
        "delivery_slot_start_time",
        "delivery_slot_end_time",
        mode="before",
    )
    @classmethod
    def _time(cls, value: Any) -> Optional[time]:
        return coerce_time(value)

    @field_validator("can_be_cancelled", mode="before")
    @classmethod
    def _bool(cls, value: Any) -> Optional[bool]:
        return coerce_bool(value)

    # ------------------------------------------------------------------
    # Mapping to the local schema
    # ------------------------------------------------------------------

    def to_order_fields(self) -> Dict[str, Any]:
        """Local ``Order`` column values, excluding ``id`` and ``order_status``.

        The upstream's own status is kept as ``upstream_status``; the local
        lifecycle status is decided by the caller.  ``store_address_id`` and
        ``metadata`` are left out when the upstream has no value, so a
        refresh never clears the store picked at assignment time.
        """
        fields = self.model_dump(
            exclude={"id", "order_status", "items", "created_at", "updated_at"}
        )
        fields["upstream_status"] = self.order_status
        if fields["address_details"] is None:
            fields["address_details"] = {}
        for key in KEEP_LOCAL_WHEN_ABSENT:
            if fields[key] is None:
                del fields[key]
        return fields
