"""Store DTOs for the Service Layer.

- ``CreateStoreAddressDTO``: input for store address creation.
- ``AddressDTO``: flattened, system-agnostic presentation of either a
  customer or a store address, as used by the assignment context.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from modules.stores.models import StoreAddress


class CreateStoreAddressDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    address_line_1: str
    address_line_2: str = ""
    landmark: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    contact_name: str = ""
    contact_phone: str = ""
    is_default: bool = False

    @field_validator("name", "address_line_1")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("This field may not be blank.")
        return v


class AddressDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: Optional[str]
    phone: Optional[str] = None
    address_text: Optional[str]
    lat: Optional[float]
    lng: Optional[float]

    @classmethod
    def from_store(cls, store: StoreAddress) -> AddressDTO:
        return cls(
            label=store.name or store.contact_name or "Store",
            phone=store.contact_phone or None,
            address_text=store.address_text or None,
            lat=store.latitude,
            lng=store.longitude,
        )
