"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``).

- ``ImportOrderDTO``: input for the Order Import Adapter.
- ``OrderImportResult``: outcome of an import or re-sync.
- ``PollSummary``: counters for one run of the upstream order poll.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from modules.upstream.client import normalize_order_id


class ImportOrderDTO(BaseModel):
    """Immutable DTO for import requests.

    ``order_id`` is normalized (trimmed, leading ``#`` removed) so every
    caller agrees on the join key.
    """

    model_config = ConfigDict(frozen=True)

    order_id: str
    source: Optional[str] = None

    @field_validator("order_id", mode="before")
    @classmethod
    def order_id_must_not_be_blank(cls, v: Any) -> str:
        normalized = normalize_order_id(v)
        if not normalized:
            raise ValueError("orderId is required.")
        return normalized


class OrderImportResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    local_order_id: str
    source_order_id: str
    created: bool
    items_synced: Optional[int] = None


class PollSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    fetched: int = 0
    upserted: int = 0
    already_synced: int = 0
    stale: int = 0
    invalid: int = 0
