"""Unit tests for order DTOs."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.orders.dtos import ImportOrderDTO, PollSummary

pytestmark = pytest.mark.unit


def test_import_dto_normalizes_order_id():
    assert ImportOrderDTO(order_id="  #UPS-1 ").order_id == "UPS-1"


@pytest.mark.parametrize("raw", ["", "   ", "#", None])
def test_import_dto_requires_order_id(raw):
    with pytest.raises(ValidationError):
        ImportOrderDTO(order_id=raw)


def test_import_dto_is_frozen():
    dto = ImportOrderDTO(order_id="UPS-1")
    with pytest.raises(ValidationError):
        dto.order_id = "UPS-2"


def test_poll_summary_defaults_to_zero():
    assert PollSummary().model_dump() == {
        "fetched": 0,
        "upserted": 0,
        "already_synced": 0,
        "stale": 0,
        "invalid": 0,
    }
