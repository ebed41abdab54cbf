"""Unit tests for the courier event mapping table."""

from __future__ import annotations

import pytest

from modules.dispatch.constants import (
    EVENT_STATUS_MAP,
    VALID_EVENTS,
    AssignmentStatus,
    event_status,
    upstream_status_for_assignment,
)
from modules.orders.constants import OrderStatus
from modules.upstream.constants import UpstreamStatus

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "event, order_status, assignment_status, upstream_status, notifies",
    [
        ("picked_up", "picked_up", "picked_up", None, False),
        ("in_transit", "in_transit", "in_transit", "working_in_progress", False),
        ("reached", "delivered_to_store", "reached", "reached", False),
        (
            "delivered_to_store",
            "delivered_to_store",
            "reached",
            "delivered_to_store",
            False,
        ),
        ("shipped", "shipped", "out_for_delivery", "shipped", True),
        ("out_for_delivery", "shipped", "out_for_delivery", "shipped", True),
        ("delivered", "delivered", "delivered", "delivered", True),
        ("delivered_to_customer", "delivered", "delivered", "delivered", True),
    ],
)
def test_event_mapping(event, order_status, assignment_status, upstream_status, notifies):
    mapping = event_status(event)

    assert mapping is not None
    assert mapping.order_status == order_status
    assert mapping.assignment_status == assignment_status
    assert mapping.upstream_status == upstream_status
    assert bool(mapping.notification) is notifies


def test_delivered_notifies_order_completed():
    assert event_status("delivered").notification == "Order completed"


@pytest.mark.parametrize("event", ["", "PICKED_UP", "cancelled", "unknown"])
def test_unknown_events_have_no_mapping(event):
    assert event_status(event) is None


def test_mapping_table_is_read_only():
    with pytest.raises(TypeError):
        EVENT_STATUS_MAP["lost"] = EVENT_STATUS_MAP["delivered"]  # type: ignore[index]


def test_every_mapped_status_is_a_known_choice():
    for mapping in EVENT_STATUS_MAP.values():
        assert mapping.order_status in OrderStatus.values
        assert mapping.assignment_status in AssignmentStatus.values
        if mapping.upstream_status is not None:
            assert mapping.upstream_status in UpstreamStatus.values


def test_valid_events_lists_every_entry():
    assert set(VALID_EVENTS) == set(EVENT_STATUS_MAP)


class TestUpstreamStatusForAssignment:
    def test_picked_up_mirrors_nothing(self):
        assert upstream_status_for_assignment(AssignmentStatus.PICKED_UP) is None

    def test_assigned_mirrors_nothing(self):
        assert upstream_status_for_assignment(AssignmentStatus.ASSIGNED) is None

    def test_delivered_mirrors_delivered(self):
        assert upstream_status_for_assignment(AssignmentStatus.DELIVERED) == "delivered"

    def test_reached_mirrors_reached(self):
        assert upstream_status_for_assignment(AssignmentStatus.REACHED) == "reached"
