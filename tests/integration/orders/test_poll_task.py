"""Integration tests for the periodic upstream order poll task."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from modules.orders import tasks
from modules.orders.models import Order
from modules.upstream.client import UpstreamClient
from modules.upstream.exceptions import UpstreamAPIError

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def _fresh_synced_set():
    tasks._synced_order_ids.clear()
    yield
    tasks._synced_order_ids.clear()


def test_poll_upserts_confirmed_and_accepted(upstream):
    upstream.add_order("P-1", order_status="confirmed")
    upstream.add_order("P-2", order_status="accepted")
    upstream.add_order("P-3", order_status="delivered")

    result = tasks.poll_upstream_orders.delay().get()

    assert result["status"] == "ok"
    assert result["upserted"] == 2
    assert set(Order.objects.values_list("id", flat=True)) == {"P-1", "P-2"}


def test_second_run_skips_synced_ids(upstream):
    upstream.add_order("P-1", order_status="confirmed")
    tasks.poll_upstream_orders()

    result = tasks.poll_upstream_orders()

    assert result["already_synced"] == 1
    assert result["upserted"] == 0


def test_not_configured_is_skipped(settings, upstream):
    settings.UPSTREAM_BASE_URL = ""

    assert tasks.poll_upstream_orders() == {"status": "skipped", "reason": "not_configured"}


def test_upstream_error_is_reported():
    with patch.object(
        UpstreamClient,
        "list_orders",
        side_effect=UpstreamAPIError("Upstream answered 503", status_code=503),
    ):
        result = tasks.poll_upstream_orders()

    assert result == {"status": "error", "error": "Upstream answered 503"}
    assert not Order.objects.exists()
