from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

import pytest

from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from modules.orders.constants import OrderStatus
from modules.orders.models import Order
from modules.upstream.client import UpstreamClient
from modules.upstream.exceptions import UpstreamAPIError

STATUS_SECRET = "test-status-secret"
IMPORT_SECRET = "test-import-secret"


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def webhook_client():
    """APIClient presenting the status webhook secret."""
    client = APIClient()
    client.credentials(HTTP_X_SHARED_SECRET=STATUS_SECRET)
    return client


@pytest.fixture()
def import_client():
    """APIClient presenting the import secret."""
    client = APIClient()
    client.credentials(HTTP_X_SHARED_SECRET=IMPORT_SECRET)
    return client


@pytest.fixture()
def staff_user():
    return get_user_model().objects.create_user(
        username="dispatcher", password="testpass123", is_staff=True
    )


@pytest.fixture()
def staff_client(staff_user):
    """APIClient with a force-authenticated staff user (JWT endpoints)."""
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


@pytest.fixture()
def order():
    return Order.objects.create(
        id="ORD1",
        order_status=OrderStatus.ACCEPTED,
        total_amount=Decimal("349.00"),
        payment_method="upi",
        customer_name="Asha Iyer",
        customer_phone="+919800000001",
        delivery_address="12th Main, HAL 2nd Stage, Bengaluru",
        address_details={"line1": "12th Main", "lat": 12.97, "lng": 77.64},
    )


class FakeUpstream:
    """In-memory stand-in for the upstream admin API.

    Patched over ``UpstreamClient``'s transport-level methods, so the
    client's own status lookup and fallback logic still runs.
    """

    def __init__(self) -> None:
        self.orders: dict[str, dict] = {}
        self.writes: list[tuple[str, str]] = []
        self.fail_writes = False
        self.fail_reads_with: int | None = None

    def add_order(self, order_id: str, **fields) -> dict:
        record = {"id": order_id, "order_status": "confirmed", **fields}
        self.orders[order_id] = record
        return record

    def get_order(self, order_id: str) -> dict:
        if self.fail_reads_with is not None:
            raise UpstreamAPIError(
                f"Upstream answered {self.fail_reads_with}",
                status_code=self.fail_reads_with,
                error_code="http_error",
            )
        if order_id not in self.orders:
            raise UpstreamAPIError(
                "Upstream answered 404", status_code=404, error_code="http_error"
            )
        return dict(self.orders[order_id])

    def list_orders(self, statuses=None) -> list[dict]:
        rows = list(self.orders.values())
        if statuses:
            rows = [row for row in rows if row.get("order_status") in statuses]
        return [dict(row) for row in rows]

    def update_order_status(self, order_id: str, status: str) -> dict:
        if self.fail_writes:
            raise UpstreamAPIError(
                "Upstream answered 500", status_code=500, error_code="http_error"
            )
        self.writes.append((order_id, status))
        self.orders.setdefault(order_id, {"id": order_id})["order_status"] = status
        return {"ok": True}


@pytest.fixture()
def upstream():
    fake = FakeUpstream()
    with patch.object(UpstreamClient, "get_order", side_effect=fake.get_order), \
            patch.object(UpstreamClient, "list_orders", side_effect=fake.list_orders), \
            patch.object(
                UpstreamClient,
                "update_order_status",
                side_effect=fake.update_order_status,
            ):
        yield fake
