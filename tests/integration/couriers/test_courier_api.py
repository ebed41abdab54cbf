"""Integration tests for the courier pool API."""

from __future__ import annotations

import pytest
from django.contrib.auth import get_user_model

from modules.couriers.models import CourierProfile

pytestmark = pytest.mark.integration

URL = "/api/v1/couriers/"

User = get_user_model()


@pytest.fixture()
def couriers():
    ravi = User.objects.create_user(username="rider.ravi", password="x")
    CourierProfile.objects.create(user=ravi, first_name="Ravi", last_name="Kumar", phone="+919811111111")
    busy = User.objects.create_user(username="rider.busy", password="x")
    CourierProfile.objects.create(user=busy, first_name="Busy", is_available=False)
    bare = User.objects.create_user(
        username="rider.noprofile", password="x", email="bare@example.com"
    )
    return ravi, busy, bare


def _names(response):
    return sorted(row["full_name"] for row in response.json()["data"])


def test_requires_authentication(api_client):
    assert api_client.get(URL).status_code == 401


def test_lists_every_active_non_staff_user(staff_client, couriers):
    response = staff_client.get(URL)

    assert response.status_code == 200
    assert response.json()["ok"] is True
    assert _names(response) == ["Busy", "Ravi Kumar", "bare@example.com"]


def test_available_filter_keeps_couriers_without_profile(staff_client, couriers):
    response = staff_client.get(URL, {"available": "true"})

    assert _names(response) == ["Ravi Kumar", "bare@example.com"]


def test_courier_payload_shape(staff_client, couriers):
    ravi = couriers[0]

    rows = {row["id"]: row for row in staff_client.get(URL).json()["data"]}

    assert rows[str(ravi.pk)]["phone"] == "+919811111111"
    assert rows[str(ravi.pk)]["is_available"] is True
    assert rows[str(ravi.pk)]["email"] is None
