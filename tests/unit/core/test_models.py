"""Unit tests for the abstract base models (exercised through concrete ones)."""

from __future__ import annotations

import uuid

import pytest

from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.unit


def test_base_model_generates_uuid7(order):
    item = OrderItem.objects.create(order=order, product_name="Shirt")

    assert isinstance(item.id, uuid.UUID)
    assert item.id.version == 7


def test_timestamped_model_keeps_explicit_created_at(order):
    created_at = order.created_at.replace(year=2024)
    other = Order.objects.create(id="ORD2", created_at=created_at)

    assert other.created_at == created_at
    assert other.updated_at >= other.created_at


def test_update_fields_always_touch_updated_at(order):
    original = order.updated_at

    order.customer_name = "Changed"
    order.save(update_fields=["customer_name"])

    assert Order.objects.get(id="ORD1").updated_at > original
