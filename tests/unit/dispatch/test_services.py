"""Unit tests for the dispatch services.

Covers:
- StatusUpdateService: mapping applied to both tables, unknown events and
  orders rejected before any write, courier name precedence, one mirror
  per update, tolerated assignment and mirror failures.
- AssignmentService: validation before writes, import on first contact.
- AssignmentContextService: leg direction and store resolution errors.
- ReadyToDispatchService: refresh, status change, best-effort mirror.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from django.contrib.auth import get_user_model
from django.db import DatabaseError

from modules.couriers.exceptions import CourierNotFound
from modules.couriers.models import CourierProfile
from modules.couriers.repositories.django_repository import CourierDjangoRepository
from modules.couriers.services import CourierService
from modules.dispatch.dtos import AssignOrderDTO, StatusUpdateDTO
from modules.dispatch.exceptions import AssignmentNotFound, UnknownCourierEvent
from modules.dispatch.models import Assignment
from modules.dispatch.repositories.django_repository import AssignmentDjangoRepository
from modules.dispatch.services import (
    AssignmentContextService,
    AssignmentService,
    ReadyToDispatchService,
    StatusUpdateService,
)
from modules.dispatch.synchronizer import AssignmentSynchronizer
from modules.orders.constants import OrderStatus
from modules.orders.exceptions import OrderNotFound, UpstreamFetchFailed
from modules.orders.models import Order, OrderStatusHistory
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderImportService
from modules.stores.exceptions import NoStoreAddressConfigured, StoreAddressNotFound
from modules.stores.models import StoreAddress
from modules.stores.repositories.django_repository import StoreAddressDjangoRepository
from modules.stores.services import StoreAddressService
from modules.upstream.client import UpstreamClient
from modules.upstream.mirror import UpstreamMirror

pytestmark = pytest.mark.unit

User = get_user_model()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def courier():
    user = User.objects.create_user(username="rider.meera", password="x")
    CourierProfile.objects.create(user=user, first_name="Meera", last_name="Nair")
    return user


@pytest.fixture()
def store():
    return StoreAddress.objects.create(
        name="Indiranagar Hub",
        address_line_1="100 Feet Road",
        city="Bengaluru",
        latitude=12.97,
        longitude=77.64,
        contact_phone="+910000000000",
        is_default=True,
    )


@pytest.fixture()
def mirror():
    return UpstreamMirror(UpstreamClient.from_settings())


@pytest.fixture()
def status_service(mirror):
    assignment_repo = AssignmentDjangoRepository()
    return StatusUpdateService(
        order_repository=OrderDjangoRepository(),
        assignment_repository=assignment_repo,
        synchronizer=AssignmentSynchronizer(assignment_repo, mirror),
        mirror=mirror,
        courier_service=CourierService(courier_repository=CourierDjangoRepository()),
    )


@pytest.fixture()
def assignment_service(mirror):
    order_repo = OrderDjangoRepository()
    return AssignmentService(
        order_repository=order_repo,
        import_service=OrderImportService(
            order_repository=order_repo,
            upstream_client=UpstreamClient.from_settings(),
        ),
        courier_service=CourierService(courier_repository=CourierDjangoRepository()),
        store_service=StoreAddressService(store_repository=StoreAddressDjangoRepository()),
        synchronizer=AssignmentSynchronizer(AssignmentDjangoRepository(), mirror),
    )


# ---------------------------------------------------------------------------
# StatusUpdateService
# ---------------------------------------------------------------------------


class TestUpdateStatus:
    def test_picked_up_updates_both_tables_without_upstream_call(
        self, order, status_service, upstream
    ):
        result = status_service.update_status(
            StatusUpdateDTO(order_id="ORD1", event="picked_up")
        )

        order.refresh_from_db()
        assert order.order_status == "picked_up"
        assert Assignment.objects.get(order_id="ORD1").status == "picked_up"
        assert result.upstream_status is None
        assert result.upstream_synced is None
        assert upstream.writes == []

    def test_delivered_mirrors_once(self, order, status_service, upstream):
        upstream.add_order("ORD1", order_status="reached")

        result = status_service.update_status(
            StatusUpdateDTO(order_id="ORD1", event="delivered")
        )

        order.refresh_from_db()
        assert order.order_status == "delivered"
        assert result.local_assignment_status == "delivered"
        assert result.upstream_synced is True
        assert result.customer_notification == "Order completed"
        assert upstream.writes == [("ORD1", "delivered")]

    def test_delivered_skips_write_when_upstream_already_delivered(
        self, order, status_service, upstream
    ):
        upstream.add_order("ORD1", order_status="delivered")

        result = status_service.update_status(
            StatusUpdateDTO(order_id="ORD1", event="delivered")
        )

        assert result.upstream_synced is True
        assert upstream.writes == []

    def test_normalizes_order_id(self, order, status_service, upstream):
        result = status_service.update_status(
            StatusUpdateDTO(order_id="  #ORD1 ", event="picked_up")
        )

        assert result.order_id == "ORD1"

    def test_unknown_event_rejected_before_any_write(self, order, status_service, upstream):
        history_before = OrderStatusHistory.objects.count()

        with pytest.raises(UnknownCourierEvent) as exc_info:
            status_service.update_status(StatusUpdateDTO(order_id="ORD1", event="teleported"))

        assert "picked_up" in str(exc_info.value)
        order.refresh_from_db()
        assert order.order_status == OrderStatus.ACCEPTED
        assert not Assignment.objects.exists()
        assert OrderStatusHistory.objects.count() == history_before
        assert upstream.writes == []

    def test_unknown_order_raises(self, status_service, upstream):
        with pytest.raises(OrderNotFound):
            status_service.update_status(StatusUpdateDTO(order_id="NOPE", event="delivered"))

        assert not Assignment.objects.exists()
        assert upstream.writes == []

    def test_snapshot_copied_to_assignment(self, order, status_service, upstream):
        status_service.update_status(StatusUpdateDTO(order_id="ORD1", event="in_transit"))

        assignment = Assignment.objects.get(order_id="ORD1")
        assert assignment.customer_name == "Asha Iyer"
        assert assignment.total_amount == order.total_amount
        assert assignment.delivery_address == order.delivery_address

    def test_status_history_notes_event(self, order, status_service, upstream):
        status_service.update_status(StatusUpdateDTO(order_id="ORD1", event="picked_up"))

        last = OrderStatusHistory.objects.get(order_id="ORD1", new_status="picked_up")
        assert last.old_status == "accepted"
        assert last.new_status == "picked_up"
        assert last.notes == "Courier event: picked_up"


class TestCourierName:
    def test_explicit_name_wins(self, order, status_service, upstream, courier):
        status_service.update_status(
            StatusUpdateDTO(
                order_id="ORD1",
                event="picked_up",
                courier_id=str(courier.pk),
                courier_name="Rider Zed",
            )
        )

        assert Assignment.objects.get(order_id="ORD1").courier_name == "Rider Zed"

    def test_existing_name_kept(self, order, status_service, upstream):
        Assignment.objects.create(order=order, courier_id="42", courier_name="Kabir")

        status_service.update_status(StatusUpdateDTO(order_id="ORD1", event="picked_up"))

        assignment = Assignment.objects.get(order_id="ORD1")
        assert assignment.courier_name == "Kabir"
        assert assignment.courier_id == "42"

    def test_resolved_from_courier_profile(self, order, status_service, upstream, courier):
        status_service.update_status(
            StatusUpdateDTO(order_id="ORD1", event="picked_up", courier_id=str(courier.pk))
        )

        order.refresh_from_db()
        assert order.courier_id == str(courier.pk)
        assert Assignment.objects.get(order_id="ORD1").courier_name == "Meera Nair"

    def test_unknown_courier_gets_placeholder(self, order, status_service, upstream):
        status_service.update_status(
            StatusUpdateDTO(order_id="ORD1", event="picked_up", courier_id="98765432100")
        )

        assert Assignment.objects.get(order_id="ORD1").courier_name == "Rider-98765432"


class TestPartialFailures:
    def test_assignment_failure_still_mirrors_once(self, order, status_service, upstream):
        with patch.object(
            AssignmentDjangoRepository, "upsert", side_effect=DatabaseError("boom")
        ):
            result = status_service.update_status(
                StatusUpdateDTO(order_id="ORD1", event="delivered")
            )

        order.refresh_from_db()
        assert order.order_status == "delivered"
        assert result.assignment_synced is False
        assert result.upstream_synced is True
        assert upstream.writes == [("ORD1", "delivered")]

    def test_mirror_failure_is_not_fatal(self, order, status_service, upstream):
        upstream.fail_writes = True

        result = status_service.update_status(
            StatusUpdateDTO(order_id="ORD1", event="delivered")
        )

        order.refresh_from_db()
        assert order.order_status == "delivered"
        assert result.upstream_synced is False


class TestGetAssignment:
    def test_missing_assignment_raises(self, order, status_service):
        with pytest.raises(AssignmentNotFound):
            status_service.get_assignment("ORD1")


# ---------------------------------------------------------------------------
# AssignmentService
# ---------------------------------------------------------------------------


class TestAssign:
    def test_assigns_courier_and_store(
        self, order, courier, store, assignment_service, upstream
    ):
        result = assignment_service.assign(
            AssignOrderDTO(
                order_id="ORD1",
                courier_id=str(courier.pk),
                selected_address_id=str(store.id),
                assignment_type="delivery",
            )
        )

        order.refresh_from_db()
        assert order.order_status == "assigned"
        assert order.courier_id == str(courier.pk)
        assert order.store_address_id == str(store.id)
        assignment = Assignment.objects.get(order_id="ORD1")
        assert assignment.status == "assigned"
        assert assignment.assignment_type == "delivery"
        assert assignment.courier_name == "Meera Nair"
        assert result.mirror.ok
        assert upstream.writes == [("ORD1", "assigned")]

    def test_unknown_courier_rejected_before_writes(
        self, order, assignment_service, upstream
    ):
        with pytest.raises(CourierNotFound):
            assignment_service.assign(AssignOrderDTO(order_id="ORD1", courier_id="999"))

        order.refresh_from_db()
        assert order.order_status == "accepted"
        assert not Assignment.objects.exists()

    def test_unknown_store_rejected(self, order, courier, assignment_service, upstream):
        with pytest.raises(StoreAddressNotFound):
            assignment_service.assign(
                AssignOrderDTO(
                    order_id="ORD1",
                    courier_id=str(courier.pk),
                    selected_address_id="not-a-uuid",
                )
            )

    def test_imports_unknown_order(self, courier, assignment_service, upstream):
        upstream.add_order("UPS-7", customer_name="Rohan Das", order_status="confirmed")

        assignment_service.assign(AssignOrderDTO(order_id="UPS-7", courier_id=str(courier.pk)))

        order = Order.objects.get(id="UPS-7")
        assert order.order_status == "assigned"
        assert order.customer_name == "Rohan Das"

    def test_order_unknown_upstream_is_not_found(self, courier, assignment_service, upstream):
        with pytest.raises(OrderNotFound):
            assignment_service.assign(AssignOrderDTO(order_id="GHOST", courier_id=str(courier.pk)))

    def test_upstream_outage_propagates(self, courier, assignment_service, upstream):
        upstream.fail_reads_with = 503

        with pytest.raises(UpstreamFetchFailed):
            assignment_service.assign(AssignOrderDTO(order_id="UPS-8", courier_id=str(courier.pk)))

        assert not Order.objects.filter(id="UPS-8").exists()


# ---------------------------------------------------------------------------
# AssignmentContextService
# ---------------------------------------------------------------------------


class TestAssignmentContext:
    @pytest.fixture()
    def service(self):
        return AssignmentContextService(
            order_repository=OrderDjangoRepository(),
            store_service=StoreAddressService(store_repository=StoreAddressDjangoRepository()),
        )

    def test_pickup_leg_runs_customer_to_store(self, order, store, service):
        context = service.get_context("ORD1", "pickup")

        assert context.type == "pickup"
        assert context.pickup.label == "Asha Iyer"
        assert context.pickup.lat == 12.97
        assert context.dropoff.label == "Indiranagar Hub"

    def test_delivery_leg_runs_store_to_customer(self, order, store, service):
        context = service.get_context("ORD1", "delivery")

        assert context.pickup.label == "Indiranagar Hub"
        assert context.dropoff.address_text == order.delivery_address

    def test_no_store_configured_raises(self, order, service):
        with pytest.raises(NoStoreAddressConfigured):
            service.get_context("ORD1", "pickup")

    def test_unknown_order_raises(self, store, service):
        with pytest.raises(OrderNotFound):
            service.get_context("NOPE", "pickup")


# ---------------------------------------------------------------------------
# ReadyToDispatchService
# ---------------------------------------------------------------------------


class TestReadyToDispatch:
    @pytest.fixture()
    def service(self, mirror):
        order_repo = OrderDjangoRepository()
        return ReadyToDispatchService(
            order_repository=order_repo,
            import_service=OrderImportService(
                order_repository=order_repo,
                upstream_client=UpstreamClient.from_settings(),
            ),
            mirror=mirror,
        )

    def test_refreshes_items_and_mirrors(self, order, service, upstream):
        upstream.add_order(
            "ORD1",
            order_status="delivered_to_store",
            order_items=[{"product_name": "Shirt", "price": "49", "quantity": 2}],
        )

        result = service.mark_ready("ORD1")

        order.refresh_from_db()
        assert order.order_status == "ready_to_dispatch"
        assert result.items_synced == 1
        assert result.upstream_synced is True
        assert upstream.writes == [("ORD1", "ready_to_dispatch")]

    def test_unknown_order_raises(self, service, upstream):
        with pytest.raises(OrderNotFound):
            service.mark_ready("NOPE")

    def test_refresh_failure_raises(self, order, service, upstream):
        with pytest.raises(UpstreamFetchFailed):
            service.mark_ready("ORD1")

        order.refresh_from_db()
        assert order.order_status == "accepted"

    def test_mirror_failure_is_not_fatal(self, order, service, upstream):
        upstream.add_order("ORD1")
        upstream.fail_writes = True

        result = service.mark_ready("ORD1")

        assert result.local_order_status == "ready_to_dispatch"
        assert result.upstream_synced is False


def test_mirror_reads_before_writing():
    client = MagicMock()
    client.is_configured = True
    client.get_order_status.return_value = "delivered"

    result = UpstreamMirror(client).mirror("ORD1", "delivered")

    assert result.skipped
    client.update_order_status.assert_not_called()
