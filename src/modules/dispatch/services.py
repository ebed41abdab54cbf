"""Dispatch service layer (Use Cases).

- ``StatusUpdateService``: the Status Update Router's single state machine.
  The generic endpoint and every rider alias call ``update_status``.
- ``AssignmentService``: assigns a courier (and optionally a store) to an
  order, importing unknown orders on first contact.
- ``AssignmentContextService``: resolves the pickup / dropoff addresses of
  one leg.
- ``ReadyToDispatchService`` and ``OrderStatusSyncService``: explicit,
  operator-driven upstream syncs.

Rules enforced:
- Unknown events and unknown orders are rejected before any write.
- The order write is authoritative.  Assignment writes and upstream
  mirrors are best-effort and reported, never rolled back into a failure.
- At most one upstream mirror call per status update.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog

from modules.couriers.dtos import courier_display_name
from modules.dispatch.constants import (
    VALID_EVENTS,
    AssignmentStatus,
    AssignmentType,
    event_status,
)
from modules.dispatch.dtos import (
    AssignmentContextDTO,
    ReadyToDispatchResult,
    StatusUpdateResult,
)
from modules.dispatch.exceptions import (
    AssignmentNotFound,
    AssignmentWriteFailed,
    UnknownCourierEvent,
)
from modules.dispatch.models import Assignment
from modules.orders.constants import OrderStatus
from modules.orders.dtos import ImportOrderDTO
from modules.orders.exceptions import OrderNotFound, UpstreamFetchFailed
from modules.stores.dtos import AddressDTO
from modules.upstream.constants import UpstreamStatus
from modules.upstream.dtos import render_address
from shared.domain.results import SyncResult

if TYPE_CHECKING:
    from modules.couriers.services import CourierService
    from modules.dispatch.dtos import AssignOrderDTO, StatusUpdateDTO
    from modules.dispatch.repositories.interfaces import IAssignmentRepository
    from modules.dispatch.synchronizer import AssignmentSynchronizer, AssignmentWriteResult
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.orders.services import OrderImportService
    from modules.stores.services import StoreAddressService
    from modules.upstream.mirror import UpstreamMirror

logger = structlog.get_logger(__name__)


class StatusUpdateService:
    def __init__(
        self,
        order_repository: IOrderRepository,
        assignment_repository: IAssignmentRepository,
        synchronizer: AssignmentSynchronizer,
        mirror: UpstreamMirror,
        courier_service: CourierService,
    ) -> None:
        self._order_repo = order_repository
        self._assignment_repo = assignment_repository
        self._synchronizer = synchronizer
        self._mirror = mirror
        self._courier_service = courier_service

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def update_status(self, dto: StatusUpdateDTO) -> StatusUpdateResult:
        """Apply a courier-reported event to the order and its assignment.

        Raises:
            UnknownCourierEvent: ``dto.event`` has no mapping entry.
            OrderNotFound: no local order with ``dto.order_id``.
        """
        log = logger.bind(order_id=dto.order_id, event=dto.event)

        mapping = event_status(dto.event)
        if mapping is None:
            log.warning("status_update.unknown_event")
            raise UnknownCourierEvent(dto.event, VALID_EVENTS)

        order_fields: Dict[str, Any] = {"order_status": mapping.order_status}
        if dto.courier_id:
            order_fields["courier_id"] = dto.courier_id
        order = self._order_repo.update_fields(
            dto.order_id, order_fields, notes=f"Courier event: {dto.event}"
        )
        if order is None:
            log.warning("status_update.order_not_found")
            raise OrderNotFound(f"Order {dto.order_id} not found.")

        context = f"status_update:{dto.event}"
        written = self._synchronizer.save(
            order.id,
            self._assignment_fields(order, dto, mapping.assignment_status),
            upstream_status=mapping.upstream_status,
            context=context,
        )
        if not written.write:
            log.warning("status_update.assignment_not_synced", error=written.write.error)

        mirrored: Optional[SyncResult] = written.mirror
        if mapping.upstream_status and not written.mirror_attempted:
            mirrored = self._mirror.mirror(order.id, mapping.upstream_status, context=context)

        log.info(
            "status_update.applied",
            order_status=mapping.order_status,
            assignment_status=mapping.assignment_status,
            upstream_status=mapping.upstream_status,
            upstream_synced=mirrored.ok if mirrored else None,
        )
        return StatusUpdateResult(
            order_id=order.id,
            event=dto.event,
            local_order_status=mapping.order_status,
            local_assignment_status=mapping.assignment_status,
            upstream_status=mapping.upstream_status,
            upstream_synced=mirrored.ok if mirrored else None,
            assignment_synced=written.write.ok,
            customer_notification=mapping.notification,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_assignment(self, order_id: str) -> Assignment:
        """Raises ``AssignmentNotFound`` when the order has no assignment."""
        assignment = self._assignment_repo.get_by_id(order_id)
        if assignment is None:
            raise AssignmentNotFound(f"No assignment for order {order_id}.")
        return assignment

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _assignment_fields(
        self, order: Order, dto: StatusUpdateDTO, assignment_status: str
    ) -> Dict[str, Any]:
        existing = self._assignment_repo.get_by_id(order.id)
        courier_id = (
            dto.courier_id
            or (existing.courier_id if existing else None)
            or order.courier_id
        )
        courier_name = (
            dto.courier_name
            or (existing.courier_name if existing else "")
            or self._courier_service.display_name(courier_id)
        )
        return {
            **Assignment.snapshot_from(order),
            "status": assignment_status,
            "courier_id": courier_id,
            "courier_name": courier_name,
        }


class AssignmentService:
    def __init__(
        self,
        order_repository: IOrderRepository,
        import_service: OrderImportService,
        courier_service: CourierService,
        store_service: StoreAddressService,
        synchronizer: AssignmentSynchronizer,
    ) -> None:
        self._order_repo = order_repository
        self._import_service = import_service
        self._courier_service = courier_service
        self._store_service = store_service
        self._synchronizer = synchronizer

    def assign(self, dto: AssignOrderDTO) -> AssignmentWriteResult:
        """Assign a courier to an order and mirror ``assigned`` upstream.

        Raises:
            CourierNotFound: unknown ``courier_id``.
            StoreAddressNotFound: unknown ``selected_address_id``.
            OrderNotFound: the order is unknown locally and upstream.
            UpstreamFetchFailed: the upstream could not be reached to import
                an unknown order.
            AssignmentWriteFailed: the assignment row could not be written.
        """
        log = logger.bind(order_id=dto.order_id, courier_id=dto.courier_id)

        courier = self._courier_service.get_courier(dto.courier_id)
        store = (
            self._store_service.get_address(dto.selected_address_id)
            if dto.selected_address_id
            else None
        )
        self._ensure_local(dto.order_id)

        order_fields: Dict[str, Any] = {
            "order_status": OrderStatus.ASSIGNED,
            "courier_id": str(courier.pk),
        }
        if store is not None:
            order_fields["store_address_id"] = str(store.id)
        order = self._order_repo.update_fields(
            dto.order_id, order_fields, notes=f"Assigned to courier {courier.pk}"
        )
        if order is None:
            raise OrderNotFound(f"Order {dto.order_id} not found.")

        written = self._synchronizer.save(
            order.id,
            {
                **Assignment.snapshot_from(order),
                "status": AssignmentStatus.ASSIGNED,
                "assignment_type": dto.assignment_type,
                "courier_id": str(courier.pk),
                "courier_name": courier_display_name(courier),
                "store_address_id": order.store_address_id,
            },
            upstream_status=UpstreamStatus.ASSIGNED,
            context="assign",
        )
        if not written.write:
            raise AssignmentWriteFailed(
                f"Failed to save assignment for order {order.id}: {written.write.error}"
            )

        log.info(
            "assignment.assigned",
            assignment_type=dto.assignment_type,
            store_address_id=order.store_address_id,
            upstream_synced=written.mirror.ok if written.mirror else None,
        )
        return written

    def _ensure_local(self, order_id: str) -> None:
        if self._order_repo.exists(order_id):
            return
        logger.info("assignment.importing_unknown_order", order_id=order_id)
        try:
            self._import_service.import_order(
                ImportOrderDTO(order_id=order_id, source="assign")
            )
        except UpstreamFetchFailed as exc:
            if exc.status_code == 404:
                raise OrderNotFound(f"Order {order_id} not found.") from exc
            raise


class AssignmentContextService:
    def __init__(
        self,
        order_repository: IOrderRepository,
        store_service: StoreAddressService,
    ) -> None:
        self._order_repo = order_repository
        self._store_service = store_service

    def get_context(
        self, order_id: str, assignment_type: str = AssignmentType.PICKUP
    ) -> AssignmentContextDTO:
        """Resolve both ends of the leg.

        ``pickup`` legs run customer to store, ``delivery`` legs store to
        customer.

        Raises:
            OrderNotFound: no local order with *order_id*.
            NoStoreAddressConfigured: no store address exists at all.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")

        customer = self._customer_address(order)
        store = AddressDTO.from_store(self._store_service.resolve_for_order(order))
        if assignment_type == AssignmentType.DELIVERY:
            return AssignmentContextDTO(
                pickup=store, dropoff=customer, type=AssignmentType.DELIVERY
            )
        return AssignmentContextDTO(
            pickup=customer, dropoff=store, type=AssignmentType.PICKUP
        )

    @staticmethod
    def _customer_address(order: Order) -> AddressDTO:
        details = order.address_details if isinstance(order.address_details, dict) else {}
        return AddressDTO(
            label=order.customer_name or "Customer",
            phone=order.customer_phone or None,
            address_text=order.delivery_address or render_address(details) or None,
            lat=_coordinate(details, "lat", "latitude"),
            lng=_coordinate(details, "lng", "longitude"),
        )


class ReadyToDispatchService:
    def __init__(
        self,
        order_repository: IOrderRepository,
        import_service: OrderImportService,
        mirror: UpstreamMirror,
    ) -> None:
        self._order_repo = order_repository
        self._import_service = import_service
        self._mirror = mirror

    def mark_ready(self, order_id: str) -> ReadyToDispatchResult:
        """Refresh the order from upstream and move it to ``ready_to_dispatch``.

        Raises:
            OrderNotFound: no local order with *order_id*.
            UpstreamFetchFailed: the refresh from upstream failed.
        """
        if not self._order_repo.exists(order_id):
            raise OrderNotFound(f"Order {order_id} not found.")

        refreshed = self._import_service.sync_order(order_id)
        order = self._order_repo.update_fields(
            order_id,
            {"order_status": OrderStatus.READY_TO_DISPATCH},
            notes="Ready to dispatch",
        )
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")

        mirrored = self._mirror.mirror(
            order_id, UpstreamStatus.READY_TO_DISPATCH, context="ready_to_dispatch"
        )
        logger.info(
            "order.ready_to_dispatch",
            order_id=order_id,
            upstream_synced=mirrored.ok,
        )
        return ReadyToDispatchResult(
            order_id=order_id,
            local_order_status=order.order_status,
            items_synced=refreshed.items.count(),
            upstream_synced=mirrored.ok,
        )


class OrderStatusSyncService:
    """Operator-driven mirror of an arbitrary upstream status."""

    def __init__(self, mirror: UpstreamMirror) -> None:
        self._mirror = mirror

    def sync(self, order_id: str, upstream_status: str) -> SyncResult:
        return self._mirror.mirror(order_id, upstream_status, context="manual_sync")


def _coordinate(details: Dict[str, Any], *keys: str) -> Optional[float]:
    for key in keys:
        value = details.get(key)
        if value is None or isinstance(value, bool):
            continue
        try:
            return float(value)
        except (TypeError, ValueError):
            continue
    return None
