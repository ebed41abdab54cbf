"""Dispatch API views.

Webhook endpoints (shared secret, ``STATUS_WEBHOOK_SECRET``):

- ``StatusUpdateView``: ``POST /status-update`` and ``GET /status-update``.
- ``RiderWebhookView``: ``POST /rider-webhooks/<alias>``, a fixed-event
  alias of ``POST /status-update``.
- ``ReadyToDispatchView``: ``POST /ready-to-dispatch``.
- ``OrderStatusSyncView``: ``POST /order-status-sync``.

Staff endpoints (JWT): ``AssignView`` and ``AssignmentContextView``.

Domain exceptions are caught and translated into HTTP status codes here;
nothing below the view layer knows about HTTP.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.authentication import StatusWebhookAuthentication
from modules.couriers.exceptions import CourierNotFound
from modules.couriers.repositories.django_repository import CourierDjangoRepository
from modules.couriers.services import CourierService
from modules.dispatch.dtos import AssignOrderDTO, StatusUpdateDTO
from modules.dispatch.exceptions import (
    AssignmentNotFound,
    AssignmentWriteFailed,
    UnknownCourierEvent,
)
from modules.dispatch.repositories.django_repository import AssignmentDjangoRepository
from modules.dispatch.serializers import (
    AssignmentContextQuerySerializer,
    AssignSerializer,
    OrderReferenceSerializer,
    OrderStatusSyncSerializer,
    StatusUpdateSerializer,
)
from modules.dispatch.services import (
    AssignmentContextService,
    AssignmentService,
    OrderStatusSyncService,
    ReadyToDispatchService,
    StatusUpdateService,
)
from modules.dispatch.synchronizer import AssignmentSynchronizer
from modules.orders.exceptions import OrderNotFound, UpstreamFetchFailed
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderImportService
from modules.stores.exceptions import NoStoreAddressConfigured, StoreAddressNotFound
from modules.stores.repositories.django_repository import StoreAddressDjangoRepository
from modules.stores.services import StoreAddressService
from modules.upstream.client import UpstreamClient, normalize_order_id
from modules.upstream.mirror import UpstreamMirror


def _error(message: str, code: int, **extra) -> Response:
    return Response({"ok": False, "error": message, **extra}, status=code)


class WebhookView(APIView):
    authentication_classes = [StatusWebhookAuthentication]
    permission_classes = [IsAuthenticated]
    throttle_scope = "webhooks"


class StatusUpdateView(WebhookView):
    """Courier status webhook.

    POST applies an event; GET returns the assignment's current sub-status.
    """

    event: str = ""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        mirror = UpstreamMirror(UpstreamClient.from_settings())
        assignment_repo = AssignmentDjangoRepository()
        self._service = StatusUpdateService(
            order_repository=OrderDjangoRepository(),
            assignment_repository=assignment_repo,
            synchronizer=AssignmentSynchronizer(assignment_repo, mirror),
            mirror=mirror,
            courier_service=CourierService(courier_repository=CourierDjangoRepository()),
        )

    def get(self, request: Request) -> Response:
        """GET /api/v1/status-update?orderId="""
        order_id = normalize_order_id(request.query_params.get("orderId"))
        if not order_id:
            return _error("orderId is required", status.HTTP_400_BAD_REQUEST)
        try:
            assignment = self._service.get_assignment(order_id)
        except AssignmentNotFound:
            return _error("Order not found", status.HTTP_404_NOT_FOUND)
        return Response(
            {
                "ok": True,
                "orderId": order_id,
                "status": assignment.status,
                "updatedAt": assignment.updated_at.isoformat(),
            }
        )

    def post(self, request: Request) -> Response:
        """POST /api/v1/status-update"""
        serializer = StatusUpdateSerializer(
            data=request.data, context={"event": self.event}
        )
        serializer.is_valid(raise_exception=True)
        dto = StatusUpdateDTO(**serializer.validated_data)

        try:
            result = self._service.update_status(dto)
        except UnknownCourierEvent as exc:
            return _error(
                str(exc), status.HTTP_400_BAD_REQUEST, validEvents=list(exc.valid_events)
            )
        except OrderNotFound:
            return _error("Order not found", status.HTTP_404_NOT_FOUND)

        return Response(
            {
                "ok": True,
                "orderId": result.order_id,
                "event": result.event,
                "localOrderStatus": result.local_order_status,
                "localAssignmentStatus": result.local_assignment_status,
                "upstreamStatus": result.upstream_status,
                "upstreamSynced": result.upstream_synced,
                "assignmentSynced": result.assignment_synced,
                "customerNotification": result.customer_notification,
            }
        )


class RiderWebhookView(StatusUpdateView):
    """Fixed-event alias of ``StatusUpdateView``; routed with ``event=...``."""

    http_method_names = ["post", "options"]


class ReadyToDispatchView(WebhookView):
    """POST /api/v1/ready-to-dispatch

    424 when the upstream refresh fails; the upstream mirror afterwards is
    best-effort.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        client = UpstreamClient.from_settings()
        self._service = ReadyToDispatchService(
            order_repository=OrderDjangoRepository(),
            import_service=OrderImportService(
                order_repository=OrderDjangoRepository(), upstream_client=client
            ),
            mirror=UpstreamMirror(client),
        )

    def post(self, request: Request) -> Response:
        serializer = OrderReferenceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order_id = serializer.validated_data["orderId"]

        try:
            result = self._service.mark_ready(order_id)
        except OrderNotFound:
            return _error("Order not found", status.HTTP_404_NOT_FOUND)
        except UpstreamFetchFailed as exc:
            return _error(str(exc), status.HTTP_424_FAILED_DEPENDENCY)

        return Response(
            {
                "ok": True,
                "orderId": result.order_id,
                "localOrderStatus": result.local_order_status,
                "itemsSynced": result.items_synced,
                "upstreamSynced": result.upstream_synced,
            }
        )


class OrderStatusSyncView(WebhookView):
    """POST /api/v1/order-status-sync"""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderStatusSyncService(
            mirror=UpstreamMirror(UpstreamClient.from_settings())
        )

    def post(self, request: Request) -> Response:
        serializer = OrderStatusSyncSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order_id = serializer.validated_data["orderId"]
        upstream_status = serializer.validated_data["status"]

        result = self._service.sync(order_id, upstream_status)
        if not result:
            return _error(
                f"Upstream sync failed: {result.error}",
                status.HTTP_424_FAILED_DEPENDENCY,
            )
        return Response(
            {
                "ok": True,
                "orderId": order_id,
                "status": upstream_status,
                "skipped": result.skipped,
            }
        )


class AssignView(APIView):
    """POST /api/v1/assign"""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        client = UpstreamClient.from_settings()
        order_repo = OrderDjangoRepository()
        self._service = AssignmentService(
            order_repository=order_repo,
            import_service=OrderImportService(
                order_repository=order_repo, upstream_client=client
            ),
            courier_service=CourierService(courier_repository=CourierDjangoRepository()),
            store_service=StoreAddressService(
                store_repository=StoreAddressDjangoRepository()
            ),
            synchronizer=AssignmentSynchronizer(
                AssignmentDjangoRepository(), UpstreamMirror(client)
            ),
        )

    def post(self, request: Request) -> Response:
        serializer = AssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        dto = AssignOrderDTO(
            order_id=data["orderId"],
            courier_id=data["courierId"],
            selected_address_id=data.get("selectedAddressId"),
            assignment_type=data["assignmentType"],
        )

        try:
            result = self._service.assign(dto)
        except CourierNotFound:
            return _error("Courier not found", status.HTTP_404_NOT_FOUND)
        except StoreAddressNotFound:
            return _error("Store address not found", status.HTTP_404_NOT_FOUND)
        except OrderNotFound:
            return _error("Order not found", status.HTTP_404_NOT_FOUND)
        except UpstreamFetchFailed as exc:
            return _error(str(exc), status.HTTP_424_FAILED_DEPENDENCY)
        except AssignmentWriteFailed as exc:
            return _error(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {
                "ok": True,
                "orderId": dto.order_id,
                "upstreamSynced": result.mirror.ok if result.mirror else None,
            }
        )


class AssignmentContextView(APIView):
    """GET /api/v1/assignment-context/{order_id}?type=pickup|delivery"""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = AssignmentContextService(
            order_repository=OrderDjangoRepository(),
            store_service=StoreAddressService(
                store_repository=StoreAddressDjangoRepository()
            ),
        )

    def get(self, request: Request, order_id: str) -> Response:
        query = AssignmentContextQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            context = self._service.get_context(
                normalize_order_id(order_id), query.validated_data["type"]
            )
        except OrderNotFound:
            return _error("Order not found", status.HTTP_404_NOT_FOUND)
        except NoStoreAddressConfigured as exc:
            return _error(str(exc), status.HTTP_400_BAD_REQUEST)

        return Response(context.model_dump(mode="json"))
