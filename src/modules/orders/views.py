"""Order API views.

- ``ImportOrderView``: the Order Import Adapter entry point, called by the
  upstream system with the import secret.
- ``OrderViewSet``: read-only order API for staff (JWT).

Domain exceptions are caught and translated into HTTP status codes; the
views never swallow generic exceptions.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet

from modules.core.authentication import ImportSecretAuthentication
from modules.core.pagination import StandardResultsSetPagination
from modules.orders.dtos import ImportOrderDTO
from modules.orders.exceptions import UpstreamFetchFailed
from modules.orders.filters import OrderFilter
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    ImportOrderSerializer,
    OrderListSerializer,
    OrderSerializer,
)
from modules.orders.services import OrderImportService
from modules.upstream.client import UpstreamClient, normalize_order_id


class ImportOrderView(APIView):
    """POST /api/v1/import-order

    Pulls the full order from the upstream and upserts it locally as
    ``accepted``.  Returns 201 for a new local order, 200 when an existing
    one was overwritten, 502 when the upstream fetch fails.
    """

    authentication_classes = [ImportSecretAuthentication]
    permission_classes = [IsAuthenticated]
    throttle_scope = "webhooks"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderImportService(
            order_repository=OrderDjangoRepository(),
            upstream_client=UpstreamClient.from_settings(),
        )

    def post(self, request: Request) -> Response:
        serializer = ImportOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order_id = normalize_order_id(serializer.validated_data["orderId"])
        if not order_id:
            return Response(
                {"ok": False, "error": "orderId is required"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        dto = ImportOrderDTO(
            order_id=order_id,
            source=serializer.validated_data.get("source"),
        )

        try:
            result = self._service.import_order(dto)
        except UpstreamFetchFailed as exc:
            return Response(
                {"ok": False, "error": str(exc)},
                status=status.HTTP_502_BAD_GATEWAY,
            )

        return Response(
            {
                "ok": True,
                "localOrderId": result.local_order_id,
                "sourceOrderId": result.source_order_id,
            },
            status=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK,
        )


class OrderViewSet(GenericViewSet):
    """Read-only ViewSet for local orders.

    Filtering (status, source, courier, date range, total range) is
    handled by ``OrderFilter``; search covers id and customer fields.
    """

    filterset_class = OrderFilter
    search_fields = ["id", "customer_name", "customer_phone"]
    ordering_fields = ["created_at", "updated_at", "total_amount", "order_status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    throttle_scope = "order_listing"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._repository = OrderDjangoRepository()

    def get_queryset(self):
        return self._repository.queryset()

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/"""
        queryset = self.filter_queryset(self.get_queryset())

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(queryset, request)
        serializer = OrderListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self._repository.get_by_id(normalize_order_id(pk))
        if order is None:
            return Response(
                {"ok": False, "error": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(OrderSerializer(order).data)
