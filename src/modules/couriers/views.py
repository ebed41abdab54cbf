"""Courier pool API (staff, JWT)."""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.couriers.repositories.django_repository import CourierDjangoRepository
from modules.couriers.services import CourierService

_TRUTHY = {"1", "true", "yes"}


class CourierListView(APIView):
    """GET /api/v1/couriers/

    ``?available=true`` restricts the list to the assignable pool.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CourierService(courier_repository=CourierDjangoRepository())

    def get(self, request: Request) -> Response:
        available_only = (
            request.query_params.get("available", "").strip().lower() in _TRUTHY
        )
        couriers = self._service.list_couriers(available_only=available_only)
        return Response(
            {"ok": True, "data": [courier.model_dump(mode="json") for courier in couriers]}
        )
