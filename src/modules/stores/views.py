"""Store address admin API (staff, JWT)."""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.stores.dtos import CreateStoreAddressDTO
from modules.stores.exceptions import StoreAddressNotFound
from modules.stores.repositories.django_repository import StoreAddressDjangoRepository
from modules.stores.serializers import (
    CreateStoreAddressSerializer,
    StoreAddressSerializer,
)
from modules.stores.services import StoreAddressService


class StoreAddressListCreateView(APIView):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = StoreAddressService(
            store_repository=StoreAddressDjangoRepository()
        )

    def get(self, request: Request) -> Response:
        """GET /api/v1/store-addresses/"""
        stores = self._service.list_addresses()
        return Response(
            {"ok": True, "data": StoreAddressSerializer(stores, many=True).data}
        )

    def post(self, request: Request) -> Response:
        """POST /api/v1/store-addresses/"""
        serializer = CreateStoreAddressSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        store = self._service.create_address(
            CreateStoreAddressDTO(**serializer.validated_data)
        )
        return Response(
            {"ok": True, "data": StoreAddressSerializer(store).data},
            status=status.HTTP_201_CREATED,
        )


class StoreAddressDetailView(APIView):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = StoreAddressService(
            store_repository=StoreAddressDjangoRepository()
        )

    def delete(self, request: Request, pk: str) -> Response:
        """DELETE /api/v1/store-addresses/{pk}/"""
        try:
            self._service.delete_address(pk)
        except StoreAddressNotFound:
            return Response(
                {"ok": False, "error": "Store address not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response({"ok": True})
