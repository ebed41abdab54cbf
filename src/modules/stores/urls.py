"""Store address URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.stores.views import StoreAddressDetailView, StoreAddressListCreateView

urlpatterns = [
    path(
        "store-addresses/",
        StoreAddressListCreateView.as_view(),
        name="store_address_list",
    ),
    path(
        "store-addresses/<str:pk>/",
        StoreAddressDetailView.as_view(),
        name="store_address_detail",
    ),
]
