"""Courier URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.couriers.views import CourierListView

urlpatterns = [
    path("couriers/", CourierListView.as_view(), name="courier_list"),
]
