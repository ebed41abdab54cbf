"""Store address domain exceptions."""

from __future__ import annotations


class StoreAddressNotFound(Exception):
    """The referenced store address does not exist."""


class NoStoreAddressConfigured(Exception):
    """No store address exists at all, so no pickup/dropoff store can be resolved."""
