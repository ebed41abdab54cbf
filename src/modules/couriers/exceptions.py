"""Courier domain exceptions."""

from __future__ import annotations


class CourierNotFound(Exception):
    """No local user exists for the given courier id."""
