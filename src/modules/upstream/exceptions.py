"""Upstream integration exceptions."""

from __future__ import annotations


class UpstreamAPIError(Exception):
    """Raised when the upstream admin API fails or answers non-2xx."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_code: str | None = None,
        payload: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.payload = payload or {}


class UpstreamNotConfigured(UpstreamAPIError):
    """Base URL or outbound secret missing; no call is attempted."""

    def __init__(self, message: str = "Upstream API is not configured") -> None:
        super().__init__(message, error_code="not_configured")
