"""Order domain exceptions.

Raised by the Service Layer; the API layer (Views) translates them into
HTTP responses.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist locally."""


class UpstreamFetchFailed(Exception):
    """The upstream order record could not be fetched or parsed.

    ``status_code`` carries the upstream HTTP status when there was one, so
    callers can distinguish "unknown upstream order" (404) from an outage.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
