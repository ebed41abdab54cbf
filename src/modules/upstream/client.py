from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import requests
import structlog
from django.conf import settings

from modules.upstream.constants import (
    ORDER_DETAIL_PATH,
    ORDERS_PATH,
    UNSUPPORTED_ENDPOINT_STATUSES,
)
from modules.upstream.exceptions import UpstreamAPIError, UpstreamNotConfigured

logger = structlog.get_logger(__name__)


def normalize_order_id(value: Any) -> str:
    """Trim and drop the leading ``#`` some callers prefix order ids with."""
    if value is None:
        return ""
    return str(value).strip().lstrip("#").strip()


def unwrap_order(body: Any) -> Optional[Dict[str, Any]]:
    """Return the order object from an upstream response envelope."""
    if not isinstance(body, dict):
        return None
    for key in ("order", "data"):
        inner = body.get(key)
        if isinstance(inner, dict):
            return inner
    return body or None


class UpstreamClient:
    """HTTP client for the upstream order system's admin API.

    Every call carries the outbound ``UPSTREAM_API_SECRET`` (never one of the
    inbound webhook secrets) and a bounded timeout.  Network failures and
    non-2xx answers surface as ``UpstreamAPIError``.
    """

    def __init__(
        self,
        base_url: str,
        api_secret: str,
        timeout_s: float,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self.api_secret = api_secret or ""
        self.timeout = timeout_s
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, session: Optional[requests.Session] = None) -> UpstreamClient:
        return cls(
            base_url=settings.UPSTREAM_BASE_URL,
            api_secret=settings.UPSTREAM_API_SECRET,
            timeout_s=settings.UPSTREAM_TIMEOUT_SECONDS,
            session=session,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.api_secret)

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        if not self.is_configured:
            raise UpstreamNotConfigured()

        url = self._build_url(path)
        log = logger.bind(method=method.upper(), url=url)
        try:
            response = self.session.request(
                method=method.upper(),
                url=url,
                params=params,
                json=json,
                headers=self._build_headers(),
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            log.warning("upstream.timeout", timeout_s=self.timeout)
            raise UpstreamAPIError(
                "Upstream request timed out",
                error_code="timeout",
            ) from exc
        except requests.RequestException as exc:
            log.warning("upstream.network_error", error=str(exc))
            raise UpstreamAPIError(
                "Network error while calling upstream",
                error_code="network_error",
            ) from exc

        body = self._parse_response_body(response)
        if response.ok:
            return body

        log.warning(
            "upstream.http_error",
            status_code=response.status_code,
            body=body,
        )
        raise UpstreamAPIError(
            f"Upstream answered {response.status_code}",
            status_code=response.status_code,
            error_code="http_error",
            payload=body if isinstance(body, dict) else {"raw": body},
        )

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def get_order(self, order_id: str) -> Dict[str, Any]:
        """Fetch the full upstream order record."""
        body = self.request("GET", ORDER_DETAIL_PATH.format(order_id=order_id))
        order = unwrap_order(body)
        if order is None:
            raise UpstreamAPIError(
                f"Upstream returned no order for {order_id}",
                error_code="empty_body",
            )
        return order

    def list_orders(self, statuses: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
        params = {"status": ",".join(statuses)} if statuses else None
        body = self.request("GET", ORDERS_PATH, params=params)
        if isinstance(body, dict):
            body = body.get("orders") or body.get("data") or []
        if not isinstance(body, list):
            return []
        return [row for row in body if isinstance(row, dict)]

    def get_order_status(self, order_id: str) -> Optional[str]:
        """Return the upstream's current status for *order_id*, if known.

        Uses the dedicated per-order endpoint; when the upstream deployment
        does not expose it, falls back to listing orders and matching by id.
        """
        try:
            order = self.get_order(order_id)
        except UpstreamAPIError as exc:
            if exc.status_code not in UNSUPPORTED_ENDPOINT_STATUSES:
                raise
            logger.info(
                "upstream.status_lookup_fallback",
                order_id=order_id,
                status_code=exc.status_code,
            )
            order = next(
                (
                    row
                    for row in self.list_orders()
                    if normalize_order_id(row.get("id")) == order_id
                ),
                None,
            )
        return _extract_status(order)

    def update_order_status(self, order_id: str, status: str) -> Dict[str, Any]:
        body = self.request(
            "PATCH",
            ORDERS_PATH,
            json={"orderId": order_id, "status": status},
        )
        return body if isinstance(body, dict) else {}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _build_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_secret}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _build_url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @staticmethod
    def _parse_response_body(response: requests.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}


def _extract_status(order: Optional[Dict[str, Any]]) -> Optional[str]:
    if not order:
        return None
    status = order.get("order_status") or order.get("status")
    return status if isinstance(status, str) else None
