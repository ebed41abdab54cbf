"""Upstream Mirror Client.

The one place local status transitions are pushed to the upstream order
system.  Every local code path that needs to tell the upstream about a
status change calls ``UpstreamMirror.mirror``; there are no other PATCH
helpers.

Contract
--------
* Never raises.  The outcome is a ``SyncResult``; callers treat failure as
  non-fatal because the local state change has already been committed.
* Idempotent.  The upstream's current status is read first and the write
  is skipped when it already equals the target, so repeated calls for the
  same transition produce a single outbound write.
"""

from __future__ import annotations

from typing import Optional

import structlog

from modules.upstream.client import UpstreamClient, normalize_order_id
from modules.upstream.exceptions import UpstreamAPIError
from shared.domain.results import SyncResult

logger = structlog.get_logger(__name__)


class UpstreamMirror:
    def __init__(self, client: Optional[UpstreamClient] = None) -> None:
        self._client = client or UpstreamClient.from_settings()

    def mirror(self, order_id: str, upstream_status: str, context: str = "") -> SyncResult:
        order_id = normalize_order_id(order_id)
        log = logger.bind(
            order_id=order_id,
            upstream_status=upstream_status,
            context=context,
        )
        if not order_id or not upstream_status:
            log.warning("upstream.mirror_invalid_arguments")
            return SyncResult.failure("orderId and status are required")
        if not self._client.is_configured:
            log.error("upstream.mirror_not_configured")
            return SyncResult.failure("Upstream API is not configured")

        try:
            current = self._client.get_order_status(order_id)
        except UpstreamAPIError as exc:
            # An unreadable current status does not block the write.
            log.warning(
                "upstream.mirror_status_lookup_failed",
                error=str(exc),
                status_code=exc.status_code,
            )
            current = None

        if current == upstream_status:
            log.info("upstream.mirror_skipped")
            return SyncResult.already_applied()

        try:
            self._client.update_order_status(order_id, upstream_status)
        except UpstreamAPIError as exc:
            log.error(
                "upstream.mirror_failed",
                error=str(exc),
                error_code=exc.error_code,
                status_code=exc.status_code,
                previous_status=current,
            )
            return SyncResult.failure(str(exc))

        log.info("upstream.mirrored", previous_status=current)
        return SyncResult.success()
