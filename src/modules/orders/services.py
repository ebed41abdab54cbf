"""Order service layer (Use Cases).

Houses the Order Import Adapter and the periodic upstream poll.  Both
converge on the same upsert-by-id write, so they can run concurrently
with each other and with webhook-driven status updates.

Rules enforced:
- The local id is the upstream id; it is never regenerated.
- Upstream fields are copied through an explicit allow-list
  (``UpstreamOrderPayload``); unknown fields are dropped.
- An import always lands in ``accepted``, whatever the upstream reports.
- An upstream fetch failure fails the whole import: nothing is written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Set

import structlog
from django.db import transaction
from pydantic import ValidationError

from modules.notifications.constants import ORDER_IMPORTED
from modules.notifications.services import record_notification
from modules.orders.constants import IMPORTED_ORDER_STATUS, OrderStatus, SourceSystem
from modules.orders.dtos import ImportOrderDTO, OrderImportResult, PollSummary
from modules.orders.exceptions import UpstreamFetchFailed
from modules.upstream.dtos import UpstreamOrderPayload
from modules.upstream.exceptions import UpstreamAPIError

if TYPE_CHECKING:
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.upstream.client import UpstreamClient

logger = structlog.get_logger(__name__)


class OrderImportService:
    """Application service for pulling upstream orders into the local store.

    Receives the repository and the upstream client via constructor
    injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        upstream_client: UpstreamClient,
    ) -> None:
        self._order_repo = order_repository
        self._client = upstream_client

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def import_order(self, dto: ImportOrderDTO) -> OrderImportResult:
        """Fetch the upstream order and upsert it as ``accepted``.

        Raises:
            UpstreamFetchFailed: the upstream record could not be fetched
                or is not a usable order.
        """
        log = logger.bind(order_id=dto.order_id, source=dto.source)
        log.info("order_import.started")

        payload = self.fetch_payload(dto.order_id)
        order, created, items_synced = self._persist(
            dto.order_id,
            payload,
            order_status=IMPORTED_ORDER_STATUS,
            notes=f"Imported from {dto.source or SourceSystem.UPSTREAM}",
        )

        notified = record_notification(
            notification_type=ORDER_IMPORTED,
            title=f"Order {order.id} imported",
            message=f"Order {order.id} was imported from the upstream order system.",
            related_order_id=order.id,
            data={"source": dto.source or SourceSystem.UPSTREAM, "created": created},
        )

        log.info(
            "order_import.completed",
            created=created,
            items_synced=items_synced,
            notified=notified.ok,
        )
        return OrderImportResult(
            local_order_id=order.id,
            source_order_id=payload.id,
            created=created,
            items_synced=items_synced,
        )

    def sync_order(self, order_id: str) -> Order:
        """Refresh an order and its line items from the upstream.

        Unlike ``import_order`` the local ``order_status`` of an existing
        row is kept; new rows start as ``accepted``.

        Raises:
            UpstreamFetchFailed: the upstream record could not be fetched.
        """
        payload = self.fetch_payload(order_id)
        order, created, items_synced = self._persist(order_id, payload)
        logger.info(
            "order_sync.completed",
            order_id=order_id,
            created=created,
            items_synced=items_synced,
        )
        return order

    def poll(self, statuses: list[str], synced_ids: Set[str]) -> PollSummary:
        """Upsert upstream orders in *statuses* that this process has not seen.

        ``synced_ids`` is a best-effort, in-memory de-duplication set owned by
        the caller; losing it only costs redundant upserts.  A local row whose
        ``updated_at`` is newer than the upstream's is left alone (last write
        wins).  The local ``order_status`` of an existing row is never
        overwritten by the poll.

        Raises:
            UpstreamAPIError: the upstream listing call failed.
        """
        rows = self._client.list_orders(statuses)
        counts: Dict[str, int] = {
            "fetched": len(rows),
            "upserted": 0,
            "already_synced": 0,
            "stale": 0,
            "invalid": 0,
        }

        for raw in rows:
            try:
                payload = UpstreamOrderPayload.model_validate(raw)
            except ValidationError as exc:
                counts["invalid"] += 1
                logger.warning("order_poll.invalid_payload", errors=exc.error_count())
                continue

            if payload.id in synced_ids:
                counts["already_synced"] += 1
                continue

            local = self._order_repo.get_by_id(payload.id)
            if (
                local is not None
                and payload.updated_at is not None
                and local.updated_at > payload.updated_at
            ):
                counts["stale"] += 1
                logger.info(
                    "order_poll.local_newer",
                    order_id=payload.id,
                    local_updated_at=local.updated_at.isoformat(),
                    upstream_updated_at=payload.updated_at.isoformat(),
                )
                continue

            initial_status = None
            if local is None:
                initial_status = (
                    payload.order_status
                    if payload.order_status in OrderStatus.values
                    else IMPORTED_ORDER_STATUS
                )
            self._persist(payload.id, payload, order_status=initial_status)
            synced_ids.add(payload.id)
            counts["upserted"] += 1

        summary = PollSummary(**counts)
        logger.info("order_poll.completed", **summary.model_dump())
        return summary

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def fetch_payload(self, order_id: str) -> UpstreamOrderPayload:
        """Fetch and validate the upstream record for *order_id*.

        Raises:
            UpstreamFetchFailed: on any upstream error or unusable body.
        """
        try:
            raw = self._client.get_order(order_id)
        except UpstreamAPIError as exc:
            logger.error(
                "order_import.fetch_failed",
                order_id=order_id,
                status_code=exc.status_code,
                error_code=exc.error_code,
            )
            raise UpstreamFetchFailed(
                f"Failed to fetch order {order_id} from upstream: {exc}",
                status_code=exc.status_code,
            ) from exc

        try:
            # The requested id is the join key, whatever the body repeats.
            return UpstreamOrderPayload.model_validate({**raw, "id": order_id})
        except ValidationError as exc:
            logger.error(
                "order_import.invalid_payload",
                order_id=order_id,
                errors=exc.error_count(),
            )
            raise UpstreamFetchFailed(
                f"Upstream returned an invalid order for {order_id}."
            ) from exc

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @transaction.atomic
    def _persist(
        self,
        order_id: str,
        payload: UpstreamOrderPayload,
        order_status: Optional[str] = None,
        notes: str = "",
    ) -> tuple[Order, bool, Optional[int]]:
        fields: Dict[str, Any] = payload.to_order_fields()
        fields["source_system"] = SourceSystem.UPSTREAM
        if order_status is not None:
            fields["order_status"] = order_status

        order, created = self._order_repo.upsert(
            order_id,
            fields,
            created_at=payload.created_at,
            notes=notes,
        )

        items_synced = None
        if payload.items is not None:
            items = self._order_repo.replace_items(
                order_id, [item.model_dump() for item in payload.items]
            )
            items_synced = len(items)
        return order, created, items_synced
