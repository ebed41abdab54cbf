"""Periodic upstream order poll.

Runs on Celery beat every ``UPSTREAM_POLL_INTERVAL_SECONDS`` when
``UPSTREAM_POLL_ENABLED`` is set.  ``_synced_order_ids`` lives for the
lifetime of the worker process only.
"""

from typing import Set

import structlog
from celery import shared_task
from django.conf import settings

from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderImportService
from modules.upstream.client import UpstreamClient
from modules.upstream.exceptions import UpstreamAPIError

logger = structlog.get_logger(__name__)

_synced_order_ids: Set[str] = set()


@shared_task(name="orders.poll_upstream_orders")
def poll_upstream_orders():
    client = UpstreamClient.from_settings()
    if not client.is_configured:
        logger.warning("order_poll.not_configured")
        return {"status": "skipped", "reason": "not_configured"}

    service = OrderImportService(
        order_repository=OrderDjangoRepository(),
        upstream_client=client,
    )
    try:
        summary = service.poll(list(settings.UPSTREAM_POLL_STATUSES), _synced_order_ids)
    except UpstreamAPIError as exc:
        logger.error(
            "order_poll.failed",
            error=str(exc),
            status_code=exc.status_code,
        )
        return {"status": "error", "error": str(exc)}
    return {"status": "ok", **summary.model_dump()}
