"""DRF exception handler producing the ``{ok: false, error}`` envelope.

Webhook callers branch on ``ok`` and log ``error``; the handler makes the
framework's own failures (authentication, parsing, validation, throttling)
look the same as the domain errors views return explicitly.  Database
errors that escape a view are logged and answered with 500.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, DatabaseError):
            view = context.get("view")
            logger.error(
                "api.database_error",
                view=type(view).__name__ if view else None,
                error=str(exc),
            )
            return Response(
                {"ok": False, "error": "database_error"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return None

    if isinstance(exc, ValidationError):
        response.data = {
            "ok": False,
            "error": "Invalid payload.",
            "fields": response.data,
        }
        return response

    detail = response.data.get("detail") if isinstance(response.data, dict) else None
    response.data = {"ok": False, "error": str(detail or exc)}
    return response
