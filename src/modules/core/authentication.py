"""Pre-shared secret authentication for system-to-system endpoints.

Webhook callers (the courier app and the upstream order system) do not
hold user accounts.  They present a secret either as a Bearer token or in
the ``x-shared-secret`` header, compared in constant time against a
server-held value.

Each trust domain reads its own setting so the secrets can be rotated
independently:

* ``StatusWebhookAuthentication`` -> ``STATUS_WEBHOOK_SECRET``
* ``ImportSecretAuthentication``  -> ``IMPORT_SHARED_SECRET``

Security decisions
------------------
* **Fail Closed**: an unset secret rejects every request (401) and logs an
  operational error; it never degrades into open access.
* No fallback from one secret setting to another.
"""

from __future__ import annotations

import structlog
from django.conf import settings
from django.utils.crypto import constant_time_compare
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

logger = structlog.get_logger(__name__)


class WebhookCaller:
    """Principal attached to ``request.user`` for secret-authenticated calls."""

    is_authenticated = True
    is_active = True

    def __init__(self, domain: str):
        self.domain = domain
        # Used by DRF's user throttles as the cache identity.
        self.pk = f"webhook:{domain}"

    def __str__(self) -> str:  # pragma: no cover
        return self.pk


class SharedSecretAuthentication(BaseAuthentication):
    """DRF authentication class validating a pre-shared secret."""

    setting_name: str = ""
    domain: str = ""
    accept_bearer: bool = True
    keyword = "Bearer"

    # ------------------------------------------------------------------
    # Public API (DRF contract)
    # ------------------------------------------------------------------

    def authenticate(self, request):
        provided = self._extract_secret(request)
        if not provided:
            return None  # no credentials, IsAuthenticated answers 401

        expected = getattr(settings, self.setting_name, "") or ""
        if not expected:
            logger.error(
                "shared_secret.not_configured",
                setting=self.setting_name,
                domain=self.domain,
            )
            raise AuthenticationFailed("Unauthorized")

        if not constant_time_compare(provided, expected):
            logger.warning("shared_secret.mismatch", domain=self.domain)
            raise AuthenticationFailed("Unauthorized")

        return (WebhookCaller(self.domain), None)

    def authenticate_header(self, request):
        """Value for the ``WWW-Authenticate`` header; forces 401 over 403."""
        return f'{self.keyword} realm="{self.domain}"'

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _extract_secret(self, request) -> str:
        header = request.META.get("HTTP_X_SHARED_SECRET", "").strip()
        if header:
            return header
        if not self.accept_bearer:
            return ""
        auth = request.META.get("HTTP_AUTHORIZATION", "")
        parts = auth.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
        return ""


class StatusWebhookAuthentication(SharedSecretAuthentication):
    setting_name = "STATUS_WEBHOOK_SECRET"
    domain = "status-webhook"


class ImportSecretAuthentication(SharedSecretAuthentication):
    setting_name = "IMPORT_SHARED_SECRET"
    domain = "import"
    accept_bearer = False
