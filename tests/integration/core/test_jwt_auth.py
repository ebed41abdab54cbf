"""Integration tests for staff JWT authentication.

Validates:
  - /health is public (plain Django view, no DRF).
  - Staff endpoints return 401 without, or with an invalid, token.
  - A token obtained from /api/v1/auth/token/ opens the staff API.
  - The webhook shared secret is not a staff credential.
"""

import pytest

pytestmark = pytest.mark.integration

ORDERS_URL = "/api/v1/orders/"


class TestProtectedEndpoints:
    def test_no_token_returns_401(self, api_client):
        assert api_client.get(ORDERS_URL).status_code == 401

    def test_invalid_token_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer invalid.token.here")
        assert api_client.get(ORDERS_URL).status_code == 401

    def test_malformed_auth_header_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Token some-token")
        assert api_client.get(ORDERS_URL).status_code == 401

    def test_webhook_secret_as_bearer_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer test-status-secret")
        assert api_client.get(ORDERS_URL).status_code == 401

    def test_401_includes_www_authenticate_header(self, api_client):
        response = api_client.get(ORDERS_URL)
        assert response.status_code == 401
        assert "Bearer" in response.get("WWW-Authenticate", "")


class TestTokenFlow:
    def test_obtained_token_grants_access(self, api_client, staff_user):
        token = api_client.post(
            "/api/v1/auth/token/",
            {"username": "dispatcher", "password": "testpass123"},
            format="json",
        )
        assert token.status_code == 200

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.json()['access']}")

        assert api_client.get(ORDERS_URL).status_code == 200

    def test_wrong_password_is_rejected(self, api_client, staff_user):
        response = api_client.post(
            "/api/v1/auth/token/",
            {"username": "dispatcher", "password": "nope"},
            format="json",
        )
        assert response.status_code == 401
        assert response.json()["ok"] is False
