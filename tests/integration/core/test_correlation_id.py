import uuid

import pytest

pytestmark = pytest.mark.integration


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        parsed = uuid.UUID(request_id, version=4)
        assert str(parsed) == request_id

    def test_echoed_on_webhook_errors(self, api_client_with_correlation):
        client, cid = api_client_with_correlation
        response = client.post("/api/v1/status-update", {}, format="json")
        assert response.status_code == 401
        assert response["X-Request-ID"] == cid
