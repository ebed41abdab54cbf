import pytest

pytestmark = pytest.mark.integration


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert "services" in data

    def test_health_check_reports_database_status(self, client):
        data = client.get("/health").json()
        assert data["services"]["database"]["status"] == "up"
        assert "response_time_ms" in data["services"]["database"]

    def test_health_check_reports_cache_status(self, client):
        data = client.get("/health").json()
        assert data["services"]["cache"]["status"] == "up"

    def test_upstream_is_reported_not_probed(self, client, settings):
        assert client.get("/health").json()["services"]["upstream"] == {
            "status": "configured"
        }

        settings.UPSTREAM_API_SECRET = ""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["services"]["upstream"] == {"status": "not_configured"}

    def test_health_check_needs_no_credentials(self, api_client):
        assert api_client.get("/health").status_code == 200
