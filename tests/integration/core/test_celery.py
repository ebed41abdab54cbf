"""Integration tests for the Celery configuration."""

import pytest

pytestmark = pytest.mark.integration


class TestCeleryConfig:
    def test_celery_app_is_importable(self):
        from config.celery import app

        assert app.main == "dispatch_hub"

    def test_celery_app_exported_from_init(self):
        from config import celery_app

        assert celery_app.main == "dispatch_hub"

    def test_poll_task_is_registered(self):
        from config import celery_app
        from modules.orders import tasks  # noqa: F401

        assert "orders.poll_upstream_orders" in celery_app.tasks

    def test_celery_serializer_is_json(self, settings):
        assert settings.CELERY_TASK_SERIALIZER == "json"
        assert settings.CELERY_RESULT_SERIALIZER == "json"
        assert settings.CELERY_ACCEPT_CONTENT == ["json"]

    def test_celery_timezone_matches_django(self, settings):
        assert settings.CELERY_TIMEZONE == settings.TIME_ZONE

    def test_poll_is_not_scheduled_by_default(self, settings):
        assert settings.UPSTREAM_POLL_ENABLED is False
        assert settings.CELERY_BEAT_SCHEDULE == {}
