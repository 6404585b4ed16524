"""Tests for structured logging setup."""

import logging

import structlog

from syllabus_calendar import __version__
from syllabus_calendar.config.settings import Settings, get_settings
from syllabus_calendar.observability.logging import (
    SERVICE_NAME,
    add_service_info,
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    def test_production_renders_json(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        get_settings.cache_clear()

        setup_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_development_renders_console(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "development")
        get_settings.cache_clear()

        setup_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_debug_setting_lowers_root_level(self):
        setup_logging(Settings(_env_file=None, log_level="WARNING", debug=True))
        assert logging.getLogger().level == logging.DEBUG

        setup_logging(Settings(_env_file=None, log_level="WARNING"))
        assert logging.getLogger().level == logging.WARNING

    def test_sdk_loggers_quieted(self):
        setup_logging(Settings(_env_file=None, log_level="DEBUG"))
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_get_logger(self):
        assert get_logger("syllabus_calendar.test") is not None


class TestServiceInfo:
    def test_stamps_service_and_version(self):
        event = add_service_info(None, "info", {"event": "hello"})
        assert event["service"] == SERVICE_NAME
        assert event["version"] == __version__

    def test_keeps_explicit_values(self):
        event = add_service_info(None, "info", {"event": "hello", "service": "worker"})
        assert event["service"] == "worker"


class TestContext:
    def test_bind_and_clear(self):
        bind_context(request_id="abc")
        assert structlog.contextvars.get_contextvars()["request_id"] == "abc"

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
