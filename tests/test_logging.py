"""Tests for structlog configuration."""

import json

import pytest
import structlog

from truesharp_analytics.monitoring import (
    bind_correlation_id,
    configure_logging,
    get_logger,
    unbind_correlation_id,
)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_production_renders_json(self):
        configure_logging("production")
        # Renderer is the last processor in the chain
        renderer = structlog.get_config()["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

        line = renderer(None, "info", {"event": "saved_filter_stored", "filter_id": "f1"})
        assert json.loads(line) == {"event": "saved_filter_stored", "filter_id": "f1"}

    def test_development_renders_console(self):
        configure_logging("development")
        renderer = structlog.get_config()["processors"][-1]
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown log mode"):
            configure_logging("loud")


class TestCorrelationId:
    """Tests for correlation ID context binding."""

    def test_bind_and_unbind(self):
        bind_correlation_id("req_abc123")
        assert structlog.contextvars.get_contextvars()["correlation_id"] == "req_abc123"

        unbind_correlation_id()
        assert "correlation_id" not in structlog.contextvars.get_contextvars()


def test_get_logger_logs_without_error():
    log = get_logger("truesharp_analytics.tests")
    log.info("test_event", key="value", count=42)
