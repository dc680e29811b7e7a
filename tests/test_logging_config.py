"""
Tests for logging configuration and health check suppression.
"""

import logging

import pytest

from vpp_mcp.logging_config import HealthCheckFilter, configure_logging, get_logging_config


def _record(name, message):
    return logging.LogRecord(name, logging.INFO, __file__, 1, message, None, None)


class TestHealthCheckFilter:
    """Test suppression of probe access lines."""

    def test_health_probe_dropped(self):
        record = _record("uvicorn.access", '10.0.0.1:5000 - "GET /health HTTP/1.1" 200')
        assert HealthCheckFilter().filter(record) is False

    def test_other_access_kept(self):
        record = _record("uvicorn.access", '10.0.0.1:5000 - "GET /sse HTTP/1.1" 200')
        assert HealthCheckFilter().filter(record) is True

    def test_other_loggers_kept(self):
        record = _record("vpp_mcp.dispatch", "GET /health from a tool description")
        assert HealthCheckFilter().filter(record) is True


class TestLoggingConfig:
    """Test the dictConfig layout."""

    def test_levels(self):
        config = get_logging_config("DEBUG")
        assert config["loggers"]["vpp_mcp"]["level"] == "DEBUG"
        assert config["loggers"]["uvicorn.access"]["level"] == "DEBUG"
        assert config["loggers"]["mcp"]["level"] == "WARNING"

    def test_stderr_by_default(self):
        config = get_logging_config()
        assert config["handlers"]["default"]["stream"] == "ext://sys.stderr"

    def test_access_handler_filtered(self):
        config = get_logging_config()
        assert config["handlers"]["access"]["filters"] == ["health_check_filter"]

    @pytest.fixture
    def restore_logger(self):
        loggers = [logging.getLogger("vpp_mcp"), logging.getLogger()]
        saved = [(lg.level, lg.propagate, list(lg.handlers)) for lg in loggers]
        yield
        for lg, (level, propagate, handlers) in zip(loggers, saved):
            lg.setLevel(level)
            lg.propagate = propagate
            lg.handlers = handlers

    def test_configure_logging(self, restore_logger):
        logger = configure_logging("WARNING")
        assert logger.name == "vpp_mcp"
        assert logger.level == logging.WARNING

    def test_invalid_level(self, restore_logger):
        with pytest.raises(ValueError):
            configure_logging("LOUD")
