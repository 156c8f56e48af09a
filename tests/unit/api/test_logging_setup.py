"""Tests for logging configuration from settings."""

import io
import logging

import pytest
import structlog
from fastapi.testclient import TestClient

from keepalive.api.dependencies import get_registry
from keepalive.api.logging_setup import configure_logging, resolve_level
from keepalive.api.server import create_app
from keepalive.application.host_registry import HostRegistry


def _structlog_level_class(level: int):
    return structlog.make_filtering_bound_logger(level)


@pytest.mark.parametrize(
    "name, expected",
    [("debug", logging.DEBUG), ("ERROR", logging.ERROR), (None, logging.INFO), ("noise", logging.INFO)],
)
def test_resolve_level(name, expected) -> None:
    assert resolve_level(name) == expected


def test_configure_logging_filters_and_writes_to_stream() -> None:
    stream = io.StringIO()
    configure_logging("WARNING", stream)

    assert structlog.get_config()["wrapper_class"] is _structlog_level_class(logging.WARNING)
    assert logging.getLogger().level == logging.WARNING

    log = structlog.get_logger("test")
    log.info("hidden.event")
    log.warning("shown.event")
    output = stream.getvalue()
    assert "shown.event" in output
    assert "hidden.event" not in output


def test_server_applies_configured_log_level(fast_settings) -> None:
    registry = HostRegistry(fast_settings.model_copy(update={"log_level": "ERROR"}))
    app = create_app()
    app.dependency_overrides[get_registry] = lambda: registry

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        assert structlog.get_config()["wrapper_class"] is _structlog_level_class(logging.ERROR)
        assert logging.getLogger().level == logging.ERROR
