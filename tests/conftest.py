"""Test configuration and shared fixtures."""

from __future__ import annotations

import logging

import pytest
import structlog
from fastapi.testclient import TestClient

from keepalive.api.dependencies import get_registry
from keepalive.api.server import create_app
from keepalive.application.host_registry import HostRegistry
from keepalive.core.domain.config_schema import HostSettings


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by the CLI or the app lifespan."""
    root_level = logging.getLogger().level
    yield
    structlog.reset_defaults()
    logging.getLogger().setLevel(root_level)


@pytest.fixture
def fast_settings() -> HostSettings:
    """Settings with padding disabled and a zero relay interval."""
    return HostSettings(
        workload="primes",
        prime_padding_iterations=0,
        fibonacci_padding_iterations=0,
        relay_interval_seconds=0.0,
        relay_max_iterations=3,
        max_hosts=4,
    )


@pytest.fixture
def registry(fast_settings: HostSettings) -> HostRegistry:
    return HostRegistry(fast_settings)


@pytest.fixture
def app(registry: HostRegistry):
    application = create_app()
    application.dependency_overrides[get_registry] = lambda: registry
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    # One event loop for the whole client, so host loops keep running
    # between requests.
    with TestClient(app) as test_client:
        yield test_client
