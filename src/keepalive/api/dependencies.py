"""FastAPI dependency injection providers.

Centralizes creation of the settings and the host registry so routes
receive them via ``Depends()`` and tests can swap them through
``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from keepalive.application.host_registry import HostRegistry
from keepalive.application.settings_loader import load_settings
from keepalive.core.domain.config_schema import HostSettings


@lru_cache(maxsize=1)
def get_settings() -> HostSettings:
    """Provide the process-wide settings, loaded once."""
    return load_settings()


@lru_cache(maxsize=1)
def get_registry() -> HostRegistry:
    """Provide the shared HostRegistry instance.

    Uses ``lru_cache`` so the registry is created once and reused across
    requests (testable via ``get_registry.cache_clear()``).
    """
    return HostRegistry(get_settings())
