"""
Settings Loader
===============

Builds ``HostSettings`` from (in increasing precedence):

1. Schema defaults
2. An optional YAML file (explicit path or ``KEEPALIVE_CONFIG``)
3. ``KEEPALIVE_<FIELD>`` environment variables (``LOGLEVEL`` is accepted
   as a fallback for ``log_level``)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from keepalive.core.domain.config_schema import HostSettings
from keepalive.core.domain.errors import ConfigError

logger = structlog.get_logger(__name__)

ENV_PREFIX = "KEEPALIVE_"
CONFIG_PATH_ENV = "KEEPALIVE_CONFIG"


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}", details={"path": str(path)})
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file must contain a mapping: {path}", details={"path": str(path)}
        )
    return data


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for field_name in HostSettings.model_fields:
        raw = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if raw is not None and raw.strip() != "":
            overrides[field_name] = raw.strip()
    if "log_level" not in overrides and environ.get("LOGLEVEL"):
        overrides["log_level"] = environ["LOGLEVEL"]
    return overrides


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> HostSettings:
    """Load and validate host settings.

    Args:
        path: Optional YAML file; falls back to ``KEEPALIVE_CONFIG``.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        Validated settings.

    Raises:
        ConfigError: If the file is missing or malformed, or validation fails.
    """
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}

    config_path = path or env.get(CONFIG_PATH_ENV)
    if config_path:
        data.update(_read_yaml(Path(config_path)))
        logger.debug("settings.file_loaded", path=str(config_path))

    data.update(_env_overrides(env))

    try:
        return HostSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(
            "Invalid keepalive settings",
            details={
                "errors": exc.errors(
                    include_url=False, include_context=False, include_input=False
                )
            },
        ) from exc
