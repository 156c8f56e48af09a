"""Domain-specific exception types for the keepalive host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class KeepaliveError(Exception):
    """Base exception for keepalive domain errors."""

    message: str
    code: str = "keepalive_error"
    details: Dict[str, Any] | None = None
    status_code: int | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if self.details is None:
            self.details = {}


class InvalidRequestError(KeepaliveError):
    """Error raised for an unrecognized or malformed request."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message, code="invalid_request", details=details, status_code=400
        )


class HostNotFoundError(KeepaliveError):
    """Error raised when no task host is registered under an id."""

    def __init__(self, host_id: str) -> None:
        self.host_id = host_id
        super().__init__(
            message=f"Task host not found: {host_id}",
            code="not_found",
            details={"host_id": host_id},
            status_code=404,
        )


class UnknownWorkloadError(KeepaliveError):
    """Error raised when a workload name is not registered."""

    def __init__(self, name: str, *, available: list[str] | None = None) -> None:
        self.name = name
        super().__init__(
            message=f"Unknown workload: {name}",
            code="invalid_request",
            details={"workload": name, "available": list(available or [])},
            status_code=400,
        )


class HostCapacityError(KeepaliveError):
    """Error raised when the registry holds only running hosts and is full."""

    def __init__(self, max_hosts: int) -> None:
        super().__init__(
            message=f"All {max_hosts} task hosts are running",
            code="capacity",
            details={"max_hosts": max_hosts},
            status_code=429,
        )


class HostUnavailableError(KeepaliveError):
    """Error raised when a task host cannot be reached by the relay."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message, code="host_unavailable", details=details, status_code=502
        )


class ConfigError(KeepaliveError):
    """Error raised for configuration failures."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="config_error", details=details)
