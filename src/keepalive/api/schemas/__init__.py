"""API schemas."""

from keepalive.api.schemas.errors import ErrorResponse
from keepalive.api.schemas.host_schemas import (
    CreateHostRequest,
    HostCreatedResponse,
    HostListResponse,
    StartResponse,
    StatusResponse,
    StopResponse,
)

__all__ = [
    "CreateHostRequest",
    "ErrorResponse",
    "HostCreatedResponse",
    "HostListResponse",
    "StartResponse",
    "StatusResponse",
    "StopResponse",
]
