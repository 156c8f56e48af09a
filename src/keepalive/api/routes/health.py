from fastapi import APIRouter, Depends
from pydantic import BaseModel

from keepalive import __version__
from keepalive.api.dependencies import get_registry
from keepalive.application.host_registry import HostRegistry

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    checks: dict[str, str] | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe - is the service running?"""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(
    registry: HostRegistry = Depends(get_registry),
) -> HealthResponse:
    """Readiness probe - reports registry usage and known workloads."""
    checks = {
        "hosts": f"{len(registry)}/{registry.settings.max_hosts}",
        "workloads": ", ".join(registry.workloads.names()),
    }
    return HealthResponse(status="ready", version=__version__, checks=checks)
