"""
Monitor API Route
=================

Outer entry point: creates a fresh task host, starts it and streams the
keep-alive relay back to the caller as ``text/plain`` lines::

    <ISO-8601 timestamp> - <JSON snapshot>

The stream ends after the configured number of pings, or after a single
``Error: ...`` line if relaying fails. Example::

    curl -N -X POST "http://localhost:8070/api/v1/monitor?workload=primes&iterations=10"
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from keepalive.api.dependencies import get_registry
from keepalive.api.errors import from_domain_error
from keepalive.application.host_registry import HostRegistry
from keepalive.application.keepalive_driver import KeepAliveDriver
from keepalive.core.domain.errors import KeepaliveError

router = APIRouter()


@router.post("/monitor")
async def monitor(
    workload: str | None = Query(None, description="Workload name"),
    interval: float | None = Query(None, ge=0.0, description="Seconds between pings"),
    iterations: int | None = Query(None, ge=1, description="Number of pings"),
    registry: HostRegistry = Depends(get_registry),
) -> StreamingResponse:
    """Start a new task host and stream its keep-alive relay."""
    settings = registry.settings
    try:
        host = registry.create(workload)
    except KeepaliveError as e:
        raise from_domain_error(e) from e

    driver = KeepAliveDriver(
        host,
        interval_seconds=settings.relay_interval_seconds if interval is None else interval,
        max_iterations=settings.relay_max_iterations if iterations is None else iterations,
        stop_on_finish=settings.stop_host_on_relay_end,
    )
    return StreamingResponse(
        driver.run(),
        media_type="text/plain; charset=utf-8",
        headers={"X-Host-Id": host.host_id},
    )
