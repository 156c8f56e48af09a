"""
Task Host API Routes
====================

Request surface of a single task host, bound over HTTP:

- POST   /hosts                 - create an idle host
- GET    /hosts                 - list host ids
- POST   /hosts/{id}/start      - begin a run (idempotent while running)
- GET    /hosts/{id}/ping       - status snapshot; also the keep-alive signal
- POST   /hosts/{id}/stop       - request cancellation (always succeeds)
- DELETE /hosts/{id}            - stop and forget the host

Any other operation under ``/hosts/{id}/`` is rejected as an invalid
request without touching the host.
"""

from fastapi import APIRouter, Body, Depends, Response, status

from keepalive.api.dependencies import get_registry
from keepalive.api.errors import from_domain_error
from keepalive.api.schemas.host_schemas import (
    CreateHostRequest,
    HostCreatedResponse,
    HostListResponse,
    StartResponse,
    StatusResponse,
    StopResponse,
)
from keepalive.application.host_registry import HostRegistry
from keepalive.application.task_host import TaskHost
from keepalive.core.domain.errors import InvalidRequestError, KeepaliveError

router = APIRouter()


def _lookup(registry: HostRegistry, host_id: str) -> TaskHost:
    try:
        return registry.get(host_id)
    except KeepaliveError as e:
        raise from_domain_error(e) from e


@router.post(
    "/hosts",
    response_model=HostCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_host(
    request: CreateHostRequest | None = Body(None),
    registry: HostRegistry = Depends(get_registry),
) -> HostCreatedResponse:
    """Create a new idle task host; ``start`` must be called separately."""
    workload = request.workload if request else None
    try:
        host = registry.create(workload)
    except KeepaliveError as e:
        raise from_domain_error(e) from e
    return HostCreatedResponse(host_id=host.host_id, workload=host.workload_name)


@router.get("/hosts", response_model=HostListResponse)
async def list_hosts(registry: HostRegistry = Depends(get_registry)) -> HostListResponse:
    return HostListResponse(host_ids=registry.list_ids())


@router.post("/hosts/{host_id}/start", response_model=StartResponse)
async def start_host(
    host_id: str, registry: HostRegistry = Depends(get_registry)
) -> StartResponse:
    """Begin a run. Returns 200 with ``started: false`` if already running."""
    result = await _lookup(registry, host_id).start()
    return StartResponse.model_validate(result.to_dict())


@router.get("/hosts/{host_id}/ping", response_model=StatusResponse)
async def ping_host(
    host_id: str, registry: HostRegistry = Depends(get_registry)
) -> StatusResponse:
    """Return the host's current snapshot.

    Handling this request is what renews the host's CPU-time budget, so it
    never waits on the execution loop.
    """
    snapshot = await _lookup(registry, host_id).status()
    return StatusResponse.model_validate(snapshot.to_dict())


@router.post("/hosts/{host_id}/stop", response_model=StopResponse)
async def stop_host(
    host_id: str, registry: HostRegistry = Depends(get_registry)
) -> StopResponse:
    """Request cancellation; a no-op when the host is not running."""
    result = await _lookup(registry, host_id).stop()
    return StopResponse.model_validate(result.to_dict())


@router.delete("/hosts/{host_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_host(
    host_id: str, registry: HostRegistry = Depends(get_registry)
) -> Response:
    try:
        await registry.remove(host_id)
    except KeepaliveError as e:
        raise from_domain_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.api_route(
    "/hosts/{host_id}/{operation}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def invalid_operation(host_id: str, operation: str) -> None:
    error = InvalidRequestError(
        f"Invalid operation: {operation}",
        details={"host_id": host_id, "operation": operation},
    )
    raise from_domain_error(error)
