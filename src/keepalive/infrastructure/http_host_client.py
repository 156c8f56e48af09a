"""HTTP client for a task host served by a remote keepalive API.

Implements ``TaskHostProtocol`` so the keep-alive relay can drive a remote
host exactly like an in-process one. Transport and HTTP failures surface
as ``HostUnavailableError``.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from keepalive.core.domain.acknowledgement import StartResult, StopResult
from keepalive.core.domain.errors import HostUnavailableError
from keepalive.core.domain.progress import StatusSnapshot

logger = structlog.get_logger(__name__)

API_PREFIX = "/api/v1"


class HttpTaskHostClient:
    """Remote task host reached over the keepalive HTTP API.

    Args:
        base_url: Server root, e.g. ``http://localhost:8070``.
        host_id: Id of the host on that server.
        timeout: Per-request timeout in seconds.
        client: Optional pre-built ``httpx.AsyncClient`` (for tests).
        owns_client: Whether ``aclose`` closes the client; defaults to True
            only when the client was created here.
    """

    def __init__(
        self,
        base_url: str,
        host_id: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        owns_client: bool | None = None,
    ) -> None:
        self._host_id = host_id
        self._owns_client = client is None if owns_client is None else owns_client
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=httpx.Timeout(timeout)
        )

    @property
    def host_id(self) -> str:
        return self._host_id

    async def start(self) -> StartResult:
        data = await self._request("POST", "start")
        return StartResult.from_dict(data)

    async def status(self) -> StatusSnapshot:
        data = await self._request("GET", "ping")
        return StatusSnapshot.from_dict(data)

    async def stop(self) -> StopResult:
        data = await self._request("POST", "stop")
        return StopResult.from_dict(data)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpTaskHostClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(self, method: str, operation: str) -> dict[str, Any]:
        path = f"{API_PREFIX}/hosts/{self._host_id}/{operation}"
        try:
            response = await self._client.request(method, path)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise HostUnavailableError(
                f"Task host {self._host_id} returned HTTP {exc.response.status_code}",
                details={"operation": operation, "status_code": exc.response.status_code},
            ) from exc
        except httpx.HTTPError as exc:
            raise HostUnavailableError(
                f"Task host {self._host_id} unreachable: {exc}",
                details={"operation": operation},
            ) from exc


async def create_remote_host(
    base_url: str,
    *,
    workload: str | None = None,
    timeout: float = 10.0,
    client: httpx.AsyncClient | None = None,
) -> HttpTaskHostClient:
    """Create a host on a remote server and return a client bound to it."""
    owns_client = client is None
    http = client or httpx.AsyncClient(
        base_url=base_url.rstrip("/"), timeout=httpx.Timeout(timeout)
    )
    payload: dict[str, Any] = {"workload": workload} if workload else {}
    try:
        response = await http.post(f"{API_PREFIX}/hosts", json=payload)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        if owns_client:
            await http.aclose()
        raise HostUnavailableError(
            f"Could not create task host at {base_url}: {exc}"
        ) from exc
    host_id = response.json()["hostId"]
    logger.info("http_host_client.host_created", base_url=base_url, host_id=host_id)
    return HttpTaskHostClient(
        base_url, host_id, timeout=timeout, client=http, owns_client=owns_client
    )
