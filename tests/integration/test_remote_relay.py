"""End-to-end relay through the HTTP API, served in-process over ASGI."""

import json

import httpx
import pytest

from keepalive.application.host_registry import HostRegistry
from keepalive.application.keepalive_driver import KeepAliveDriver
from keepalive.core.domain.enums import RunState
from keepalive.infrastructure.http_host_client import create_remote_host

BASE_URL = "http://keepalive.test"


@pytest.fixture
async def http_client(app, registry: HostRegistry):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as client:
        yield client
    await registry.shutdown()


async def test_remote_relay_drives_registry_host(http_client, registry) -> None:
    remote = await create_remote_host(BASE_URL, workload="combined", client=http_client)
    driver = KeepAliveDriver(remote, interval_seconds=0.0, max_iterations=4)

    lines = [line async for line in driver.run()]

    assert len(lines) == 4
    snapshots = [json.loads(line.split(" - ", 1)[1]) for line in lines]
    assert all(s["workload"] == "combined" for s in snapshots)
    assert [s["stepCount"] for s in snapshots] == sorted(s["stepCount"] for s in snapshots)

    host = registry.get(remote.host_id)
    final = await host.wait(timeout=1.0)
    assert final.state == RunState.STOPPED


async def test_remote_relay_reports_vanished_host(http_client, registry) -> None:
    remote = await create_remote_host(BASE_URL, client=http_client)
    driver = KeepAliveDriver(remote, interval_seconds=0.0, max_iterations=10)

    lines = []
    async for line in driver.run():
        lines.append(line)
        if len(lines) == 2:
            await registry.remove(remote.host_id)

    assert len(lines) == 3
    assert lines[-1].startswith("Error: ")
    assert "404" in lines[-1]
