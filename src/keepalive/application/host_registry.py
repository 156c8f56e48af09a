"""
Host Registry
=============

Keeps one ``TaskHost`` per run identity. Every monitor request creates a
fresh host, so hosts never share a progress record.
"""

from __future__ import annotations

import asyncio
from collections import OrderedDict
from uuid import uuid4

import structlog

from keepalive.application.task_host import TaskHost
from keepalive.application.workload_registry import (
    WorkloadRegistry,
    default_workload_registry,
)
from keepalive.core.domain.config_schema import HostSettings
from keepalive.core.domain.errors import HostCapacityError, HostNotFoundError

logger = structlog.get_logger(__name__)


class HostRegistry:
    """In-memory map of host id -> task host, bounded by ``max_hosts``.

    When the registry is full, the oldest host that is not running is
    evicted to make room; if every host is running, creation fails.
    """

    def __init__(
        self,
        settings: HostSettings,
        workloads: WorkloadRegistry | None = None,
    ) -> None:
        self._settings = settings
        self._workloads = workloads or default_workload_registry()
        self._hosts: OrderedDict[str, TaskHost] = OrderedDict()

    @property
    def settings(self) -> HostSettings:
        return self._settings

    @property
    def workloads(self) -> WorkloadRegistry:
        return self._workloads

    def __len__(self) -> int:
        return len(self._hosts)

    def create(self, workload: str | None = None) -> TaskHost:
        """Create and register a new idle host.

        Raises:
            UnknownWorkloadError: If ``workload`` is not registered.
            HostCapacityError: If the registry is full of running hosts.
        """
        name = workload or self._settings.workload
        instance = self._workloads.create(name, self._settings)
        if len(self._hosts) >= self._settings.max_hosts:
            self._evict_one()
        host = TaskHost(instance, host_id=uuid4().hex)
        self._hosts[host.host_id] = host
        logger.info("registry.host_created", host_id=host.host_id, workload=name)
        return host

    def get(self, host_id: str) -> TaskHost:
        host = self._hosts.get(host_id)
        if host is None:
            raise HostNotFoundError(host_id)
        return host

    def list_ids(self) -> list[str]:
        return list(self._hosts)

    async def remove(self, host_id: str) -> None:
        """Stop and forget a host."""
        host = self._hosts.pop(host_id, None)
        if host is None:
            raise HostNotFoundError(host_id)
        await host.aclose()
        logger.info("registry.host_removed", host_id=host_id)

    async def shutdown(self) -> None:
        """Stop every host; used on application shutdown."""
        hosts = list(self._hosts.values())
        self._hosts.clear()
        if hosts:
            await asyncio.gather(*(h.aclose() for h in hosts), return_exceptions=True)
        logger.info("registry.shutdown", host_count=len(hosts))

    def _evict_one(self) -> None:
        for host_id, host in self._hosts.items():
            if not host.state.is_active:
                del self._hosts[host_id]
                logger.info("registry.host_evicted", host_id=host_id)
                return
        raise HostCapacityError(self._settings.max_hosts)
