"""
Workload Registry
=================

Maps workload names to factories that build a workload from settings.
The API and CLI only ever refer to workloads by name.
"""

from __future__ import annotations

from collections.abc import Callable

from keepalive.core.domain.config_schema import HostSettings
from keepalive.core.domain.errors import UnknownWorkloadError
from keepalive.core.interfaces.workload import WorkloadProtocol
from keepalive.infrastructure.workloads import (
    CombinedWorkload,
    FibonacciWorkload,
    PrimeSearchWorkload,
)

WorkloadFactory = Callable[[HostSettings], WorkloadProtocol]


class WorkloadRegistry:
    """Name -> factory lookup for workloads."""

    def __init__(self) -> None:
        self._factories: dict[str, WorkloadFactory] = {}

    def register(self, name: str, factory: WorkloadFactory) -> None:
        """Register (or replace) the factory for ``name``."""
        self._factories[name] = factory

    def names(self) -> list[str]:
        return sorted(self._factories)

    def create(self, name: str, settings: HostSettings) -> WorkloadProtocol:
        """Build the workload registered under ``name``.

        Raises:
            UnknownWorkloadError: If no factory is registered for ``name``.
        """
        factory = self._factories.get(name)
        if factory is None:
            raise UnknownWorkloadError(name, available=self.names())
        return factory(settings)


def _primes(settings: HostSettings) -> WorkloadProtocol:
    return PrimeSearchWorkload(padding_iterations=settings.prime_padding_iterations)


def _fibonacci(settings: HostSettings) -> WorkloadProtocol:
    return FibonacciWorkload(padding_iterations=settings.fibonacci_padding_iterations)


def _combined(settings: HostSettings) -> WorkloadProtocol:
    return CombinedWorkload([_primes(settings), _fibonacci(settings)])


def default_workload_registry() -> WorkloadRegistry:
    """Registry with the reference workloads: primes, fibonacci, combined."""
    registry = WorkloadRegistry()
    registry.register("primes", _primes)
    registry.register("fibonacci", _fibonacci)
    registry.register("combined", _combined)
    return registry
