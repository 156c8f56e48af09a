"""Workload that advances several workloads in one step."""

from __future__ import annotations

from collections.abc import Sequence

from keepalive.core.domain.progress import ProgressRecord
from keepalive.core.interfaces.workload import WorkloadProtocol


class CombinedWorkload:
    """Runs one step of every part, in order, as a single step.

    The default host workload pairs the prime search with the Fibonacci
    generator so both sequences grow together.
    """

    def __init__(self, parts: Sequence[WorkloadProtocol], name: str = "combined") -> None:
        if not parts:
            raise ValueError("CombinedWorkload needs at least one part")
        self._parts = tuple(parts)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def sequence_names(self) -> tuple[str, ...]:
        names: list[str] = []
        for part in self._parts:
            names.extend(n for n in part.sequence_names if n not in names)
        return tuple(names)

    def step(self, record: ProgressRecord) -> ProgressRecord:
        for part in self._parts:
            record = part.step(record)
        return record
