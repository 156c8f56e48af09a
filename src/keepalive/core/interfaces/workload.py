"""Workload Protocol for pluggable units of CPU work."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from keepalive.core.domain.progress import ProgressRecord


class WorkloadProtocol(Protocol):
    """Protocol for resumable, step-wise CPU workloads.

    A workload keeps no state of its own between calls: everything it needs
    to resume is read back from the record it is handed.
    """

    @property
    def name(self) -> str:
        """Registry name of the workload (e.g. ``"primes"``)."""
        ...

    @property
    def sequence_names(self) -> tuple[str, ...]:
        """Sequences the workload appends to, primary first."""
        ...

    def step(self, record: ProgressRecord) -> ProgressRecord:
        """Perform one bounded, deterministic unit of work.

        Args:
            record: The run's progress record; the result is appended to it.

        Returns:
            The same record, advanced by one step.
        """
        ...
