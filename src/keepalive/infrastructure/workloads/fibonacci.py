"""Linear recurrence (Fibonacci) workload."""

from __future__ import annotations

from keepalive.core.domain.progress import ProgressRecord
from keepalive.infrastructure.workloads.padding import burn_terms


class FibonacciWorkload:
    """Appends the next Fibonacci number: 0, 1, then the sum of the prior two.

    Args:
        padding_iterations: Redundant float operations per computed term.
        sequence: Name of the sequence the terms are appended to.
    """

    def __init__(self, padding_iterations: int = 5000, sequence: str = "fibonacci") -> None:
        if padding_iterations < 0:
            raise ValueError("padding_iterations must be >= 0")
        self._padding = padding_iterations
        self._sequence = sequence

    @property
    def name(self) -> str:
        return "fibonacci"

    @property
    def sequence_names(self) -> tuple[str, ...]:
        return (self._sequence,)

    def step(self, record: ProgressRecord) -> ProgressRecord:
        values = record.sequences.get(self._sequence, [])
        if len(values) < 2:
            record.append(self._sequence, len(values))
            return record
        if self._padding:
            burn_terms(self._padding)
        record.append(self._sequence, values[-1] + values[-2])
        return record
