"""Sequential primality search workload."""

from __future__ import annotations

import math

from keepalive.core.domain.progress import ProgressRecord
from keepalive.infrastructure.workloads.padding import burn_divisor


class PrimeSearchWorkload:
    """Finds the next prime above the last one recorded.

    Each step trial-divides candidates starting right after the last prime
    (or at 2 on a fresh record) and appends the first prime it finds.

    Args:
        padding_iterations: Redundant float operations per trial divisor.
        sequence: Name of the sequence the primes are appended to.
    """

    def __init__(self, padding_iterations: int = 1000, sequence: str = "primes") -> None:
        if padding_iterations < 0:
            raise ValueError("padding_iterations must be >= 0")
        self._padding = padding_iterations
        self._sequence = sequence

    @property
    def name(self) -> str:
        return "primes"

    @property
    def sequence_names(self) -> tuple[str, ...]:
        return (self._sequence,)

    def step(self, record: ProgressRecord) -> ProgressRecord:
        last = record.last(self._sequence)
        candidate = 2 if last is None else last + 1
        while not self._is_prime(candidate):
            candidate += 1
        record.append(self._sequence, candidate)
        return record

    def _is_prime(self, candidate: int) -> bool:
        if candidate < 2:
            return False
        log_candidate = math.log(candidate)
        for divisor in range(2, math.isqrt(candidate) + 1):
            if self._padding:
                burn_divisor(divisor, log_candidate, self._padding)
            if candidate % divisor == 0:
                return False
        return True
