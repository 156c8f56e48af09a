"""Reference workloads for generating CPU load."""

from keepalive.infrastructure.workloads.combined import CombinedWorkload
from keepalive.infrastructure.workloads.fibonacci import FibonacciWorkload
from keepalive.infrastructure.workloads.primes import PrimeSearchWorkload

__all__ = [
    "CombinedWorkload",
    "FibonacciWorkload",
    "PrimeSearchWorkload",
]
