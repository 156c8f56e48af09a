"""Redundant floating-point work used to make workload steps CPU-heavy.

The results are discarded; they never influence the produced sequences.
"""

from __future__ import annotations

import math


def burn_divisor(divisor: int, log_candidate: float, iterations: int) -> float:
    """Padding for one trial division in the prime search."""
    acc = 0.0
    square = float(divisor * divisor)
    for j in range(iterations):
        acc += square * log_candidate / math.sin((j + 1) * 0.01)
    return acc


def burn_terms(iterations: int) -> float:
    """Padding for one Fibonacci term."""
    acc = 0.0
    for i in range(iterations):
        x = i * 0.01
        acc += math.tan(x) * math.exp(math.sin(x))
    return acc
