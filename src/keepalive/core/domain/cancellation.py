"""Cooperative cancellation token for a single task-host run."""

from __future__ import annotations


class CancellationToken:
    """Token checked cooperatively between workload steps.

    The host creates one token per run. ``stop()`` cancels it and the
    execution loop polls :attr:`cancelled` at each suspension point, so an
    in-flight step always runs to completion.
    """

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._cancelled

    def cancel(self) -> bool:
        """Request cancellation.

        Returns:
            True the first time the token fires, False afterwards.
        """
        if self._cancelled:
            return False
        self._cancelled = True
        return True
