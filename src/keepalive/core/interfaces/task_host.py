"""Task host Protocol shared by in-process hosts and remote clients."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from keepalive.core.domain.acknowledgement import StartResult, StopResult
    from keepalive.core.domain.progress import StatusSnapshot


class TaskHostProtocol(Protocol):
    """Protocol for the start/status/stop surface of a task host.

    ``status()`` doubles as the budget-renewal signal: delivering it is what
    keeps the platform from suspending the host.
    """

    async def start(self) -> StartResult:
        """Begin a run; a no-op acknowledgement while already running."""
        ...

    async def status(self) -> StatusSnapshot:
        """Return a fresh snapshot of the current run."""
        ...

    async def stop(self) -> StopResult:
        """Request cooperative cancellation of the current run."""
        ...
