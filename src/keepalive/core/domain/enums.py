"""
Core Domain Enums

Defines the run states of a task host
to eliminate magic strings throughout the codebase.
"""

from enum import Enum


class RunState(str, Enum):
    """Lifecycle state of a task host's current run."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"

    @property
    def is_active(self) -> bool:
        """Whether a run's record and token are still live."""
        return self in (RunState.RUNNING, RunState.STOPPING)
