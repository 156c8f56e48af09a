"""
Domain Models

This package contains the core domain models of the keepalive host:
- Run state and cancellation
- Progress record and status snapshots
- Configuration schema
- Error hierarchy
"""

from keepalive.core.domain.cancellation import CancellationToken
from keepalive.core.domain.enums import RunState
from keepalive.core.domain.progress import ProgressRecord, StatusSnapshot

__all__ = [
    "CancellationToken",
    "ProgressRecord",
    "RunState",
    "StatusSnapshot",
]
