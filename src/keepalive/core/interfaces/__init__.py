"""
Core Protocol Interfaces

Protocols for the pluggable parts of the keepalive host:

    - WorkloadProtocol: step-wise CPU work driven by a task host
    - TaskHostProtocol: start/status/stop surface used by the relay
    - LoggerProtocol: logging abstraction for the core
"""

from keepalive.core.interfaces.logging import LoggerProtocol
from keepalive.core.interfaces.task_host import TaskHostProtocol
from keepalive.core.interfaces.workload import WorkloadProtocol

__all__ = [
    "LoggerProtocol",
    "TaskHostProtocol",
    "WorkloadProtocol",
]
