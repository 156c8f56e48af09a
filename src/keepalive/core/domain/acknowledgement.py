"""Acknowledgements returned by task-host lifecycle operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class StartResult:
    """Outcome of ``start()``; a duplicate start is not an error."""

    started: bool
    run_id: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"started": self.started, "runId": self.run_id, "message": self.message}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StartResult:
        return cls(
            started=bool(data.get("started", False)),
            run_id=int(data.get("runId", 0)),
            message=str(data.get("message", "")),
        )


@dataclass(frozen=True)
class StopResult:
    """Outcome of ``stop()``; stopping an inactive host is a no-op."""

    stopped: bool
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"stopped": self.stopped, "message": self.message}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StopResult:
        return cls(
            stopped=bool(data.get("stopped", False)),
            message=str(data.get("message", "")),
        )
