"""Request/response schemas for the task-host endpoints.

Wire names are camelCase; Python attribute names stay snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateHostRequest(_CamelModel):
    """Body of ``POST /hosts``; the workload defaults to the configured one."""

    workload: str | None = Field(
        None,
        description="Workload name (primes, fibonacci, combined)",
        examples=["primes"],
    )


class HostCreatedResponse(_CamelModel):
    host_id: str = Field(..., alias="hostId")
    workload: str


class HostListResponse(_CamelModel):
    host_ids: list[str] = Field(default_factory=list, alias="hostIds")


class StartResponse(_CamelModel):
    """Acknowledgement of ``start``; ``started`` is False for a duplicate start."""

    started: bool
    run_id: int = Field(..., alias="runId")
    message: str


class StopResponse(_CamelModel):
    """Acknowledgement of ``stop``; always returned with HTTP 200."""

    stopped: bool
    message: str


class StatusResponse(_CamelModel):
    """Snapshot of a task host, returned by ``GET /hosts/{id}/ping``."""

    running: bool
    state: str
    step_count: int = Field(..., alias="stepCount")
    counts: dict[str, int] = Field(default_factory=dict)
    last_value: int | str | None = Field(None, alias="lastValue")
    last_values: dict[str, int | str | None] = Field(
        default_factory=dict, alias="lastValues"
    )
    memory_estimate_bytes: int = Field(0, alias="memoryEstimateBytes")
    elapsed_seconds: int = Field(0, alias="elapsedSeconds")
    run_id: int = Field(0, alias="runId")
    workload: str | None = None
    error: str | None = None
