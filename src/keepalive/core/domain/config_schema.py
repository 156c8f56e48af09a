"""
Configuration Schema Validation

Pydantic model for validating keepalive host settings loaded from YAML
files and environment variables.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class HostSettings(BaseModel):
    """Settings for task hosts, the keep-alive relay and the API."""

    model_config = ConfigDict(extra="forbid")

    workload: str = Field(
        "combined",
        min_length=1,
        description="Default workload for new task hosts",
    )
    prime_padding_iterations: int = Field(
        1000,
        ge=0,
        description="Redundant float operations per trial divisor in the prime search",
    )
    fibonacci_padding_iterations: int = Field(
        5000,
        ge=0,
        description="Redundant float operations per Fibonacci term",
    )
    relay_interval_seconds: float = Field(
        1.0,
        ge=0.0,
        description="Pause between two keep-alive pings",
    )
    relay_max_iterations: int = Field(
        300,
        ge=1,
        description="Pings sent before the relay closes its output",
    )
    stop_host_on_relay_end: bool = Field(
        True,
        description="Stop the task host once its relay has ended",
    )
    max_hosts: int = Field(
        64,
        ge=1,
        description="Maximum number of task hosts kept by the registry",
    )
    log_level: str = Field("INFO", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level
