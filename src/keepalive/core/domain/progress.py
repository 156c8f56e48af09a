"""Progress domain models.

``ProgressRecord`` is the mutable accumulator a task host owns for one run;
``StatusSnapshot`` is the immutable view handed out on every status query.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from keepalive.core.domain.enums import RunState

# log10(2), used to estimate decimal digits from the bit length.
_LOG10_2 = 0.30102999566398120

# Integers wider than this are rendered as a magnitude string on the wire.
# Python refuses to str() integers above 4300 digits by default.
MAX_WIRE_DIGITS = 4000


def estimate_digits(value: int) -> int:
    """Cheap upper-bound estimate of the decimal digits of ``value``."""
    bits = abs(value).bit_length()
    digits = int(bits * _LOG10_2) + 1
    return digits + 1 if value < 0 else digits


def wire_value(value: int | None) -> int | str | None:
    """Return ``value`` in a JSON-safe form."""
    if value is None:
        return None
    if estimate_digits(value) > MAX_WIRE_DIGITS:
        return f"~1e{estimate_digits(abs(value)) - 1}"
    return value


@dataclass(frozen=True)
class RecordCheckpoint:
    """Sequence lengths and counters of a record at a step boundary."""

    lengths: Mapping[str, int]
    estimated_bytes: int
    step_count: int


@dataclass
class ProgressRecord:
    """Append-only accumulator of workload results for one run.

    Holds one integer sequence per name; the first registered sequence is the
    primary one reported as ``lastValue``. ``estimated_bytes`` tracks the size
    of the compact JSON serialization of all sequences incrementally, so the
    estimate never needs a full serialization pass.
    """

    sequences: dict[str, list[int]] = field(default_factory=dict)
    step_count: int = 0
    estimated_bytes: int = 0

    @classmethod
    def for_sequences(cls, names: Iterable[str]) -> ProgressRecord:
        """Create an empty record with the given sequences registered."""
        sequences = {name: [] for name in names}
        empty = json.dumps(sequences, separators=(",", ":"))
        return cls(sequences=sequences, estimated_bytes=len(empty))

    @property
    def primary(self) -> str | None:
        """Name of the primary sequence, if any are registered."""
        return next(iter(self.sequences), None)

    def append(self, name: str, value: int) -> None:
        """Append ``value`` to sequence ``name``, registering it if new."""
        values = self.sequences.get(name)
        if values is None:
            values = self.sequences[name] = []
            # "name":[] plus the separating comma when not first
            self.estimated_bytes += len(json.dumps(name)) + 3
            if len(self.sequences) > 1:
                self.estimated_bytes += 1
        if values:
            self.estimated_bytes += 1
        self.estimated_bytes += estimate_digits(value)
        values.append(value)

    def complete_step(self) -> None:
        self.step_count += 1

    def checkpoint(self) -> RecordCheckpoint:
        """Capture the record's extent so a failed step can be undone."""
        return RecordCheckpoint(
            lengths={name: len(values) for name, values in self.sequences.items()},
            estimated_bytes=self.estimated_bytes,
            step_count=self.step_count,
        )

    def rollback(self, checkpoint: RecordCheckpoint) -> None:
        """Discard everything appended since ``checkpoint`` was taken."""
        for name in list(self.sequences):
            length = checkpoint.lengths.get(name)
            if length is None:
                del self.sequences[name]
            else:
                del self.sequences[name][length:]
        self.estimated_bytes = checkpoint.estimated_bytes
        self.step_count = checkpoint.step_count

    def values(self, name: str) -> list[int]:
        """Return a copy of sequence ``name``."""
        return list(self.sequences.get(name, ()))

    def count(self, name: str) -> int:
        return len(self.sequences.get(name, ()))

    def last(self, name: str | None = None) -> int | None:
        """Return the most recent value of ``name`` (default: primary)."""
        key = name if name is not None else self.primary
        if key is None:
            return None
        values = self.sequences.get(key)
        return values[-1] if values else None


@dataclass(frozen=True)
class StatusSnapshot:
    """Point-in-time view of a task host.

    Built fresh on every status query from copies of the record's counters;
    never shares structure with the live record or with other snapshots.
    """

    state: RunState
    step_count: int = 0
    counts: Mapping[str, int] = field(default_factory=dict)
    last_values: Mapping[str, int | None] = field(default_factory=dict)
    last_value: int | None = None
    memory_estimate_bytes: int = 0
    elapsed_seconds: int = 0
    run_id: int = 0
    workload: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "counts", MappingProxyType(dict(self.counts)))
        object.__setattr__(self, "last_values", MappingProxyType(dict(self.last_values)))

    @property
    def running(self) -> bool:
        """Whether the run is still taking steps."""
        return self.state == RunState.RUNNING

    @classmethod
    def capture(
        cls,
        record: ProgressRecord,
        *,
        state: RunState,
        elapsed_seconds: int,
        run_id: int,
        workload: str | None,
        error: str | None = None,
    ) -> StatusSnapshot:
        """Build a snapshot of ``record`` without copying whole sequences."""
        return cls(
            state=state,
            step_count=record.step_count,
            counts={name: len(values) for name, values in record.sequences.items()},
            last_values={
                name: (values[-1] if values else None)
                for name, values in record.sequences.items()
            },
            last_value=record.last(),
            memory_estimate_bytes=record.estimated_bytes,
            elapsed_seconds=elapsed_seconds,
            run_id=run_id,
            workload=workload,
            error=error,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire payload (camelCase keys)."""
        return {
            "running": self.running,
            "state": self.state.value,
            "stepCount": self.step_count,
            "counts": dict(self.counts),
            "lastValue": wire_value(self.last_value),
            "lastValues": {name: wire_value(v) for name, v in self.last_values.items()},
            "memoryEstimateBytes": self.memory_estimate_bytes,
            "elapsedSeconds": self.elapsed_seconds,
            "runId": self.run_id,
            "workload": self.workload,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StatusSnapshot:
        """Deserialize a wire payload."""
        raw_state = data.get("state")
        if raw_state is None:
            state = RunState.RUNNING if data.get("running") else RunState.STOPPED
        else:
            state = RunState(raw_state)
        return cls(
            state=state,
            step_count=int(data.get("stepCount", 0)),
            counts={str(k): int(v) for k, v in (data.get("counts") or {}).items()},
            last_values=dict(data.get("lastValues") or {}),
            last_value=data.get("lastValue"),
            memory_estimate_bytes=int(data.get("memoryEstimateBytes", 0)),
            elapsed_seconds=int(data.get("elapsedSeconds", 0)),
            run_id=int(data.get("runId", 0)),
            workload=data.get("workload"),
            error=data.get("error"),
        )

    def to_json(self) -> str:
        """Compact JSON form used in relay lines."""
        return json.dumps(self.to_dict(), separators=(",", ":"))
