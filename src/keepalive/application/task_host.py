"""
Task Host
=========

Runs one workload at a time on the asyncio event loop and keeps the loop
responsive while doing so.

The execution loop takes exactly one workload step, then suspends with
``await asyncio.sleep(0)``. Status and stop requests are served in those
gaps. A status query therefore always sees the record as of the last
completed step, and a stop request is noticed before the next step begins.

State machine::

    idle --start()--> running --stop()--> stopping --(next yield)--> stopped
                         |                                              ^
                         +------------- workload fault ----------------+

A stopped host can be started again; every run gets a fresh record and a
fresh cancellation token.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from uuid import uuid4

import structlog

from keepalive.core.domain.acknowledgement import StartResult, StopResult
from keepalive.core.domain.cancellation import CancellationToken
from keepalive.core.domain.enums import RunState
from keepalive.core.domain.progress import ProgressRecord, StatusSnapshot
from keepalive.core.interfaces.logging import LoggerProtocol
from keepalive.core.interfaces.workload import WorkloadProtocol


class TaskHost:
    """Cooperative host for a single CPU-bound workload.

    Args:
        workload: The workload stepped by the execution loop.
        host_id: Identifier used in logs and by the registry.
        logger: Optional logger; defaults to a bound structlog logger.
        clock: Monotonic clock used for elapsed time (injectable for tests).
    """

    def __init__(
        self,
        workload: WorkloadProtocol,
        *,
        host_id: str | None = None,
        logger: LoggerProtocol | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._workload = workload
        self._host_id = host_id or uuid4().hex
        self._logger = logger or structlog.get_logger(__name__).bind(
            component="TaskHost", host_id=self._host_id
        )
        self._clock = clock

        self._state = RunState.IDLE
        self._run_id = 0
        self._record = ProgressRecord.for_sequences(workload.sequence_names)
        self._token: CancellationToken | None = None
        self._task: asyncio.Task[None] | None = None
        self._error: str | None = None

        self._started_mono: float | None = None
        self._finished_mono: float | None = None

    @property
    def host_id(self) -> str:
        return self._host_id

    @property
    def workload_name(self) -> str:
        return self._workload.name

    @property
    def state(self) -> RunState:
        """Current run state."""
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == RunState.RUNNING

    @property
    def run_id(self) -> int:
        """Number of the current (or last) run; 0 before the first start."""
        return self._run_id

    # ------------------------------------------------------------------
    # Request surface
    # ------------------------------------------------------------------

    async def start(self) -> StartResult:
        """Begin a new run unless one is already running.

        Returns immediately; the execution loop runs as a separate asyncio
        task. A start while running leaves the existing run untouched.
        """
        if self._state == RunState.RUNNING:
            self._logger.debug("task_host.start_ignored", run_id=self._run_id)
            return StartResult(
                started=False, run_id=self._run_id, message="Task already running"
            )

        self._run_id += 1
        run_id = self._run_id
        record = ProgressRecord.for_sequences(self._workload.sequence_names)
        token = CancellationToken()

        self._record = record
        self._token = token
        self._error = None
        self._state = RunState.RUNNING
        self._started_mono = self._clock()
        self._finished_mono = None

        self._task = asyncio.create_task(
            self._run_loop(run_id, record, token),
            name=f"task-host-{self._host_id}-{run_id}",
        )
        self._logger.info(
            "task_host.started", run_id=run_id, workload=self._workload.name
        )
        return StartResult(started=True, run_id=run_id, message="Task started")

    async def status(self) -> StatusSnapshot:
        """Return a fresh snapshot; never waits on the execution loop."""
        return self.snapshot()

    async def stop(self) -> StopResult:
        """Signal cancellation; the loop halts at its next suspension point."""
        if self._state != RunState.RUNNING or self._token is None:
            return StopResult(stopped=False, message="Task not running")

        self._token.cancel()
        self._state = RunState.STOPPING
        self._logger.info("task_host.stopping", run_id=self._run_id)
        return StopResult(stopped=True, message="Task stopped")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def snapshot(self) -> StatusSnapshot:
        """Synchronous form of :meth:`status`."""
        return StatusSnapshot.capture(
            self._record,
            state=self._state,
            elapsed_seconds=self._elapsed_seconds(),
            run_id=self._run_id,
            workload=self._workload.name,
            error=self._error,
        )

    async def wait(self, timeout: float | None = None) -> StatusSnapshot:
        """Wait until the current run's loop has exited.

        Raises:
            TimeoutError: If the loop is still running after ``timeout``.
        """
        task = self._task
        if task is not None and not task.done():
            await asyncio.wait_for(asyncio.shield(task), timeout)
        return self.snapshot()

    async def aclose(self, timeout: float = 5.0) -> None:
        """Stop the current run and wait for its loop to exit."""
        await self.stop()
        task = self._task
        if task is None or task.done():
            return
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout)
        except TimeoutError:
            self._logger.warning("task_host.close_timeout", run_id=self._run_id)
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    def _elapsed_seconds(self) -> int:
        if self._started_mono is None:
            return 0
        end = self._finished_mono if self._finished_mono is not None else self._clock()
        return max(0, int(end - self._started_mono))

    async def _run_loop(
        self, run_id: int, record: ProgressRecord, token: CancellationToken
    ) -> None:
        """Execution loop: one step, one token check, one suspension."""
        try:
            while not token.cancelled:
                checkpoint = record.checkpoint()
                record = self._workload.step(record)
                record.complete_step()
                if run_id == self._run_id:
                    self._record = record
                if token.cancelled:
                    break
                await asyncio.sleep(0)
        except asyncio.CancelledError:
            self._logger.info("task_host.cancelled", run_id=run_id)
            raise
        except Exception as exc:
            self._logger.error(
                "task_host.workload_fault",
                run_id=run_id,
                step=record.step_count + 1,
                error=str(exc),
                exc_info=True,
            )
            # Drop whatever the failed step appended before raising.
            record.rollback(checkpoint)
            if run_id == self._run_id:
                self._error = f"{type(exc).__name__}: {exc}"
        finally:
            self._finish(run_id, record)

    def _finish(self, run_id: int, record: ProgressRecord) -> None:
        if run_id != self._run_id:
            # A newer run has replaced this one; leave its state alone.
            self._logger.debug("task_host.superseded_run_exited", run_id=run_id)
            return
        self._state = RunState.STOPPED
        self._finished_mono = self._clock()
        self._token = None
        self._logger.info(
            "task_host.finished",
            run_id=run_id,
            steps=record.step_count,
            elapsed_s=self._elapsed_seconds(),
            faulted=self._error is not None,
        )
