"""
Keep-Alive Driver
=================

Pings a task host on a fixed cadence and relays every returned snapshot as
a timestamped text line::

    2026-10-18T12:00:01.000Z - {"running":true,"state":"running",...}

Each ping is a status query, which is also what renews the host's CPU-time
budget. The relay ends after ``max_iterations`` pings, when the consumer
closes it, or after the first fault. A fault is written as one final
``Error: ...`` line and is never retried.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import aclosing
from datetime import datetime

import structlog

from keepalive.core.domain.progress import StatusSnapshot
from keepalive.core.interfaces.task_host import TaskHostProtocol
from keepalive.core.utils.time import utc_now

logger = structlog.get_logger(__name__)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and ``Z`` suffix."""
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_status_line(moment: datetime, snapshot: StatusSnapshot) -> str:
    """Render one relay line for ``snapshot``."""
    return f"{format_timestamp(moment)} - {snapshot.to_json()}\n"


def format_error_line(error: BaseException) -> str:
    """Render the terminal error line of a relay."""
    message = str(error) or type(error).__name__
    return f"Error: {message}\n"


class KeepAliveDriver:
    """Relay loop between one task host and one consumer.

    Args:
        host: The task host (in-process or remote) to ping.
        interval_seconds: Pause between two pings.
        max_iterations: Number of snapshots published before closing.
        stop_on_finish: Stop the host once the relay has ended.
        clock: Source of line timestamps.
        sleep: Awaitable sleep (injectable for tests).
    """

    def __init__(
        self,
        host: TaskHostProtocol,
        *,
        interval_seconds: float = 1.0,
        max_iterations: int = 300,
        stop_on_finish: bool = True,
        clock: Callable[[], datetime] = utc_now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")
        if interval_seconds < 0:
            raise ValueError("interval_seconds must be >= 0")
        self._host = host
        self._interval = interval_seconds
        self._max_iterations = max_iterations
        self._stop_on_finish = stop_on_finish
        self._clock = clock
        self._sleep = sleep
        self._published = 0

    @property
    def published(self) -> int:
        """Snapshots published so far (error lines excluded)."""
        return self._published

    async def run(self) -> AsyncIterator[str]:
        """Start the host, then relay its snapshots."""
        try:
            result = await self._host.start()
        except Exception as exc:
            logger.warning("keepalive.start_failed", error=str(exc))
            yield format_error_line(exc)
            return
        logger.info("keepalive.host_started", run_id=result.run_id, started=result.started)
        async with aclosing(self.relay()) as lines:
            async for line in lines:
                yield line

    async def relay(self) -> AsyncIterator[str]:
        """Yield one line per ping until done, closed or faulted."""
        logger.info(
            "keepalive.relay_started",
            interval_s=self._interval,
            max_iterations=self._max_iterations,
        )
        try:
            while self._published < self._max_iterations:
                snapshot = await self._host.status()
                self._published += 1
                yield format_status_line(self._clock(), snapshot)
                if self._published < self._max_iterations:
                    await self._sleep(self._interval)
        except Exception as exc:
            logger.warning(
                "keepalive.relay_fault", error=str(exc), published=self._published
            )
            yield format_error_line(exc)
        finally:
            logger.info("keepalive.relay_ended", published=self._published)
            if self._stop_on_finish:
                await self._stop_host()

    async def _stop_host(self) -> None:
        try:
            await self._host.stop()
        except Exception as exc:
            logger.warning("keepalive.stop_failed", error=str(exc))
