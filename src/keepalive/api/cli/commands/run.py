"""Run command - host a workload in-process and relay its progress."""

import asyncio
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import aclosing

import typer

from keepalive.api.cli.output_formatter import KeepaliveConsole, is_error_line
from keepalive.api.logging_setup import configure_logging
from keepalive.application.host_registry import HostRegistry
from keepalive.application.keepalive_driver import KeepAliveDriver
from keepalive.application.settings_loader import load_settings
from keepalive.core.domain.config_schema import HostSettings
from keepalive.core.domain.errors import KeepaliveError


def apply_log_level(settings: HostSettings, debug: bool) -> None:
    """Log at the configured level, or DEBUG with --debug, on stderr."""
    configure_logging(logging.DEBUG if debug else settings.log_level, sys.stderr)


async def print_relay(
    lines: AsyncIterator[str],
    tf_console: KeepaliveConsole | None,
) -> bool:
    """Print relay lines as they arrive.

    Args:
        lines: Relay output.
        tf_console: Rich console for text output, or None for raw lines.

    Returns:
        True if the relay ended with an error line.
    """
    failed = False
    async with aclosing(lines) as stream:
        async for line in stream:
            failed = is_error_line(line)
            if tf_console is None:
                typer.echo(line, nl=False)
            else:
                tf_console.print_relay_line(line)
    return failed


def run_local(
    ctx: typer.Context,
    workload: str | None = typer.Option(
        None, "--workload", "-w", help="Workload name (primes, fibonacci, combined)"
    ),
    interval: float | None = typer.Option(
        None, "--interval", "-i", min=0.0, help="Seconds between pings"
    ),
    iterations: int | None = typer.Option(
        None, "--iterations", "-n", min=1, help="Number of pings before stopping"
    ),
    output_format: str = typer.Option(
        "text",
        "--output-format",
        "-f",
        help="Output format: 'text' (default, human-readable) or 'raw' (relay lines)",
    ),
):
    """Run a workload in this process and print its keep-alive relay.

    Examples:
        # Ten pings against the prime search
        keepalive run --workload primes --iterations 10

        # Raw relay lines, e.g. for piping into a file
        keepalive run -f raw -n 300 > relay.log
    """
    if output_format not in ("text", "raw"):
        raise typer.BadParameter(
            f"Invalid output format: {output_format}. Must be 'text' or 'raw'"
        )
    global_opts = ctx.obj or {}
    debug = global_opts.get("debug", False)
    tf_console = KeepaliveConsole(debug=debug) if output_format == "text" else None

    try:
        settings = load_settings(global_opts.get("config"))
    except KeepaliveError as e:
        (tf_console or KeepaliveConsole()).print_error(e.message, e)
        raise typer.Exit(1) from e
    apply_log_level(settings, debug)

    try:
        registry = HostRegistry(settings)
        host = registry.create(workload)
    except KeepaliveError as e:
        (tf_console or KeepaliveConsole()).print_error(e.message, e)
        raise typer.Exit(1) from e

    if tf_console is not None:
        tf_console.print_banner(host.host_id, host.workload_name)

    driver = KeepAliveDriver(
        host,
        interval_seconds=settings.relay_interval_seconds if interval is None else interval,
        max_iterations=settings.relay_max_iterations if iterations is None else iterations,
        stop_on_finish=True,
    )

    async def _run() -> bool:
        try:
            return await print_relay(driver.run(), tf_console)
        finally:
            await registry.shutdown()

    try:
        failed = asyncio.run(_run())
    except KeyboardInterrupt:
        failed = False
    if failed:
        raise typer.Exit(1)
    if tf_console is not None:
        tf_console.print_success(f"Relay finished after {driver.published} pings")
