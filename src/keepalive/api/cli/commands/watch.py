"""Watch command - relay keep-alive pings to a host on a remote server."""

import asyncio

import typer

from keepalive.api.cli.commands.run import apply_log_level, print_relay
from keepalive.api.cli.output_formatter import KeepaliveConsole
from keepalive.application.keepalive_driver import KeepAliveDriver
from keepalive.application.settings_loader import load_settings
from keepalive.core.domain.errors import KeepaliveError
from keepalive.infrastructure.http_host_client import (
    HttpTaskHostClient,
    create_remote_host,
)


def watch_remote(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Server root, e.g. http://localhost:8070"),
    host_id: str | None = typer.Option(
        None, "--host-id", help="Existing host to drive (default: create a new one)"
    ),
    workload: str | None = typer.Option(
        None, "--workload", "-w", help="Workload for a newly created host"
    ),
    interval: float | None = typer.Option(
        None, "--interval", "-i", min=0.0, help="Seconds between pings"
    ),
    iterations: int | None = typer.Option(
        None, "--iterations", "-n", min=1, help="Number of pings before stopping"
    ),
    stop: bool | None = typer.Option(
        None, "--stop/--no-stop", help="Stop the remote host when the relay ends"
    ),
    timeout: float = typer.Option(10.0, "--timeout", help="Per-request timeout (s)"),
):
    """Keep a remote task host alive and print its status feed.

    Interval, iterations and stop default to the relay settings
    (``--config`` / ``KEEPALIVE_*``).

    Examples:
        # Create a host on the server and watch it for a minute
        keepalive watch http://localhost:8070 -n 60

        # Drive an existing host without stopping it afterwards
        keepalive watch http://localhost:8070 --host-id 3f2a... --no-stop
    """
    global_opts = ctx.obj or {}
    debug = global_opts.get("debug", False)
    tf_console = KeepaliveConsole(debug=debug)

    try:
        settings = load_settings(global_opts.get("config"))
    except KeepaliveError as e:
        tf_console.print_error(e.message, e)
        raise typer.Exit(1) from e
    apply_log_level(settings, debug)

    async def _watch() -> bool:
        if host_id:
            remote = HttpTaskHostClient(url, host_id, timeout=timeout)
        else:
            remote = await create_remote_host(url, workload=workload, timeout=timeout)
        async with remote:
            tf_console.print_banner(remote.host_id, workload or "server default")
            driver = KeepAliveDriver(
                remote,
                interval_seconds=(
                    settings.relay_interval_seconds if interval is None else interval
                ),
                max_iterations=(
                    settings.relay_max_iterations if iterations is None else iterations
                ),
                stop_on_finish=settings.stop_host_on_relay_end if stop is None else stop,
            )
            return await print_relay(driver.run(), tf_console)

    try:
        failed = asyncio.run(_watch())
    except KeepaliveError as e:
        tf_console.print_error(e.message, e)
        raise typer.Exit(1) from e
    except KeyboardInterrupt:
        failed = False
    if failed:
        raise typer.Exit(1)
