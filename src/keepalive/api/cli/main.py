"""Keepalive CLI entry point."""

import logging

import typer
from rich.console import Console

from keepalive.api.cli.commands import run, serve, watch
from keepalive.api.logging_setup import configure_logging

app = typer.Typer(
    name="keepalive",
    help="Keepalive - cooperative CPU task host kept alive by pings",
    add_completion=True,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.command("run", help="Run a workload in-process and print its relay")(run.run_local)
app.command("watch", help="Relay keep-alive pings to a remote host")(watch.watch_remote)
app.command("serve", help="Start the HTTP API")(serve.serve)


@app.callback()
def main(
    ctx: typer.Context,
    config: str | None = typer.Option(
        None, "--config", "-c", help="YAML settings file (default: $KEEPALIVE_CONFIG)"
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """Keepalive CLI."""
    # Store global options in context for subcommands
    ctx.obj = {"config": config, "debug": debug}
    configure_logging(logging.DEBUG if debug else logging.WARNING)


@app.command()
def version():
    """Show keepalive version."""
    from keepalive import __version__

    console.print(f"[bold blue]Version:[/bold blue] [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
