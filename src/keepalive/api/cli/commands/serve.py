"""Serve command - run the keepalive HTTP API."""

import os

import typer


def serve(
    host: str = typer.Option(
        os.getenv("KEEPALIVE_HOST", "0.0.0.0"), "--host", help="Bind address"
    ),
    port: int = typer.Option(
        int(os.getenv("KEEPALIVE_PORT", "8070")), "--port", "-p", help="Bind port"
    ),
):
    """Start the API server with uvicorn."""
    import uvicorn

    loglevel = os.getenv("LOGLEVEL", "info").lower()
    typer.echo(f"Starting keepalive API on http://{host}:{port}")
    typer.echo(f"API docs: http://localhost:{port}/docs")
    uvicorn.run("keepalive.api.server:app", host=host, port=port, log_level=loglevel)
