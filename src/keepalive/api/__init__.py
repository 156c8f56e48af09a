"""API layer: FastAPI server, routes and the Typer CLI."""
