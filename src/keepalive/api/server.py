from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse

from keepalive import __version__
from keepalive.api.dependencies import get_registry
from keepalive.api.errors import ERROR_HEADER
from keepalive.api.logging_setup import configure_logging
from keepalive.api.routes import health, hosts, monitor

logger = structlog.get_logger()


async def keepalive_http_exception_handler(
    request: Request,
    exc: HTTPException,
) -> JSONResponse:
    """Return standardized error responses for keepalive exceptions."""
    if exc.headers and exc.headers.get(ERROR_HEADER) == "1" and isinstance(exc.detail, dict):
        return JSONResponse(
            status_code=exc.status_code, content=exc.detail, headers=exc.headers
        )
    return await http_exception_handler(request, exc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI startup/shutdown events."""
    provider = app.dependency_overrides.get(get_registry, get_registry)
    registry = provider()
    # log_level already folds in LOGLEVEL and KEEPALIVE_LOG_LEVEL
    configure_logging(registry.settings.log_level)
    await logger.ainfo(
        "fastapi.startup",
        message="Keepalive API starting...",
        max_hosts=registry.settings.max_hosts,
        workload=registry.settings.workload,
    )
    yield
    await logger.ainfo("fastapi.shutdown", message="Keepalive API shutting down...")

    # Stop every running host so no execution loop outlives the server
    await registry.shutdown()


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Keepalive Task Host API",
        description=(
            "Cooperative CPU task host kept alive by periodic pings"
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_exception_handler(HTTPException, keepalive_http_exception_handler)

    app.include_router(hosts.router, prefix="/api/v1", tags=["hosts"])
    app.include_router(monitor.router, prefix="/api/v1", tags=["monitor"])
    app.include_router(health.router, tags=["health"])

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8070)
