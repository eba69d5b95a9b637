"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from nzbio.infrastructure.config import AppConfig
from nzbio.interfaces.app_state import AppState
from nzbio.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create the FastAPI app: configuration only, no resource initialization.

    Resources (HTTP client, upstream clients, use cases) are created in lifespan().
    """
    app = FastAPI(
        title=config.addon.name,
        description=config.addon.description,
        version=config.addon.version,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        """Liveness probe; 200 as long as the process is running."""
        return {"status": "ok"}

    # Registered after /healthz: the Stremio router ends in a catch-all route.
    from nzbio.interfaces.api.stremio.router import router as stremio_router

    app.include_router(stremio_router)

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
