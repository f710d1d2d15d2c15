"""FastAPI service exposing the cached cloud provider status to the web client."""
from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from core.cache import StatusCache
from core.config import Settings, get_settings
from core.orchestrator import RefreshOrchestrator, utc_now
from core.scheduler import Scheduler
from providers import build_registry, make_http_client

log = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    cache: StatusCache | None = None,
    orchestrator: RefreshOrchestrator | None = None,
) -> FastAPI:
    """Build the API application.

    With no ``cache``/``orchestrator`` the lifespan wires the real
    providers onto a shared HTTP client and starts the refresh scheduler.
    Passing both skips that wiring, which is how tests drive the routes.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("API starting (env=%s, version=%s)", settings.ENV, settings.VERSION)
        if app.state.orchestrator is not None:
            yield
            return

        async with make_http_client(settings) as client:
            registry = build_registry(client, settings)
            app.state.cache = StatusCache(registry.keys)
            app.state.orchestrator = RefreshOrchestrator(
                registry,
                app.state.cache,
                concurrency_limit=settings.CONCURRENCY_LIMIT,
            )
            scheduler = Scheduler(app.state.orchestrator, settings.REFRESH_INTERVAL_SECONDS)
            task = asyncio.create_task(scheduler.run(), name="scheduler")
            try:
                yield
            finally:
                task.cancel()
                with suppress(asyncio.CancelledError):
                    await task
                await app.state.orchestrator.aclose()
                log.info("API stopped")

    app = FastAPI(title=settings.APP_NAME, version=settings.VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.cache = cache
    app.state.orchestrator = orchestrator
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    def health(request: Request) -> dict[str, Any]:
        """Return process liveness and uptime in seconds."""

        return {"status": "ok", "uptime": time.monotonic() - request.app.state.started_at}

    @app.get("/api/version")
    def version() -> dict[str, str]:
        """Return application metadata from shared settings."""

        return {"name": settings.APP_NAME, "version": settings.VERSION, "env": settings.ENV}

    @app.get("/api/status")
    async def all_status(request: Request) -> dict[str, Any]:
        """Return every provider's cache entry, fetched or not."""

        snapshot = request.app.state.cache.snapshot()
        return {key: entry.to_dict() for key, entry in snapshot.items()}

    @app.get("/api/status/{provider}")
    async def provider_status(provider: str, request: Request) -> dict[str, Any]:
        """Return one provider's cache entry."""

        try:
            entry = request.app.state.cache.get(provider.lower())
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Unknown provider: {provider}") from None
        return entry.to_dict()

    @app.post("/api/refresh")
    async def refresh(request: Request) -> dict[str, Any]:
        """Run a refresh cycle (or join the one in flight) and return the result."""

        snapshot = await request.app.state.orchestrator.refresh()
        return {
            "message": "Refreshed",
            "timestamp": utc_now().isoformat(),
            "providers": {key: entry.to_dict() for key, entry in snapshot.items()},
        }

    return app


app = create_app()
