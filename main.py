"""Cloud Status Monitor -- entry point.

Assembles the status pipeline:

    Scheduler (once at startup, then every REFRESH_INTERVAL_SECONDS)
        -> RefreshOrchestrator (AWS, Azure, GCP fetched concurrently)
        -> StatusCache (one entry per provider, atomically replaced)
        -> FastAPI query endpoints under /api

A shared httpx.AsyncClient is injected into all providers.
A semaphore inside the orchestrator caps concurrent provider fetches.
"""
from __future__ import annotations

import logging

import uvicorn

from core.config import get_settings


def main() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        uvicorn.run(
            "api.app:app",
            host=settings.HOST,
            port=settings.PORT,
            log_config=None,
        )
    except KeyboardInterrupt:
        print("\nShutting down.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
