from __future__ import annotations

from fastapi import FastAPI

from ..config import Settings
from .logs import router as logs_router
from .meta import router as meta_router
from .pubsub import router as pubsub_router
from .stats import router as stats_router


def include_routers(app: FastAPI, settings: Settings) -> None:
    """Mount the routers enabled for the configured mode."""
    if settings.pubsub_enabled:
        app.include_router(pubsub_router)
    if settings.stats_enabled:
        app.include_router(logs_router)
        app.include_router(stats_router)
    app.include_router(meta_router)


__all__ = ["include_routers", "logs_router", "meta_router", "pubsub_router", "stats_router"]
