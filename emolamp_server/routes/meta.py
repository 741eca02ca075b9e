from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from ..models import StatusResponse
from ..services import AppContext, get_context
from ..utils import now_ms

router = APIRouter(tags=["meta"])

_DASHBOARD_PATH = Path(__file__).resolve().parent.parent / "static" / "dashboard.html"


@router.get("/api/status", response_model=StatusResponse)
# Report server identity and uptime; lamp clients use this as their connect check
def server_status(ctx: AppContext = Depends(get_context)) -> StatusResponse:
    settings = ctx.settings
    return StatusResponse(
        status="ok",
        server=settings.app_name,
        version=settings.app_version,
        uptime=round(ctx.uptime, 3),
        timestamp=now_ms(),
        subscribers=ctx.message_store.subscriber_count() if settings.pubsub_enabled else None,
        topics=ctx.message_store.topics() if settings.pubsub_enabled else None,
        logs=ctx.log_store.counts() if settings.stats_enabled else None,
    )


@router.get("/healthz", response_class=PlainTextResponse)
# Liveness probe for the hosting platform, independent of store state
def healthz() -> PlainTextResponse:
    return PlainTextResponse("OK", status_code=200)


@router.get("/", include_in_schema=False)
def index(request: Request, ctx: AppContext = Depends(get_context)):
    if ctx.settings.stats_enabled and _DASHBOARD_PATH.is_file():
        return HTMLResponse(_DASHBOARD_PATH.read_text(encoding="utf-8"))

    endpoints = sorted(path for path in request.app.openapi().get("paths", {}) if path.startswith("/api/"))
    return JSONResponse(
        {
            "name": ctx.settings.app_name,
            "description": "Message relay and telemetry statistics for EmoLamp",
            "mode": ctx.settings.mode,
            "endpoints": endpoints,
            "currentState": ctx.current_state.get().as_wire(),
            "generatedAt": now_ms(),
        }
    )


__all__ = ["router"]
