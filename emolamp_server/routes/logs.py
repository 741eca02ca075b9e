"""Telemetry ingest: every body is accepted, missing fields take their defaults."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from ..logging_config import logger
from ..models import ENTRY_TYPES, LogCategory, LogEntry
from ..services import AppContext, get_context
from ..utils import error_response, now_ms

router = APIRouter(prefix="/api/log", tags=["logs"])


def _record(ctx: AppContext, category: LogCategory, payload: Any) -> LogEntry:
    entry = ENTRY_TYPES[category].from_payload(payload, received_at=now_ms())
    ctx.log_store.append(category, entry)

    state = ctx.current_state
    if category is LogCategory.EMOTION:
        state.apply_emotion(entry)
    elif category is LogCategory.WEATHER:
        state.apply_weather(entry)
    elif category is LogCategory.STATE:
        state.apply_state_change(entry)
    else:
        state.apply_manual_state(entry)

    logger.info(f"{category.value} logged", extra={"category": category.value, "timestamp": entry.timestamp})
    return entry


def _ingest(ctx: AppContext, category: LogCategory, payload: Any, *, include_entry: bool = True):
    try:
        entry = _record(ctx, category, payload)
    except Exception as exc:
        logger.exception("log ingest failed", extra={"category": category.value})
        return error_response(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    response: Dict[str, Any] = {"success": True}
    if include_entry:
        response["entry"] = entry.as_wire()
    return response


@router.post("/emotion")
def log_emotion(payload: Any = Body(default=None), ctx: AppContext = Depends(get_context)):
    return _ingest(ctx, LogCategory.EMOTION, payload)


@router.post("/weather")
def log_weather(payload: Any = Body(default=None), ctx: AppContext = Depends(get_context)):
    return _ingest(ctx, LogCategory.WEATHER, payload)


@router.post("/state")
def log_state(payload: Any = Body(default=None), ctx: AppContext = Depends(get_context)):
    return _ingest(ctx, LogCategory.STATE, payload)


@router.post("/manualstate")
def log_manual_state(payload: Any = Body(default=None), ctx: AppContext = Depends(get_context)):
    return _ingest(ctx, LogCategory.MANUAL_STATE, payload, include_entry=False)


__all__ = ["router"]
