"""Long-polling message relay between the lamp, the Unity scene and web clients."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from ..logging_config import logger
from ..models import LED_TOPIC, STATE_TOPIC, LedColor
from ..services import AppContext, get_context
from ..utils import as_mapping, coerce_str, error_response, leading_int

router = APIRouter(prefix="/api", tags=["pubsub"])


@router.post("/publish")
# Append a message to its topic queue; state-topic payloads also update the lamp snapshot
def publish(payload: Any = Body(default=None), ctx: AppContext = Depends(get_context)):
    try:
        data = as_mapping(payload)
        topic = coerce_str(data.get("topic"), "").strip()
        if not topic:
            return error_response("topic is required", status_code=status.HTTP_400_BAD_REQUEST)

        client_id = coerce_str(data.get("clientId"), "").strip() or "anonymous"
        body = data.get("payload")
        message = ctx.message_store.publish(topic, body, client_id)

        if topic == STATE_TOPIC and isinstance(body, dict):
            ctx.current_state.merge(body)

        return {"success": True, "message": message.as_wire()}
    except Exception as exc:
        logger.exception("publish failed", extra={"path": "/api/publish"})
        return error_response(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get("/poll")
# Return the newest message from another client published after `since`, or null
def poll(
    client_id: Optional[str] = Query(default=None, alias="clientId"),
    since: Optional[str] = Query(default=None),
    ctx: AppContext = Depends(get_context),
):
    try:
        requester = (client_id or "").strip() or "anonymous"
        message = ctx.message_store.poll_since(leading_int(since, 0), requester)
        return message.as_wire() if message else None
    except Exception as exc:
        logger.exception("poll failed", extra={"path": "/api/poll"})
        return error_response(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get("/state")
def get_state(ctx: AppContext = Depends(get_context)):
    return ctx.current_state.get().as_wire()


@router.post("/state")
# Merge a partial lamp state and rebroadcast the full snapshot on the state topic
def update_state(payload: Any = Body(default=None), ctx: AppContext = Depends(get_context)):
    try:
        # An empty body still refreshes the timestamp and rebroadcasts
        state = ctx.current_state.merge(as_mapping(payload))
        ctx.message_store.publish(STATE_TOPIC, state.as_wire(), "server")
        logger.info(
            f"state updated: mode={state.mode}, emotion={state.emotion}",
            extra={"mode": state.mode, "emotion": state.emotion},
        )
        return {"success": True, "state": state.as_wire()}
    except Exception as exc:
        logger.exception("state update failed", extra={"path": "/api/state"})
        return error_response(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post("/led")
# Push a raw RGB colour to the LED rig through the led topic
def set_led(payload: Any = Body(default=None), ctx: AppContext = Depends(get_context)):
    try:
        led = LedColor.from_payload(payload)
        ctx.message_store.publish(LED_TOPIC, led.as_wire(), "api")
        return {"success": True, "led": led.as_wire()}
    except Exception as exc:
        logger.exception("led update failed", extra={"path": "/api/led"})
        return error_response(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


__all__ = ["router"]
