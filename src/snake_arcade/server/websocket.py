"""WebSocket handlers for real-time play and spectating."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from snake_arcade.interfaces import Intent
from snake_arcade.server.models import SessionStatus
from snake_arcade.server.session_manager import SessionManager, state_payload

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _parse_intent(raw: str) -> Intent | None:
    """Decode ``{"intent": "<name>"}``; anything else yields None."""
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(msg, dict):
        return None
    name = msg.get("intent")
    if not isinstance(name, str):
        return None
    try:
        return Intent(name.lower())
    except ValueError:
        return None


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str, token: str = "") -> None:
    """Player WebSocket: send intents, receive the snapshot each tick."""
    manager = _get_manager(websocket)
    instance = manager.get_session(session_id)
    if instance is None:
        await websocket.close(code=4004, reason="Session not found.")
        return
    if token != instance.token:
        await websocket.close(code=4001, reason="Invalid token.")
        return

    await websocket.accept()

    # Enforce a single active socket per session.
    previous_ws = instance.websocket
    if previous_ws is not None and previous_ws is not websocket:
        try:
            await previous_ws.close(code=4008, reason="Replaced by new connection.")
        except Exception:
            logger.warning(
                "Failed closing previous socket in session %s.", session_id,
            )

    instance.websocket = websocket
    instance.connected = True
    logger.info("Player connected to session %s.", session_id)

    # Send initial snapshot so the client can draw immediately.
    await websocket.send_text(state_payload(instance, None))

    try:
        while True:
            raw = await websocket.receive_text()
            intent = _parse_intent(raw)
            if intent is None or intent == Intent.NONE:
                continue
            async with instance.lock:
                if instance.status == SessionStatus.ACTIVE:
                    instance.queue_intent(intent)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        # No-op if a newer connection already replaced this socket.
        instance.detach(websocket)


@ws_router.websocket("/sessions/{session_id}/spectate")
async def spectate(websocket: WebSocket, session_id: str) -> None:
    """Spectator WebSocket: receive-only snapshot stream."""
    manager = _get_manager(websocket)
    instance = manager.get_session(session_id)
    if instance is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    instance.spectators.append(websocket)
    logger.info("Spectator connected to session %s.", session_id)

    await websocket.send_text(state_payload(instance, None))

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Spectator disconnected from session %s.", session_id)
    finally:
        instance.detach(websocket)
