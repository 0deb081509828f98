"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from snake_sim.server.session_manager import SessionManager
from snake_sim.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Send directions or pause toggles, receive a snapshot each move."""
    manager = _get_manager(websocket)
    if manager.get_session(session_id) is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    logger.info("Client connected to session %s.", session_id)

    try:
        await manager.subscribe(session_id, websocket)
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            if msg.get("action") == "pause":
                await manager.toggle_pause(session_id)
                continue

            direction_str = msg.get("direction")
            if not isinstance(direction_str, str):
                continue
            try:
                direction = Direction.parse(direction_str)
            except ValueError:
                continue
            await manager.set_direction(session_id, direction)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        manager.unsubscribe(session_id, websocket)
