"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from braille_snake.controls import direction_for_key
from braille_snake.server.session import GameSession

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_session(ws: WebSocket) -> GameSession | None:
    return getattr(ws.app.state, "session", None)


def _dumps(payload: dict) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


@ws_router.websocket("/game/play")
async def play(websocket: WebSocket) -> None:
    """Send turns and pause toggles, receive a frame each tick."""
    session = _get_session(websocket)
    if session is None:
        await websocket.close(code=1013, reason="No game session running.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Player connected (%d sockets).", len(session.sockets))

    # Send the current frame so the client gets immediate feedback.
    await websocket.send_text(_dumps(session.frame_payload()))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            if "direction" in msg:
                direction = direction_for_key(msg["direction"])
                if direction is None:
                    continue
                accepted = session.change_direction(direction)
                await websocket.send_text(_dumps({
                    "type": "ack",
                    "direction": direction.name.lower(),
                    "accepted": accepted,
                }))
            elif isinstance(msg.get("pause"), bool):
                if msg["pause"]:
                    session.pause()
                else:
                    session.resume()
                await session.flush()
    except WebSocketDisconnect:
        logger.info("Player disconnected.")
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
