from __future__ import annotations

import asyncio
import json
import logging
from contextlib import suppress
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from models.snapshot import SessionSnapshot
from services.game_hub import game_hub
from services.relay import relay

router = APIRouter(tags=["game-updates"])
logger = logging.getLogger(__name__)


@router.websocket("/ws")
async def ws_game_updates(websocket: WebSocket) -> None:
    """
    Push channel for session snapshots.

    Client -> server:
      {"type": "join_game", "gameId": str}    follow a session (replaces any previous one)

    Server -> client:
      {"type": "game_update", "session": {...snapshot...}}
      {"type": "error", "error": str}
    """
    await websocket.accept()
    await _serve(websocket, game_hub.new_queue())


@router.websocket("/ws/games/{session_id}")
async def ws_session_updates(websocket: WebSocket, session_id: str) -> None:
    """Same channel, already following ``session_id`` on connect."""
    await websocket.accept()
    if session_id not in relay.registry:
        await websocket.send_json({"type": "error", "error": f"Session {session_id} not found"})
        await websocket.close()
        return

    q = await game_hub.subscribe(session_id)
    game_hub.offer(q, SessionSnapshot.from_session(relay.get_session(session_id)).to_message())
    logger.info("[game_ws] Subscribed on connect session_id=%r", session_id)
    await _serve(websocket, q)


async def _serve(websocket: WebSocket, q: asyncio.Queue[dict[str, Any]]) -> None:
    # All writes go through the queue so only the sender task touches send_json.
    sender = asyncio.create_task(_pump(websocket, q))
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return
            raw = message.get("text")
            if raw is None:
                logger.warning("[game_ws] Ignoring binary frame (%d bytes)", len(message.get("bytes") or b""))
                continue
            await _handle_message(q, raw)
    except WebSocketDisconnect:
        return
    finally:
        await game_hub.unsubscribe(q)
        sender.cancel()
        with suppress(asyncio.CancelledError):
            await sender


async def _pump(websocket: WebSocket, q: asyncio.Queue[dict[str, Any]]) -> None:
    while True:
        payload = await q.get()
        try:
            await websocket.send_json(payload)
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            # Closed connections are skipped, never escalated.
            logger.warning("[game_ws] Dropping update for closed connection: %s", e)
            return


async def _handle_message(q: asyncio.Queue[dict[str, Any]], raw: str) -> None:
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("[game_ws] Ignoring non-JSON message: %.60s", raw)
        return
    if not isinstance(data, dict):
        logger.warning("[game_ws] Ignoring non-object message: %.60s", raw)
        return

    if data.get("type") != "join_game":
        logger.info("[game_ws] Ignoring message type=%r", data.get("type"))
        return

    session_id = data.get("gameId")
    if not isinstance(session_id, str) or session_id not in relay.registry:
        game_hub.offer(q, {"type": "error", "error": f"Session {session_id} not found"})
        return

    await game_hub.subscribe(session_id, q)
    logger.info("[game_ws] Subscribed session_id=%r", session_id)
    await relay.broadcast(SessionSnapshot.from_session(relay.get_session(session_id)))
