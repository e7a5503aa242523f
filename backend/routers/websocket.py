"""WebSocket endpoint for real-time world updates.

Clients only listen. The one thing they may send is ``{"type": "ping"}``;
anything else is read and dropped so the socket buffer never fills.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import orjson
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from backend.broadcast import Broadcaster
from backend.connection_manager import ConnectionManager
from backend.state_payloads import encode_message
from core.exceptions import TransientSendFailure

logger = logging.getLogger(__name__)


def _peer_address(websocket: WebSocket) -> str:
    """Best-effort client address, honouring a reverse proxy if present."""
    forwarded = websocket.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if websocket.client:
        return websocket.client.host
    return "unknown"


def _frame_text(frame: Mapping[str, Any]) -> Optional[str]:
    text = frame.get("text")
    if text is None and frame.get("bytes"):
        text = frame["bytes"].decode("utf-8", errors="replace")
    return text or None


def _reply(websocket: WebSocket, connections: ConnectionManager, text: str) -> None:
    """Answer a single client message through its outbox."""
    try:
        payload = orjson.loads(text)
    except orjson.JSONDecodeError:
        connections.send(websocket, encode_message("error", {"error": "Invalid JSON payload."}))
        return

    if isinstance(payload, dict) and payload.get("type") == "ping":
        connections.send(websocket, encode_message("pong", {}))


async def _serve_client(
    websocket: WebSocket,
    connections: ConnectionManager,
    broadcaster: Broadcaster,
) -> None:
    peer = _peer_address(websocket)
    registered = False

    try:
        await websocket.accept()

        # Register before the first send so no event between the two is missed
        connections.add_client(websocket)
        registered = True
        logger.info("Viewer connected from %s", peer)

        try:
            broadcaster.send_snapshot(websocket)
        except TransientSendFailure as exc:
            logger.warning("Initial snapshot to %s failed: %s", peer, exc)
            return

        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                break
            text = _frame_text(frame)
            if text is None:
                continue
            try:
                _reply(websocket, connections, text)
            except TransientSendFailure as exc:
                logger.info("Stopped serving %s: %s", peer, exc)
                break
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WebSocket error for viewer %s", peer)
    finally:
        if registered:
            connections.remove_client(websocket)


def setup_router(connections: ConnectionManager, broadcaster: Broadcaster) -> APIRouter:
    """Create the websocket router."""
    router = APIRouter()

    @router.websocket("/ws")
    async def world_updates(websocket: WebSocket) -> None:
        await _serve_client(websocket, connections, broadcaster)

    return router
