"""Connected websocket clients and fan-out sending.

Each client owns a bounded outbox drained by its own sender task. Queuing a
message never awaits, so the simulation loop and request handlers are never
held up by a slow or dead client; only that client's sender waits on it.
"""

import asyncio
import logging
from contextlib import suppress
from dataclasses import dataclass
from typing import Dict, Set

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from core.exceptions import TransientSendFailure

logger = logging.getLogger(__name__)

# A client that cannot take a message within this time is treated as gone
SEND_TIMEOUT_SECONDS = 2.0

# Messages allowed to pile up for one client (~4 seconds of snapshots at 15 Hz)
OUTBOX_LIMIT = 64


def handle_task_exception(task: asyncio.Task) -> None:
    """Handle exceptions from background tasks."""
    try:
        exc = task.exception()
        if exc is not None:
            logger.error(
                f"Unhandled exception in task {task.get_name()}: {exc}",
                exc_info=(type(exc), exc, exc.__traceback__),
            )
    except asyncio.CancelledError:
        logger.debug(f"Task {task.get_name()} was cancelled")


@dataclass
class _Outbox:
    queue: asyncio.Queue
    task: asyncio.Task


class ConnectionManager:
    """Tracks connected clients and pushes text frames to them.

    Every client receives the same messages in the same order. A failed or
    timed-out send, or an overflowing outbox, only affects the client it was
    meant for: that client is dropped and nothing is retried.
    """

    def __init__(
        self,
        send_timeout: float = SEND_TIMEOUT_SECONDS,
        outbox_limit: int = OUTBOX_LIMIT,
    ) -> None:
        self._outboxes: Dict[WebSocket, _Outbox] = {}
        self.send_timeout = send_timeout
        self.outbox_limit = outbox_limit
        logger.info("ConnectionManager initialized")

    @property
    def clients(self) -> Set[WebSocket]:
        self._prune_closed_clients()
        return set(self._outboxes)

    @property
    def client_count(self) -> int:
        self._prune_closed_clients()
        return len(self._outboxes)

    def add_client(self, websocket: WebSocket) -> None:
        """Register a client and start its sender task.

        Must be called from a running event loop.
        """
        self._prune_closed_clients()
        if websocket in self._outboxes:
            return
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.outbox_limit)
        task = asyncio.create_task(
            self._drain(websocket, queue),
            name=f"client_sender_{id(websocket):x}",
        )
        task.add_done_callback(handle_task_exception)
        self._outboxes[websocket] = _Outbox(queue=queue, task=task)
        logger.info("Client connected. Total clients: %d", len(self._outboxes))

    def remove_client(self, websocket: WebSocket) -> None:
        outbox = self._outboxes.pop(websocket, None)
        if outbox is None:
            return
        if outbox.task is not asyncio.current_task():
            outbox.task.cancel()
        logger.info("Client disconnected. Total clients: %d", len(self._outboxes))

    def _prune_closed_clients(self) -> None:
        """Remove any WebSocket connections that are no longer open."""
        stale_clients = [
            websocket
            for websocket in self._outboxes
            if getattr(websocket, "client_state", WebSocketState.CONNECTED)
            not in {WebSocketState.CONNECTED, WebSocketState.CONNECTING}
        ]
        if stale_clients:
            for websocket in stale_clients:
                self.remove_client(websocket)
            logger.info(
                "Pruned %d stale clients. Total clients: %d",
                len(stale_clients),
                len(self._outboxes),
            )

    def send(self, websocket: WebSocket, message: str) -> None:
        """Queue one text frame for one client.

        Raises:
            TransientSendFailure: If the client is unknown or its outbox is
                full; a full outbox also drops the client.
        """
        outbox = self._outboxes.get(websocket)
        if outbox is None:
            raise TransientSendFailure("client is not connected")
        try:
            outbox.queue.put_nowait(message)
        except asyncio.QueueFull:
            self.remove_client(websocket)
            raise TransientSendFailure(
                f"outbox full after {self.outbox_limit} messages"
            ) from None

    def broadcast(self, message: str) -> int:
        """Queue ``message`` for every client.

        Returns:
            Number of clients it was queued for.
        """
        queued = 0
        for websocket in list(self.clients):
            try:
                self.send(websocket, message)
            except TransientSendFailure as e:
                logger.warning("Dropping slow client: %s", e)
                continue
            queued += 1
        return queued

    async def _drain(self, websocket: WebSocket, queue: asyncio.Queue) -> None:
        while True:
            message = await queue.get()
            try:
                await asyncio.wait_for(websocket.send_text(message), timeout=self.send_timeout)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning("Send failed, dropping client: %s", str(e) or type(e).__name__)
                self.remove_client(websocket)
                return

    async def close(self) -> None:
        """Stop every sender task."""
        tasks = [outbox.task for outbox in self._outboxes.values()]
        self._outboxes.clear()
        for task in tasks:
            task.cancel()
        for task in tasks:
            with suppress(asyncio.CancelledError):
                await task
