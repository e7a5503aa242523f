"""Broadcast scheduling for snapshots and discrete events.

Snapshots go out at most ``broadcast_hz`` times per second, gated on wall
clock time after each batch of ticks. ``eaten`` and ``newDrawing`` events are
queued the moment they happen and are never batched or deduplicated. Nothing
here awaits: messages go into per-client outboxes drained by sender tasks.
"""

import logging
import time
from typing import Callable, Iterable, Optional

from fastapi import WebSocket

from backend.connection_manager import ConnectionManager
from backend.state_payloads import eaten_message, new_drawing_message, state_message
from backend.world_state import WorldState
from core.drawing import Drawing
from core.events import EatenEvent
from core.simulation import IntervalGate

logger = logging.getLogger("backend.broadcast")


class Broadcaster:
    """Pushes world state and events to every connected client.

    Args:
        world_state: Source of snapshots.
        connections: Connected clients.
        broadcast_interval: Minimum seconds between periodic snapshots.
        clock: Monotonic clock used by the snapshot gate.
    """

    def __init__(
        self,
        world_state: WorldState,
        connections: ConnectionManager,
        broadcast_interval: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.world_state = world_state
        self.connections = connections
        self.gate = IntervalGate(broadcast_interval)
        self._clock = clock
        self.snapshots_sent = 0

    def publish_state(self, now: Optional[float] = None) -> bool:
        """Broadcast a snapshot if the gate is open.

        Returns:
            True if a snapshot was sent.
        """
        if not self.gate.ready(self._clock() if now is None else now):
            return False
        if not self.connections.client_count:
            return False

        message = state_message(self.world_state.snapshot())
        delivered = self.connections.broadcast(message)
        self.snapshots_sent += 1
        if self.snapshots_sent % 150 == 0:  # ~10 seconds at 15 Hz
            logger.debug(
                "Snapshot %d: %d actors to %d clients",
                self.snapshots_sent,
                self.world_state.engine.actor_count,
                delivered,
            )
        return True

    def publish_eaten(self, events: Iterable[EatenEvent]) -> None:
        for event in events:
            self.connections.broadcast(eaten_message(event))

    def publish_new_drawing(self, drawing: Drawing) -> None:
        self.connections.broadcast(new_drawing_message(drawing))

    def send_snapshot(self, websocket: WebSocket) -> None:
        """Queue the current snapshot for a single client, outside the gate.

        Raises:
            TransientSendFailure: If the client is not registered.
        """
        self.connections.send(websocket, state_message(self.world_state.snapshot()))
