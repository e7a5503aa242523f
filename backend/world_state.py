"""Owned world state shared by the runner, the routers and the broadcaster.

The drawing registry and the simulation engine are the only mutable shared
structures. Everything touches them through this object, on the event loop
thread, so no locking is needed.
"""

import logging
from typing import Any, Optional, Tuple

from backend.drawing_registry import DrawingRegistry
from backend.state_payloads import ActorSnapshot, StatePayload
from core.actor import Actor
from core.drawing import Drawing, now_millis
from core.simulation import SimulationEngine

logger = logging.getLogger(__name__)


class WorldState:
    """Drawing registry plus the live simulation built from it."""

    def __init__(self, registry: DrawingRegistry, engine: SimulationEngine) -> None:
        self.registry = registry
        self.engine = engine

    def submit_drawing(self, payload: Any) -> Tuple[Drawing, Optional[Actor]]:
        """Register a drawing and spawn its actor if none is alive.

        Raises:
            InvalidPayload: From the registry; nothing is stored or spawned.
        """
        drawing = self.registry.submit(payload)
        actor = self.engine.spawn_for(drawing)
        return drawing, actor

    def spawn_missing(self) -> int:
        """Spawn actors for every registered drawing without a live actor.

        Returns:
            Number of actors spawned.
        """
        spawned = 0
        for drawing in self.registry.list_all():
            if self.engine.spawn_for(drawing) is not None:
                spawned += 1
        if spawned:
            logger.info("Spawned %d actors from %d stored drawings", spawned, len(self.registry))
        return spawned

    def snapshot(self, t: Optional[int] = None) -> StatePayload:
        return StatePayload(
            t=now_millis() if t is None else t,
            world_w=self.engine.world_width,
            world_h=self.engine.world_height,
            actors=[ActorSnapshot.from_actor(actor) for actor in self.engine.actors()],
        )
