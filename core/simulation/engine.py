"""Authoritative simulation engine for the fish fight world.

The engine owns the set of live actors and is the only thing that mutates
them. One call to ``step`` advances every actor by one fixed timestep:

1. Motion: sample the turn and speed noise fields at each actor's phases,
   steer, move, and advance the phases.
2. Wrap: toroidal boundaries, re-entering once the scaled box has left
   the world extended by its half-size.
3. Predation: ordered pair scan (see ``core.predation``).
4. Removal: eaten actors are deleted after the scan.

A tick never suspends and never fails; inputs are validated before a drawing
reaches ``spawn_for``.
"""

import logging
import math
import random
from typing import Dict, List, Optional

from core.actor import Actor
from core.actor_factory import ActorFactory
from core.config.simulation_config import SimulationConfig
from core.drawing import Drawing
from core.events import EatenEvent
from core.noise import NoiseField
from core.predation import resolve_predation

logger = logging.getLogger(__name__)


class SimulationEngine:
    """Owns the live actor set and advances it tick by tick.

    Args:
        config: World size, tick rate and actor tuning.
        seed: Optional seed; when given, spawns and noise are deterministic.
    """

    def __init__(self, config: Optional[SimulationConfig] = None, seed: Optional[int] = None) -> None:
        self.config = config or SimulationConfig()
        self.rng = random.Random(seed)

        # Independent fields for turning and throttle, each with its own table
        self.turn_field = NoiseField(random.Random(self.rng.random()))
        self.speed_field = NoiseField(random.Random(self.rng.random()))

        self.factory = ActorFactory(
            self.config.world_width,
            self.config.world_height,
            tuning=self.config.actor_tuning,
            rng=self.rng,
        )
        self._actors: Dict[str, Actor] = {}
        self.tick_count = 0

    @property
    def world_width(self) -> float:
        return self.config.world_width

    @property
    def world_height(self) -> float:
        return self.config.world_height

    @property
    def actor_count(self) -> int:
        return len(self._actors)

    def actors(self) -> List[Actor]:
        """Live actors in spawn order."""
        return list(self._actors.values())

    def get(self, actor_id: str) -> Optional[Actor]:
        return self._actors.get(actor_id)

    def has_actor(self, actor_id: str) -> bool:
        return actor_id in self._actors

    def add_actor(self, actor: Actor) -> None:
        """Insert a prebuilt actor, replacing nothing."""
        if actor.id in self._actors:
            raise ValueError(f"Actor {actor.id} already exists")
        self._actors[actor.id] = actor

    def spawn_for(self, drawing: Drawing) -> Optional[Actor]:
        """Spawn an actor for ``drawing`` unless one with its id is alive.

        Returns:
            The new actor, or None if the id already had a live actor.
        """
        if drawing.id in self._actors:
            logger.debug("Actor %s already alive, not spawning", drawing.id)
            return None
        actor = self.factory.spawn(drawing)
        self._actors[actor.id] = actor
        logger.info("Spawned actor %s (%d live)", actor.id, len(self._actors))
        return actor

    def remove(self, actor_id: str) -> bool:
        return self._actors.pop(actor_id, None) is not None

    def step(self, dt: Optional[float] = None) -> List[EatenEvent]:
        """Advance the whole actor set by one tick.

        Returns:
            Eaten events produced this tick, in scan order.
        """
        if dt is None:
            dt = self.config.dt

        actors = list(self._actors.values())
        for actor in actors:
            self._move(actor, dt)
            self._wrap(actor)

        events, eaten = resolve_predation(actors)
        for actor_id in eaten:
            del self._actors[actor_id]

        self.tick_count += 1
        return events

    def _move(self, actor: Actor, dt: float) -> None:
        turn = self.turn_field.sample(actor.turn_phase)
        throttle = self.speed_field.sample(actor.speed_phase)

        actor.heading += turn * actor.turn_speed * dt
        speed = (0.5 + 0.5 * throttle) * actor.speed_scale
        actor.vel.update(math.cos(actor.heading) * speed, math.sin(actor.heading) * speed)
        actor.pos.x += actor.vel.x * dt
        actor.pos.y += actor.vel.y * dt

        actor.turn_phase += actor.noise_speed * dt
        actor.speed_phase += actor.noise_speed * dt

    def _wrap(self, actor: Actor) -> None:
        # The box must clear the world grown by its half-size on every side,
        # which puts the center one full scaled size past the edge
        margin_x = actor.scaled_width
        margin_y = actor.scaled_height
        w = self.config.world_width
        h = self.config.world_height

        if actor.pos.x < -margin_x:
            actor.pos.x = w + margin_x
        elif actor.pos.x > w + margin_x:
            actor.pos.x = -margin_x

        if actor.pos.y < -margin_y:
            actor.pos.y = h + margin_y
        elif actor.pos.y > h + margin_y:
            actor.pos.y = -margin_y
