"""Factory that turns drawings into simulated actors."""

from __future__ import annotations

import logging
import math
import random
from typing import Optional, Tuple

from core.actor import Actor
from core.config.actors import MIN_ACTOR_SIZE, NOISE_PHASE_RANGE
from core.config.simulation_config import ActorTuning
from core.drawing import Drawing, Point
from core.math_utils import Vector2, heading_between

logger = logging.getLogger(__name__)


def actor_size(drawing: Drawing) -> Tuple[int, int]:
    """Actor width and height for a drawing, never below ``MIN_ACTOR_SIZE``."""
    bounds = drawing.bounds
    w = max(MIN_ACTOR_SIZE, math.ceil(bounds.width))
    h = max(MIN_ACTOR_SIZE, math.ceil(bounds.height))
    return w, h


def local_offset(anchor: Point, drawing: Drawing, width: float, height: float) -> Vector2:
    """Offset of a drawing-space anchor from the actor's local center."""
    return Vector2(
        anchor.x - drawing.bounds.min_x - width / 2.0,
        anchor.y - drawing.bounds.min_y - height / 2.0,
    )


class ActorFactory:
    """Spawns actors at random poses inside the world rectangle.

    Args:
        world_width: Width of the world rectangle.
        world_height: Height of the world rectangle.
        tuning: Steering constants copied onto every new actor.
        rng: Random source for positions, headings and noise phases.
    """

    def __init__(
        self,
        world_width: float,
        world_height: float,
        tuning: Optional[ActorTuning] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.world_width = world_width
        self.world_height = world_height
        self.tuning = tuning or ActorTuning()
        self._rng = rng or random.Random()

    def spawn(self, drawing: Drawing) -> Actor:
        w, h = actor_size(drawing)
        rng = self._rng

        pos = Vector2(rng.uniform(0.0, self.world_width), rng.uniform(0.0, self.world_height))

        anchors = drawing.anchors
        if anchors is not None:
            heading = heading_between(anchors.mouth, anchors.back)
            mouth_offset = local_offset(anchors.mouth, drawing, w, h)
            back_offset = local_offset(anchors.back, drawing, w, h)
        else:
            heading = rng.uniform(0.0, 2.0 * math.pi)
            mouth_offset = Vector2()
            back_offset = Vector2()

        actor = Actor(
            id=drawing.id,
            pos=pos,
            heading=heading,
            width=w,
            height=h,
            mouth_offset=mouth_offset,
            back_offset=back_offset,
            turn_phase=rng.uniform(0.0, NOISE_PHASE_RANGE),
            speed_phase=rng.uniform(0.0, NOISE_PHASE_RANGE),
            noise_speed=self.tuning.noise_speed,
            speed_scale=self.tuning.speed_scale,
            turn_speed=self.tuning.turn_speed,
        )
        logger.debug(
            "Spawned actor %s (%dx%d) at (%.1f, %.1f) heading %.2f",
            actor.id,
            w,
            h,
            pos.x,
            pos.y,
            heading,
        )
        return actor
