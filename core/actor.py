"""Simulated creature actors."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.config.actors import (
    DEFAULT_NOISE_SPEED,
    DEFAULT_SPEED_SCALE,
    DEFAULT_TURN_SPEED,
    MIN_MOUTH_RADIUS,
    MOUTH_RADIUS_FACTOR,
)
from core.math_utils import Vector2


@dataclass
class Actor:
    """A live creature spawned from a drawing.

    ``pos`` is the world position of the actor's local center. Anchor offsets
    are local-space, relative to that center and before rotation; they are
    fixed at spawn and only transformed (rotated by ``heading``, scaled by
    ``scale``) when world positions are needed.
    """

    id: str
    pos: Vector2
    heading: float
    width: float
    height: float
    mouth_offset: Vector2 = field(default_factory=Vector2)
    back_offset: Vector2 = field(default_factory=Vector2)
    vel: Vector2 = field(default_factory=Vector2)
    scale: float = 1.0

    # Noise phases for the turn and speed fields
    turn_phase: float = 0.0
    speed_phase: float = 0.0

    noise_speed: float = DEFAULT_NOISE_SPEED
    speed_scale: float = DEFAULT_SPEED_SCALE
    turn_speed: float = DEFAULT_TURN_SPEED

    @property
    def speed(self) -> float:
        return self.vel.length()

    @property
    def scaled_width(self) -> float:
        return self.width * self.scale

    @property
    def scaled_height(self) -> float:
        return self.height * self.scale

    def to_world(self, local_offset: Vector2) -> Vector2:
        """Map a local offset to world space using the current pose."""
        return (local_offset * self.scale).rotated(self.heading).add_inplace(self.pos)

    def mouth_position(self) -> Vector2:
        return self.to_world(self.mouth_offset)

    def back_position(self) -> Vector2:
        return self.to_world(self.back_offset)

    def mouth_radius(self) -> float:
        return max(min(self.width, self.height) * MOUTH_RADIUS_FACTOR * self.scale, MIN_MOUTH_RADIUS)
