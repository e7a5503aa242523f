"""Small 2D math helpers for the simulation.

Positions, velocities and anchor offsets are all ``Vector2`` values. Mutating
helpers end in ``_inplace`` and return ``self`` so the per-tick hot path can
avoid allocations.
"""

from __future__ import annotations

import math
from typing import Dict


class Vector2:
    """A 2D vector in world or actor-local pixel space."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def distance_to(self, other: "Vector2") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def rotated(self, angle: float) -> "Vector2":
        """Return this vector rotated counter-clockwise by ``angle`` radians."""
        c = math.cos(angle)
        s = math.sin(angle)
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def update(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def add_inplace(self, other: "Vector2") -> "Vector2":
        """Add another vector to this one in-place."""
        self.x += other.x
        self.y += other.y
        return self

    def __eq__(self, other: object) -> bool:
        """Check if two vectors are equal."""
        if other.__class__ is not Vector2:
            return False
        return abs(self.x - other.x) < 1e-9 and abs(self.y - other.y) < 1e-9

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"


def heading_between(front: Vector2, back: Vector2) -> float:
    """Angle of the axis pointing from ``back`` towards ``front``."""
    return math.atan2(front.y - back.y, front.x - back.x)


__all__ = ["Vector2", "heading_between"]
