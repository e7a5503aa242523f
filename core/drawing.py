"""Drawing records submitted by clients.

A drawing is the template an actor is spawned from: the polyline strokes the
user drew, the padded bounding box around them, and optionally the mouth and
back anchors that define which way the creature faces. Records are immutable
once stored.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Optional, Tuple


class Point(NamedTuple):
    """A point in drawing space."""

    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


Stroke = Tuple[Point, ...]


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box around every point of a drawing."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, point: Point) -> bool:
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    def to_dict(self) -> Dict[str, float]:
        return {
            "minX": self.min_x,
            "minY": self.min_y,
            "maxX": self.max_x,
            "maxY": self.max_y,
        }


@dataclass(frozen=True)
class Anchors:
    """Mouth (front) and back points of a creature, in drawing space."""

    mouth: Point
    back: Point

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {"mouth": self.mouth.to_dict(), "back": self.back.to_dict()}


@dataclass(frozen=True)
class Drawing:
    """A stored creature drawing."""

    id: str
    strokes: Tuple[Stroke, ...]
    bounds: Bounds
    anchors: Optional[Anchors] = None
    timestamp: int = 0  # epoch milliseconds

    @property
    def point_count(self) -> int:
        return sum(len(stroke) for stroke in self.strokes)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape clients submit and receive."""
        strokes: List[List[Dict[str, float]]] = [
            [point.to_dict() for point in stroke] for stroke in self.strokes
        ]
        return {
            "id": self.id,
            "strokes": strokes,
            "bounds": self.bounds.to_dict(),
            "anchors": self.anchors.to_dict() if self.anchors else None,
            "timestamp": self.timestamp,
        }


def now_millis() -> int:
    return int(time.time() * 1000)


def generate_drawing_id(timestamp_ms: Optional[int] = None, rng: Optional[random.Random] = None) -> str:
    """Create an id of the form ``<epoch-millis>_<0..1000000>``."""
    rng = rng or random
    ts = now_millis() if timestamp_ms is None else timestamp_ms
    return f"{ts}_{round(rng.random() * 1_000_000)}"
