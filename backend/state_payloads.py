"""Lightweight data transfer objects for real-time messages.

Every message on the websocket is a JSON text frame of the form
``{"type": <event>, "data": <payload>}`` where event is ``state``,
``eaten`` or ``newDrawing``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

import orjson

from core.actor import Actor
from core.drawing import Drawing
from core.events import EatenEvent

STATE = "state"
EATEN = "eaten"
NEW_DRAWING = "newDrawing"


@dataclass
class ActorSnapshot:
    """Minimal snapshot of an actor for client rendering."""

    id: str
    x: float
    y: float
    vx: float
    vy: float
    heading: float
    scale: float
    mouth_offset: Dict[str, float]
    back_offset: Dict[str, float]
    w: float
    h: float

    @classmethod
    def from_actor(cls, actor: Actor) -> "ActorSnapshot":
        return cls(
            id=actor.id,
            x=actor.pos.x,
            y=actor.pos.y,
            vx=actor.vel.x,
            vy=actor.vel.y,
            heading=actor.heading,
            scale=actor.scale,
            mouth_offset=actor.mouth_offset.to_dict(),
            back_offset=actor.back_offset.to_dict(),
            w=actor.width,
            h=actor.height,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "vy": self.vy,
            "heading": self.heading,
            "scale": self.scale,
            "mouthOffset": self.mouth_offset,
            "backOffset": self.back_offset,
            "w": self.w,
            "h": self.h,
        }


@dataclass
class StatePayload:
    """Full world snapshot, identical for every client."""

    t: int
    world_w: float
    world_h: float
    actors: List[ActorSnapshot] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "t": self.t,
            "world": {"w": self.world_w, "h": self.world_h},
            "actors": [actor.to_dict() for actor in self.actors],
        }


def encode_message(event: str, data: Dict[str, Any]) -> str:
    """Serialize one websocket message."""
    return orjson.dumps({"type": event, "data": data}).decode("utf-8")


def state_message(payload: StatePayload) -> str:
    return encode_message(STATE, payload.to_dict())


def eaten_message(event: EatenEvent) -> str:
    return encode_message(EATEN, event.to_dict())


def new_drawing_message(drawing: Drawing) -> str:
    return encode_message(NEW_DRAWING, drawing.to_dict())
