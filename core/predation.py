"""Predator/prey resolution.

An actor eats another when its mouth reaches the other's back: the distance
between A's world-space mouth and B's world-space back must be at most the sum
of both mouth radii. Geometry is taken once at the start of the scan and
removals are left to the caller, so the only order dependence is the skip
rule: an eaten actor takes no further part in the scan.
"""

import logging
from typing import List, Sequence, Set, Tuple

from core.actor import Actor
from core.config.actors import GROWTH_FACTOR, MAX_SCALE
from core.events import EatenEvent

logger = logging.getLogger(__name__)


def grow(actor: Actor) -> None:
    actor.scale = min(actor.scale * GROWTH_FACTOR, MAX_SCALE)


def resolve_predation(actors: Sequence[Actor]) -> Tuple[List[EatenEvent], Set[str]]:
    """Scan every ordered pair and decide who eats whom this tick.

    Eaters grow immediately, but the new scale only affects the next tick.

    Returns:
        The eaten events in scan order and the ids to remove.
    """
    events: List[EatenEvent] = []
    eaten: Set[str] = set()

    mouths = [actor.mouth_position() for actor in actors]
    backs = [actor.back_position() for actor in actors]
    radii = [actor.mouth_radius() for actor in actors]

    for i, eater in enumerate(actors):
        if eater.id in eaten:
            continue
        for j, prey in enumerate(actors):
            if i == j or prey.id in eaten:
                continue
            if mouths[i].distance_to(backs[j]) > radii[i] + radii[j]:
                continue

            eaten.add(prey.id)
            grow(eater)
            events.append(EatenEvent(eater_id=eater.id, prey_id=prey.id))
            logger.info("Actor %s ate actor %s (scale now %.2f)", eater.id, prey.id, eater.scale)

    return events, eaten
