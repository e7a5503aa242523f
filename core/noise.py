"""Seeded one-dimensional gradient (Perlin) noise.

Actors steer by sampling a smooth noise field at a slowly advancing phase.
Each ``NoiseField`` owns its own permutation table and gradients, so two
fields built from different seeds are independent of each other.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional

_TABLE_SIZE = 256
_TABLE_MASK = _TABLE_SIZE - 1


def _fade(t: float) -> float:
    # 6t^5 - 15t^4 + 10t^3, zero first and second derivative at 0 and 1
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


class NoiseField:
    """Continuous noise over the real line with values in ``[-1, 1]``.

    Raw 1-D gradient noise with gradients in ``[-1, 1]`` peaks at ``0.5`` in
    magnitude, so samples are scaled by two and clamped.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        rng = rng or random.Random()
        perm = list(range(_TABLE_SIZE))
        rng.shuffle(perm)
        self._perm: List[int] = perm
        self._gradients: List[float] = [rng.uniform(-1.0, 1.0) for _ in range(_TABLE_SIZE)]

    def _gradient(self, lattice: int) -> float:
        return self._gradients[self._perm[lattice & _TABLE_MASK]]

    def sample(self, x: float) -> float:
        i0 = math.floor(x)
        t = x - i0
        d0 = self._gradient(i0) * t
        d1 = self._gradient(i0 + 1) * (t - 1.0)
        value = 2.0 * (d0 + _fade(t) * (d1 - d0))
        if value > 1.0:
            return 1.0
        if value < -1.0:
            return -1.0
        return value


__all__ = ["NoiseField"]
