"""Core fish fight simulation.

This package contains the pure simulation logic with no web dependencies.
Key modules include:

- drawing: Submitted drawing records (strokes, bounds, anchors)
- actor / actor_factory: Simulated creatures and how drawings become them
- noise: Seeded gradient noise driving steering
- predation: Mouth-to-back predator/prey resolution
- simulation: The tick engine and fixed-step driving helpers

Design note: this module exposes a small, explicit public API via ``__all__``.
Use direct imports from submodules for internal helpers.
"""

from . import simulation as simulation

__all__ = [
    "simulation",
]
