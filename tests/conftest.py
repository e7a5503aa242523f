"""Pytest configuration and fixtures for fish fight tests."""

import random

import pytest

from core.drawing import Anchors, Bounds, Drawing, Point


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def simulation_engine():
    """A simulation engine with the default world and a fixed seed."""
    from core.simulation import SimulationEngine

    return SimulationEngine(seed=42)


@pytest.fixture
def make_drawing():
    """Factory for drawing records.

    ``bounds`` is ``(min_x, min_y, max_x, max_y)``; ``mouth``/``back`` are
    ``(x, y)`` tuples and must be given together.
    """

    def _make(drawing_id="d1", bounds=(0, 0, 40, 40), mouth=None, back=None, strokes=()):
        anchors = None
        if mouth is not None and back is not None:
            anchors = Anchors(mouth=Point(*mouth), back=Point(*back))
        return Drawing(
            id=drawing_id,
            strokes=tuple(tuple(Point(*p) for p in stroke) for stroke in strokes),
            bounds=Bounds(*bounds),
            anchors=anchors,
            timestamp=0,
        )

    return _make


@pytest.fixture
def drawing_payload():
    """A valid ``POST /api/drawings`` body."""

    def _payload(**overrides):
        payload = {
            "strokes": [[{"x": 10, "y": 20}, {"x": 30, "y": 20}]],
            "bounds": {"minX": 0, "minY": 0, "maxX": 40, "maxY": 40},
            "anchors": {"mouth": {"x": 35, "y": 20}, "back": {"x": 5, "y": 20}},
        }
        payload.update(overrides)
        return payload

    return _payload
