"""Tests for spawning actors from drawings."""

import math
import random

import pytest

from core.actor_factory import ActorFactory, actor_size
from core.config.actors import DEFAULT_NOISE_SPEED, DEFAULT_SPEED_SCALE, DEFAULT_TURN_SPEED
from core.config.simulation_config import ActorTuning
from core.math_utils import Vector2


@pytest.fixture
def factory(seeded_rng):
    return ActorFactory(1920, 1080, rng=seeded_rng)


class TestActorSize:
    def test_size_matches_bounds(self, make_drawing):
        assert actor_size(make_drawing(bounds=(0, 0, 40, 40))) == (40, 40)

    def test_size_rounds_up(self, make_drawing):
        assert actor_size(make_drawing(bounds=(0.5, 0, 60.2, 50.01))) == (60, 51)

    def test_degenerate_bounds_use_floor(self, make_drawing):
        assert actor_size(make_drawing(bounds=(10, 10, 10, 10))) == (32, 32)
        assert actor_size(make_drawing(bounds=(0, 0, 100, 5))) == (100, 32)


class TestSpawn:
    def test_no_anchors(self, factory, make_drawing):
        """A 40x40 drawing without anchors gets centered zero offsets."""
        actor = factory.spawn(make_drawing(bounds=(0, 0, 40, 40)))

        assert (actor.width, actor.height) == (40, 40)
        assert actor.mouth_offset == Vector2(0, 0)
        assert actor.back_offset == Vector2(0, 0)
        assert 0.0 <= actor.heading <= 2 * math.pi

    def test_anchors_define_heading_and_offsets(self, factory, make_drawing):
        actor = factory.spawn(
            make_drawing(bounds=(0, 0, 40, 40), mouth=(35, 20), back=(5, 20))
        )

        assert actor.heading == pytest.approx(0.0)
        assert actor.mouth_offset.x == pytest.approx(15.0)
        assert actor.mouth_offset.y == pytest.approx(0.0)
        assert actor.back_offset.x == pytest.approx(-15.0)
        assert actor.back_offset.y == pytest.approx(0.0)

    def test_offsets_are_relative_to_bounds_origin(self, factory, make_drawing):
        actor = factory.spawn(
            make_drawing(bounds=(100, 200, 160, 240), mouth=(130, 205), back=(130, 235))
        )

        # Mouth above back: facing up (negative y)
        assert actor.heading == pytest.approx(-math.pi / 2)
        assert actor.mouth_offset.x == pytest.approx(0.0)
        assert actor.mouth_offset.y == pytest.approx(-15.0)
        assert actor.back_offset.y == pytest.approx(15.0)

    def test_spawn_inside_world(self, factory, make_drawing):
        for i in range(200):
            actor = factory.spawn(make_drawing(drawing_id=f"d{i}"))
            assert 0.0 <= actor.pos.x <= 1920
            assert 0.0 <= actor.pos.y <= 1080

    def test_defaults(self, factory, make_drawing):
        actor = factory.spawn(make_drawing())

        assert actor.id == "d1"
        assert actor.scale == 1.0
        assert actor.noise_speed == DEFAULT_NOISE_SPEED
        assert actor.speed_scale == DEFAULT_SPEED_SCALE
        assert actor.turn_speed == DEFAULT_TURN_SPEED

    def test_noise_phases_are_independent(self, factory, make_drawing):
        a = factory.spawn(make_drawing(drawing_id="a"))
        b = factory.spawn(make_drawing(drawing_id="b"))

        assert a.turn_phase != a.speed_phase
        assert (a.turn_phase, a.speed_phase) != (b.turn_phase, b.speed_phase)

    def test_custom_tuning(self, make_drawing):
        tuned = ActorFactory(
            800, 400, tuning=ActorTuning(noise_speed=1.0, speed_scale=50.0, turn_speed=0.5),
            rng=random.Random(0),
        )
        actor = tuned.spawn(make_drawing())

        assert (actor.noise_speed, actor.speed_scale, actor.turn_speed) == (1.0, 50.0, 0.5)
