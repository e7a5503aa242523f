import math

import pytest

from core.math_utils import Vector2, heading_between


def test_vector2_rotated_quarter_turn():
    v = Vector2(10, 0).rotated(math.pi / 2)
    assert v.x == pytest.approx(0.0, abs=1e-9)
    assert v.y == pytest.approx(10.0)


def test_vector2_rotation_preserves_length():
    v = Vector2(3, 4)
    assert v.rotated(1.234).length() == pytest.approx(5.0)


def test_vector2_add_inplace_returns_self():
    v1 = Vector2(1, 2)
    result = v1.add_inplace(Vector2(3, 4))
    assert result is v1
    assert (v1.x, v1.y) == (4, 6)


def test_vector2_scaling_allocates():
    a = Vector2(1, 1)
    c = a * 3
    assert (a.x, a.y) == (1, 1)
    assert (c.x, c.y) == (3, 3)


def test_vector2_distance():
    assert Vector2(0, 0).distance_to(Vector2(3, 4)) == pytest.approx(5.0)


def test_vector2_equality_tolerance():
    base = Vector2(1.0, 1.0)
    close = Vector2(1.0 + 5e-10, 1.0 - 5e-10)
    far = Vector2(1.0, 1.0001)

    assert base == close
    assert base != far
    assert base != (1.0, 1.0)


def test_vector2_to_dict_uses_floats():
    v = Vector2(2, -7)
    assert v.to_dict() == {"x": 2.0, "y": -7.0}


@pytest.mark.parametrize(
    "front, back, expected",
    [
        ((10, 0), (0, 0), 0.0),
        ((0, 10), (0, 0), math.pi / 2),
        ((-10, 0), (0, 0), math.pi),
        ((5, 5), (10, 10), -3 * math.pi / 4),
    ],
)
def test_heading_between(front, back, expected):
    assert heading_between(Vector2(*front), Vector2(*back)) == pytest.approx(expected)
