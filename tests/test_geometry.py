import math

import pytest

from quadkit.geometry import Rect, Vec2, Vec3, polar_to_cartesian


def test_vec2_length_of_pythagorean_triple():
    assert Vec2(3.0, 4.0).length() == pytest.approx(5.0)


@pytest.mark.parametrize("x,y", [(3.0, 4.0), (-2.0, 7.5), (0.1, -0.3)])
def test_vec2_normalize_gives_unit_length_same_direction(x, y):
    v = Vec2(x, y)
    n = v.normalize()
    assert n.length() == pytest.approx(1.0)
    assert n.dot(v) == pytest.approx(v.length())


def test_vec2_normalize_zero_raises():
    with pytest.raises(ValueError):
        Vec2(0.0, 0.0).normalize()


def test_vec2_arithmetic_round_trip():
    a = Vec2(1.5, -2.0)
    b = Vec2(0.25, 4.0)
    assert (a + b) - b == a
    assert (a * 2.0) / 2.0 == a
    assert -(-a) == a


def test_vec2_dot_of_perpendicular_is_zero():
    v = Vec2(2.0, 5.0)
    assert v.dot(Vec2(-v.y, v.x)) == pytest.approx(0.0)


def test_vec3_cross_is_perpendicular():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(-4.0, 0.5, 2.0)
    c = a.cross(b)
    assert c.dot(a) == pytest.approx(0.0)
    assert c.dot(b) == pytest.approx(0.0)
    assert b.cross(a) == -c


def test_vec3_cross_of_axes():
    assert Vec3(1.0, 0.0, 0.0).cross(Vec3(0.0, 1.0, 0.0)) == Vec3(0.0, 0.0, 1.0)


def test_vec3_normalize_unit_length():
    v = Vec3(-3.0, 1.0, 9.0)
    assert v.normalize().length() == pytest.approx(1.0)
    with pytest.raises(ValueError):
        Vec3().normalize()


def test_rect_overlaps_is_symmetric():
    a = Rect(0.0, 0.0, 10.0, 10.0)
    b = Rect(5.0, 5.0, 10.0, 10.0)
    c = Rect(20.0, 20.0, 1.0, 1.0)
    assert a.overlaps(b) and b.overlaps(a)
    assert not a.overlaps(c) and not c.overlaps(a)


def test_rect_overlaps_touching_edges():
    a = Rect(0.0, 0.0, 8.0, 8.0)
    assert a.overlaps(Rect(8.0, 0.0, 8.0, 8.0))


def test_rect_contains_edges():
    r = Rect(2.0, 3.0, 4.0, 5.0)
    assert r.contains(Vec2(2.0, 3.0))
    assert not r.contains(Vec2(6.0, 3.0))
    assert not r.contains(Vec2(2.0, 8.0))
    assert not r.contains(Vec2(1.9, 4.0))


@pytest.mark.parametrize("rho,theta", [(1.0, 0.3), (2.5, -1.2), (7.0, math.pi)])
def test_polar_to_cartesian_keeps_radius_and_angle(rho, theta):
    p = polar_to_cartesian(rho, theta)
    assert p.length() == pytest.approx(rho)
    assert math.atan2(p.y, p.x) == pytest.approx(math.atan2(math.sin(theta), math.cos(theta)))