import random

import pytest

from quadkit.asteroids import (
    ASTEROID_COUNT,
    BULLET_SPEED,
    MAX_SHIP_SPEED,
    SHIP_HEIGHT,
    TURN_STEP,
    Asteroid,
    AsteroidsGame,
    Bullet,
    Controls,
    wrap_around,
)
from quadkit.geometry import Vec2


def quiet_game() -> AsteroidsGame:
    game = AsteroidsGame(800.0, 600.0, random.Random(3))
    game.asteroids = [
        Asteroid(pos=Vec2(10.0, 10.0), vel=Vec2(0.0, 0.0), rot=0.0, rot_speed=0.0, size=5.0, sides=6)
    ]
    return game


def test_wrap_around_right_edge():
    assert wrap_around(Vec2(801.0, 50.0), 800.0, 600.0) == Vec2(0.0, 50.0)


def test_wrap_around_left_and_top_edges():
    assert wrap_around(Vec2(-1.0, -1.0), 800.0, 600.0) == Vec2(800.0, 600.0)


def test_wrap_around_inside_unchanged():
    assert wrap_around(Vec2(5.0, 7.0), 800.0, 600.0) == Vec2(5.0, 7.0)


def test_reset_places_asteroids_on_circle():
    game = AsteroidsGame(800.0, 600.0, random.Random(1))
    assert len(game.asteroids) == ASTEROID_COUNT
    for asteroid in game.asteroids:
        assert asteroid.sides == 6
        assert asteroid.size == pytest.approx(600.0 / 10)
        assert (asteroid.pos - game.center).length() == pytest.approx(600.0 / 2)
    assert game.ship.pos == game.center
    assert not game.game_over


def test_shooting_creates_bullet_at_bullet_speed():
    game = quiet_game()
    game.update(Controls(shoot=True), now=1.0)
    assert len(game.bullets) == 1
    assert game.bullets[0].vel.length() == pytest.approx(BULLET_SPEED)
    assert game.bullets[0].vel.y < 0


def test_shot_cooldown():
    game = quiet_game()
    game.update(Controls(shoot=True), now=1.0)
    game.update(Controls(shoot=True), now=1.05)
    assert len(game.bullets) == 1
    game.update(Controls(shoot=True), now=1.2)
    assert len(game.bullets) == 2


def test_bullets_expire():
    game = quiet_game()
    game.update(Controls(shoot=True), now=1.0)
    game.update(Controls(), now=2.6)
    assert game.bullets == []


def test_ship_speed_is_capped():
    game = quiet_game()
    for _ in range(40):
        game.update(Controls(up=True), now=0.0)
    assert game.ship.vel.length() == pytest.approx(MAX_SHIP_SPEED)


def test_turning_right():
    game = quiet_game()
    game.update(Controls(right=True), now=0.0)
    assert game.ship.rot == TURN_STEP


def test_bullet_splits_asteroid():
    game = AsteroidsGame(800.0, 600.0, random.Random(2))
    game.asteroids = [
        Asteroid(pos=Vec2(400.0, 100.0), vel=Vec2(0.0, 0.0), rot=0.0, rot_speed=0.0, size=20.0, sides=6)
    ]
    game.bullets = [Bullet(pos=Vec2(400.0, 100.0), vel=Vec2(1.0, 0.0), shot_at=1.0)]
    game.update(Controls(), now=1.0)
    assert game.bullets == []
    assert len(game.asteroids) == 2
    for fragment in game.asteroids:
        assert fragment.sides == 5
        assert fragment.size == pytest.approx(20.0 * 0.8)
        assert fragment.vel.dot(Vec2(1.0, 0.0)) == pytest.approx(0.0, abs=1e-9)
    assert not game.game_over


def test_destroying_last_asteroid_wins():
    game = AsteroidsGame(800.0, 600.0, random.Random(2))
    game.asteroids = [
        Asteroid(pos=Vec2(400.0, 100.0), vel=Vec2(0.0, 0.0), rot=0.0, rot_speed=0.0, size=20.0, sides=4)
    ]
    game.bullets = [Bullet(pos=Vec2(400.0, 100.0), vel=Vec2(1.0, 0.0), shot_at=1.0)]
    game.update(Controls(), now=1.0)
    assert game.asteroids == []
    assert game.game_over
    assert game.won


def test_ship_collision_loses():
    game = quiet_game()
    game.asteroids[0].pos = game.ship.pos
    game.update(Controls(), now=0.0)
    assert game.game_over
    assert not game.won


def test_update_after_game_over_does_nothing_until_reset():
    game = quiet_game()
    game.game_over = True
    before = game.ship.pos
    game.update(Controls(up=True), now=0.0)
    assert game.ship.pos == before
    game.reset()
    assert not game.game_over
    assert len(game.asteroids) == ASTEROID_COUNT


def test_ship_nose_points_up_at_zero_rotation():
    game = quiet_game()
    nose, left, right = game.ship_vertices()
    assert nose.x == pytest.approx(game.ship.pos.x)
    assert nose.y == pytest.approx(game.ship.pos.y - SHIP_HEIGHT / 2)
    assert left.y == pytest.approx(right.y)