"""Asteroids game logic: a wrapping ship, bullets and splitting rocks."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Optional

from quadkit.geometry import Vec2

SHIP_HEIGHT = 25.0
SHIP_BASE = 22.0
ASTEROID_COUNT = 10
ASTEROID_SIDES = 6
MIN_SPLIT_SIDES = 4
SPLIT_SHRINK = 0.8
SHOT_COOLDOWN = 0.1
BULLET_LIFETIME = 1.5
BULLET_SPEED = 7.0
MAX_SHIP_SPEED = 5.0
TURN_STEP = 5.0
THRUST = 1.0 / 3.0
DRAG = 10.0


def wrap_around(pos: Vec2, width: float, height: float) -> Vec2:
    """Move a point that left the screen to the opposite edge."""
    x, y = pos.x, pos.y
    if x > width:
        x = 0.0
    if x < 0.0:
        x = width
    if y > height:
        y = 0.0
    if y < 0.0:
        y = height
    return Vec2(x, y)


@dataclass(frozen=True)
class Controls:
    """Which keys are held during a frame."""

    up: bool = False
    left: bool = False
    right: bool = False
    shoot: bool = False


@dataclass
class Ship:
    pos: Vec2
    rot: float = 0.0
    vel: Vec2 = Vec2(0.0, 0.0)

    @property
    def heading(self) -> Vec2:
        """Unit vector the nose points along."""
        rotation = math.radians(self.rot)
        return Vec2(math.sin(rotation), -math.cos(rotation))


@dataclass
class Bullet:
    pos: Vec2
    vel: Vec2
    shot_at: float
    collided: bool = False


@dataclass
class Asteroid:
    pos: Vec2
    vel: Vec2
    rot: float
    rot_speed: float
    size: float
    sides: int
    collided: bool = False


class AsteroidsGame:
    """State of one asteroids game on a screen of the given size."""

    def __init__(
        self, width: float = 800.0, height: float = 600.0, rng: Optional[random.Random] = None
    ) -> None:
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.last_shot = 0.0
        self.reset()

    @property
    def center(self) -> Vec2:
        return Vec2(self.width / 2.0, self.height / 2.0)

    @property
    def won(self) -> bool:
        """True once the game ended because every asteroid was destroyed."""
        return self.game_over and not self.asteroids

    def _random_direction(self) -> Vec2:
        while True:
            candidate = Vec2(self.rng.uniform(-1.0, 1.0), self.rng.uniform(-1.0, 1.0))
            if candidate.length() > 0.0:
                return candidate.normalize()

    def _spawn_asteroid(self) -> Asteroid:
        extent = min(self.width, self.height)
        pos = self.center + self._random_direction() * (extent / 2.0)
        vel = Vec2(self.rng.uniform(-1.0, 1.0), self.rng.uniform(-1.0, 1.0))
        return Asteroid(
            pos=pos,
            vel=vel,
            rot=0.0,
            rot_speed=self.rng.uniform(-2.0, 2.0),
            size=extent / 10.0,
            sides=ASTEROID_SIDES,
        )

    def reset(self) -> None:
        """Start a new round with the ship in the centre and fresh asteroids."""
        self.ship = Ship(pos=self.center)
        self.bullets: list[Bullet] = []
        self.asteroids: list[Asteroid] = [self._spawn_asteroid() for _ in range(ASTEROID_COUNT)]
        self.game_over = False

    def _fragment(self, asteroid: Asteroid, direction: Vec2) -> Asteroid:
        return Asteroid(
            pos=asteroid.pos,
            vel=direction.normalize() * self.rng.uniform(1.0, 3.0),
            rot=self.rng.uniform(0.0, 360.0),
            rot_speed=self.rng.uniform(-2.0, 2.0),
            size=asteroid.size * SPLIT_SHRINK,
            sides=asteroid.sides - 1,
        )

    def update(self, controls: Controls, now: float) -> None:
        """Advance one frame at time `now`; does nothing once the game is over."""
        if self.game_over:
            return
        ship = self.ship
        heading = ship.heading

        acc = -ship.vel / DRAG
        if controls.up:
            acc = heading * THRUST

        if controls.shoot and now - self.last_shot > SHOT_COOLDOWN:
            self.bullets.append(
                Bullet(
                    pos=ship.pos + heading * (SHIP_HEIGHT / 2.0),
                    vel=heading * BULLET_SPEED,
                    shot_at=now,
                )
            )
            self.last_shot = now

        if controls.right:
            ship.rot += TURN_STEP
        elif controls.left:
            ship.rot -= TURN_STEP

        ship.vel = ship.vel + acc
        if ship.vel.length() > MAX_SHIP_SPEED:
            ship.vel = ship.vel.normalize() * MAX_SHIP_SPEED
        ship.pos = wrap_around(ship.pos + ship.vel, self.width, self.height)

        for bullet in self.bullets:
            bullet.pos = bullet.pos + bullet.vel
        for asteroid in self.asteroids:
            asteroid.pos = wrap_around(asteroid.pos + asteroid.vel, self.width, self.height)
            asteroid.rot += asteroid.rot_speed

        self.bullets = [b for b in self.bullets if b.shot_at + BULLET_LIFETIME > now]

        fragments: list[Asteroid] = []
        for asteroid in self.asteroids:
            if (asteroid.pos - ship.pos).length() < asteroid.size + SHIP_HEIGHT / 3.0:
                self.game_over = True
                break
            hit = next(
                (b for b in self.bullets if (asteroid.pos - b.pos).length() < asteroid.size),
                None,
            )
            if hit is None:
                continue
            asteroid.collided = True
            hit.collided = True
            if asteroid.sides > MIN_SPLIT_SIDES:
                fragments.append(self._fragment(asteroid, Vec2(hit.vel.y, -hit.vel.x)))
                fragments.append(self._fragment(asteroid, Vec2(-hit.vel.y, hit.vel.x)))

        self.bullets = [
            b for b in self.bullets if b.shot_at + BULLET_LIFETIME > now and not b.collided
        ]
        self.asteroids = [a for a in self.asteroids if not a.collided] + fragments

        if not self.asteroids:
            self.game_over = True

    def ship_vertices(self) -> tuple[Vec2, Vec2, Vec2]:
        """Corners of the ship triangle: nose, then the two rear corners."""
        rotation = math.radians(self.ship.rot)
        s, c = math.sin(rotation), math.cos(rotation)
        x, y = self.ship.pos
        half_h = SHIP_HEIGHT / 2.0
        half_b = SHIP_BASE / 2.0
        nose = Vec2(x + s * half_h, y - c * half_h)
        left = Vec2(x - c * half_b - s * half_h, y - s * half_b + c * half_h)
        right = Vec2(x + c * half_b - s * half_h, y + s * half_b + c * half_h)
        return nose, left, right