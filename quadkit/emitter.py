"""Particle emitters: spawning, simulating and recycling particles."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, replace
from typing import Optional

from quadkit.geometry import Vec2
from quadkit.particle_config import BatchedCurve, Color, EmitterConfig

_MAX_FRAME = 0xFFFF


def _lerp_color(a: Color, b: Color, t: float) -> tuple[float, float, float, float]:
    return tuple(x * (1.0 - t) + y * t for x, y in zip(a.to_tuple(), b.to_tuple()))


def _rotate(vector: Vec2, angle: float) -> Vec2:
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return Vec2(vector.x * cos_a - vector.y * sin_a, vector.x * sin_a + vector.y * cos_a)


@dataclass
class Particle:
    """One live particle and its simulation state."""

    position: Vec2
    size: float
    velocity: Vec2
    lifetime: float
    initial_size: float
    spawn_index: int
    color: tuple[float, float, float, float]
    uv: tuple[float, float, float, float] = (1.0, 1.0, 0.0, 0.0)
    lived: float = 0.0
    life_fraction: float = 0.0
    frame: int = 0


class Emitter:
    """Spawns particles according to an EmitterConfig and advances them over time."""

    def __init__(self, config: EmitterConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.particles: list[Particle] = []
        self.position = Vec2(0.0, 0.0)
        self.particles_spawned = 0
        self.last_emit_time = 0.0
        self.time_passed = 0.0
        self.blend_mode = config.blend_mode
        self.geometry = config.shape.geometry()
        self.mesh_dirty = False
        self.batched_size_curve: Optional[BatchedCurve] = None
        self.rebuild_size_curve()

    def _reset(self) -> None:
        self.particles.clear()
        self.last_emit_time = 0.0
        self.time_passed = 0.0
        self.particles_spawned = 0

    def rebuild_size_curve(self) -> None:
        """Resample the size curve after the config's curve has changed."""
        curve = self.config.size_curve
        self.batched_size_curve = curve.batch() if curve is not None else None

    def update_particle_mesh(self) -> None:
        """Rebuild the particle mesh from the config on the next update."""
        self.mesh_dirty = True

    def _emit_particle(self, offset: Vec2) -> None:
        config = self.config
        rng = self.rng
        offset = offset + config.emission_shape.random_point(rng)
        size = config.size - config.size * rng.uniform(0.0, config.size_randomness)
        position = offset if config.local_coords else self.position + offset

        spread = config.initial_direction_spread
        angle = rng.uniform(-spread / 2.0, spread / 2.0)
        speed = config.initial_velocity - config.initial_velocity * rng.uniform(
            0.0, config.initial_velocity_randomness
        )
        velocity = _rotate(config.initial_direction, angle) * speed
        lifetime = config.lifetime - config.lifetime * rng.uniform(0.0, config.lifetime_randomness)

        self.particles.append(
            Particle(
                position=position,
                size=size,
                velocity=velocity,
                lifetime=lifetime,
                initial_size=size,
                spawn_index=self.particles_spawned,
                color=config.colors_curve.start.to_tuple(),
            )
        )
        self.particles_spawned += 1

    def emit(self, pos: Vec2, n: int) -> None:
        """Emit n particles at once, ignoring the config's emitting and amount."""
        for _ in range(n):
            self._emit_particle(pos)
            self.particles_spawned += 1

    def _spawn_due(self, dt: float) -> None:
        config = self.config
        self.time_passed += dt
        if config.amount == 0:
            gap = math.inf
        else:
            gap = (config.lifetime / config.amount) * (1.0 - config.explosiveness)
        if gap < 0.001:
            spawn_amount = config.amount
        else:
            spawn_amount = max(0, int((self.time_passed - self.last_emit_time) / gap))

        for _ in range(spawn_amount):
            self.last_emit_time = self.time_passed
            if self.particles_spawned < config.amount:
                self._emit_particle(Vec2(0.0, 0.0))
            if len(self.particles) >= config.amount:
                break

    def _advance(self, particle: Particle, dt: float) -> None:
        config = self.config
        curve = config.colors_curve
        particle.velocity = particle.velocity + particle.velocity * (config.linear_accel * dt)

        t = particle.lived / particle.lifetime if particle.lifetime != 0.0 else 1.0
        if t < 0.5:
            particle.color = _lerp_color(curve.start, curve.mid, t * 2.0)
        else:
            particle.color = _lerp_color(curve.mid, curve.end, (t - 0.5) * 2.0)

        particle.position = particle.position + particle.velocity * dt
        scale = self.batched_size_curve.get(t) if self.batched_size_curve is not None else 1.0
        particle.size = particle.initial_size * scale

        if particle.lifetime != 0.0:
            particle.life_fraction = t

        particle.lived += dt
        particle.velocity = particle.velocity + config.gravity * dt

        atlas = config.atlas
        if atlas is None:
            particle.uv = (0.0, 0.0, 1.0, 1.0)
            return
        if particle.lifetime != 0.0:
            progress = particle.lived / particle.lifetime * (atlas.end_index - atlas.start_index)
            particle.frame = min(max(int(progress), 0), _MAX_FRAME) + atlas.start_index
        column = particle.frame % atlas.n
        row = particle.frame // atlas.m
        particle.uv = (column / atlas.n, row / atlas.m, 1.0 / atlas.n, 1.0 / atlas.m)

    def update(self, dt: float) -> None:
        """Spawn due particles, advance all particles by dt and drop the dead ones."""
        config = self.config
        if self.mesh_dirty:
            self.geometry = config.shape.geometry()
            self.mesh_dirty = False
        if config.blend_mode != self.blend_mode:
            self.blend_mode = config.blend_mode

        if config.emitting:
            self._spawn_due(dt)

        if config.one_shot and self.time_passed > config.lifetime:
            self.time_passed = 0.0
            self.last_emit_time = 0.0
            config.emitting = False

        for particle in self.particles:
            self._advance(particle, dt)

        alive = [
            p for p in self.particles if not (p.lived > p.lifetime or p.lived > config.lifetime)
        ]
        self.particles_spawned -= len(self.particles) - len(alive)
        self.particles = alive

    def step(self, pos: Vec2, dt: float) -> None:
        """Move the emitter to pos and advance it by dt."""
        self.position = pos
        self.update(dt)


class EmittersCache:
    """Many short-lived copies of one emitter, recycled through a pool."""

    CACHE_DEFAULT_SIZE = 10

    def __init__(self, config: EmitterConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.cache: list[Emitter] = [
            Emitter(replace(config, emitting=False), self.rng)
            for _ in range(self.CACHE_DEFAULT_SIZE)
        ]
        self.active: list[tuple[Emitter, Vec2]] = []

    def spawn(self, pos: Vec2) -> None:
        """Start a fresh emission cycle at pos."""
        emitter = self.cache.pop() if self.cache else Emitter(replace(self.config), self.rng)
        emitter.mesh_dirty = True
        emitter.config.emitting = True
        emitter._reset()
        self.active.append((emitter, pos))

    def update(self, dt: float) -> None:
        """Advance every active emitter; those that stopped emitting go back to the pool."""
        still_active: list[tuple[Emitter, Vec2]] = []
        for emitter, pos in self.active:
            emitter.position = pos
            emitter.update(dt)
            if emitter.config.emitting:
                still_active.append((emitter, pos))
            else:
                self.cache.append(emitter)
        self.active = still_active