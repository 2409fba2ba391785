import random

import pytest

from quadkit.emitter import Emitter, EmittersCache
from quadkit.geometry import Vec2
from quadkit.particle_config import (
    AtlasConfig,
    CircleMesh,
    Color,
    ColorCurve,
    Curve,
    EmitterConfig,
)


def make(config: EmitterConfig) -> Emitter:
    return Emitter(config, random.Random(1234))


def test_particle_count_never_exceeds_amount():
    emitter = make(EmitterConfig())
    for _ in range(100):
        emitter.step(Vec2(5.0, 5.0), 0.05)
        assert len(emitter.particles) <= emitter.config.amount
    assert len(emitter.particles) > 0


def test_full_explosiveness_spawns_all_at_once():
    emitter = make(EmitterConfig(amount=30, explosiveness=1.0))
    emitter.update(0.01)
    assert len(emitter.particles) == 30


def test_not_emitting_spawns_nothing():
    emitter = make(EmitterConfig(emitting=False))
    for _ in range(10):
        emitter.update(0.1)
    assert emitter.particles == []


def test_emit_ignores_emitting_flag():
    emitter = make(EmitterConfig(emitting=False))
    emitter.emit(Vec2(0.0, 0.0), 3)
    assert len(emitter.particles) == 3


def test_particles_die_after_lifetime():
    emitter = make(EmitterConfig(emitting=False, lifetime=0.5))
    emitter.emit(Vec2(0.0, 0.0), 2)
    emitter.update(0.3)
    assert len(emitter.particles) == 2
    emitter.update(0.3)
    assert emitter.particles == []


def test_one_shot_stops_emitting():
    emitter = make(EmitterConfig(one_shot=True, explosiveness=1.0, amount=5, lifetime=0.3))
    emitter.update(0.1)
    assert len(emitter.particles) == 5
    for _ in range(20):
        emitter.update(0.1)
    assert emitter.config.emitting is False
    assert emitter.particles == []


def test_local_coords_ignore_emitter_position():
    emitter = make(EmitterConfig(emitting=False, local_coords=True))
    emitter.position = Vec2(100.0, 100.0)
    emitter.emit(Vec2(1.0, 2.0), 1)
    assert emitter.particles[0].position == Vec2(1.0, 2.0)


def test_world_coords_add_emitter_position():
    emitter = make(EmitterConfig(emitting=False, local_coords=False))
    emitter.position = Vec2(100.0, 100.0)
    emitter.emit(Vec2(1.0, 2.0), 1)
    assert emitter.particles[0].position == emitter.position + Vec2(1.0, 2.0)


def test_zero_spread_keeps_direction():
    config = EmitterConfig(
        emitting=False, initial_direction=Vec2(1.0, 0.0), initial_velocity=100.0
    )
    emitter = make(config)
    emitter.emit(Vec2(0.0, 0.0), 1)
    velocity = emitter.particles[0].velocity
    assert velocity.x == pytest.approx(100.0)
    assert velocity.y == pytest.approx(0.0)


def test_spread_preserves_speed():
    config = EmitterConfig(
        emitting=False, initial_direction_spread=3.0, initial_velocity=100.0
    )
    emitter = make(config)
    emitter.emit(Vec2(0.0, 0.0), 20)
    for particle in emitter.particles:
        assert particle.velocity.length() == pytest.approx(100.0)


def test_gravity_changes_velocity():
    emitter = make(EmitterConfig(emitting=False, gravity=Vec2(0.0, 10.0)))
    emitter.emit(Vec2(0.0, 0.0), 1)
    before = emitter.particles[0].velocity.y
    emitter.update(0.5)
    assert emitter.particles[0].velocity.y > before


def test_particle_moves_along_velocity():
    emitter = make(EmitterConfig(emitting=False))
    emitter.emit(Vec2(0.0, 0.0), 1)
    start = emitter.particles[0].position
    emitter.update(0.1)
    assert emitter.particles[0].position.y < start.y


def test_no_atlas_uses_whole_texture():
    emitter = make(EmitterConfig(emitting=False))
    emitter.emit(Vec2(0.0, 0.0), 1)
    emitter.update(0.01)
    assert emitter.particles[0].uv == (0.0, 0.0, 1.0, 1.0)


def test_atlas_frame_within_range():
    atlas = AtlasConfig.from_range(4, 4, 8, None)
    emitter = make(EmitterConfig(emitting=False, atlas=atlas))
    emitter.emit(Vec2(0.0, 0.0), 1)
    for _ in range(5):
        emitter.update(0.1)
        particle = emitter.particles[0]
        assert atlas.start_index <= particle.frame <= atlas.end_index
        assert particle.uv[2] == pytest.approx(1.0 / atlas.n)
        assert particle.uv[3] == pytest.approx(1.0 / atlas.m)


def test_size_curve_scales_size():
    curve = Curve(points=[(0.0, 0.5), (0.5, 1.0), (1.0, 0.0)])
    emitter = make(EmitterConfig(emitting=False, size_curve=curve))
    emitter.emit(Vec2(0.0, 0.0), 1)
    emitter.update(0.01)
    expected = emitter.config.size * curve.batch().get(0.0)
    assert emitter.particles[0].size == pytest.approx(expected)


def test_start_color_at_birth():
    red = Color(1.0, 0.0, 0.0, 1.0)
    emitter = make(EmitterConfig(emitting=False, colors_curve=ColorCurve(start=red)))
    emitter.emit(Vec2(0.0, 0.0), 1)
    assert emitter.particles[0].color == red.to_tuple()
    emitter.update(0.0)
    assert emitter.particles[0].color == pytest.approx(red.to_tuple())


def test_mesh_rebuilt_when_dirty():
    emitter = make(EmitterConfig(emitting=False))
    emitter.config.shape = CircleMesh(6)
    emitter.update_particle_mesh()
    emitter.update(0.01)
    assert emitter.geometry == CircleMesh(6).geometry()
    assert emitter.mesh_dirty is False


def test_rebuild_size_curve():
    emitter = make(EmitterConfig())
    assert emitter.batched_size_curve is None
    emitter.config.size_curve = Curve(points=[(0.0, 1.0), (1.0, 1.0)])
    emitter.rebuild_size_curve()
    assert emitter.batched_size_curve == emitter.config.size_curve.batch()


def test_cache_recycles_finished_emitters():
    config = EmitterConfig(one_shot=True, explosiveness=1.0, amount=3, lifetime=0.3)
    cache = EmittersCache(config, random.Random(7))
    assert len(cache.cache) == EmittersCache.CACHE_DEFAULT_SIZE
    cache.spawn(Vec2(10.0, 10.0))
    assert len(cache.active) == 1
    assert len(cache.cache) == EmittersCache.CACHE_DEFAULT_SIZE - 1
    cache.update(0.1)
    emitter, pos = cache.active[0]
    assert pos == Vec2(10.0, 10.0)
    assert len(emitter.particles) == 3
    for _ in range(20):
        cache.update(0.1)
    assert cache.active == []
    assert len(cache.cache) == EmittersCache.CACHE_DEFAULT_SIZE


def test_cache_grows_when_pool_empty():
    cache = EmittersCache(EmitterConfig(), random.Random(3))
    for _ in range(EmittersCache.CACHE_DEFAULT_SIZE + 2):
        cache.spawn(Vec2(0.0, 0.0))
    assert len(cache.active) == EmittersCache.CACHE_DEFAULT_SIZE + 2
    assert cache.cache == []