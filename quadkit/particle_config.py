"""Configuration types for particle emitters: curves, shapes, meshes and blending."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from itertools import pairwise
from typing import Any, Optional, Union

from quadkit.geometry import Vec2, polar_to_cartesian


class Interpolation(Enum):
    """How the points between a curve's key points are produced."""

    LINEAR = "linear"
    BEZIER = "bezier"


@dataclass(frozen=True)
class BatchedCurve:
    """A curve sampled at evenly spaced steps, ready for fast lookup."""

    points: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    def get(self, t: float) -> float:
        """Value of the curve at t in [0, 1], interpolated between samples."""
        if not self.points:
            raise ValueError("cannot sample an empty curve")
        last = len(self.points) - 1
        t_scaled = t * len(self.points)
        previous_ix = min(max(int(t_scaled), 0), last)
        next_ix = min(previous_ix + 1, last)
        previous = self.points[previous_ix]
        following = self.points[next_ix]
        return previous + (following - previous) * (t_scaled - previous_ix)


@dataclass
class Curve:
    """A piecewise curve defined by (x, y) key points."""

    points: list[tuple[float, float]] = field(default_factory=list)
    interpolation: Interpolation = Interpolation.LINEAR
    resolution: int = 20

    def batch(self) -> BatchedCurve:
        """Sample the curve every 1/resolution along x."""
        if self.interpolation is not Interpolation.LINEAR:
            raise ValueError("only linear interpolation is supported")
        if self.resolution < 1:
            raise ValueError("resolution must be at least 1")
        step = 1.0 / self.resolution
        x = 0.0
        samples: list[float] = []
        for (start_x, start_y), (end_x, end_y) in pairwise(self.points):
            while x <= end_x:
                t = (x - start_x) / (end_x - start_x)
                samples.append(start_y + (end_y - start_y) * t)
                x += step
        return BatchedCurve(tuple(samples))


@dataclass(frozen=True)
class Color:
    """An RGBA colour with components in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)


WHITE = Color(1.0, 1.0, 1.0, 1.0)


@dataclass(frozen=True)
class ColorCurve:
    """Colours a particle passes through from birth, to mid-life, to death."""

    start: Color = WHITE
    mid: Color = WHITE
    end: Color = WHITE


@dataclass(frozen=True)
class EmissionPoint:
    """All particles start at the emitter position."""

    def random_point(self, rng: random.Random) -> Vec2:
        return Vec2(0.0, 0.0)


@dataclass(frozen=True)
class EmissionRect:
    """Particles start anywhere inside a rectangle centred on the emitter."""

    width: float
    height: float

    def random_point(self, rng: random.Random) -> Vec2:
        return Vec2(
            rng.uniform(-self.width / 2.0, self.width / 2.0),
            rng.uniform(-self.height / 2.0, self.height / 2.0),
        )


@dataclass(frozen=True)
class EmissionSphere:
    """Particles start uniformly inside a disc centred on the emitter."""

    radius: float

    def random_point(self, rng: random.Random) -> Vec2:
        rho = math.sqrt(rng.uniform(0.0, self.radius * self.radius))
        phi = rng.uniform(0.0, math.pi * 2.0)
        return polar_to_cartesian(rho, phi)


EmissionShape = Union[EmissionPoint, EmissionRect, EmissionSphere]

# Each vertex: position (3), uv (2), colour (4).
VERTEX_STRIDE = 9


@dataclass(frozen=True)
class RectangleMesh:
    """A unit quad spanning -1..1 on both axes."""

    def geometry(self) -> tuple[list[float], list[int]]:
        vertices = [
            -1.0, -1.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0,
            1.0, -1.0, 0.0, 1.0, 0.0, 1.0, 1.0, 1.0, 1.0,
            1.0, 1.0, 0.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0,
            -1.0, 1.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 1.0,
        ]
        indices = [0, 1, 2, 0, 2, 3]
        return vertices, indices


@dataclass(frozen=True)
class CircleMesh:
    """A unit circle built as a triangle fan."""

    subdivisions: int

    def geometry(self) -> tuple[list[float], list[int]]:
        vertices = [0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0]
        indices: list[int] = []
        for i in range(self.subdivisions + 1):
            angle = i / self.subdivisions * math.pi * 2.0
            rx, ry = math.cos(angle), math.sin(angle)
            vertices.extend([rx, ry, 0.0, rx, ry, 1.0, 1.0, 1.0, 1.0])
            if i != self.subdivisions:
                indices.extend([0, i + 1, i + 2])
        return vertices, indices


@dataclass(frozen=True)
class CustomMesh:
    """A mesh given directly as vertex data and triangle indices."""

    vertices: tuple[float, ...]
    indices: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", tuple(self.vertices))
        object.__setattr__(self, "indices", tuple(self.indices))

    def geometry(self) -> tuple[list[float], list[int]]:
        return list(self.vertices), list(self.indices)


ParticleShape = Union[RectangleMesh, CircleMesh, CustomMesh]


class BlendMode(Enum):
    """How overlapping particles are combined."""

    ALPHA = "alpha"
    ADDITIVE = "additive"


@dataclass(frozen=True)
class AtlasConfig:
    """Layout of an n by m sprite sheet and the frame range to animate through."""

    n: int
    m: int
    start_index: int
    end_index: int

    @classmethod
    def from_range(cls, n: int, m: int, start: Optional[int], stop: Optional[int]) -> AtlasConfig:
        """Build from a half-open frame range; missing ends default to the whole sheet."""
        return cls(
            n=n,
            m=m,
            start_index=0 if start is None else start,
            end_index=n * m if stop is None else stop,
        )


@dataclass(frozen=True)
class ParticleMaterial:
    """Custom vertex and fragment shader sources for particles."""

    vertex: str
    fragment: str


@dataclass
class EmitterConfig:
    """Everything that controls how an emitter spawns and animates particles."""

    local_coords: bool = False
    emission_shape: EmissionShape = field(default_factory=EmissionPoint)
    one_shot: bool = False
    lifetime: float = 1.0
    lifetime_randomness: float = 0.0
    explosiveness: float = 0.0
    amount: int = 8
    shape: ParticleShape = field(default_factory=RectangleMesh)
    emitting: bool = True
    initial_direction: Vec2 = Vec2(0.0, -1.0)
    initial_direction_spread: float = 0.0
    initial_velocity: float = 50.0
    initial_velocity_randomness: float = 0.0
    linear_accel: float = 0.0
    size: float = 10.0
    size_randomness: float = 0.0
    size_curve: Optional[Curve] = None
    blend_mode: BlendMode = BlendMode.ALPHA
    colors_curve: ColorCurve = field(default_factory=ColorCurve)
    gravity: Vec2 = Vec2(0.0, 0.0)
    texture: Any = None
    atlas: Optional[AtlasConfig] = None
    material: Optional[ParticleMaterial] = None
    post_processing: bool = False