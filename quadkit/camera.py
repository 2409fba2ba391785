"""Camera helpers: angle interpolation and a first-person fly camera."""

from __future__ import annotations

import math
from dataclasses import dataclass

from quadkit.geometry import Vec3

FULL_TURN = 360.0
PITCH_LIMIT = 1.5


def short_angle_dist(a0: float, a1: float) -> float:
    """Signed shortest distance in degrees from a0 to a1."""
    da = math.fmod(a1 - a0, FULL_TURN)
    return math.fmod(2.0 * da, FULL_TURN) - da


def angle_lerp(a0: float, a1: float, t: float) -> float:
    """Interpolate from a0 towards a1 along the shorter arc."""
    return a0 + short_angle_dist(a0, a1) * t


def wrap_rotation(angle: float) -> float:
    """Bring an angle that has stepped just outside [0, 360) back into range."""
    if angle >= FULL_TURN:
        return angle - FULL_TURN
    if angle < 0.0:
        return angle + FULL_TURN
    return angle


def camera_basis(yaw: float, pitch: float, world_up: Vec3) -> tuple[Vec3, Vec3, Vec3]:
    """Return the (front, right, up) unit vectors for the given yaw and pitch."""
    front = Vec3(
        math.cos(yaw) * math.cos(pitch),
        math.sin(pitch),
        math.sin(yaw) * math.cos(pitch),
    ).normalize()
    right = front.cross(world_up).normalize()
    up = right.cross(front).normalize()
    return front, right, up


@dataclass
class FirstPersonCamera:
    """Mouse-look camera that moves along its own front and right axes."""

    position: Vec3 = Vec3(0.0, 1.0, 0.0)
    yaw: float = 1.18
    pitch: float = 0.0
    world_up: Vec3 = Vec3(0.0, 1.0, 0.0)
    move_speed: float = 0.1
    look_speed: float = 0.1

    @property
    def front(self) -> Vec3:
        return camera_basis(self.yaw, self.pitch, self.world_up)[0]

    @property
    def right(self) -> Vec3:
        return camera_basis(self.yaw, self.pitch, self.world_up)[1]

    @property
    def up(self) -> Vec3:
        return camera_basis(self.yaw, self.pitch, self.world_up)[2]

    @property
    def target(self) -> Vec3:
        return self.position + self.front

    def look(self, mouse_dx: float, mouse_dy: float, dt: float) -> None:
        """Turn by a mouse movement; pitch is kept within the limit."""
        self.yaw += mouse_dx * dt * self.look_speed
        self.pitch += mouse_dy * dt * -self.look_speed
        self.pitch = max(-PITCH_LIMIT, min(PITCH_LIMIT, self.pitch))

    def move(self, forward: float, strafe: float) -> None:
        """Step along the front axis by forward and the right axis by strafe."""
        front, right, _ = camera_basis(self.yaw, self.pitch, self.world_up)
        self.position = (
            self.position
            + front * (forward * self.move_speed)
            + right * (strafe * self.move_speed)
        )