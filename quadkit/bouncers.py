"""A swarm of sprites that bounce around the screen, as in a sprite benchmark."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from quadkit.geometry import Vec2
from quadkit.particle_config import Color

SPEED_RANGE = 250.0
FRAMES_PER_SECOND = 60.0
DEFAULT_BATCH = 100


@dataclass
class Bouncer:
    pos: Vec2
    speed: Vec2
    color: Color


class BouncerSwarm:
    """Bouncers that move by their speed each frame and reflect off the screen edges."""

    def __init__(self) -> None:
        self.bouncers: list[Bouncer] = []

    def __len__(self) -> int:
        return len(self.bouncers)

    def spawn(self, pos: Vec2, count: int = DEFAULT_BATCH, rng: Optional[random.Random] = None) -> None:
        """Add count bouncers at pos with random speeds and colours."""
        rng = rng if rng is not None else random.Random()
        for _ in range(count):
            speed = Vec2(
                rng.uniform(-SPEED_RANGE, SPEED_RANGE) / FRAMES_PER_SECOND,
                rng.uniform(-SPEED_RANGE, SPEED_RANGE) / FRAMES_PER_SECOND,
            )
            color = Color(
                rng.randrange(50, 240) / 255.0,
                rng.randrange(80, 240) / 255.0,
                rng.randrange(100, 240) / 255.0,
                1.0,
            )
            self.bouncers.append(Bouncer(pos=pos, speed=speed, color=color))

    def update(self, width: float, height: float, sprite_width: float, sprite_height: float) -> None:
        """Move every bouncer one frame, reversing along any axis where it left the screen."""
        for bouncer in self.bouncers:
            bouncer.pos = bouncer.pos + bouncer.speed
            sx, sy = bouncer.speed
            center_x = bouncer.pos.x + sprite_width / 2.0
            center_y = bouncer.pos.y + sprite_height / 2.0
            if center_x > width or center_x < 0.0:
                sx = -sx
            if center_y > height or center_y < 0.0:
                sy = -sy
            bouncer.speed = Vec2(sx, sy)