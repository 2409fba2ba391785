"""A swaying fractal tree built from recursively rotated branches."""

from __future__ import annotations

import math
from dataclasses import dataclass

from quadkit.geometry import Vec2

MAX_DEPTH = 8
BRANCH_WIDTH = 0.01
ANGLE_DECAY = 0.7
LENGTH_DECAY = 0.8
SWAY = 0.1


@dataclass(frozen=True)
class Branch:
    """One segment of the tree in world coordinates."""

    start: Vec2
    end: Vec2
    depth: int
    width: float = BRANCH_WIDTH

    @property
    def length(self) -> float:
        return (self.end - self.start).length()


def branch_segments(time: float, angle: float = 1.0, tall: float = 0.3, depth: int = 0) -> list[Branch]:
    """All branches of the tree at the given time, trunk first, depth-first, right before left."""
    branches: list[Branch] = []
    right_sway = math.sin(time) * SWAY
    left_sway = math.cos(time) * SWAY

    def grow(origin: Vec2, heading: float, level: int, spread: float, length: float) -> None:
        if level >= MAX_DEPTH:
            return
        end = origin + Vec2(-length * math.sin(heading), length * math.cos(heading))
        branches.append(Branch(origin, end, level))
        child_spread = spread * ANGLE_DECAY
        child_length = length * LENGTH_DECAY
        grow(end, heading + spread + right_sway, level + 1, child_spread, child_length)
        grow(end, heading - spread - left_sway, level + 1, child_spread, child_length)

    grow(Vec2(0.0, 0.0), 0.0, depth, angle, tall)
    return branches