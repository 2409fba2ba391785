"""Breakout-style game logic in a 20 by 20 world."""

from __future__ import annotations

from quadkit.geometry import Rect, Vec2

BLOCKS_W = 10
BLOCKS_H = 10
SCR_W = 20.0
SCR_H = 20.0
BLOCK_AREA_HEIGHT = 7.0
BLOCK_MARGIN = 0.05
PLATFORM_WIDTH = 5.0
PLATFORM_HEIGHT = 0.2
PLATFORM_SPEED = 3.0
BALL_REST_HEIGHT = 0.5
BALL_RESPAWN_Y = 10.0


class ArkanoidGame:
    """Paddle, ball and a grid of breakable blocks."""

    def __init__(self) -> None:
        self.blocks = [[True] * BLOCKS_W for _ in range(BLOCKS_H)]
        self.ball_x = 12.0
        self.ball_y = 7.0
        self.dx = 3.5
        self.dy = -3.5
        self.platform_x = 10.0
        self.stick = True

    @property
    def blocks_left(self) -> int:
        return sum(row.count(True) for row in self.blocks)

    @staticmethod
    def _block_size() -> tuple[float, float]:
        return SCR_W / BLOCKS_W, BLOCK_AREA_HEIGHT / BLOCKS_H

    def _hitbox(self, row: int, column: int) -> Rect:
        if not (0 <= row < BLOCKS_H and 0 <= column < BLOCKS_W):
            raise IndexError(f"no block at row {row}, column {column}")
        w, h = self._block_size()
        return Rect(column * w + BLOCK_MARGIN, row * h + BLOCK_MARGIN, w, h)

    def block_rect(self, row: int, column: int) -> Rect:
        """The drawn rectangle of a block, leaving a small gap to its neighbours."""
        hitbox = self._hitbox(row, column)
        return Rect(hitbox.x, hitbox.y, hitbox.w - 2 * BLOCK_MARGIN, hitbox.h - 2 * BLOCK_MARGIN)

    def update(self, dt: float, left: bool = False, right: bool = False, launch: bool = False) -> None:
        """Advance by dt seconds with the given keys held."""
        if right and self.platform_x < SCR_W - PLATFORM_WIDTH / 2.0:
            self.platform_x += PLATFORM_SPEED * dt
        if left and self.platform_x > PLATFORM_WIDTH / 2.0:
            self.platform_x -= PLATFORM_SPEED * dt

        if not self.stick:
            self.ball_x += self.dx * dt
            self.ball_y += self.dy * dt
        else:
            self.ball_x = self.platform_x
            self.ball_y = SCR_H - BALL_REST_HEIGHT
            self.stick = not launch

        if self.ball_x <= 0.0 or self.ball_x > SCR_W:
            self.dx = -self.dx
        on_platform = (
            self.ball_y > SCR_H - PLATFORM_HEIGHT - 0.15 / 2.0
            and self.platform_x - PLATFORM_WIDTH / 2.0 <= self.ball_x <= self.platform_x + PLATFORM_WIDTH / 2.0
        )
        if self.ball_y <= 0.0 or on_platform:
            self.dy = -self.dy
        if self.ball_y >= SCR_H:
            self.ball_y = BALL_RESPAWN_Y
            self.dy = -abs(self.dy)
            self.stick = True

        ball = Vec2(self.ball_x, self.ball_y)
        for row, cells in enumerate(self.blocks):
            for column, alive in enumerate(cells):
                if alive and self._hitbox(row, column).contains(ball):
                    self.dy = -self.dy
                    cells[column] = False