"""Conway's Game of Life on a bounded grid."""

from __future__ import annotations

import random
from enum import Enum


class CellState(Enum):
    ALIVE = "alive"
    DEAD = "dead"


Grid = list[list[CellState]]

_NEIGHBOUR_OFFSETS = [(dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dy, dx) != (0, 0)]


def _next_state(cell: CellState, neighbours: int) -> CellState:
    if cell is CellState.ALIVE:
        return CellState.ALIVE if neighbours in (2, 3) else CellState.DEAD
    return CellState.ALIVE if neighbours == 3 else CellState.DEAD


def next_generation(cells: Grid) -> Grid:
    """Apply one step of the rules; cells beyond the edges count as dead."""
    height = len(cells)
    width = len(cells[0]) if cells else 0
    if any(len(row) != width for row in cells):
        raise ValueError("all rows must have the same length")

    def alive_neighbours(y: int, x: int) -> int:
        return sum(
            1
            for dy, dx in _NEIGHBOUR_OFFSETS
            if 0 <= y + dy < height
            and 0 <= x + dx < width
            and cells[y + dy][x + dx] is CellState.ALIVE
        )

    return [
        [_next_state(cell, alive_neighbours(y, x)) for x, cell in enumerate(row)]
        for y, row in enumerate(cells)
    ]


def random_cells(width: int, height: int, rng: random.Random) -> Grid:
    """A grid where each cell is alive with probability one in five."""
    return [
        [CellState.ALIVE if rng.randrange(5) == 0 else CellState.DEAD for _ in range(width)]
        for _ in range(height)
    ]