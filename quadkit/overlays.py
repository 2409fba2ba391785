"""Screen overlays: centred dialogs and touch markers."""

from __future__ import annotations

from enum import Enum

from quadkit.geometry import Vec2
from quadkit.particle_config import WHITE, Color

GREEN = Color(0.0, 0.89, 0.19, 1.0)
YELLOW = Color(0.99, 0.98, 0.0, 1.0)
BLUE = Color(0.0, 0.47, 0.95, 1.0)
BLACK = Color(0.0, 0.0, 0.0, 1.0)

LARGE_MARKER = 80.0
SMALL_MARKER = 60.0


def centered_position(screen_size: Vec2, dialog_size: Vec2) -> Vec2:
    """Top-left corner that centres a dialog of this size on the screen."""
    return screen_size / 2.0 - dialog_size / 2.0


class TouchPhase(Enum):
    """Where a touch is in its lifecycle."""

    STARTED = "started"
    STATIONARY = "stationary"
    MOVED = "moved"
    ENDED = "ended"
    CANCELLED = "cancelled"


_TOUCH_STYLES: dict[TouchPhase, tuple[Color, float]] = {
    TouchPhase.STARTED: (GREEN, LARGE_MARKER),
    TouchPhase.STATIONARY: (WHITE, SMALL_MARKER),
    TouchPhase.MOVED: (YELLOW, SMALL_MARKER),
    TouchPhase.ENDED: (BLUE, LARGE_MARKER),
    TouchPhase.CANCELLED: (BLACK, LARGE_MARKER),
}


def touch_style(phase: TouchPhase) -> tuple[Color, float]:
    """Fill colour and marker radius for a touch in this phase."""
    return _TOUCH_STYLES[phase]