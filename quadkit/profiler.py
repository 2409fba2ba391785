"""Frame-time history and selection logic for an on-screen profiler."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from quadkit.particle_config import Color

FPS_BUFFER_CAPACITY = 100
FRAMES_BUFFER_CAPACITY = 400

SELECTED_COLOR = Color(1.0, 1.0, 0.0, 1.0)
FAST_COLOR = Color(0.6, 0.6, 1.0, 1.0)
MEDIUM_COLOR = Color(0.3, 0.3, 0.8, 1.0)
SLOW_COLOR = Color(0.2, 0.2, 0.6, 1.0)


@dataclass(frozen=True)
class Zone:
    """A named, timed section of a frame, possibly with nested sections."""

    name: str
    duration: float
    children: tuple[Zone, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class Frame:
    """Timing data captured for one frame."""

    full_frame_time: float
    zones: tuple[Zone, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "zones", tuple(self.zones))


def _reciprocal(value: float) -> float:
    if value == 0.0:
        return math.inf
    return 1.0 / value


def zone_label(zone: Zone) -> str:
    """Text shown for a zone: its duration and the matching rate."""
    return f"{zone.name}: {zone.duration:.4f}ms {_reciprocal(zone.duration):.1f}(1/t)"


def frame_color(full_frame_time: float, selected: bool) -> Color:
    """Bar colour of a frame in the history graph."""
    if selected:
        return SELECTED_COLOR
    if full_frame_time < 1.0 / 58.0:
        return FAST_COLOR
    if full_frame_time < 1.0 / 25.0:
        return MEDIUM_COLOR
    return SLOW_COLOR


@dataclass
class ProfilerState:
    """Recent frame times, captured frames and the profiler window's state."""

    fps_buffer: list[float] = field(default_factory=list)
    frames_buffer: list[Frame] = field(default_factory=list)
    selected_frame: Optional[Frame] = None
    window_opened: bool = False
    paused: bool = False

    def push(self, frame: Frame, frame_time: float) -> None:
        """Record a new frame, newest first, keeping the buffers bounded."""
        if not self.paused and self.window_opened:
            self.frames_buffer.insert(0, frame)
        self.fps_buffer.insert(0, frame_time)
        del self.fps_buffer[FPS_BUFFER_CAPACITY:]
        del self.frames_buffer[FRAMES_BUFFER_CAPACITY:]

    def average_fps(self) -> float:
        """Frames per second averaged over the recorded frame times."""
        if not self.fps_buffer:
            raise ValueError("no frame times recorded")
        mean = sum(self.fps_buffer) / len(self.fps_buffer)
        return _reciprocal(mean)

    def slowest_near(self, mouse_x: float, left: float, width: float) -> Optional[int]:
        """Index of the slowest frame among those drawn near mouse_x in a graph of this width."""
        if not self.frames_buffer:
            return None
        last = len(self.frames_buffer) - 1
        x = int((mouse_x - left - 2.0) / width * FRAMES_BUFFER_CAPACITY)
        low = min(max(x - 2, 0), last)
        high = min(max(x + 3, 0), last)
        best: Optional[int] = None
        for index in range(low, high):
            time = self.frames_buffer[index].full_frame_time
            if best is None or time >= self.frames_buffer[best].full_frame_time:
                best = index
        return best

    def toggle_window(self) -> bool:
        """Open or close the profiler window and return whether it is now open."""
        self.window_opened = not self.window_opened
        return self.window_opened

    def current_frame(self) -> Optional[Frame]:
        """The selected frame, or else the newest captured one."""
        if self.selected_frame is not None:
            return self.selected_frame
        return self.frames_buffer[0] if self.frames_buffer else None