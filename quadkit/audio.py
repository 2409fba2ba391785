"""A registry of loaded sounds and their playback state."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class PlaySoundParams:
    looped: bool = False
    volume: float = 1.0


@dataclass(frozen=True)
class Sound:
    """Handle of a sound loaded into a SoundLibrary."""

    id: int


@dataclass
class _Playback:
    data: bytes
    playing: bool = False
    looped: bool = False
    volume: float = 1.0


class SoundLibrary:
    """Loads sounds and tracks which are playing, looped and at what volume."""

    def __init__(self) -> None:
        self._sounds: dict[int, _Playback] = {}
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._sounds)

    def __contains__(self, sound: object) -> bool:
        return isinstance(sound, Sound) and sound.id in self._sounds

    def __getitem__(self, sound: Sound) -> _Playback:
        try:
            return self._sounds[sound.id]
        except KeyError:
            raise KeyError(f"unknown sound {sound.id}") from None

    def load_bytes(self, data: bytes) -> Sound:
        """Register sound data and return its handle."""
        sound = Sound(self._next_id)
        self._sounds[sound.id] = _Playback(bytes(data))
        self._next_id += 1
        return sound

    def load(self, path: Union[str, os.PathLike]) -> Sound:
        """Read a sound file and register it."""
        return self.load_bytes(Path(path).read_bytes())

    def play_once(self, sound: Sound) -> None:
        self.play(sound, PlaySoundParams(looped=False, volume=1.0))

    def play(self, sound: Sound, params: Optional[PlaySoundParams] = None) -> None:
        params = params if params is not None else PlaySoundParams()
        playback = self[sound]
        playback.playing = True
        playback.looped = params.looped
        playback.volume = params.volume

    def stop(self, sound: Sound) -> None:
        self[sound].playing = False

    def set_volume(self, sound: Sound, volume: float) -> None:
        self[sound].volume = volume