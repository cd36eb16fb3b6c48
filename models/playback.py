from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PlaybackState(Enum):
    """Transport state of the player."""
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class PlaybackMode(Enum):
    """Order in which next/prev pick tracks."""
    NORMAL = "normal"
    RANDOM = "random"


@dataclass(frozen=True)
class PlayerSnapshot:
    """Read-only copy of the player state handed to renderers."""
    current_index: int | None
    status: PlaybackState
    mode: PlaybackMode
    elapsed: float
    duration: float | None

    @property
    def is_playing(self) -> bool:
        return self.status == PlaybackState.PLAYING

    @property
    def progress(self) -> float:
        """Fraction of the track played, 0.0 when the duration is unknown."""
        if not self.duration:
            return 0.0
        return min(1.0, self.elapsed / self.duration)
