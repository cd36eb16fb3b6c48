from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import pygame
from mutagen import File as MutagenFile, MutagenError

from models.errors import DecodeFailure, SeekUnsupported

logger = logging.getLogger(__name__)


@dataclass
class PlaybackHandle:
    """A track bound to the backend.

    Attributes:
        path: File being played.
        duration: Stream length in seconds, None when the decoder cannot tell.
        offset: Seconds to add to the mixer clock, updated on every seek.
        started: Whether play() has been issued.
        paused: Whether the stream is currently paused.
        released: Set once stop() has been called; a released handle is inert.
    """
    path: Path
    duration: float | None = None
    offset: float = 0.0
    started: bool = False
    paused: bool = False
    released: bool = False


class AudioBackend(Protocol):
    """Commands and queries the playback state machine issues.

    Every call must return quickly; decoding happens on the backend's own
    thread.
    """

    def open(self, path: Path) -> PlaybackHandle: ...

    def play(self, handle: PlaybackHandle) -> None: ...

    def pause(self, handle: PlaybackHandle) -> None: ...

    def resume(self, handle: PlaybackHandle) -> None: ...

    def seek(self, handle: PlaybackHandle, position: float) -> None: ...

    def stop(self, handle: PlaybackHandle) -> None: ...

    def position(self, handle: PlaybackHandle) -> float: ...

    def has_ended(self, handle: PlaybackHandle) -> bool: ...


class PygameBackend:
    """Audio backend on top of pygame.mixer.music.

    The mixer streams a single file at a time, so opening a new handle
    replaces whatever was loaded before.
    """

    def __init__(self, frequency: int = 44100, buffer: int = 512):
        pygame.mixer.init(frequency=frequency, size=-16, channels=2, buffer=buffer)
        self._active: PlaybackHandle | None = None
        logger.info(f"Audio mixer initialized at {frequency} Hz")

    def open(self, path: Path) -> PlaybackHandle:
        """Load a file into the mixer.

        Raises:
            DecodeFailure: If the file is missing or the codec is unsupported.
        """
        try:
            pygame.mixer.music.load(str(path))
        except (pygame.error, OSError) as e:
            raise DecodeFailure(path, str(e)) from e

        handle = PlaybackHandle(path=Path(path), duration=self._probe_duration(path))
        self._active = handle
        logger.debug(f"Loaded {path} (duration={handle.duration})")
        return handle

    def play(self, handle: PlaybackHandle) -> None:
        if not self._is_active(handle):
            return
        try:
            pygame.mixer.music.play()
        except pygame.error as e:
            raise DecodeFailure(handle.path, str(e)) from e
        handle.started = True
        handle.paused = False
        handle.offset = 0.0

    def pause(self, handle: PlaybackHandle) -> None:
        if self._is_active(handle) and handle.started and not handle.paused:
            pygame.mixer.music.pause()
            handle.paused = True

    def resume(self, handle: PlaybackHandle) -> None:
        if self._is_active(handle) and handle.paused:
            pygame.mixer.music.unpause()
            handle.paused = False

    def seek(self, handle: PlaybackHandle, position: float) -> None:
        """Move the stream to an absolute position without restarting it.

        Raises:
            SeekUnsupported: If the format cannot be repositioned in place.
        """
        if not self._is_active(handle) or not handle.started:
            return
        try:
            pygame.mixer.music.set_pos(position)
        except pygame.error as e:
            raise SeekUnsupported(f"Cannot seek in {handle.path.suffix or 'this'} files: {e}") from e
        handle.offset = position - self._mixer_seconds()

    def stop(self, handle: PlaybackHandle) -> None:
        if handle.released:
            return
        if self._is_active(handle):
            pygame.mixer.music.stop()
            pygame.mixer.music.unload()
            self._active = None
        handle.released = True
        handle.started = False
        handle.paused = False

    def position(self, handle: PlaybackHandle) -> float:
        if not self._is_active(handle) or not handle.started:
            return 0.0
        return max(0.0, handle.offset + self._mixer_seconds())

    def has_ended(self, handle: PlaybackHandle) -> bool:
        if not self._is_active(handle) or not handle.started or handle.paused:
            return False
        return not pygame.mixer.music.get_busy()

    def shutdown(self) -> None:
        """Release the mixer on application exit."""
        if self._active is not None:
            self.stop(self._active)
        pygame.mixer.quit()
        logger.info("Audio mixer shut down")

    def _is_active(self, handle: PlaybackHandle) -> bool:
        return handle is self._active and not handle.released

    @staticmethod
    def _mixer_seconds() -> float:
        millis = pygame.mixer.music.get_pos()
        return max(0, millis) / 1000.0

    @staticmethod
    def _probe_duration(path: Path) -> float | None:
        try:
            audio = MutagenFile(path)
        except (MutagenError, OSError) as e:
            logger.debug(f"Could not read duration of {path}: {e}")
            return None
        if audio is None or not audio.info or not getattr(audio.info, 'length', None):
            return None
        return float(audio.info.length)
