from __future__ import annotations

import logging
import random

from models.errors import DecodeFailure, SeekUnsupported
from models.playback import PlaybackMode, PlaybackState, PlayerSnapshot
from services.audio_backend import AudioBackend, PlaybackHandle
from services.catalog import Catalog

logger = logging.getLogger(__name__)


class PlaybackStateMachine:
    """Owns playback state and drives the audio backend.

    States move STOPPED -> PLAYING <-> PAUSED, and back to STOPPED on an
    explicit stop or when the end of the playlist is reached. A track that
    fails to decode is never left bound: the machine skips past it, and
    stops when nothing playable remains.
    """

    def __init__(
        self,
        catalog: Catalog,
        backend: AudioBackend,
        loop_playlist: bool = False,
        rng: random.Random | None = None,
    ):
        """Initialize the state machine.

        Args:
            catalog: Tracks available for playback.
            backend: Audio output the machine issues commands to.
            loop_playlist: Wrap around at the ends of the playlist.
            rng: Random source for random mode. Defaults to an unseeded generator.
        """
        self._catalog = catalog
        self._backend = backend
        self._rng = rng if rng is not None else random.Random()
        self._handle: PlaybackHandle | None = None
        self._notice: str | None = None

        self.loop_playlist = loop_playlist
        self.current_index: int | None = None
        self.status = PlaybackState.STOPPED
        self.mode = PlaybackMode.NORMAL
        self.elapsed = 0.0
        self.duration: float | None = None

    def play(self, index: int) -> None:
        """Smart play: resume, pause, or switch depending on state.

        Playing the bound track toggles pause; any other index, or any index
        while stopped, starts that track from zero.
        """
        if not 0 <= index < len(self._catalog):
            logger.debug(f"Ignoring play of out-of-range index {index}")
            return

        if index == self.current_index and self.status == PlaybackState.PAUSED:
            self.resume()
        elif index == self.current_index and self.status == PlaybackState.PLAYING:
            self.pause()
        else:
            self._switch_to(index)

    def pause(self) -> None:
        if self.status != PlaybackState.PLAYING or self._handle is None:
            return
        self.elapsed = self._clamp(self._backend.position(self._handle))
        self._backend.pause(self._handle)
        self.status = PlaybackState.PAUSED
        logger.debug(f"Paused at {self.elapsed:.1f}s")

    def resume(self) -> None:
        if self.status != PlaybackState.PAUSED or self._handle is None:
            return
        self._backend.resume(self._handle)
        self.status = PlaybackState.PLAYING
        logger.debug(f"Resumed at {self.elapsed:.1f}s")

    def stop(self) -> None:
        """Stop playback. The last track stays bound for display."""
        self._release()
        self.elapsed = 0.0
        logger.debug("Playback stopped")

    def seek(self, delta: float) -> None:
        """Move the playhead by delta seconds without restarting the stream."""
        if self.status == PlaybackState.STOPPED or self._handle is None:
            return

        target = self._clamp(self.elapsed + delta)
        try:
            self._backend.seek(self._handle, target)
        except SeekUnsupported as e:
            logger.warning(f"Seek failed: {e}")
            self._notice = "Seeking is not supported for this track"
            return

        self.elapsed = target
        logger.debug(f"Seeked to {target:.1f}s")

    def next(self) -> None:
        """Advance to the next track, or stop at the end of the playlist."""
        if not self._catalog:
            return

        if self.mode == PlaybackMode.RANDOM:
            target = self._random_index()
        elif self.current_index is None:
            target = 0
        elif self.current_index + 1 < len(self._catalog):
            target = self.current_index + 1
        elif self.loop_playlist:
            target = 0
        else:
            target = None

        if target is None:
            logger.info("Reached end of playlist")
            self.stop()
            return

        self._switch_to(target)

    def prev(self) -> None:
        """Go back one track. At the first track, replay it from zero."""
        if not self._catalog:
            return

        if self.mode == PlaybackMode.RANDOM:
            target = self._random_index()
        elif self.current_index is None:
            target = 0
        elif self.current_index > 0:
            target = self.current_index - 1
        elif self.loop_playlist:
            target = len(self._catalog) - 1
        else:
            target = 0

        self._switch_to(target)

    def toggle_mode(self) -> PlaybackMode:
        if self.mode == PlaybackMode.NORMAL:
            self.mode = PlaybackMode.RANDOM
        else:
            self.mode = PlaybackMode.NORMAL
        logger.info(f"Playback mode set to {self.mode.value}")
        return self.mode

    def tick(self) -> None:
        """Reconcile with the backend: auto-advance or refresh elapsed time."""
        if self.status != PlaybackState.PLAYING or self._handle is None:
            return

        if self._backend.has_ended(self._handle):
            logger.debug(f"Track {self.current_index} ended naturally, advancing")
            self.next()
            return

        self.elapsed = self._clamp(self._backend.position(self._handle))

    def snapshot(self) -> PlayerSnapshot:
        return PlayerSnapshot(
            current_index=self.current_index,
            status=self.status,
            mode=self.mode,
            elapsed=self.elapsed,
            duration=self.duration,
        )

    def consume_notice(self) -> str | None:
        """Return the latest user-facing message once, then clear it."""
        notice, self._notice = self._notice, None
        return notice

    def _switch_to(self, index: int) -> None:
        """Bind and start a track, skipping forward past decode failures."""
        origin = self.current_index
        failed: set[int] = set()
        candidate: int | None = index

        while candidate is not None:
            try:
                self._bind(candidate)
                return
            except DecodeFailure as e:
                logger.warning(f"Decode failure on track {candidate}: {e}")
                self._notice = str(e)
                failed.add(candidate)
                candidate = self._skip_target(candidate, origin, failed)

        logger.error(f"No playable track left after {len(failed)} failures, stopping")
        self._release()
        self.current_index = None
        self.elapsed = 0.0
        self.duration = None

    def _bind(self, index: int) -> None:
        self._release()

        track = self._catalog[index]
        handle = self._backend.open(track.file_path)
        try:
            self._backend.play(handle)
        except DecodeFailure:
            self._backend.stop(handle)
            raise

        self._handle = handle
        self.current_index = index
        self.elapsed = 0.0
        self.duration = handle.duration or track.duration_seconds
        self.status = PlaybackState.PLAYING
        logger.info(f"Playing track {index}: {track.title}")

    def _release(self) -> None:
        if self._handle is not None:
            self._backend.stop(self._handle)
            self._handle = None
        self.status = PlaybackState.STOPPED

    def _skip_target(self, failed_index: int, origin: int | None, failed: set[int]) -> int | None:
        if self.mode == PlaybackMode.RANDOM:
            choices = [i for i in range(len(self._catalog)) if i not in failed and i != origin]
            return self._rng.choice(choices) if choices else None

        target = failed_index + 1
        if target >= len(self._catalog):
            if not self.loop_playlist:
                return None
            target = 0
        return None if target in failed else target

    def _random_index(self) -> int:
        count = len(self._catalog)
        if self.current_index is None:
            return self._rng.randrange(count)
        if count == 1:
            return self.current_index
        choice = self._rng.randrange(count - 1)
        return choice if choice < self.current_index else choice + 1

    def _clamp(self, seconds: float) -> float:
        seconds = max(0.0, seconds)
        if self.duration is not None:
            seconds = min(seconds, self.duration)
        return seconds
