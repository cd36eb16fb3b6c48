import random
from pathlib import Path

import pytest

from models.errors import DecodeFailure, SeekUnsupported
from services.audio_backend import PlaybackHandle
from services.catalog import Catalog
from services.player import PlaybackStateMachine
from services.session import PlayerSession
from services.settings import Settings


class FakeBackend:
    """Scripted stand-in for the audio backend.

    Positions and end-of-stream flags are set per path by the test; every
    call is recorded in `calls` as (method, file name).
    """

    def __init__(self):
        self.calls: list[tuple[str, str]] = []
        self.positions: dict[str, float] = {}
        self.ended: set[str] = set()
        self.fail_paths: set[str] = set()
        self.unseekable: set[str] = set()
        self.durations: dict[str, float] = {}
        self.open_handles: list[PlaybackHandle] = []

    def open(self, path: Path) -> PlaybackHandle:
        name = Path(path).name
        self.calls.append(("open", name))
        if name in self.fail_paths:
            raise DecodeFailure(path, "unsupported codec")
        handle = PlaybackHandle(path=Path(path), duration=self.durations.get(name))
        self.open_handles.append(handle)
        return handle

    def play(self, handle: PlaybackHandle) -> None:
        self.calls.append(("play", handle.path.name))
        handle.started = True

    def pause(self, handle: PlaybackHandle) -> None:
        self.calls.append(("pause", handle.path.name))
        handle.paused = True

    def resume(self, handle: PlaybackHandle) -> None:
        self.calls.append(("resume", handle.path.name))
        handle.paused = False

    def seek(self, handle: PlaybackHandle, position: float) -> None:
        self.calls.append(("seek", handle.path.name))
        if handle.path.name in self.unseekable:
            raise SeekUnsupported("cannot seek")
        self.positions[handle.path.name] = position

    def stop(self, handle: PlaybackHandle) -> None:
        self.calls.append(("stop", handle.path.name))
        handle.released = True
        if handle in self.open_handles:
            self.open_handles.remove(handle)

    def position(self, handle: PlaybackHandle) -> float:
        return self.positions.get(handle.path.name, 0.0)

    def has_ended(self, handle: PlaybackHandle) -> bool:
        return handle.path.name in self.ended

    def names(self, method: str) -> list[str]:
        return [name for called, name in self.calls if called == method]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def catalog():
    """Four tracks used throughout the search and playback tests."""
    return Catalog.from_paths([
        "/music/Battle Song.mp3",
        "/music/Beautiful.mp3",
        "/music/Subtitle.mp3",
        "/music/Jazz.mp3",
    ])


@pytest.fixture
def player(catalog, backend):
    return PlaybackStateMachine(catalog, backend, rng=random.Random(1234))


@pytest.fixture
def session(catalog, backend):
    return PlayerSession(catalog, backend, Settings(), rng=random.Random(42))
