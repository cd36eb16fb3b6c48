from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any, Protocol

from models.errors import NoTracksFound
from models.track import Track

logger = logging.getLogger(__name__)


class TrackSource(Protocol):
    """Anything that can list audio files and read their tags."""

    music_dirs: list[Path]

    def discover(self) -> list[tuple[Path, str]]: ...

    def read_metadata(self, file_path: Path) -> dict[str, Any]: ...


class Catalog(Sequence[Track]):
    """Ordered, read-only list of the tracks discovered for this session.

    Indices are dense 0..N-1 and follow discovery order.
    """

    def __init__(self, tracks: Sequence[Track] = (), searched: list[Path] | None = None):
        self._tracks: tuple[Track, ...] = tuple(tracks)
        self.searched = list(searched or [])
        for position, track in enumerate(self._tracks):
            if track.index != position:
                raise ValueError(f"Track {track.title!r} has index {track.index}, expected {position}")

    @classmethod
    def load(cls, source: TrackSource) -> Catalog:
        """Build the catalog from a track source, assigning indices in order."""
        tracks = []
        for index, (file_path, _name) in enumerate(source.discover()):
            tracks.append(Track.from_file(index, file_path, source.read_metadata(file_path)))

        logger.info(f"Catalog loaded with {len(tracks)} tracks")
        return cls(tracks, searched=getattr(source, 'music_dirs', None))

    @classmethod
    def from_paths(cls, paths: Sequence[Path | str]) -> Catalog:
        """Build a catalog from bare paths without reading tags."""
        return cls([Track.from_file(index, Path(path)) for index, path in enumerate(paths)])

    def __getitem__(self, index):
        return self._tracks[index]

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)

    @property
    def is_empty(self) -> bool:
        return not self._tracks

    def get(self, index: int | None) -> Track | None:
        """Return the track at index, or None when out of range."""
        if index is None or not 0 <= index < len(self._tracks):
            return None
        return self._tracks[index]

    def titles(self) -> list[str]:
        return [track.title for track in self._tracks]

    def require_tracks(self) -> None:
        """Raise NoTracksFound when the catalog is empty."""
        if self.is_empty:
            raise NoTracksFound(self.searched)
