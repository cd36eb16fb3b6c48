from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"


@dataclass(frozen=True)
class Track:
    """Represents a music track with metadata.

    The index is assigned once when the catalog is loaded and never reused
    within a session. Duration is None while unknown.
    """
    index: int
    file_path: Path
    title: str
    artist: str = UNKNOWN_ARTIST
    album: str = UNKNOWN_ALBUM
    duration_seconds: float | None = None

    @classmethod
    def from_file(cls, index: int, file_path: Path, metadata: dict[str, Any] | None = None) -> Track:
        """Build a Track from a discovered file and its tag metadata.

        Args:
            index: Catalog position assigned at load time.
            file_path: Path to the audio file.
            metadata: Optional dict with 'artist', 'album' and 'duration' keys.

        Returns:
            Track titled after the file name with the extension stripped.
        """
        metadata = metadata or {}
        duration = metadata.get('duration')
        if not duration or duration <= 0:
            duration = None

        return cls(
            index=index,
            file_path=Path(file_path).absolute(),
            title=Path(file_path).stem,
            artist=metadata.get('artist') or UNKNOWN_ARTIST,
            album=metadata.get('album') or UNKNOWN_ALBUM,
            duration_seconds=duration,
        )


def format_time(seconds: float | None) -> str:
    """Format seconds as MM:SS, or --:-- when unknown."""
    if seconds is None:
        return "--:--"
    total_seconds = max(0, int(seconds))
    minutes, secs = divmod(total_seconds, 60)
    return f"{minutes:02d}:{secs:02d}"
