"""Exceptions raised by the MUSIX core and its collaborators."""

from __future__ import annotations

from pathlib import Path


class MusixError(Exception):
    """Base exception for MUSIX."""


class NoTracksFound(MusixError):
    """The catalog is empty. The player stays idle but operable."""

    def __init__(self, searched: list[Path] | None = None):
        self.searched = searched or []
        locations = ", ".join(str(path) for path in self.searched) or "no directories"
        super().__init__(f"No music files found in {locations}")


class DecodeFailure(MusixError):
    """The audio backend could not open or start a track."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not play '{Path(path).name}': {reason}")


class SeekUnsupported(MusixError):
    """The current stream cannot be repositioned in place."""
