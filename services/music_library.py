from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from mutagen import File as MutagenFile, MutagenError

logger = logging.getLogger(__name__)


class MusicLibrary:
    """Service for discovering music files and reading their tags."""

    SUPPORTED_EXTENSIONS = {'.mp3', '.flac', '.wav', '.ogg'}

    def __init__(self, music_dirs: list[Path]):
        """Initialize MusicLibrary with the directories to scan.

        Args:
            music_dirs: Directories scanned recursively, in order.
        """
        self.music_dirs = [Path(directory).expanduser() for directory in music_dirs]

    def discover(self) -> list[tuple[Path, str]]:
        """Scan the music directories for audio files.

        Missing or unreadable directories are skipped. A file reachable from
        two roots is reported once.

        Returns:
            List of (path, display_name) pairs sorted by display name, then path.
        """
        found: dict[Path, str] = {}

        for music_dir in self.music_dirs:
            if not music_dir.is_dir():
                logger.warning(f"Skipping missing music directory: {music_dir}")
                continue

            try:
                for file_path in music_dir.rglob("*"):
                    if file_path.suffix.lower() not in self.SUPPORTED_EXTENSIONS:
                        continue
                    if not file_path.is_file():
                        continue
                    found.setdefault(file_path.resolve(), file_path.stem)
            except PermissionError as e:
                logger.warning(f"Could not access directory {music_dir}: {e}")
                continue

        files = sorted(found.items(), key=lambda item: (item[1], str(item[0])))
        logger.info(f"Discovered {len(files)} audio files in {len(self.music_dirs)} directories")
        return files

    @staticmethod
    def read_metadata(file_path: Path) -> dict[str, Any]:
        """Extract metadata from audio file using mutagen.

        Args:
            file_path: Path to audio file.

        Returns:
            Dictionary containing artist, album, and duration. Tags that cannot
            be read are left out so the caller applies its fallbacks.
        """
        metadata: dict[str, Any] = {}

        try:
            audio = MutagenFile(file_path, easy=True)
        except (MutagenError, OSError) as e:
            logger.warning(f"Could not extract metadata from {file_path}: {e}")
            return metadata

        if audio is None:
            logger.debug(f"Unrecognised audio format: {file_path}")
            return metadata

        if audio.tags:
            for key in ('artist', 'album'):
                if key in audio.tags:
                    value = audio.tags[key]
                    metadata[key] = str(value[0]) if isinstance(value, list) else str(value)

        if audio.info and hasattr(audio.info, 'length'):
            metadata['duration'] = float(audio.info.length)

        return metadata
