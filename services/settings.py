from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MUSIC_DIRS = [Path.home() / "Music", Path("./data")]
DEFAULT_LOG_DIR = Path.home() / '.local' / 'share' / 'musix'
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Settings:
    """Runtime settings for MUSIX.

    Attributes:
        music_dirs: Directories scanned recursively for audio files, in order.
        seek_seconds: Step used by the seek forward/backward commands.
        loop_playlist: Wrap around at the ends of the playlist instead of stopping.
        tick_interval: Seconds between UI refreshes and backend reconciliation.
        log_level: Logging level name.
        log_dir: Directory holding musix.log.
    """
    music_dirs: list[Path] = field(default_factory=lambda: list(DEFAULT_MUSIC_DIRS))
    seek_seconds: float = 5.0
    loop_playlist: bool = False
    tick_interval: float = 0.1
    log_level: str = "INFO"
    log_dir: Path = DEFAULT_LOG_DIR

    @property
    def log_file(self) -> Path:
        return self.log_dir / 'musix.log'

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Load settings from MUSIX_* environment variables.

        Invalid values are logged and replaced with the defaults.
        """
        env = os.environ if environ is None else environ
        settings = cls()

        dirs = env.get('MUSIX_MUSIC_DIRS')
        if dirs:
            settings.music_dirs = [Path(part).expanduser() for part in dirs.split(os.pathsep) if part]

        settings.seek_seconds = _positive_float(env, 'MUSIX_SEEK_SECONDS', settings.seek_seconds)
        settings.tick_interval = _positive_float(env, 'MUSIX_TICK_INTERVAL', settings.tick_interval)

        loop = env.get('MUSIX_LOOP_PLAYLIST')
        if loop is not None:
            if loop.strip().lower() in TRUE_VALUES:
                settings.loop_playlist = True
            elif loop.strip().lower() in FALSE_VALUES:
                settings.loop_playlist = False
            else:
                logger.warning(f"Ignoring invalid MUSIX_LOOP_PLAYLIST value: {loop!r}")

        level = env.get('MUSIX_LOG_LEVEL')
        if level:
            if level.upper() in VALID_LOG_LEVELS:
                settings.log_level = level.upper()
            else:
                logger.warning(f"Ignoring invalid MUSIX_LOG_LEVEL value: {level!r}")

        log_dir = env.get('MUSIX_LOG_DIR')
        if log_dir:
            settings.log_dir = Path(log_dir).expanduser()

        return settings


def _positive_float(env, name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name} value: {raw!r}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name} value: {raw!r}")
        return default
    return value
