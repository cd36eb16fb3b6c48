from .track import Track, format_time
from .playback import PlaybackState, PlaybackMode, PlayerSnapshot
from .search import MatchTier, Score, SearchResult, SearchState, SearchSnapshot
from .commands import Command, BACKSPACE
from .errors import MusixError, NoTracksFound, DecodeFailure, SeekUnsupported

__all__ = [
    "Track",
    "format_time",
    "PlaybackState",
    "PlaybackMode",
    "PlayerSnapshot",
    "MatchTier",
    "Score",
    "SearchResult",
    "SearchState",
    "SearchSnapshot",
    "Command",
    "BACKSPACE",
    "MusixError",
    "NoTracksFound",
    "DecodeFailure",
    "SeekUnsupported",
]
