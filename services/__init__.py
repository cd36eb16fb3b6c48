from .music_library import MusicLibrary
from .catalog import Catalog
from .audio_backend import AudioBackend, PlaybackHandle, PygameBackend
from .navigation import NavigationController
from .player import PlaybackStateMachine
from .session import PlayerSession, SessionSnapshot
from .settings import Settings

__all__ = [
    'MusicLibrary',
    'Catalog',
    'AudioBackend',
    'PlaybackHandle',
    'PygameBackend',
    'NavigationController',
    'PlaybackStateMachine',
    'PlayerSession',
    'SessionSnapshot',
    'Settings',
]
