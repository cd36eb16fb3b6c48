from .header import Header
from .help_screen import HelpScreen

__all__ = [
    "Header",
    "HelpScreen",
]
