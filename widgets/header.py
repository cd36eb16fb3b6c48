from textual.widgets import Static
from textual.reactive import reactive
from textual.containers import Vertical
from textual.app import ComposeResult
from textual.css.query import NoMatches
from rich.text import Text
from models.playback import PlaybackMode
from styles import COLOR_PRIMARY, COLOR_HIGHLIGHT, COLOR_MUTED, COLOR_DIM

MUSIX_ASCII = """
 ███╗   ███╗██╗   ██╗███████╗██╗██╗  ██╗
 ████╗ ████║██║   ██║██╔════╝██║╚██╗██╔╝
 ██╔████╔██║██║   ██║███████╗██║ ╚███╔╝
 ██║╚██╔╝██║██║   ██║╚════██║██║ ██╔██╗
 ██║ ╚═╝ ██║╚██████╔╝███████║██║██╔╝ ██╗
 ╚═╝     ╚═╝ ╚═════╝ ╚══════╝╚═╝╚═╝  ╚═╝
"""


class Header(Vertical):
    DEFAULT_CSS = """
    Header {
        height: auto;
        padding: 0 1;
    }

    #header-logo {
        color: #90ee90;
        text-style: bold;
    }
    """

    mode: reactive[PlaybackMode] = reactive(PlaybackMode.NORMAL)
    track_count: reactive[int] = reactive(0)
    loop_playlist: reactive[bool] = reactive(False)

    def compose(self) -> ComposeResult:
        yield Static(MUSIX_ASCII, id="header-logo")
        yield Static("─" * 80, id="header-divider")
        yield Static(self._render_status(), id="header-status")

    def _render_status(self) -> Text:
        result = Text()

        result.append("Mode ", style=COLOR_MUTED)
        if self.mode == PlaybackMode.RANDOM:
            result.append("RANDOM", style=f"{COLOR_HIGHLIGHT} bold")
        else:
            result.append("NORMAL", style=f"{COLOR_PRIMARY} bold")

        result.append("    │    Loop ", style=COLOR_MUTED)
        if self.loop_playlist:
            result.append("ON", style=f"{COLOR_PRIMARY} bold")
        else:
            result.append("OFF", style=COLOR_DIM)

        result.append("    │    Songs ", style=COLOR_MUTED)
        result.append(str(self.track_count), style=f"{COLOR_PRIMARY} bold")

        result.append("    │    ", style=COLOR_MUTED)
        result.append("X", style=f"{COLOR_PRIMARY} bold")
        result.append(": Help", style=COLOR_MUTED)

        return result

    def _refresh_status(self) -> None:
        try:
            status_widget = self.query_one("#header-status", Static)
            status_widget.update(self._render_status())
        except NoMatches:
            pass

    def watch_mode(self, new_value: PlaybackMode) -> None:
        self._refresh_status()

    def watch_track_count(self, new_value: int) -> None:
        self._refresh_status()

    def watch_loop_playlist(self, new_value: bool) -> None:
        self._refresh_status()
