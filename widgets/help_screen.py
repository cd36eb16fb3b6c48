from __future__ import annotations

from textual.screen import ModalScreen
from textual.widgets import Static, Button
from textual.containers import Container, VerticalScroll
from textual.app import ComposeResult
from textual.css.query import NoMatches

HELP_TEXT = """[bold #90ee90]🎵 MUSIX - Terminal Music Player[/bold #90ee90]

[bold]NAVIGATION[/bold]
  ↑/↓ j/k      Move selection
  g/G Home/End Jump to first/last song
  /            Search songs

[bold]PLAYBACK CONTROLS[/bold]
  Enter/Space  Play selected, or pause/resume it
  ←/→          Play previous/next song
  ,/. </>      Seek -/+ {seek} seconds
  s            Stop playback
  r            Toggle random mode

[bold]SEARCH MODE[/bold]
  Type         Filter songs (fuzzy match)
  Backspace    Delete last character
  ↑/↓          Move through results
  Tab/S-Tab    Cycle through results
  Enter        Select result and play it
  Esc          Cancel search

[bold]OTHER[/bold]
  x/h/?        Show this help
  q            Quit

[bold]LIBRARY[/bold]
  • Songs are loaded from {dirs}
  • Supported formats: MP3, FLAC, OGG, WAV
  • ♪ marks the song that is playing"""


class HelpScreen(ModalScreen[None]):
    """Modal screen listing the key controls."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    #help-container {
        width: 70;
        height: 80%;
        background: #101410;
        border: thick #90ee90;
        padding: 1 2;
    }

    #help-scroll {
        width: 100%;
        height: 1fr;
        margin-bottom: 1;
    }

    #help-content {
        width: 100%;
        height: auto;
    }

    #help-close-button {
        width: 100%;
        height: auto;
        background: #1c241c;
        color: #90ee90;
        border: solid #90ee90;
        text-style: bold;
    }

    #help-close-button:focus {
        border: solid #00ff96;
    }
    """

    def __init__(self, seek_seconds: float = 5, music_dirs: list | None = None) -> None:
        """Initialize help screen.

        Args:
            seek_seconds: Seek step shown in the controls list.
            music_dirs: Directories shown as the library location.
        """
        super().__init__()
        self.seek_seconds = seek_seconds
        self.music_dirs = music_dirs or []

    def compose(self) -> ComposeResult:
        """Compose the help screen."""
        dirs = ", ".join(str(directory) for directory in self.music_dirs) or "~/Music"
        with Container(id="help-container"):
            with VerticalScroll(id="help-scroll"):
                yield Static(HELP_TEXT.format(seek=f"{self.seek_seconds:g}", dirs=dirs), id="help-content")

            yield Button("Close (Esc)", id="help-close-button", variant="primary")

    def on_mount(self) -> None:
        """Focus the button when screen mounts."""
        self.call_after_refresh(self._focus_button)

    def _focus_button(self) -> None:
        try:
            button = self.query_one("#help-close-button", Button)
            button.focus()
        except NoMatches:
            pass

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "help-close-button":
            self.dismiss()

    async def on_key(self, event) -> None:
        """Close on Esc or x; scroll with j/k."""
        if event.key in ("escape", "x"):
            self.dismiss()
            event.prevent_default()
            event.stop()
        elif event.key == "j":
            self.query_one("#help-scroll", VerticalScroll).scroll_down()
            event.prevent_default()
            event.stop()
        elif event.key == "k":
            self.query_one("#help-scroll", VerticalScroll).scroll_up()
            event.prevent_default()
            event.stop()
