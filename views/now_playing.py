from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.widgets import Static
from rich.text import Text
from models.playback import PlaybackState, PlayerSnapshot
from models.track import Track, format_time
from styles import COLOR_PRIMARY, COLOR_HIGHLIGHT, COLOR_MUTED, COLOR_INACTIVE

PROGRESS_BAR_WIDTH = 40


class NowPlayingView(Container):
    """Widget displaying currently playing track information."""

    DEFAULT_CSS = """
    NowPlayingView {
        background: #101410;
        border: solid #90ee90;
        padding: 1 2;
    }

    NowPlayingView .music-icon {
        color: #00ff96;
        text-style: bold;
    }

    NowPlayingView .track-title {
        color: #90ee90;
        text-style: bold;
        padding: 1 0 0 0;
    }

    NowPlayingView .track-metadata {
        color: #888888;
    }

    NowPlayingView .time-display, NowPlayingView .state-display {
        padding: 1 0 0 0;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the now playing view with track info."""
        with Vertical():
            yield Static("♪", classes="music-icon")
            yield Static("No track playing", id="np-title", classes="track-title")
            yield Static("Artist: Unknown", id="np-artist", classes="track-metadata")
            yield Static("Album: Unknown", id="np-album", classes="track-metadata")
            yield Static("00:00 / --:--", id="np-time", classes="time-display")
            yield Static(self._render_progress(0.0), id="np-progress")
            yield Static("State: Stopped", id="np-state", classes="state-display")

    def show(self, player: PlayerSnapshot, track: Track | None) -> None:
        """Update all display widgets with current playback information."""
        if track:
            self.query_one("#np-title", Static).update(track.title)
            self.query_one("#np-artist", Static).update(f"Artist: {track.artist}")
            self.query_one("#np-album", Static).update(f"Album: {track.album}")
        else:
            self.query_one("#np-title", Static).update("No track playing")
            self.query_one("#np-artist", Static).update("Artist: Unknown")
            self.query_one("#np-album", Static).update("Album: Unknown")

        if player.duration is not None:
            time_text = f"{format_time(player.elapsed)} / {format_time(player.duration)}"
        else:
            time_text = format_time(player.elapsed)
        self.query_one("#np-time", Static).update(time_text)
        self.query_one("#np-progress", Static).update(self._render_progress(player.progress))

        state = f"State: {player.status.value.capitalize()}"
        if player.status == PlaybackState.STOPPED and track is None:
            state = "State: Idle"
        self.query_one("#np-state", Static).update(state)

    @staticmethod
    def _render_progress(progress: float) -> Text:
        """Render a horizontal progress gauge."""
        result = Text()
        filled = int(progress * PROGRESS_BAR_WIDTH)

        result.append("│", style=COLOR_MUTED)
        for i in range(PROGRESS_BAR_WIDTH):
            if i < filled:
                result.append("█", style=COLOR_PRIMARY)
            elif i == filled and progress > 0:
                result.append("▌", style=COLOR_HIGHLIGHT)
            else:
                result.append("─", style=COLOR_INACTIVE)
        result.append(f"│ {int(progress * 100):3d}%", style=COLOR_MUTED)

        return result
