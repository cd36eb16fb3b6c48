from textual.app import App, ComposeResult
from textual.widgets import Footer
from textual.containers import Horizontal
from textual.binding import Binding
import asyncio
import logging

from models.commands import Command
from models.errors import NoTracksFound
from models.playback import PlaybackState
from services.audio_backend import AudioBackend, PygameBackend
from services.catalog import Catalog
from services.music_library import MusicLibrary
from services.session import PlayerSession
from services.settings import Settings
from views import LibraryView, NowPlayingView
from widgets import Header, HelpScreen

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    """Send logs to a file; the terminal belongs to the UI."""
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(settings.log_file)
        ]
    )


class MusixApp(App):
    """A keyboard-driven terminal music player built with Textual."""

    CSS_PATH = "styles/app.tcss"
    TITLE = "MUSIX"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("up,k", "move_up", "Up", show=False),
        Binding("down,j", "move_down", "Down", show=False),
        Binding("home,g", "jump_first", "First", show=False),
        Binding("end,G", "jump_last", "Last", show=False),
        Binding("enter,space", "play_pause", "Play/Pause"),
        Binding("left", "previous_track", "Prev"),
        Binding("right", "next_track", "Next"),
        Binding("comma,less_than_sign", "seek_backward", "-5s"),
        Binding("full_stop,greater_than_sign", "seek_forward", "+5s"),
        Binding("s", "stop", "Stop"),
        Binding("r", "toggle_mode", "Random"),
        Binding("slash", "search", "Search"),
        Binding("x,h,question_mark", "show_help", "Help"),
    ]

    def __init__(
        self,
        settings: Settings | None = None,
        backend: AudioBackend | None = None,
        music_library: MusicLibrary | None = None,
        *args,
        **kwargs
    ):
        super().__init__(*args, **kwargs)

        logger.info("Starting MUSIX application")
        self.settings = settings or Settings.from_env()

        self._owns_backend = backend is None
        if backend is None:
            try:
                backend = PygameBackend()
            except RuntimeError as e:
                logger.critical(f"Failed to initialize audio output: {e}")
                raise
        self.audio_backend = backend

        self.music_library = music_library or MusicLibrary(self.settings.music_dirs)
        self.session = PlayerSession(Catalog(), self.audio_backend, self.settings)
        self._library_ready = False
        logger.info("Services initialized successfully")

    def compose(self) -> ComposeResult:
        """Compose the main application layout."""
        yield Header()

        with Horizontal(id="main-container"):
            yield LibraryView(id="library")
            yield NowPlayingView(id="now_playing")

        yield Footer()

    def on_mount(self) -> None:
        """Initialize the application."""
        self.query_one("#library", LibraryView).focus()

        header = self.query_one(Header)
        header.loop_playlist = self.settings.loop_playlist

        self.run_worker(self._scan_library, exclusive=True)
        self.set_interval(self.settings.tick_interval, self._tick)

    def on_unmount(self) -> None:
        self.session.player.stop()
        if self._owns_backend:
            self.audio_backend.shutdown()

    async def _scan_library(self) -> None:
        """Scan music library in background thread.

        Displays user-friendly error messages if scanning fails.
        """
        try:
            logger.info("Starting music library scan")
            catalog = await asyncio.to_thread(Catalog.load, self.music_library)
        except PermissionError as e:
            logger.error(f"Permission denied accessing music directory: {e}")
            self.notify(
                "❌ Cannot access music directory\n\nPlease check directory permissions",
                severity="error",
                timeout=10
            )
            catalog = Catalog(searched=self.music_library.music_dirs)
        except OSError as e:
            logger.error(f"Error during library scan: {type(e).__name__}: {e}")
            self.notify(
                f"❌ Error scanning music library\n\n{type(e).__name__}: {str(e)[:50]}",
                severity="error",
                timeout=10
            )
            catalog = Catalog(searched=self.music_library.music_dirs)

        self.session = PlayerSession(catalog, self.audio_backend, self.settings)
        self._library_ready = True

        try:
            catalog.require_tracks()
        except NoTracksFound as e:
            logger.warning(str(e))
            self.notify(
                f"{e}\n\nCopy MP3 files to ~/Music or ./data to get started!",
                severity="warning",
                timeout=8
            )
        else:
            self.notify(f"✓ Loaded {len(catalog)} songs", severity="information", timeout=3)

        await self._refresh_views()

    async def _tick(self) -> None:
        """Advance finished tracks and refresh the display."""
        if not self._library_ready:
            return
        try:
            self.session.tick()
        except Exception as e:
            logger.error(f"Error during playback update: {type(e).__name__}: {e}")
            self.notify("❌ Error advancing to next track", severity="error", timeout=3)
        await self._refresh_views()

    async def _dispatch(self, command: Command, argument: str | None = None) -> None:
        try:
            self.session.dispatch(command, argument)
        except Exception as e:
            logger.error(f"Error handling {command.value}: {type(e).__name__}: {e}")
            self.notify(f"❌ Cannot {command.value.replace('_', ' ')}", severity="error", timeout=3)
        await self._refresh_views()

    async def _refresh_views(self) -> None:
        snapshot = self.session.snapshot()

        notice = self.session.consume_notice()
        if notice:
            self.notify(f"❌ {notice}", severity="warning", timeout=4)

        await self.query_one("#library", LibraryView).show(snapshot)

        player = snapshot.player
        track = self.session.catalog.get(player.current_index)
        self.query_one("#now_playing", NowPlayingView).show(player, track)

        header = self.query_one(Header)
        header.mode = player.mode
        header.track_count = snapshot.catalog_size

        if track is None:
            self.sub_title = ""
        elif player.status == PlaybackState.PLAYING:
            self.sub_title = f"♪ {track.title}"
        elif player.status == PlaybackState.PAUSED:
            self.sub_title = f"{track.title} (Paused)"
        else:
            self.sub_title = track.title

    async def on_library_view_command_issued(self, message: LibraryView.CommandIssued) -> None:
        await self._dispatch(message.command, message.argument)

    async def action_move_up(self) -> None:
        await self._dispatch(Command.MOVE_UP)

    async def action_move_down(self) -> None:
        await self._dispatch(Command.MOVE_DOWN)

    async def action_jump_first(self) -> None:
        await self._dispatch(Command.JUMP_FIRST)

    async def action_jump_last(self) -> None:
        await self._dispatch(Command.JUMP_LAST)

    async def action_play_pause(self) -> None:
        """Play the selected song, or pause/resume it if it is the current one."""
        await self._dispatch(Command.PLAY_SELECTED)

    async def action_previous_track(self) -> None:
        await self._dispatch(Command.PREV)

    async def action_next_track(self) -> None:
        await self._dispatch(Command.NEXT)

    async def action_seek_backward(self) -> None:
        await self._dispatch(Command.SEEK_BACKWARD)

    async def action_seek_forward(self) -> None:
        await self._dispatch(Command.SEEK_FORWARD)

    async def action_stop(self) -> None:
        await self._dispatch(Command.STOP)

    async def action_toggle_mode(self) -> None:
        await self._dispatch(Command.TOGGLE_MODE)
        mode = self.session.player.mode.value.upper()
        self.notify(f"🔀 Mode: {mode}", timeout=1.5)

    async def action_search(self) -> None:
        await self._dispatch(Command.ENTER_SEARCH)

    def action_show_help(self) -> None:
        self.push_screen(HelpScreen(self.settings.seek_seconds, self.settings.music_dirs))

    def action_quit(self) -> None:
        """Handle quit action for clean shutdown."""
        self.exit()


def main():
    """Entry point for the MUSIX application.

    Handles initialization errors and provides user-friendly error messages.
    """
    settings = Settings.from_env()
    setup_logging(settings)

    try:
        logger.info("=" * 60)
        logger.info("MUSIX starting up")
        logger.info("=" * 60)

        app = MusixApp(settings=settings)
        app.run()

        logger.info("MUSIX shut down cleanly")

    except RuntimeError as e:
        logger.critical(f"Fatal error during startup: {e}")
        print("\n❌ MUSIX cannot start\n")
        print(f"{e}\n")
        print(f"Check {settings.log_file} for more details.\n")
        exit(1)
    except KeyboardInterrupt:
        logger.info("MUSIX interrupted by user")
        print("\n\nGoodbye! 👋\n")
        exit(0)
    except Exception as e:
        logger.critical(f"Unexpected fatal error: {type(e).__name__}: {e}", exc_info=True)
        print("\n❌ MUSIX encountered an unexpected error\n")
        print(f"{type(e).__name__}: {e}\n")
        print(f"Check {settings.log_file} for more details.\n")
        exit(1)


if __name__ == "__main__":
    main()
