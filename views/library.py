from __future__ import annotations

import asyncio
import logging

from textual import events
from textual.app import ComposeResult
from textual.containers import Container
from textual.message import Message
from textual.widgets import ListView, ListItem, Label, Static

from models.commands import BACKSPACE, Command
from models.playback import PlaybackState
from services.session import SessionSnapshot

logger = logging.getLogger(__name__)

SEARCH_KEYS = {
    "escape": Command.CANCEL_SEARCH,
    "up": Command.MOVE_UP,
    "down": Command.MOVE_DOWN,
    "tab": Command.NEXT_RESULT,
    "shift+tab": Command.PREV_RESULT,
}


class LibraryView(Container, can_focus=True):
    """Song list for the active view, with an inline search bar."""

    DEFAULT_CSS = """
    LibraryView {
        background: #101410;
        border: solid #90ee90;
        padding: 0 1;
    }

    LibraryView:focus {
        border: solid #00ff96;
    }

    #library-title {
        color: #90ee90;
        text-style: bold;
        padding: 0 0 1 0;
    }

    #search-bar {
        color: #00ff96;
        background: #1c241c;
        padding: 0 1;
    }

    #track-list > ListItem.playing {
        color: #00ff96;
        text-style: bold;
    }
    """

    class CommandIssued(Message):
        """Posted when a key typed in search mode maps to a command."""

        def __init__(self, command: Command, argument: str | None = None) -> None:
            super().__init__()
            self.command = command
            self.argument = argument

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._rows: tuple[int, ...] | None = None
        self._labels: dict[int, str] = {}
        self._searching = False
        self._render_lock = asyncio.Lock()

    def compose(self) -> ComposeResult:
        """Compose the library view with a list of tracks."""
        yield Label("🎵 Songs", id="library-title")
        yield Static("", id="search-bar")
        yield ListView(id="track-list")

    def on_mount(self) -> None:
        track_list = self.query_one("#track-list", ListView)
        track_list.can_focus = False
        self.query_one("#search-bar", Static).display = False

    async def show(self, snapshot: SessionSnapshot) -> None:
        """Render a session snapshot, rebuilding the list only when the view changed."""
        async with self._render_lock:
            await self._render(snapshot)

    async def _render(self, snapshot: SessionSnapshot) -> None:
        track_list = self.query_one("#track-list", ListView)
        rows = tuple(track.index for track in snapshot.rows)

        if rows != self._rows:
            await track_list.clear()
            self._labels.clear()
            if rows:
                await track_list.extend(
                    ListItem(Label(self._row_text(track, snapshot), classes="track-label"))
                    for track in snapshot.rows
                )
            elif snapshot.catalog_size == 0:
                await track_list.append(ListItem(Label("No music files found")))
            else:
                await track_list.append(ListItem(Label("No matching songs")))
            self._rows = rows
            logger.debug(f"Library view rebuilt with {len(rows)} rows")

        self._update_labels(track_list, snapshot)
        self._update_search_bar(snapshot)

        if rows:
            track_list.index = snapshot.selected

    def _update_labels(self, track_list: ListView, snapshot: SessionSnapshot) -> None:
        if not snapshot.rows:
            return
        current = snapshot.player.current_index
        for position, track in enumerate(snapshot.rows):
            text = self._row_text(track, snapshot)
            if self._labels.get(position) == text:
                continue
            item = track_list.children[position]
            item.query_one(Label).update(text)
            item.set_class(track.index == current and snapshot.player.is_playing, "playing")
            self._labels[position] = text

    def _update_search_bar(self, snapshot: SessionSnapshot) -> None:
        search_bar = self.query_one("#search-bar", Static)
        self._searching = snapshot.search is not None
        search_bar.display = self._searching
        if snapshot.search is None:
            return

        matches = snapshot.search.match_count
        summary = "" if matches is None else f"  ({matches} of {snapshot.catalog_size})"
        search_bar.update(f"/{snapshot.search.query}▏{summary}")

    @staticmethod
    def _row_text(track, snapshot: SessionSnapshot) -> str:
        player = snapshot.player
        indicator = "  "
        if track.index == player.current_index:
            if player.status == PlaybackState.PLAYING:
                indicator = "♪ "
            elif player.status == PlaybackState.PAUSED:
                indicator = "‖ "
        return f"{indicator}{track.index + 1}. {track.title}"

    def on_key(self, event: events.Key) -> None:
        """Capture typing while the search bar is open."""
        if not self._searching:
            return

        if event.key == "enter":
            self.post_message(self.CommandIssued(Command.PLAY_RESULT))
        elif event.key == "backspace":
            self.post_message(self.CommandIssued(Command.EDIT_QUERY, BACKSPACE))
        elif event.key in SEARCH_KEYS:
            self.post_message(self.CommandIssued(SEARCH_KEYS[event.key]))
        elif event.is_printable and event.character:
            self.post_message(self.CommandIssued(Command.EDIT_QUERY, event.character))
        else:
            return

        event.prevent_default()
        event.stop()
