from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from models.commands import Command
from models.playback import PlayerSnapshot
from models.search import SearchSnapshot
from models.track import Track
from services.audio_backend import AudioBackend
from services.catalog import Catalog
from services.navigation import NavigationController
from services.player import PlaybackStateMachine
from services.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything the display needs for one frame."""
    rows: tuple[Track, ...]
    selected: int
    player: PlayerSnapshot
    search: SearchSnapshot | None
    catalog_size: int

    @property
    def selected_track(self) -> Track | None:
        if not self.rows:
            return None
        return self.rows[self.selected]


class PlayerSession:
    """Single owner of the catalog, navigation and playback state.

    Input arrives as Command values applied one at a time by dispatch();
    the display calls tick() on a timer and renders snapshot().
    """

    def __init__(
        self,
        catalog: Catalog,
        backend: AudioBackend,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or Settings()
        self.catalog = catalog
        self.navigation = NavigationController(catalog)
        self.player = PlaybackStateMachine(
            catalog,
            backend,
            loop_playlist=self.settings.loop_playlist,
            rng=rng,
        )
        self._handlers = {
            Command.MOVE_UP: lambda _: self.navigation.move(-1),
            Command.MOVE_DOWN: lambda _: self.navigation.move(1),
            Command.JUMP_FIRST: lambda _: self.navigation.jump_first(),
            Command.JUMP_LAST: lambda _: self.navigation.jump_last(),
            Command.PLAY_SELECTED: self._play_selected,
            Command.PAUSE: lambda _: self.player.pause(),
            Command.RESUME: lambda _: self.player.resume(),
            Command.STOP: lambda _: self.player.stop(),
            Command.NEXT: lambda _: self._transport(self.player.next),
            Command.PREV: lambda _: self._transport(self.player.prev),
            Command.SEEK_FORWARD: lambda _: self.player.seek(self.settings.seek_seconds),
            Command.SEEK_BACKWARD: lambda _: self.player.seek(-self.settings.seek_seconds),
            Command.TOGGLE_MODE: lambda _: self.player.toggle_mode(),
            Command.ENTER_SEARCH: lambda _: self.navigation.enter_search(),
            Command.EDIT_QUERY: lambda char: self.navigation.edit_query(char or ""),
            Command.SET_QUERY: lambda text: self.navigation.set_query(text or ""),
            Command.NEXT_RESULT: lambda _: self.navigation.next_result(),
            Command.PREV_RESULT: lambda _: self.navigation.prev_result(),
            Command.COMMIT_SEARCH: lambda _: self.navigation.exit_search(commit=True),
            Command.CANCEL_SEARCH: lambda _: self.navigation.exit_search(commit=False),
            Command.PLAY_RESULT: self._play_result,
        }

    def dispatch(self, command: Command, argument: str | None = None) -> None:
        """Apply a single input command."""
        logger.debug(f"Dispatch {command.value} ({argument!r})")
        self._handlers[command](argument)

    def tick(self) -> None:
        """Reconcile playback with the backend; the cursor follows auto-advance."""
        self._transport(self.player.tick)

    def snapshot(self) -> SessionSnapshot:
        rows = tuple(self.catalog[index] for index in self.navigation.view())
        selected = min(self.navigation.selected_index, max(0, len(rows) - 1))

        search = None
        if self.navigation.search is not None:
            results = self.navigation.search.results
            search = SearchSnapshot(
                query=self.navigation.search.query,
                match_count=None if results is None else len(results),
            )

        return SessionSnapshot(
            rows=rows,
            selected=selected,
            player=self.player.snapshot(),
            search=search,
            catalog_size=len(self.catalog),
        )

    def consume_notice(self) -> str | None:
        return self.player.consume_notice()

    def _play_selected(self, _argument) -> None:
        index = self.navigation.confirm()
        if index is None:
            return
        self._transport(lambda: self.player.play(index))

    def _play_result(self, _argument) -> None:
        """Commit the search and play the chosen result, if there is one."""
        chosen = self.navigation.confirm()
        self.navigation.exit_search(commit=True)
        if chosen is None:
            logger.debug("Search committed with no results, nothing to play")
            return
        self._transport(lambda: self.player.play(chosen))

    def _transport(self, action) -> None:
        before = self.player.current_index
        action()
        if self.player.current_index != before:
            self.navigation.follow(self.player.current_index)
