from __future__ import annotations

import logging

from models.commands import BACKSPACE
from models.search import SearchState
from services.catalog import Catalog
from services.fuzzy_search import filter_catalog

logger = logging.getLogger(__name__)


class NavigationController:
    """Selection cursor over the active view.

    The active view is the full catalog, or the ranked search results while
    a non-empty query is active. Cursor positions are clamped on every
    move, so they are always valid for the current view.
    """

    def __init__(self, catalog: Catalog):
        self._catalog = catalog
        self.catalog_index = 0
        self.search: SearchState | None = None

    @property
    def is_searching(self) -> bool:
        return self.search is not None

    @property
    def selected_index(self) -> int:
        """Cursor position within the active view."""
        if self.search is not None:
            return self.search.cursor
        return self.catalog_index

    def view(self) -> list[int]:
        """Catalog indices of the active view, in display order."""
        if self.search is not None and self.search.is_filtering:
            return self.search.result_indices()
        return list(range(len(self._catalog)))

    def move(self, delta: int) -> None:
        size = len(self.view())
        if size == 0:
            return
        self._select(max(0, min(size - 1, self.selected_index + delta)))

    def jump_first(self) -> None:
        if self.view():
            self._select(0)

    def jump_last(self) -> None:
        size = len(self.view())
        if size:
            self._select(size - 1)

    def confirm(self) -> int | None:
        """Catalog index under the cursor, or None when the view is empty."""
        view = self.view()
        if not view:
            return None
        return view[min(self.selected_index, len(view) - 1)]

    def follow(self, index: int | None) -> None:
        """Put the catalog cursor on a track, unless a search is in progress."""
        if self.search is None and self._catalog.get(index) is not None:
            self.catalog_index = index

    def enter_search(self) -> None:
        if self.search is not None:
            return
        self.search = SearchState(return_index=self.catalog_index)
        logger.debug("Entered search mode")

    def edit_query(self, char: str) -> None:
        """Append char to the query, or delete the last character on BACKSPACE."""
        if self.search is None:
            return
        if char == BACKSPACE:
            self._apply_query(self.search.query[:-1])
        else:
            self._apply_query(self.search.query + char)

    def set_query(self, query: str) -> None:
        if self.search is None:
            return
        self._apply_query(query)

    def next_result(self) -> None:
        self._cycle(1)

    def prev_result(self) -> None:
        self._cycle(-1)

    def exit_search(self, commit: bool) -> int | None:
        """Leave search mode.

        Args:
            commit: Keep the selected result as the catalog selection instead
                of restoring the selection from before the search.

        Returns:
            The catalog index now selected, or None if nothing is selected.
        """
        if self.search is None:
            return self.confirm()

        selected = self.confirm() if commit else None
        if selected is not None:
            self.catalog_index = selected
        else:
            self.catalog_index = self.search.return_index
        logger.debug(f"Left search mode (commit={commit}, query={self.search.query!r})")
        self.search = None
        return self.confirm()

    def _apply_query(self, query: str) -> None:
        previous = self.confirm()
        self.search.query = query
        self.search.results = filter_catalog(self._catalog, query)

        view = self.view()
        if previous is not None and previous in view:
            self.search.cursor = view.index(previous)
        else:
            self.search.cursor = 0

    def _cycle(self, step: int) -> None:
        if self.search is None:
            return
        size = len(self.view())
        if size == 0:
            return
        self.search.cursor = (self.search.cursor + step) % size

    def _select(self, position: int) -> None:
        if self.search is not None:
            self.search.cursor = position
        else:
            self.catalog_index = position
