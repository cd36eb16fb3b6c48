from models.commands import BACKSPACE
from services.catalog import Catalog
from services.navigation import NavigationController


def type_query(navigation, text):
    for char in text:
        navigation.edit_query(char)


class TestCatalogNavigation:
    """Tests for moving the cursor over the full catalog."""

    def setup_method(self):
        self.navigation = NavigationController(Catalog.from_paths(
            ["/music/Battle Song.mp3", "/music/Beautiful.mp3", "/music/Subtitle.mp3", "/music/Jazz.mp3"]
        ))

    def test_move_clamps_at_both_ends(self):
        """Test that moving never wraps around."""
        self.navigation.move(-1)
        assert self.navigation.selected_index == 0

        for _ in range(10):
            self.navigation.move(1)
        assert self.navigation.selected_index == 3

    def test_jump_first_and_last(self):
        """Test jumping to the ends of the view."""
        self.navigation.jump_last()
        assert self.navigation.confirm() == 3

        self.navigation.jump_first()
        assert self.navigation.confirm() == 0

    def test_confirm_returns_catalog_index(self):
        """Test that confirm reports the selected catalog index."""
        self.navigation.move(1)
        self.navigation.move(1)

        assert self.navigation.confirm() == 2

    def test_follow_moves_cursor(self):
        """Test that the cursor follows a newly playing track."""
        self.navigation.follow(3)
        assert self.navigation.catalog_index == 3

        self.navigation.follow(None)
        self.navigation.follow(99)
        assert self.navigation.catalog_index == 3

    def test_result_cycling_needs_search(self):
        """Test that next/prev result do nothing outside search mode."""
        self.navigation.next_result()
        self.navigation.prev_result()

        assert self.navigation.selected_index == 0


class TestSearchNavigation:
    """Tests for search mode."""

    def setup_method(self):
        self.navigation = NavigationController(Catalog.from_paths(
            ["/music/Battle Song.mp3", "/music/Beautiful.mp3", "/music/Subtitle.mp3", "/music/Jazz.mp3"]
        ))

    def test_enter_search_starts_unfiltered(self):
        """Test that entering search shows the whole catalog at position 0."""
        self.navigation.move(1)
        self.navigation.enter_search()

        assert self.navigation.is_searching
        assert self.navigation.search.query == ""
        assert self.navigation.selected_index == 0
        assert self.navigation.view() == [0, 1, 2, 3]

    def test_edit_query_filters(self):
        """Test that typing narrows and reorders the view."""
        self.navigation.enter_search()
        type_query(self.navigation, "btl")

        assert self.navigation.view() == [0, 2, 1]
        assert self.navigation.confirm() == 0

    def test_edit_preserves_selected_track(self):
        """Test that a still-matching selection survives a query edit."""
        self.navigation.enter_search()
        self.navigation.move(2)
        assert self.navigation.confirm() == 2

        self.navigation.edit_query("t")

        assert self.navigation.view() == [0, 2, 1]
        assert self.navigation.selected_index == 1
        assert self.navigation.confirm() == 2

    def test_edit_resets_when_selection_filtered_out(self):
        """Test that selection resets to 0 when its track no longer matches."""
        self.navigation.enter_search()
        self.navigation.jump_last()
        assert self.navigation.confirm() == 3

        self.navigation.edit_query("b")

        assert self.navigation.selected_index == 0
        assert self.navigation.confirm() == 0

    def test_backspace(self):
        """Test deleting characters back to an unfiltered view."""
        self.navigation.enter_search()
        type_query(self.navigation, "bt")
        self.navigation.edit_query(BACKSPACE)

        assert self.navigation.search.query == "b"
        assert self.navigation.view() == [0, 1, 2]

        self.navigation.edit_query(BACKSPACE)
        self.navigation.edit_query(BACKSPACE)

        assert self.navigation.search.query == ""
        assert self.navigation.search.results is None
        assert self.navigation.view() == [0, 1, 2, 3]

    def test_set_query_replaces_text(self):
        """Test replacing the whole query at once."""
        self.navigation.enter_search()
        self.navigation.set_query("jazz")

        assert self.navigation.view() == [3]

    def test_result_cycling_wraps(self):
        """Test that next/prev result wrap around the filtered view."""
        self.navigation.enter_search()
        type_query(self.navigation, "btl")

        self.navigation.prev_result()
        assert self.navigation.confirm() == 1

        self.navigation.next_result()
        assert self.navigation.confirm() == 0

        self.navigation.next_result()
        assert self.navigation.confirm() == 2

    def test_move_in_results_does_not_wrap(self):
        """Test that plain movement stays clamped inside results."""
        self.navigation.enter_search()
        type_query(self.navigation, "btl")

        self.navigation.move(-1)
        assert self.navigation.selected_index == 0

        self.navigation.jump_last()
        self.navigation.move(1)
        assert self.navigation.selected_index == 2

    def test_commit_keeps_selected_result(self):
        """Test that committing moves the catalog cursor to the chosen track."""
        self.navigation.enter_search()
        type_query(self.navigation, "btl")
        self.navigation.next_result()

        selected = self.navigation.exit_search(commit=True)

        assert selected == 2
        assert not self.navigation.is_searching
        assert self.navigation.catalog_index == 2
        assert self.navigation.view() == [0, 1, 2, 3]

    def test_cancel_restores_previous_selection(self):
        """Test that cancelling puts the cursor back where it was."""
        self.navigation.move(1)
        self.navigation.enter_search()
        type_query(self.navigation, "jazz")

        self.navigation.exit_search(commit=False)

        assert self.navigation.search is None
        assert self.navigation.catalog_index == 1

    def test_no_matches(self):
        """Test that an empty result view makes every command a no-op."""
        self.navigation.move(2)
        self.navigation.enter_search()
        type_query(self.navigation, "zzz")

        self.navigation.move(1)
        self.navigation.next_result()
        self.navigation.jump_last()

        assert self.navigation.view() == []
        assert self.navigation.confirm() is None

        self.navigation.exit_search(commit=True)
        assert self.navigation.catalog_index == 2

    def test_follow_ignored_while_searching(self):
        """Test that playback does not move the cursor during a search."""
        self.navigation.enter_search()
        self.navigation.follow(3)

        self.navigation.exit_search(commit=False)
        assert self.navigation.catalog_index == 0


class TestEmptyCatalog:
    """Tests for navigation without any tracks."""

    def test_all_commands_are_no_ops(self):
        """Test that navigation over an empty catalog never fails."""
        navigation = NavigationController(Catalog())

        navigation.move(1)
        navigation.move(-1)
        navigation.jump_first()
        navigation.jump_last()
        navigation.enter_search()
        navigation.edit_query("a")
        navigation.next_result()
        navigation.prev_result()

        assert navigation.confirm() is None
        assert navigation.exit_search(commit=True) is None
        assert navigation.selected_index == 0
