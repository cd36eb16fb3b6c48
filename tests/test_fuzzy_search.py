import itertools

import pytest

from models.search import MatchTier, Score
from services.catalog import Catalog
from services.fuzzy_search import filter_catalog, score


def titles(catalog, results):
    return [catalog[result.index].title for result in results]


def is_subsequence(query, candidate):
    remaining = iter(candidate)
    return all(char in remaining for char in query)


def strings(alphabet, max_length):
    for length in range(max_length + 1):
        for chars in itertools.product(alphabet, repeat=length):
            yield "".join(chars)


class TestScore:
    """Tests for scoring a single candidate."""

    def test_exact_match_ignores_case(self):
        """Test that a case-insensitive equal string is an exact match."""
        assert score("JAZZ", "jazz") == Score(MatchTier.EXACT)

    def test_prefix_beats_later_substring(self):
        """Test that earlier substring occurrences score higher."""
        prefix = score("song", "Songbird")
        later = score("song", "Battle Song")

        assert prefix.tier == MatchTier.SUBSTRING
        assert later.tier == MatchTier.SUBSTRING
        assert prefix > later
        assert later.rank == -7

    def test_fuzzy_gap_counts_skipped_characters(self):
        """Test the gap metric for a scattered match."""
        assert score("btl", "Battle Song") == Score(MatchTier.FUZZY, -2)
        assert score("btl", "Beautiful") == Score(MatchTier.FUZZY, -6)

    def test_fuzzy_uses_tightest_window(self):
        """Test that a later, tighter cluster wins over the first greedy match."""
        assert score("abc", "axbxxc abxc") == Score(MatchTier.FUZZY, -1)

    @pytest.mark.parametrize("query,candidate", [
        ("xyz", "Battle Song"),
        ("tb", "Battle Song"),
        ("jazzz", "Jazz"),
        ("a", ""),
    ])
    def test_missing_characters_exclude(self, query, candidate):
        """Test that candidates without the ordered subsequence score None."""
        assert score(query, candidate) is None

    def test_empty_query_scores_none(self):
        """Test that an empty query never scores."""
        assert score("", "Jazz") is None

    def test_matches_exactly_the_ordered_subsequences(self):
        """Test score against a plain subsequence check over every short string."""
        queries = [query for query in strings("abA", 3) if query]
        candidates = list(strings("abA", 4))

        for query in queries:
            for candidate in candidates:
                expected = is_subsequence(query.lower(), candidate.lower())
                result = score(query, candidate)
                assert (result is not None) == expected, (query, candidate)
                if result is not None and query.lower() == candidate.lower():
                    assert result.tier == MatchTier.EXACT
                elif result is not None and query.lower() in candidate.lower():
                    assert result.tier == MatchTier.SUBSTRING

    def test_tier_ordering(self):
        """Test exact > substring > fuzzy regardless of rank."""
        exact = score("song", "song")
        substring = score("song", "a very long title with song")
        fuzzy = score("song", "sxoxnxg")

        assert exact > substring > fuzzy


class TestFilterCatalog:
    """Tests for ranking a whole catalog."""

    def test_empty_query_returns_none(self, catalog):
        """Test that an empty query disables filtering."""
        assert filter_catalog(catalog, "") is None

    def test_btl_ordering(self, catalog):
        """Test the ranking of the btl example by subsequence tightness."""
        results = filter_catalog(catalog, "btl")

        assert titles(catalog, results) == ["Battle Song", "Subtitle", "Beautiful"]
        assert [result.index for result in results] == [0, 2, 1]

    def test_tiers_rank_in_order(self):
        """Test that exact, substring and fuzzy matches are grouped by tier."""
        catalog = Catalog.from_paths([
            "/m/S o n g.mp3",
            "/m/Big Song.mp3",
            "/m/Songbird.mp3",
            "/m/Song.mp3",
        ])

        results = filter_catalog(catalog, "SONG")

        assert titles(catalog, results) == ["Song", "Songbird", "Big Song", "S o n g"]

    def test_ties_break_on_catalog_index(self):
        """Test that equal scores keep catalog order."""
        catalog = Catalog.from_paths(["/a/Jazz.mp3", "/b/Blues.mp3", "/c/Jazz.mp3"])

        results = filter_catalog(catalog, "jaz")

        assert [result.index for result in results] == [0, 2]

    def test_results_sorted_and_deterministic(self, catalog):
        """Test that results are sorted by score then index across calls."""
        first = filter_catalog(catalog, "t")
        second = filter_catalog(catalog, "t")

        assert first == second
        keys = [(-r.score.tier, -r.score.rank, r.index) for r in first]
        assert keys == sorted(keys)

    def test_no_matches(self, catalog):
        """Test that a query matching nothing yields an empty list."""
        assert filter_catalog(catalog, "zzz") == []
