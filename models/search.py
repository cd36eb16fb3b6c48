from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple


class MatchTier(IntEnum):
    """Match quality tiers, higher is better."""
    FUZZY = 1
    SUBSTRING = 2
    EXACT = 3


class Score(NamedTuple):
    """Comparable match score.

    Tuples compare tier first, then rank. Rank is the negated occurrence
    position for substring matches and the negated gap for fuzzy matches,
    so a larger value is always a better match.
    """
    tier: MatchTier
    rank: int = 0


class SearchResult(NamedTuple):
    """A catalog index paired with the score its title earned."""
    index: int
    score: Score


@dataclass
class SearchState:
    """Live search session.

    Attributes:
        query: Raw query text as typed.
        results: Ranked matches, or None while the query is empty.
        cursor: Selected position within the active view.
        return_index: Catalog selection to restore when the search is cancelled.
    """
    query: str = ""
    results: list[SearchResult] | None = None
    cursor: int = 0
    return_index: int = 0

    @property
    def is_filtering(self) -> bool:
        return self.results is not None

    def result_indices(self) -> list[int]:
        return [result.index for result in self.results or []]


@dataclass(frozen=True)
class SearchSnapshot:
    """Read-only view of the search state for rendering."""
    query: str
    match_count: int | None
