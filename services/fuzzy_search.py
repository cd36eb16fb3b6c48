"""Fuzzy matching of track titles against a search query.

Matching is a case-insensitive ordered subsequence test. Passing candidates
are ranked in three tiers: exact match, contiguous substring (earlier
occurrences first), then scattered subsequence (smaller total gap between
matched characters first). Ties fall back to catalog order.
"""

from __future__ import annotations

from collections.abc import Sequence

from models.search import MatchTier, Score, SearchResult
from models.track import Track


def _tightest_gap(query: str, candidate: str) -> int | None:
    """Smallest number of skipped characters over all ordered matchings.

    For a fixed first position, greedy forward matching finds the earliest
    possible end, so the minimum over all starts gives the tightest window.
    """
    best = None
    first = query[0]
    for start, char in enumerate(candidate):
        if char != first:
            continue
        position = start
        for query_char in query[1:]:
            position = candidate.find(query_char, position + 1)
            if position == -1:
                # Later starts cannot succeed either.
                return best
        gap = (position - start) - (len(query) - 1)
        if best is None or gap < best:
            best = gap
            if best == 0:
                break
    return best


def score(query: str, candidate: str) -> Score | None:
    """Score candidate against query, or None when it does not match."""
    if not query:
        return None

    query = query.lower()
    candidate = candidate.lower()

    if query == candidate:
        return Score(MatchTier.EXACT)

    position = candidate.find(query)
    if position != -1:
        return Score(MatchTier.SUBSTRING, -position)

    gap = _tightest_gap(query, candidate)
    if gap is None:
        return None
    return Score(MatchTier.FUZZY, -gap)


def filter_catalog(tracks: Sequence[Track], query: str) -> list[SearchResult] | None:
    """Rank every matching track title against query.

    Returns:
        Results sorted by descending score then ascending catalog index, or
        None when the query is empty and no filtering applies.
    """
    if not query:
        return None

    results = []
    for track in tracks:
        track_score = score(query, track.title)
        if track_score is not None:
            results.append(SearchResult(track.index, track_score))

    results.sort(key=lambda result: (-result.score.tier, -result.score.rank, result.index))
    return results
