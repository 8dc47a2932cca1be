"""
Ranking of search results from the search-based lyrics provider

Scoring per candidate:
- Title term: 2 points when the candidate title contains the parsed title
  (or the raw query when nothing was parsed), case-insensitive.
- Artist term: 1 point when both artist names are known and the candidate
  artist contains the parsed artist, case-insensitive.

The artist term is added independently of the title term, so a candidate can
score 0, 1, 2 or 3. Ties keep the provider's search order.

This differs from the conditional `title ? 2 : 0 + artist` form, where the
artist point only counts when the title misses: a full match and a title-only
match both score 2 there, and search order decides between them. Adding the
terms lets the artist break that tie.
"""

from typing import List, Optional, Sequence

from .models import ParsedQuery, SearchCandidate

TITLE_MATCH_POINTS = 2
ARTIST_MATCH_POINTS = 1


def score_candidate(candidate: SearchCandidate, parsed: ParsedQuery, raw_query: str) -> int:
    """
    Calculate the ranking score of one candidate

    Args:
        candidate: Search result to score
        parsed: Parsed interpretation of the query
        raw_query: Query as typed, used when there is no parsed title

    Returns:
        Score between 0 and 3
    """
    needle = (parsed.title or raw_query).lower()
    title_points = TITLE_MATCH_POINTS if needle in (candidate.title or '').lower() else 0

    artist_points = 0
    if candidate.artist_name and parsed.artist:
        if parsed.artist.lower() in candidate.artist_name.lower():
            artist_points = ARTIST_MATCH_POINTS

    return title_points + artist_points


def rank_candidates(
    candidates: Sequence[SearchCandidate],
    parsed: ParsedQuery,
    raw_query: str
) -> List[SearchCandidate]:
    """
    Score and order candidates, best first

    Scores are written onto the candidates. sorted() is stable, so candidates
    with equal scores stay in search order.

    Args:
        candidates: Search results in provider order
        parsed: Parsed interpretation of the query
        raw_query: Query as typed

    Returns:
        New list sorted by descending score
    """
    for candidate in candidates:
        candidate.score = score_candidate(candidate, parsed, raw_query)
    return sorted(candidates, key=lambda c: c.score, reverse=True)


def choose_candidate(
    candidates: Sequence[SearchCandidate],
    parsed: ParsedQuery,
    raw_query: str
) -> Optional[SearchCandidate]:
    """
    Pick the best candidate

    Args:
        candidates: Search results in provider order
        parsed: Parsed interpretation of the query
        raw_query: Query as typed

    Returns:
        Top-scoring candidate (the first result when every score ties), or
        None only for an empty result list
    """
    if not candidates:
        return None
    return rank_candidates(candidates, parsed, raw_query)[0]
