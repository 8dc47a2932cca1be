"""
Freeform query parsing

Turns what a user typed into the search box into artist/title candidates.
Recognised shapes, checked in order:

    "<title> by <artist>"    -> title, artist
    "<artist> - <title>"     -> artist/title, plus the swapped reading
    anything else            -> the whole query is the title

Song titles and artist names cannot be told apart from the string alone, so a
single " - " produces both orderings and the provider chain tries the
conventional "artist - title" reading first.

Parsing never fails: the worst case is a freeform, title-only query.
"""

import re

from ..utils.helpers import normalize_whitespace
from .models import Interpretation, ParsedQuery

# Lazy on the left side: the first " by " splits the query
BY_PATTERN = re.compile(r'^(.+?)\s+by\s+(.+)$', re.IGNORECASE)

DASH_SEPARATOR = ' - '


def parse_query(query: str) -> ParsedQuery:
    """
    Parse a freeform song query

    Args:
        query: Raw search text (trimmed and non-empty in normal use)

    Returns:
        ParsedQuery holding the primary interpretation and, for "A - B"
        queries, the swapped alternate
    """
    normalized = normalize_whitespace(query)

    by_match = BY_PATTERN.match(normalized)
    if by_match:
        return ParsedQuery(
            title=by_match.group(1).strip(),
            artist=by_match.group(2).strip()
        )

    parts = normalized.split(DASH_SEPARATOR)
    if len(parts) == 2:
        first, second = parts[0].strip(), parts[1].strip()
        return ParsedQuery(
            title=second,
            artist=first,
            alternate=Interpretation(title=first, artist=second)
        )

    return ParsedQuery(title=normalized)
