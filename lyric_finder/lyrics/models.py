"""
Data models for the lyrics lookup pipeline

All objects here are created fresh for each inbound query and discarded when
the request completes: nothing is cached or shared between requests.

Models:
- Provenance: which provider and query mode produced a lyrics text
- Interpretation / ParsedQuery: structured reading of a freeform query
- SearchCandidate: one ranked result from the search-based provider
- ProviderAttempt: record of a single step of the provider chain
- LyricsResult: final output handed back to the web layer or the CLI
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Provenance(str, Enum):
    """
    Enumeration of lyrics provenance tags

    Records which provider, and which query interpretation, produced a lyrics
    text. The sanitizer uses it to apply provider-specific cleanup and the web
    page shows its label next to the lyrics.

    Values compare equal to their plain string tag, e.g.
    Provenance.PRIMARY_ALT == "primary:alt".

    Values:
        PRIMARY_PARSED: primary provider, artist/title as parsed
        PRIMARY_ALT: primary provider, swapped "title - artist" reading
        PRIMARY_FREEFORM: primary provider, whole query as the title
        SECONDARY: search-based provider, best ranked candidate
    """
    PRIMARY_PARSED = "primary:parsed"
    PRIMARY_ALT = "primary:alt"
    PRIMARY_FREEFORM = "primary:freeform"
    SECONDARY = "secondary"

    @property
    def label(self) -> str:
        """Human readable provider description for display"""
        return _PROVENANCE_LABELS[self]

    @property
    def is_secondary(self) -> bool:
        return self is Provenance.SECONDARY

    def __str__(self) -> str:
        return self.value


_PROVENANCE_LABELS = {
    Provenance.PRIMARY_PARSED: "LRCLIB (artist/title)",
    Provenance.PRIMARY_ALT: "LRCLIB (title/artist)",
    Provenance.PRIMARY_FREEFORM: "LRCLIB (freeform)",
    Provenance.SECONDARY: "Genius",
}


@dataclass(frozen=True)
class Interpretation:
    """
    One (title, artist) reading of a query

    Attributes:
        title: Song title
        artist: Artist name
    """
    title: str
    artist: str


@dataclass(frozen=True)
class ParsedQuery:
    """
    Structured reading of a freeform search query

    Produced once per query by the query parser and never modified.

    Invariants:
    - Freeform mode (no separator recognised): artist and alternate are None
      and title holds the whole normalized query.
    - alternate is only set for "A - B" queries, holding the swapped reading.

    Attributes:
        title: Primary title interpretation
        artist: Primary artist interpretation (None in freeform mode)
        alternate: Swapped interpretation for ambiguous "A - B" queries
    """
    title: str
    artist: Optional[str] = None
    alternate: Optional[Interpretation] = None

    @property
    def is_freeform(self) -> bool:
        """True when no separator was recognised in the query"""
        return self.artist is None and self.alternate is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'artist': self.artist,
            'alternate': (
                {'title': self.alternate.title, 'artist': self.alternate.artist}
                if self.alternate else None
            ),
        }


@dataclass
class SearchCandidate:
    """
    Search result from the search-based provider

    Transient: produced while ranking a search response and discarded once the
    best candidate has been fetched.

    Attributes:
        title: Song title as returned by the provider
        artist_name: Primary artist name ('' when the provider has none)
        id: Provider identifier used to fetch the lyrics body
        score: Ranking score assigned by the result ranker
    """
    title: str
    artist_name: str
    id: Any
    score: int = 0

    @classmethod
    def from_genius_hit(cls, result: Dict[str, Any]) -> 'SearchCandidate':
        """
        Create SearchCandidate from a Genius search hit

        Args:
            result: The 'result' object of a Genius search hit

        Returns:
            SearchCandidate with missing fields defaulted to ''
        """
        primary_artist = result.get('primary_artist') or {}
        return cls(
            title=result.get('title') or '',
            artist_name=primary_artist.get('name') or '',
            id=result.get('id'),
        )


@dataclass
class ProviderAttempt:
    """
    Record of a single provider chain step

    Attributes:
        provenance: Which provider/mode was tried
        found: Whether the step produced non-empty lyrics
        error: Error message when the step raised, else None
        elapsed: Seconds spent in the step
    """
    provenance: Provenance
    found: bool = False
    error: Optional[str] = None
    elapsed: float = 0.0


@dataclass
class LyricsResult:
    """
    Final result of a lyrics lookup

    text is None when no provider produced lyrics. error is set only when an
    unexpected fault was caught at the pipeline boundary; it then holds the
    generic message shown to the user.

    Attributes:
        text: Sanitized lyrics text, or None when not found
        provenance: Provenance of the text, or None when not found
        query: Raw query the lookup was made for
        error: User-facing error message, or None
        attempts: Provider chain steps that were executed, in order
        elapsed: Total lookup time in seconds
    """
    text: Optional[str] = None
    provenance: Optional[Provenance] = None
    query: str = ""
    error: Optional[str] = None
    attempts: List[ProviderAttempt] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def found(self) -> bool:
        return self.text is not None

    @property
    def provider_label(self) -> Optional[str]:
        return self.provenance.label if self.provenance else None
