"""
Lyrics provider interface

Every provider turns a query into an ordered list of LookupSteps. The provider
chain runs the steps of all providers in order and stops at the first step
that returns lyrics, so the chain never needs to know how a provider is
called.

Two provider styles exist:

- DirectLyricsProvider: answers lookup(artist, title) with lyrics text
  directly. It contributes up to three steps: the parsed artist/title, the
  swapped alternate reading, and a freeform lookup with the raw query.
- SearchLyricsProvider: answers search(query) with candidate songs and
  fetch_lyrics(id) with the lyrics of one song. It contributes a single step
  that searches, ranks the results and fetches the best candidate.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Any, Awaitable, Callable, List, Optional, Union

from .models import ParsedQuery, Provenance, SearchCandidate
from .ranking import choose_candidate

Logger = Union[logging.Logger, logging.LoggerAdapter]


@dataclass
class LookupStep:
    """
    One attempt of the provider chain

    Attributes:
        provenance: Tag recorded when this step produces lyrics
        description: Short text for logs ("Queen - Bohemian Rhapsody")
        run: Coroutine factory returning lyrics text or None
    """
    provenance: Provenance
    description: str
    run: Callable[[], Awaitable[Optional[str]]]


class LyricsProvider(ABC):
    """Base class for lyrics providers"""

    # Short identifier used in logs and errors
    name: str = "provider"

    @abstractmethod
    def lookup_steps(self, raw_query: str, parsed: ParsedQuery, logger: Logger) -> List[LookupStep]:
        """
        Plan the lookups this provider makes for a query

        Args:
            raw_query: Query as typed by the user
            parsed: Parsed interpretation of the query
            logger: Request-scoped logger

        Returns:
            Steps in the order they should be tried
        """

    async def close(self) -> None:
        """Release network resources held by the provider"""


class DirectLyricsProvider(LyricsProvider):
    """Provider that maps (artist, title) straight to lyrics text"""

    @abstractmethod
    async def lookup(self, artist: Optional[str], title: str) -> Optional[str]:
        """
        Look up lyrics for a song

        Args:
            artist: Artist name, or None for a freeform lookup
            title: Song title, or the whole query in freeform mode

        Returns:
            Lyrics text or None when the provider has none

        Raises:
            ProviderError: If the provider call fails
        """

    def lookup_steps(self, raw_query: str, parsed: ParsedQuery, logger: Logger) -> List[LookupStep]:
        steps = []

        if parsed.artist:
            steps.append(LookupStep(
                provenance=Provenance.PRIMARY_PARSED,
                description=f"{parsed.artist} - {parsed.title}",
                run=partial(self.lookup, parsed.artist, parsed.title)
            ))

        if parsed.alternate:
            steps.append(LookupStep(
                provenance=Provenance.PRIMARY_ALT,
                description=f"{parsed.alternate.artist} - {parsed.alternate.title}",
                run=partial(self.lookup, parsed.alternate.artist, parsed.alternate.title)
            ))

        # Freeform lookup always runs last, with the query exactly as typed
        steps.append(LookupStep(
            provenance=Provenance.PRIMARY_FREEFORM,
            description=raw_query,
            run=partial(self.lookup, None, raw_query)
        ))

        return steps


class SearchLyricsProvider(LyricsProvider):
    """Provider that searches for candidate songs and fetches one of them"""

    # How many top search results are written to the log
    log_candidates: int = 5

    @abstractmethod
    async def search(self, query: str) -> List[SearchCandidate]:
        """
        Search for candidate songs

        Args:
            query: Search text

        Returns:
            Candidates in provider order (possibly empty)

        Raises:
            ProviderError: If the search call fails
        """

    @abstractmethod
    async def fetch_lyrics(self, song_id: Any) -> Optional[str]:
        """
        Fetch the lyrics of one song

        Args:
            song_id: Provider identifier from a SearchCandidate

        Returns:
            Lyrics text or None

        Raises:
            ProviderError: If the fetch call fails
        """

    async def find_best(self, raw_query: str, parsed: ParsedQuery, logger: Logger) -> Optional[str]:
        """
        Search, rank and fetch the best candidate's lyrics

        Args:
            raw_query: Query as typed, also used as the search text
            parsed: Parsed interpretation used for ranking
            logger: Request-scoped logger

        Returns:
            Lyrics text of the chosen candidate, or None
        """
        candidates = await self.search(raw_query)
        logger.info(f"{self.name} search results: {len(candidates)}")

        for index, candidate in enumerate(candidates[:self.log_candidates]):
            logger.info(f"  [{index}] {candidate.title} - {candidate.artist_name or 'Unknown'} ({candidate.id})")

        chosen = choose_candidate(candidates, parsed, raw_query)
        if chosen is None:
            return None

        logger.info(f"{self.name} chosen: {chosen.title} - {chosen.artist_name} (score {chosen.score})")
        return await self.fetch_lyrics(chosen.id)

    def lookup_steps(self, raw_query: str, parsed: ParsedQuery, logger: Logger) -> List[LookupStep]:
        return [LookupStep(
            provenance=Provenance.SECONDARY,
            description=raw_query,
            run=partial(self.find_best, raw_query, parsed, logger)
        )]
