"""
Genius API integration - secondary, search-based lyrics provider

Genius is tried after every LRCLIB lookup mode came back empty. Unlike LRCLIB
it cannot answer "lyrics for artist X, title Y" directly: the raw query is
searched, the hits are ranked against the parsed query (see ranking.py), and
the lyrics page of the best hit is fetched.

Lyrics scraped from Genius pages carry a lot of page furniture (contributor
banners, "You might also like" teasers, "Embed" footers); the sanitizer
removes it, with an extra [Verse 1] cut for this provider.

The lyricsgenius client is synchronous (requests based), so every call runs
in a worker thread to keep the event loop free.

Requirements:
- GENIUS_API_KEY must be configured; without it every call raises
  ProviderError and the chain reports "not found".
"""

import asyncio
from typing import Any, List, Optional

import lyricsgenius

from ..config.settings import get_settings
from ..exceptions import ProviderError
from ..utils.logger import get_logger, log_performance
from .base import SearchLyricsProvider
from .models import SearchCandidate


class GeniusProvider(SearchLyricsProvider):
    """
    Genius lyrics provider

    Search hits are mapped to SearchCandidate objects (title, primary artist
    name, song id); lyrics are fetched with the song id.

    Configuration:
    API key, request timeout, page size and the number of logged candidates
    come from the lyrics section of the application settings.
    """

    name = "genius"

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: Optional[int] = None,
        per_page: Optional[int] = None
    ):
        """
        Initialize Genius lyrics provider

        Args:
            api_key: Genius API access token, defaults to settings
            timeout: Request timeout in seconds, defaults to settings
            per_page: Search results requested per query, defaults to settings
        """
        settings = get_settings()
        self.logger = get_logger(__name__)

        self.api_key = api_key if api_key is not None else settings.lyrics.genius_api_key
        self.timeout = timeout or settings.lyrics.timeout
        self.per_page = per_page or settings.lyrics.genius_per_page
        self.log_candidates = settings.lyrics.log_candidates

        # Lazy-initialized Genius client (created when first needed)
        self._genius_client: Optional[lyricsgenius.Genius] = None

    @property
    def genius_client(self) -> lyricsgenius.Genius:
        """
        Get authenticated Genius API client with lazy initialization

        Returns:
            Configured lyricsgenius.Genius client instance

        Raises:
            ProviderError: If the API key is not configured or client
                           initialization fails
        """
        if not self._genius_client:
            if not self.api_key:
                raise ProviderError("Genius API key not configured", provider=self.name)

            try:
                self._genius_client = lyricsgenius.Genius(
                    access_token=self.api_key,
                    timeout=self.timeout,
                    retries=0,                    # The chain never retries a step
                    remove_section_headers=False, # Section headers locate the first verse
                    skip_non_songs=True,
                    verbose=False
                )
                self.logger.info("Genius API client initialized successfully")

            except Exception as e:
                raise ProviderError(
                    f"Genius API initialization failed: {e}",
                    provider=self.name,
                    details={'original_error': repr(e)}
                ) from e

        return self._genius_client

    @log_performance
    async def search(self, query: str) -> List[SearchCandidate]:
        """
        Search Genius for songs matching the query

        Args:
            query: Search text

        Returns:
            Candidates in Genius result order

        Raises:
            ProviderError: If the search request fails
        """
        client = self.genius_client

        try:
            response = await asyncio.to_thread(client.search_songs, query, per_page=self.per_page)
        except Exception as e:
            raise ProviderError(
                f"Genius search failed: {e}",
                provider=self.name,
                details={'query': query, 'original_error': repr(e)}
            ) from e

        candidates = []
        for hit in (response or {}).get('hits', []):
            result = hit.get('result') or {}
            if result.get('id') is None:
                continue
            candidates.append(SearchCandidate.from_genius_hit(result))

        return candidates

    async def fetch_lyrics(self, song_id: Any) -> Optional[str]:
        """
        Fetch the lyrics page of a Genius song

        Args:
            song_id: Genius song id

        Returns:
            Raw lyrics text, or None when the page has none

        Raises:
            ProviderError: If the lyrics request fails
        """
        client = self.genius_client

        try:
            lyrics = await asyncio.to_thread(client.lyrics, song_id=song_id)
        except Exception as e:
            raise ProviderError(
                f"Genius lyrics fetch failed: {e}",
                provider=self.name,
                details={'song_id': song_id, 'original_error': repr(e)}
            ) from e

        if lyrics:
            self.logger.debug(f"Genius lyrics found for song {song_id} ({len(lyrics)} chars)")
            return lyrics
        return None
