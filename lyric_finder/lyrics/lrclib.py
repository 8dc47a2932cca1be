"""
LRCLIB integration - primary lyrics provider

LRCLIB (https://lrclib.net) is a free lyrics database that needs no API key.
It answers direct artist/title lookups with the lyrics body, which makes it
the first provider tried for every query.

Endpoints used:
- GET /get?artist_name=...&track_name=...  exact lookup, 404 when unknown
- GET /search?q=...                        freeform search, list of records

Records carry 'plainLyrics' and/or 'syncedLyrics' (LRC). Plain text is
preferred; synced lyrics are stripped of their timestamps when that is all
the record has. Instrumental records count as "no lyrics".

Errors:
Transport failures, timeouts, unexpected HTTP statuses and undecodable bodies
raise ProviderError. A 404 is a normal "not found" and returns None.
"""

import asyncio
import re
from typing import Any, Dict, Optional

import aiohttp

from ..config.settings import get_settings
from ..exceptions import ProviderError
from ..utils.logger import get_logger, log_performance
from .base import DirectLyricsProvider

# "[mm:ss.xx]" timestamps at the start of LRC lines
LRC_TIMESTAMP = re.compile(r'^(?:\[\d{1,2}:\d{2}(?:[.:]\d{1,3})?\])+\s?')


def strip_lrc_timestamps(synced: str) -> str:
    """
    Convert LRC synced lyrics into plain text

    Args:
        synced: LRC formatted lyrics

    Returns:
        The same lines without their leading timestamps
    """
    return '\n'.join(LRC_TIMESTAMP.sub('', line) for line in synced.splitlines())


class LrclibProvider(DirectLyricsProvider):
    """
    LRCLIB lyrics provider

    Uses an aiohttp session, either injected (shared by the web application
    for connection pooling) or created lazily and owned by the provider.
    """

    name = "lrclib"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize LRCLIB provider

        Args:
            base_url: API root, defaults to settings.lyrics.lrclib_base_url
            timeout: Total request timeout in seconds
            user_agent: User-Agent header sent with each request
            session: Shared aiohttp session; when None the provider opens
                     (and later closes) its own
        """
        settings = get_settings()
        self.logger = get_logger(__name__)

        self.base_url = (base_url or settings.lyrics.lrclib_base_url).rstrip('/')
        self.timeout = timeout or settings.lyrics.timeout
        self.user_agent = user_agent or settings.lyrics.user_agent

        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get the HTTP session, creating an owned one on first use"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={'User-Agent': self.user_agent}
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this provider created it"""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    @log_performance
    async def _request_json(self, path: str, params: Dict[str, str]) -> Any:
        """
        GET an API endpoint and decode its JSON body

        Args:
            path: Endpoint path relative to the API root
            params: Query string parameters

        Returns:
            Decoded JSON, or None for a 404

        Raises:
            ProviderError: On transport errors, timeouts, bad statuses or bodies
        """
        url = f"{self.base_url}/{path}"
        details = {'url': url, 'params': params}

        try:
            session = await self._get_session()
            async with session.get(url, params=params) as response:
                details['status'] = response.status

                if response.status == 404:
                    return None

                if response.status == 429:
                    raise ProviderError(
                        "LRCLIB rate limit reached",
                        provider=self.name, details=details, is_rate_limit=True
                    )

                if response.status != 200:
                    raise ProviderError(
                        f"LRCLIB returned HTTP {response.status}",
                        provider=self.name, details=details
                    )

                return await response.json(content_type=None)

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            details['original_error'] = repr(e)
            raise ProviderError(f"LRCLIB request failed: {e}", provider=self.name, details=details) from e

    @staticmethod
    def extract_lyrics(record: Any) -> Optional[str]:
        """
        Get usable lyrics text from an LRCLIB record

        Args:
            record: Decoded LRCLIB track record

        Returns:
            Plain lyrics, de-timestamped synced lyrics, or None
        """
        if not isinstance(record, dict) or record.get('instrumental'):
            return None

        plain = record.get('plainLyrics')
        if plain and plain.strip():
            return plain

        synced = record.get('syncedLyrics')
        if synced and synced.strip():
            text = strip_lrc_timestamps(synced)
            return text if text.strip() else None

        return None

    async def lookup(self, artist: Optional[str], title: str) -> Optional[str]:
        """
        Look up lyrics by artist and title, or freeform by title only

        Args:
            artist: Artist name, None for a freeform lookup
            title: Song title, or the whole query in freeform mode

        Returns:
            Lyrics text or None
        """
        if artist:
            self.logger.debug(f"LRCLIB lookup: {artist} - {title}")
            record = await self._request_json('get', {'artist_name': artist, 'track_name': title})
            return self.extract_lyrics(record)

        self.logger.debug(f"LRCLIB search: {title}")
        records = await self._request_json('search', {'q': title})
        if records is None:
            return None
        if not isinstance(records, list):
            raise ProviderError(
                "LRCLIB search returned an unexpected payload",
                provider=self.name, details={'query': title}
            )

        for record in records:
            lyrics = self.extract_lyrics(record)
            if lyrics:
                return lyrics
        return None
