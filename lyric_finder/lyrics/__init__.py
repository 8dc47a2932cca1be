"""
Lyrics lookup package: query parsing, provider fallback, ranking and cleanup

Key components:
- parse_query: freeform text -> ParsedQuery (artist/title readings)
- LrclibProvider: primary provider, direct artist/title lookups
- GeniusProvider: secondary provider, search + fetch
- ProviderChain: tries provider lookup steps in order, first hit wins
- choose_candidate: ranks search results against the parsed query
- sanitize_lyrics: strips provider noise from lyrics text
- LyricsProcessor: the boundary used by the web app and CLI

Usage:
    async with LyricsProcessor() as processor:
        result = await processor.find_lyrics("Hey Jude - The Beatles")
        if result.found:
            print(result.text)
"""

from .models import (
    Provenance,
    Interpretation,
    ParsedQuery,
    SearchCandidate,
    ProviderAttempt,
    LyricsResult
)
from .query import parse_query
from .ranking import score_candidate, rank_candidates, choose_candidate
from .sanitizer import sanitize_lyrics
from .base import LookupStep, LyricsProvider, DirectLyricsProvider, SearchLyricsProvider
from .lrclib import LrclibProvider
from .genius import GeniusProvider
from .processor import (
    ProviderChain,
    LyricsProcessor,
    EMPTY_QUERY_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    not_found_message,
    is_blank_query
)

__all__ = [
    # Data model
    'Provenance',
    'Interpretation',
    'ParsedQuery',
    'SearchCandidate',
    'ProviderAttempt',
    'LyricsResult',

    # Pipeline stages
    'parse_query',
    'score_candidate',
    'rank_candidates',
    'choose_candidate',
    'sanitize_lyrics',

    # Providers
    'LookupStep',
    'LyricsProvider',
    'DirectLyricsProvider',
    'SearchLyricsProvider',
    'LrclibProvider',
    'GeniusProvider',

    # Coordination
    'ProviderChain',
    'LyricsProcessor',
    'EMPTY_QUERY_MESSAGE',
    'GENERIC_ERROR_MESSAGE',
    'not_found_message',
    'is_blank_query',
]
