"""
Lyrics lookup coordination

This module holds the two objects the rest of the application talks to:

ProviderChain
    Runs the lookup steps of every provider strictly in order and stops at
    the first one that returns non-empty lyrics. A step that raises is logged
    and treated as "no result"; the chain always moves on and never retries.

    Order for the default providers:
    1. LRCLIB with the parsed artist/title        -> primary:parsed
    2. LRCLIB with the swapped "A - B" reading    -> primary:alt
    3. LRCLIB freeform with the raw query         -> primary:freeform
    4. Genius search, rank, fetch best candidate  -> secondary

LyricsProcessor
    The pipeline boundary used by the web layer and the CLI: parses the
    query, runs the chain, sanitizes the text according to its provenance
    and times the lookup. Any unexpected exception is caught here and turned
    into a LyricsResult carrying a generic error message, so callers never
    see a raw fault.

Logging:
Both objects take the logger to use per call. The web layer passes a
RequestLogAdapter so every line of a lookup carries the request id.
"""

import sys
import time
from typing import List, Optional, Sequence, Tuple

import aiohttp

from ..utils.helpers import generate_request_id, normalize_whitespace
from ..utils.logger import get_logger, get_request_logger
from .base import Logger, LyricsProvider
from .genius import GeniusProvider
from .lrclib import LrclibProvider
from .models import LyricsResult, ParsedQuery, Provenance, ProviderAttempt
from .query import parse_query
from .sanitizer import sanitize_lyrics

# User-facing messages
EMPTY_QUERY_MESSAGE = "Please enter a song name."
GENERIC_ERROR_MESSAGE = "Something went wrong fetching lyrics. Try again."


def not_found_message(query: str) -> str:
    """Message shown when no provider had lyrics for a query"""
    return f'No lyrics found for "{query}".'


def _log_at_boundary(log_method, message: str) -> None:
    """Log from the pipeline boundary; a failing handler must not replace the result"""
    try:
        log_method(message)
    except Exception as e:
        sys.stderr.write(f"Logging failed ({e.__class__.__name__}): {message}\n")


class ProviderChain:
    """
    Sequential fallback over lyrics providers

    Providers are tried in the order given; within a provider its lookup
    steps are tried in the order it plans them.
    """

    def __init__(self, providers: Sequence[LyricsProvider]):
        """
        Initialize provider chain

        Args:
            providers: Providers in priority order
        """
        self.providers = list(providers)

    async def run(
        self,
        raw_query: str,
        parsed: ParsedQuery,
        logger: Logger
    ) -> Tuple[Optional[str], Optional[Provenance], List[ProviderAttempt]]:
        """
        Run lookup steps until one yields lyrics

        Args:
            raw_query: Query as typed
            parsed: ParsedQuery for raw_query
            logger: Logger for this lookup

        Returns:
            (lyrics text, provenance, attempts); text and provenance are None
            when every step came back empty or failed
        """
        attempts: List[ProviderAttempt] = []

        for provider in self.providers:
            try:
                steps = provider.lookup_steps(raw_query, parsed, logger)
            except Exception as e:
                logger.error(f"{provider.name} could not plan lookups: {e}")
                continue

            for step in steps:
                attempt = ProviderAttempt(provenance=step.provenance)
                attempts.append(attempt)
                start_time = time.perf_counter()

                try:
                    text = await step.run()
                    if text is not None and not isinstance(text, str):
                        raise TypeError(f"expected lyrics text, got {type(text).__name__}")
                    has_text = bool(text and text.strip())
                except Exception as e:
                    attempt.error = str(e) or e.__class__.__name__
                    logger.warning(f"{provider.name} error ({step.provenance}): {attempt.error}")
                    has_text = False
                finally:
                    attempt.elapsed = time.perf_counter() - start_time

                if has_text:
                    attempt.found = True
                    logger.info(f"{provider.name} result: found ({len(text)} chars) via {step.provenance}")
                    return text, step.provenance, attempts

                if attempt.error is None:
                    logger.info(f"{provider.name} result: none via {step.provenance} ({step.description})")

        return None, None, attempts


class LyricsProcessor:
    """
    Pipeline boundary: query in, LyricsResult out

    Each call to find_lyrics is independent; the processor holds providers
    (and their HTTP sessions) but no per-request state.
    """

    def __init__(
        self,
        providers: Optional[Sequence[LyricsProvider]] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize lyrics processor

        Args:
            providers: Providers in priority order; defaults to LRCLIB then Genius
            session: Shared aiohttp session handed to the LRCLIB provider
        """
        self.logger = get_logger(__name__)

        if providers is None:
            providers = [LrclibProvider(session=session), GeniusProvider()]

        self.providers = list(providers)
        self.chain = ProviderChain(self.providers)

    async def find_lyrics(self, raw_query: str, logger: Optional[Logger] = None) -> LyricsResult:
        """
        Look up, clean and return lyrics for a query

        Args:
            raw_query: Non-empty search text
            logger: Logger for this lookup; a request-scoped one with a fresh
                    request id is created when omitted

        Returns:
            LyricsResult; text is None when nothing was found, and error is set
            when an unexpected fault was caught
        """
        log = logger or get_request_logger(__name__, generate_request_id())
        query = (raw_query or '').strip()
        start_time = time.perf_counter()

        try:
            parsed = parse_query(query)
            log.info(f"parsed query: {parsed.to_dict()}")

            text, provenance, attempts = await self.chain.run(query, parsed, log)

            result = LyricsResult(query=query, attempts=attempts)
            if text is not None:
                cleaned = sanitize_lyrics(text, provenance)
                if cleaned and cleaned.strip():
                    result.text = cleaned
                    result.provenance = provenance
                else:
                    log.warning(f"lyrics via {provenance} were empty after cleanup")

        except Exception as e:
            result = LyricsResult(query=query, error=GENERIC_ERROR_MESSAGE)
            _log_at_boundary(log.exception, f"unhandled error: {e}")

        result.elapsed = time.perf_counter() - start_time
        _log_at_boundary(log.info, f"total lookup time: {result.elapsed * 1000:.0f}ms")
        return result

    async def close(self) -> None:
        """Release provider resources"""
        for provider in self.providers:
            await provider.close()

    async def __aenter__(self) -> 'LyricsProcessor':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def is_blank_query(raw_query: Optional[str]) -> bool:
    """True when a query has nothing to search for"""
    return not normalize_whitespace(raw_query or '')
