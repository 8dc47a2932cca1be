"""
Exception classes for Lyric-Finder.

This module defines the custom exceptions used throughout the application.
Each exception carries a human-readable message plus an optional details
dictionary for logging, so callers can distinguish between failure modes
without parsing error strings.

Exception Hierarchy:
    LyricFinderError (base)
        ConfigError - Configuration file or value issues
        ProviderError - A lyrics provider lookup, search or fetch failed

A lyrics lookup that simply finds nothing is NOT an exception: it is a normal
outcome reported as a LyricsResult without text.
"""

from typing import Optional


class LyricFinderError(Exception):
    """
    Base exception for all Lyric-Finder errors.

    All custom exceptions in this project inherit from this class, allowing
    callers to catch every Lyric-Finder error with a single except clause.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (query, URL, status).

    Example:
        try:
            settings.require_valid()
        except LyricFinderError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional context about the
                     error. Common keys include:
                     - 'query': the search text involved in the error
                     - 'url': URL that caused the error
                     - 'status': HTTP status code returned by a provider
                     - 'original_error': the underlying exception message
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(LyricFinderError):
    """
    Raised when there's an issue with the configuration.

    This is a CRITICAL error for the CLI: commands stop and report it.

    Common causes:
        - config.yaml has invalid YAML syntax
        - Invalid field values (port out of range, unknown log level)

    Example:
        raise ConfigError(
            "Invalid configuration",
            details={'errors': ["server.port must be between 1 and 65535"]}
        )
    """
    pass


class ProviderError(LyricFinderError):
    """
    Raised when a call to a lyrics provider fails.

    This is a NON-CRITICAL error: the provider chain logs it, treats the
    step as "no result" and moves on to the next step.

    Common causes:
        - Network connectivity issues or timeouts
        - Unexpected HTTP status codes
        - Malformed responses that cannot be parsed
        - Missing API credentials
        - Rate limiting by the remote service

    Attributes:
        provider: Short identifier of the failing provider ('lrclib', 'genius').
        is_rate_limit: True if the provider rejected the call for rate limiting.

    Example:
        raise ProviderError(
            "LRCLIB returned HTTP 500",
            provider='lrclib',
            details={'url': url, 'status': 500}
        )
    """

    def __init__(
        self,
        message: str,
        provider: str = "",
        details: Optional[dict] = None,
        is_rate_limit: bool = False
    ) -> None:
        """
        Initialize provider error with provider identification.

        Args:
            message: Human-readable error description.
            provider: Identifier of the provider that failed.
            details: Optional dictionary with additional context.
            is_rate_limit: Set to True if this is a rate limit error.
        """
        super().__init__(message, details)
        self.provider = provider
        self.is_rate_limit = is_rate_limit
