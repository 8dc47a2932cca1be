"""
Lyric-Finder: song lyrics from a freeform query

A small web application (and CLI) that interprets queries such as
"Hey Jude by The Beatles" or "The Beatles - Hey Jude", looks the song up on
LRCLIB, falls back to a ranked Genius search, and returns cleaned lyrics.

Packages:
- lyric_finder.lyrics: query parsing, providers, ranking, sanitizing
- lyric_finder.web: aiohttp application and templates
- lyric_finder.config: YAML/environment settings
- lyric_finder.utils: logging and helpers
"""

__version__ = "1.0.0"

__author__ = "Lyric-Finder Team"

__description__ = "Find song lyrics from a freeform query, with provider fallback and cleanup"

__all__ = [
    "__version__",
    "__author__",
    "__description__"
]
