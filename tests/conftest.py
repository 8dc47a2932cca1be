"""Test configuration and fixtures"""

import logging
import logging.handlers

import pytest

from lyric_finder.config import settings as settings_module
from lyric_finder.lyrics.base import DirectLyricsProvider, SearchLyricsProvider
from lyric_finder.lyrics.models import SearchCandidate
from lyric_finder.utils.logger import shutdown_logging

CONFIG_ENV_VARS = ['HOST', 'PORT', 'GENIUS_API_KEY', 'LRCLIB_BASE_URL', 'LOG_LEVEL', 'LOG_FILE']


class FakeDirectProvider(DirectLyricsProvider):
    """Direct provider answering from a {(artist, title): lyrics} table"""

    name = "fake-primary"

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []
        self.closed = False

    async def lookup(self, artist, title):
        self.calls.append((artist, title))
        if self.error:
            raise self.error
        return self.responses.get((artist, title))

    async def close(self):
        self.closed = True


class FakeSearchProvider(SearchLyricsProvider):
    """Search provider answering from a candidate list and a {id: lyrics} table"""

    name = "fake-secondary"

    def __init__(self, candidates=None, lyrics=None, error=None):
        self.candidates = candidates or []
        self.lyrics = lyrics or {}
        self.error = error
        self.searches = []
        self.fetches = []

    async def search(self, query):
        self.searches.append(query)
        if self.error:
            raise self.error
        return list(self.candidates)

    async def fetch_lyrics(self, song_id):
        self.fetches.append(song_id)
        return self.lyrics.get(song_id)


@pytest.fixture
def fake_primary():
    """Factory for fake direct providers"""
    return FakeDirectProvider


@pytest.fixture
def fake_secondary():
    """Factory for fake search providers"""
    return FakeSearchProvider


@pytest.fixture
def amazing_grace_candidates():
    """Search results where the right song is not the first hit"""
    return [
        SearchCandidate(title="Something Else", artist_name="John Newton", id=1),
        SearchCandidate(title="Amazing Grace", artist_name="John Newton", id=2),
        SearchCandidate(title="Amazing Grace (Live)", artist_name="Choir", id=3),
    ]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment and config files"""
    for env_var in CONFIG_ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings_module, '_settings', None)
    return tmp_path


@pytest.fixture
def reset_logging():
    """Restore the root logger after tests that configure logging"""
    root_logger = logging.getLogger()
    saved_level = root_logger.level
    saved_handlers = root_logger.handlers[:]

    yield root_logger

    shutdown_logging()
    for handler in root_logger.handlers[:]:
        if handler not in saved_handlers:
            root_logger.removeHandler(handler)
    for handler in saved_handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)
