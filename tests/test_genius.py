"""Test the Genius provider with a mocked lyricsgenius client"""

import logging
from unittest.mock import Mock, patch

import pytest

from lyric_finder.exceptions import ProviderError
from lyric_finder.lyrics.genius import GeniusProvider
from lyric_finder.lyrics.models import Provenance
from lyric_finder.lyrics.query import parse_query

SEARCH_RESPONSE = {
    'hits': [
        {'result': {'id': 11, 'title': "Something Else", 'primary_artist': {'name': "John Newton"}}},
        {'result': {'title': "Hit without id", 'primary_artist': {'name': "John Newton"}}},
        {'result': {'id': 22, 'title': "Amazing Grace", 'primary_artist': {'name': "John Newton"}}},
        {'result': {'id': 33, 'title': "Amazing Grace", 'primary_artist': None}},
    ]
}


@pytest.fixture
def genius_client():
    """Mocked lyricsgenius.Genius instance"""
    client = Mock()
    client.search_songs.return_value = SEARCH_RESPONSE
    client.lyrics.return_value = "1 ContributorAmazing Grace Lyrics[Verse 1]\nAmazing grace\n3Embed"
    with patch('lyric_finder.lyrics.genius.lyricsgenius.Genius', return_value=client) as genius_class:
        client.genius_class = genius_class
        yield client


class TestGeniusSearch:
    """Test search result mapping"""

    @pytest.mark.asyncio
    async def test_search_maps_hits(self, genius_client):
        """Test hits become candidates and hits without id are skipped"""
        provider = GeniusProvider(api_key="token", timeout=5, per_page=10)

        candidates = await provider.search("Amazing Grace by John Newton")

        assert [c.id for c in candidates] == [11, 22, 33]
        assert candidates[1].title == "Amazing Grace"
        assert candidates[1].artist_name == "John Newton"
        assert candidates[2].artist_name == ""
        genius_client.search_songs.assert_called_once_with("Amazing Grace by John Newton", per_page=10)

    @pytest.mark.asyncio
    async def test_client_configuration(self, genius_client):
        """Test the client keeps section headers and never retries"""
        provider = GeniusProvider(api_key="token", timeout=5, per_page=10)
        await provider.search("anything")

        kwargs = genius_client.genius_class.call_args.kwargs
        assert kwargs['access_token'] == "token"
        assert kwargs['remove_section_headers'] is False
        assert kwargs['retries'] == 0

    @pytest.mark.asyncio
    async def test_empty_response(self, genius_client):
        """Test an empty response gives no candidates"""
        genius_client.search_songs.return_value = None
        provider = GeniusProvider(api_key="token")

        assert await provider.search("nothing") == []

    @pytest.mark.asyncio
    async def test_search_error(self, genius_client):
        """Test client failures raise ProviderError"""
        genius_client.search_songs.side_effect = RuntimeError("HTTP 503")
        provider = GeniusProvider(api_key="token")

        with pytest.raises(ProviderError) as exc_info:
            await provider.search("Amazing Grace")

        assert exc_info.value.provider == "genius"
        assert "HTTP 503" in str(exc_info.value)


class TestGeniusFetch:
    """Test lyrics fetching"""

    @pytest.mark.asyncio
    async def test_fetch_lyrics(self, genius_client):
        """Test lyrics are fetched by song id"""
        provider = GeniusProvider(api_key="token")

        lyrics = await provider.fetch_lyrics(22)

        assert lyrics.startswith("1 Contributor")
        genius_client.lyrics.assert_called_once_with(song_id=22)

    @pytest.mark.asyncio
    async def test_fetch_no_lyrics(self, genius_client):
        """Test a page without lyrics gives None"""
        genius_client.lyrics.return_value = None
        provider = GeniusProvider(api_key="token")

        assert await provider.fetch_lyrics(22) is None

    @pytest.mark.asyncio
    async def test_fetch_error(self, genius_client):
        """Test fetch failures raise ProviderError"""
        genius_client.lyrics.side_effect = TimeoutError("timed out")
        provider = GeniusProvider(api_key="token")

        with pytest.raises(ProviderError):
            await provider.fetch_lyrics(22)


class TestGeniusLookup:
    """Test the search, rank and fetch step"""

    @pytest.mark.asyncio
    async def test_find_best_fetches_top_ranked(self, genius_client, caplog):
        """Test the best ranked candidate is fetched and candidates are logged"""
        caplog.set_level(logging.INFO)
        provider = GeniusProvider(api_key="token")
        query = "Amazing Grace by John Newton"

        lyrics = await provider.find_best(query, parse_query(query), logging.getLogger("tests.genius"))

        assert lyrics is not None
        genius_client.lyrics.assert_called_once_with(song_id=22)
        messages = [r.getMessage() for r in caplog.records if r.name == "tests.genius"]
        assert "genius search results: 3" in messages
        assert any("chosen: Amazing Grace - John Newton (score 3)" in m for m in messages)

    @pytest.mark.asyncio
    async def test_no_results(self, genius_client):
        """Test nothing is fetched when the search is empty"""
        genius_client.search_songs.return_value = {'hits': []}
        provider = GeniusProvider(api_key="token")

        lyrics = await provider.find_best("zzz", parse_query("zzz"), logging.getLogger("tests.genius"))

        assert lyrics is None
        genius_client.lyrics.assert_not_called()

    def test_single_secondary_step(self):
        """Test the provider contributes one secondary step"""
        provider = GeniusProvider(api_key="token")
        steps = provider.lookup_steps("hey jude", parse_query("hey jude"), logging.getLogger("tests"))

        assert len(steps) == 1
        assert steps[0].provenance == Provenance.SECONDARY

    def test_missing_api_key(self):
        """Test the client cannot be created without an API key"""
        provider = GeniusProvider(api_key="")

        with pytest.raises(ProviderError) as exc_info:
            provider.genius_client

        assert "not configured" in exc_info.value.message
