"""Test lyrics text cleanup"""

import pytest

from lyric_finder.lyrics.models import Provenance
from lyric_finder.lyrics.sanitizer import find_section_start, find_verse_one, sanitize_lyrics

GENIUS_PAGE = "21 ContributorsHow Great Is Our God Lyrics[Verse 1]\nLine one\n\n\n\nLine two\n5Embed"

SAMPLES = [
    GENIUS_PAGE,
    "How Great Is Our God Lyrics\nLine one",
    "[Intro]\nOoh\n[Verse 1]\nA\nYou might also like\n[Chorus]\nB\n12Embed",
    "Some prose Read More\n\n\n[Chorus]\nLa la",
    "Intro words [Verse 1]\nLine",
    "Lyrics\nLyrics\nLyrics",
    "Song Lyrics\nLyrics of love\nfoo",
    "Hey Jude, don't make it bad\r\nTake a sad song",
]


class TestSanitizeLyrics:
    """Test the cleaning pass"""

    def test_genius_page(self):
        """Test banner, footer and extra blank lines are removed"""
        expected = "[Verse 1]\nLine one\n\nLine two"
        assert sanitize_lyrics(GENIUS_PAGE, Provenance.SECONDARY) == expected
        assert sanitize_lyrics(GENIUS_PAGE) == expected

    def test_none_and_empty_pass_through(self):
        """Test missing text is returned unchanged"""
        assert sanitize_lyrics(None) is None
        assert sanitize_lyrics("") == ""

    def test_plain_lyrics_unchanged(self):
        """Test clean lyrics from the primary provider survive as is"""
        text = "Hey Jude, don't make it bad\nTake a sad song and make it better"
        assert sanitize_lyrics(text, Provenance.PRIMARY_PARSED) == text

    def test_carriage_returns_removed(self):
        """Test CRLF line endings are normalized"""
        assert sanitize_lyrics("Line one\r\nLine two") == "Line one\nLine two"

    def test_generic_header(self):
        """Test a title header without a contributor banner is removed"""
        assert sanitize_lyrics("How Great Is Our God Lyrics\nLine one") == "Line one"

    def test_read_more(self):
        """Test "Read More" teasers are removed through the end of the line"""
        text = "Line one\nRead More about this song\nLine two"
        assert sanitize_lyrics(text) == "Line one\nLine two"

    def test_you_might_also_like(self):
        """Test recommendation teasers are removed"""
        text = "[Verse 1]\nA\nYou might also like\n[Chorus]\nB"
        assert sanitize_lyrics(text) == "[Verse 1]\nA\n[Chorus]\nB"

    def test_embed_without_count(self):
        """Test a bare "Embed" footer is removed"""
        assert sanitize_lyrics("Line one\nEmbed") == "Line one"

    def test_cut_to_verse_one(self):
        """Test [Verse 1] takes priority over an earlier [Intro]"""
        assert sanitize_lyrics("[Intro]\nOoh\n[Verse 1]\nA") == "[Verse 1]\nA"

    def test_cut_to_any_known_header(self):
        """Test prose before the first known header is dropped"""
        assert sanitize_lyrics("Some prose\n[Chorus]\nLa la") == "[Chorus]\nLa la"

    def test_secondary_verse_one_post_pass(self):
        """Test text from the search provider starts at an unanchored [Verse 1]"""
        text = "Intro words [Verse 1]\nLine"
        assert sanitize_lyrics(text, Provenance.SECONDARY) == "[Verse 1]\nLine"
        assert sanitize_lyrics(text, Provenance.PRIMARY_FREEFORM) == text

    def test_header_strip_keeps_lyric_line(self):
        """Test a lyric line starting with "Lyrics" survives below a header"""
        assert sanitize_lyrics("Song Lyrics\nLyrics of love\nfoo") == "Lyrics of love\nfoo"

    def test_header_strip_needs_whole_line(self):
        """Test a first line that only contains "Lyrics" is not a header"""
        text = "Lyrics of love\nfoo"
        assert sanitize_lyrics(text) == text

    def test_stacked_headers_are_removed(self):
        """Test consecutive header lines at the top are all removed"""
        assert sanitize_lyrics("Song Lyrics\nMore Lyrics\nfoo") == "foo"

    def test_text_that_is_only_noise(self):
        """Test pure boilerplate sanitizes to an empty string"""
        assert sanitize_lyrics("5Embed") == ""

    @pytest.mark.parametrize("text", SAMPLES)
    @pytest.mark.parametrize("provenance", [None, Provenance.PRIMARY_PARSED, Provenance.SECONDARY])
    def test_idempotent(self, text, provenance):
        """Test sanitizing twice gives the same result as sanitizing once"""
        once = sanitize_lyrics(text, provenance)
        assert sanitize_lyrics(once, provenance) == once


class TestSectionHeaders:
    """Test section header location"""

    def test_prefers_verse_one(self):
        """Test the [Verse 1] header is preferred over earlier headers"""
        text = "[Chorus]\nA\n[Verse 2]\nB\n[Verse 1: Artist]\nC"
        assert find_section_start(text) == text.index("[Verse 1: Artist]")

    def test_any_verse_before_other_headers(self):
        """Test [Verse N] is preferred over other headers"""
        text = "[Chorus]\nA\n[Verse 2]\nB"
        assert find_section_start(text) == text.index("[Verse 2]")

    def test_no_headers(self):
        """Test -1 when there is no header"""
        assert find_section_start("just words") == -1

    def test_find_verse_one_fallback(self):
        """Test [Verse 1] is found even mid-line"""
        assert find_verse_one("abc [verse 1] def") == 4
        assert find_verse_one("no header here") == -1
