"""
Lyrics text cleanup

Providers return lyrics wrapped in page furniture: contributor banners,
"Read More" and "You might also like" teasers, "Embed" footers, and sometimes
prose before the first verse. This module strips that noise with best-effort
heuristics.

Cleaning pass, in order:
1. Drop carriage returns
2. Strip a leading "N Contributors ... Lyrics" banner
3. Without a banner, strip a generic first line ending in "Lyrics" (the
   header may run straight into a "[" section header)
4. Remove "Read More" teasers through the end of their line
5. Remove "You might also like" teasers through the end of their line
6. Remove a trailing "[N]Embed" footer
7. Cut everything before the first section header, preferring [Verse 1],
   then any [Verse ...], then any known header
8. Collapse 3+ newlines to 2
9. Trim

Text from the search-based provider gets a second [Verse 1] cut, since its
markup sometimes leaves the header somewhere step 7 does not pick it.

The pass is repeated until the text stops changing. Every step only removes
characters, so the loop terminates and sanitize_lyrics is idempotent. A
consequence is that a run of header-shaped lines at the top is removed as a
whole. Step 3 only matches complete lines, so a first line that merely starts
with "Lyrics" is kept.
"""

import re
from typing import Optional

from ..utils.logger import get_logger
from .models import Provenance

logger = get_logger(__name__)

CONTRIBUTORS_BANNER = re.compile(r'^\s*\d+\s*Contributors?.*?Lyrics\s*', re.IGNORECASE)
GENERIC_HEADER = re.compile(r'^\s*[^\n]*?Lyrics[ \t]*(?:\n|$|(?=\[))', re.IGNORECASE)
READ_MORE = re.compile(r'\bRead More\b[^\n]*(?:\n|$)', re.IGNORECASE)
ALSO_LIKE = re.compile(r'You might also like[^\n]*(?:\n|$)', re.IGNORECASE)
EMBED_FOOTER = re.compile(r'\n?\s*\d*\s*Embed\s*$', re.IGNORECASE)
EXTRA_NEWLINES = re.compile(r'\n{3,}')

# Section headers, most specific first
VERSE_ONE_HEADER = re.compile(r'^\[\s*verse\s*1\b[^\]]*\]', re.IGNORECASE | re.MULTILINE)
VERSE_HEADER = re.compile(r'^\[\s*verse\b[^\]]*\]', re.IGNORECASE | re.MULTILINE)
ANY_SECTION_HEADER = re.compile(
    r'^\[(?:verse|chorus|intro|bridge|pre-chorus|prechorus|refrain|outro)[^\]]*\]',
    re.IGNORECASE | re.MULTILINE
)


def find_section_start(text: str) -> int:
    """
    Locate the first structural section header

    Args:
        text: Lyrics text

    Returns:
        Offset of the first [Verse 1] header, else the first [Verse ...]
        header, else the first known header; -1 when there is none
    """
    for pattern in (VERSE_ONE_HEADER, VERSE_HEADER, ANY_SECTION_HEADER):
        match = pattern.search(text)
        if match:
            return match.start()
    return -1


def find_verse_one(text: str) -> int:
    """
    Locate a [Verse 1] header, line-anchored or anywhere in the text

    Args:
        text: Lyrics text

    Returns:
        Offset of the header or -1
    """
    match = VERSE_ONE_HEADER.search(text)
    if match:
        return match.start()
    return text.lower().find('[verse 1]')


def _clean_once(text: str, provenance: Optional[Provenance]) -> str:
    """Apply one cleaning pass"""
    text = text.replace('\r', '')

    text, banners = CONTRIBUTORS_BANNER.subn('', text, count=1)
    if not banners:
        text = GENERIC_HEADER.sub('', text, count=1)

    text = READ_MORE.sub('', text)
    text = ALSO_LIKE.sub('', text)
    text = EMBED_FOOTER.sub('', text, count=1)

    cut_at = find_section_start(text)
    if cut_at > 0:
        text = text[cut_at:].lstrip()

    text = EXTRA_NEWLINES.sub('\n\n', text)
    text = text.strip()

    if provenance is not None and provenance.is_secondary:
        cut_at = find_verse_one(text)
        if cut_at > 0:
            logger.debug(f"Starting secondary lyrics at [Verse 1] offset {cut_at}")
            text = text[cut_at:].lstrip()

    return text


def sanitize_lyrics(raw: Optional[str], provenance: Optional[Provenance] = None) -> Optional[str]:
    """
    Clean provider noise from lyrics text

    Never raises. None and empty input are returned unchanged.

    Args:
        raw: Lyrics text as returned by a provider
        provenance: Provenance of the text; the secondary provider enables the
                    extra [Verse 1] cut

    Returns:
        Cleaned lyrics text
    """
    if not raw:
        return raw

    text = raw if isinstance(raw, str) else str(raw)
    while True:
        cleaned = _clean_once(text, provenance)
        if cleaned == text:
            return cleaned
        text = cleaned
