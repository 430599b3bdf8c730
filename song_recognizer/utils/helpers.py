"""
Utility helper functions for Song-Recognizer
Text cleaning for provider queries and lyrics bodies
"""

import html
import re
from typing import Optional


# Parenthetical / bracketed annotations such as "(Live)" or "[Remastered 2009]"
_ANNOTATION_PATTERNS = [
    re.compile(r'\([^)]*\)'),
    re.compile(r'\[[^\]]*\]'),
]

# Trailing featuring credit: "feat. X", "ft X", "featuring X"
_FEATURING_PATTERN = re.compile(r'\s*\b(?:featuring|feat\.?|ft\.?)(?=\s|$).*$', re.IGNORECASE)

# LRC timestamp tags: [mm:ss], [mm:ss.xx], [mm:ss.xxx]
_LRC_TIMESTAMP_PATTERN = re.compile(r'\[\d{1,3}:\d{2}(?:[.:]\d{1,3})?\]')

# LRC header tags such as [ar:Artist] or [length: 03:25]
_LRC_METADATA_PATTERN = re.compile(r'^\s*\[[a-z]+:[^\]]*\]\s*$', re.IGNORECASE)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim"""
    return re.sub(r'\s+', ' ', text).strip()


def clean_search_term(value: Optional[str]) -> str:
    """
    Clean a title or artist before querying a lyrics provider

    Removes parenthetical and bracketed annotations, a trailing featuring
    credit, and redundant whitespace.

    Args:
        value: Raw title or artist as reported by the recognition provider

    Returns:
        Cleaned value, empty string when nothing meaningful remains

    Examples:
        "Song (Live) [Remastered]" -> "Song"
        "Artist feat. Other" -> "Artist"
    """
    if not value:
        return ""

    cleaned = value
    for pattern in _ANNOTATION_PATTERNS:
        cleaned = pattern.sub(' ', cleaned)

    cleaned = _FEATURING_PATTERN.sub('', collapse_whitespace(cleaned))

    return collapse_whitespace(cleaned)


def normalize_newlines(text: str) -> str:
    """Convert CRLF / CR line endings to LF"""
    return text.replace('\r\n', '\n').replace('\r', '\n')


def strip_lrc_timestamps(synced_lyrics: str) -> str:
    """
    Convert LRC synchronized lyrics into plain text

    Removes every [mm:ss.xx] timing tag and LRC header lines, keeping the
    line structure of the song.

    Args:
        synced_lyrics: Lyrics in LRC format

    Returns:
        Plain lyrics text
    """
    lines = []
    for line in normalize_newlines(synced_lyrics).split('\n'):
        if _LRC_METADATA_PATTERN.match(line):
            continue
        lines.append(_LRC_TIMESTAMP_PATTERN.sub('', line).strip())

    return '\n'.join(lines).strip()


def decode_html_entities(text: str) -> str:
    """
    Decode HTML entities, including double-encoded ones like "&amp;#39;"

    Some XML services escape lyrics twice, so decoding repeats until the
    text stops changing.
    """
    previous = None
    decoded = text
    while decoded != previous:
        previous = decoded
        decoded = html.unescape(decoded)
    return decoded


def clean_lyrics_text(lyrics: Optional[str]) -> str:
    """
    Tidy a lyrics body returned by a provider

    Normalizes line endings, trims every line and squeezes runs of blank
    lines into a single blank line between stanzas.

    Args:
        lyrics: Raw lyrics text

    Returns:
        Cleaned lyrics text (empty string for empty input)
    """
    if not lyrics:
        return ""

    lines = [line.strip() for line in normalize_newlines(lyrics).split('\n')]

    cleaned = []
    for line in lines:
        if not line and (not cleaned or not cleaned[-1]):
            continue
        cleaned.append(line)

    return '\n'.join(cleaned).strip()


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate string to maximum length with suffix

    Args:
        text: Original text
        max_length: Maximum length including suffix
        suffix: Suffix to add when truncating

    Returns:
        Truncated string
    """
    if len(text) <= max_length:
        return text

    truncate_length = max_length - len(suffix)
    if truncate_length <= 0:
        return suffix[:max_length]

    return text[:truncate_length] + suffix
