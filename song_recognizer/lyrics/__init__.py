# song_recognizer/lyrics/__init__.py
"""
Lyrics package for multi-source lyrics retrieval, language detection and translation

Key components:
- LyricsProcessor: Aggregator walking providers in priority order
- LyricsOvhProvider, LrclibProvider, ChartLyricsProvider: individual lyrics sources
- detect_language: Stop-word heuristic used to decide whether to translate

Usage:
Typically accessed through the processor:
    processor = get_lyrics_processor()
    lyrics = processor.get_lyrics(title, artist)

Or individual providers can be used directly:
    result = LrclibProvider().search_lyrics(artist, title)
"""

# Main aggregator
from .processor import (
    get_lyrics_processor,
    reset_lyrics_processor,
    format_bilingual_lyrics,
    LyricsProcessor
)

# Individual providers and their pure parse functions
from .base import BaseLyricsProvider
from .lyrics_ovh import LyricsOvhProvider, parse_lyrics_ovh_response
from .lrclib import LrclibProvider, parse_lrclib_response
from .chartlyrics import ChartLyricsProvider, parse_chartlyrics_response

# Language detection
from .language import detect_language, language_scores

__all__ = [
    # Aggregator
    'get_lyrics_processor',
    'reset_lyrics_processor',
    'format_bilingual_lyrics',
    'LyricsProcessor',

    # Providers
    'BaseLyricsProvider',
    'LyricsOvhProvider',
    'LrclibProvider',
    'ChartLyricsProvider',
    'parse_lyrics_ovh_response',
    'parse_lrclib_response',
    'parse_chartlyrics_response',

    # Language detection
    'detect_language',
    'language_scores',
]
