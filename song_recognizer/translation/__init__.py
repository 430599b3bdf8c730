# song_recognizer/translation/__init__.py
"""
Translation package for lyrics that are not in the target language

Key components:
- chunk_text: Line-respecting splitter that keeps requests under the service limit
- MyMemoryTranslator: Chunked translation client with per-chunk fallback

Usage:
    translator = get_translator()
    spanish = translator.translate(lyrics, LanguageCode.EN)
"""

from .chunker import chunk_text
from .mymemory import (
    get_translator,
    reset_translator,
    parse_translation_response,
    MyMemoryTranslator,
    TranslationResult
)

__all__ = [
    'chunk_text',
    'get_translator',
    'reset_translator',
    'parse_translation_response',
    'MyMemoryTranslator',
    'TranslationResult',
]
