"""
Lyrics lookup with multi-source fallback, language detection and translation

This module provides the lyrics aggregator used after a song has been
recognized. It coordinates the lyrics providers, detects the language of the
lyrics found and, when that language differs from the configured target
language, produces a bilingual original + translation block.

Processing Flow:
1. Cleaning: strip "(Live)", "[Remastered]", "feat. X" and extra whitespace
   from title and artist. Nothing left means no lookup at all.
2. Provider Search: query providers in configured priority order; the first
   non-empty lyrics win, results are never merged.
3. Language Detection: stop-word heuristic (see language.py).
4. Translation: chunked translation into the target language. When no chunk
   could be translated the original lyrics are returned unchanged.

Error Handling:
Provider failures of any kind are misses. A lookup either returns lyrics or
None; it never raises for network or provider problems.
"""

import time
from typing import Dict, List, Optional

import requests

from ..config.settings import Settings, get_settings
from ..models import LanguageCode, LyricsSearchResult, LyricsSource, MissReason
from ..translation.mymemory import MyMemoryTranslator
from ..utils.helpers import clean_search_term
from ..utils.logger import get_logger, OperationLogger
from .base import BaseLyricsProvider
from .chartlyrics import ChartLyricsProvider
from .language import detect_language
from .lrclib import LrclibProvider
from .lyrics_ovh import LyricsOvhProvider


SECTION_SEPARATOR = "─" * 40

PROVIDER_CLASSES = {
    LyricsSource.LYRICS_OVH: LyricsOvhProvider,
    LyricsSource.LRCLIB: LrclibProvider,
    LyricsSource.CHARTLYRICS: ChartLyricsProvider,
}


def format_bilingual_lyrics(
    original: str,
    translated: str,
    source_lang: LanguageCode,
    target_lang: LanguageCode
) -> str:
    """
    Compose the original + translation lyrics block

    Args:
        original: Lyrics as found
        translated: Lyrics translated into the target language
        source_lang: Detected language of the original
        target_lang: Language of the translation

    Returns:
        Labeled original section, separator line, labeled translation section
    """
    return (
        f"ORIGINAL LYRICS ({source_lang.display_name})\n"
        f"{original.strip()}\n"
        f"\n"
        f"{SECTION_SEPARATOR}\n"
        f"TRANSLATION ({target_lang.display_name})\n"
        f"{translated.strip()}"
    )


class LyricsProcessor:
    """
    Lyrics aggregator across lyrics.ovh, LRCLIB and ChartLyrics

    Core Responsibilities:
    - Clean recognition metadata into lookup terms
    - Walk providers in configured order with first-success short-circuit
    - Detect language and translate into the target language
    - Keep per-provider usage statistics for diagnostics

    The processor holds no per-request state: every call to get_lyrics is
    independent. Statistics counters are informational only.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        providers: Optional[Dict[LyricsSource, BaseLyricsProvider]] = None,
        translator: Optional[MyMemoryTranslator] = None
    ):
        """
        Initialize lyrics processor

        Args:
            settings: Application settings (global settings when omitted)
            session: Shared HTTP session for providers and translator
            providers: Provider instances keyed by source (built from settings when omitted)
            translator: Translation client (built from settings when omitted)
        """
        self.settings = settings or get_settings()
        self.logger = get_logger(__name__)
        session = session or requests.Session()

        self.enabled = self.settings.lyrics.enabled
        self.translate_enabled = self.settings.lyrics.translate
        self.search_order = [LyricsSource(name) for name in self.settings.lyrics.providers]

        if providers is None:
            providers = {
                source: PROVIDER_CLASSES[source](settings=self.settings, session=session)
                for source in self.search_order
            }
        self.providers = providers
        self.translator = translator or MyMemoryTranslator(settings=self.settings, session=session)

        self.stats = {
            'total_searches': 0,
            'successful_searches': 0,
            'failed_searches': 0,
            'translations': 0,
            'source_usage': {source: 0 for source in LyricsSource}
        }

    @property
    def target_language(self) -> LanguageCode:
        return LanguageCode.from_value(self.settings.translation.target_language)

    def get_lyrics(self, title: str, artist: str) -> Optional[str]:
        """
        Find lyrics for a song, translated into the target language if needed

        Args:
            title: Song title as recognized
            artist: Artist name as recognized

        Returns:
            Lyrics (possibly a bilingual block), or None when no provider had them
        """
        if not self.enabled:
            return None

        result = self.search_lyrics(title, artist)
        if not result.success:
            return None

        lyrics = result.lyrics
        if not self.translate_enabled:
            return lyrics

        detected = detect_language(lyrics)
        self.logger.debug(f"Detected lyrics language: {detected.value}")

        try:
            target = self.target_language
        except ValueError as e:
            self.logger.error(f"Unsupported target language, lyrics left untranslated: {e}")
            return lyrics

        if detected == target:
            return lyrics

        return self._translate(lyrics, detected, target)

    def search_lyrics(self, title: str, artist: str) -> LyricsSearchResult:
        """
        Query providers in priority order and return the first hit

        Args:
            title: Song title as recognized
            artist: Artist name as recognized

        Returns:
            The winning provider result, or the last miss when every provider missed
        """
        clean_title = clean_search_term(title)
        clean_artist = clean_search_term(artist)

        fallback_source = self.search_order[0] if self.search_order else LyricsSource.LYRICS_OVH
        if not clean_title or not clean_artist:
            self.logger.debug(f"Nothing left to search after cleaning: '{artist}' - '{title}'")
            return LyricsSearchResult.missed(fallback_source, MissReason.NO_MATCH, "Empty search terms")

        self.stats['total_searches'] += 1
        operation = OperationLogger(self.logger, f"Lyrics Search: {clean_artist} - {clean_title}")
        operation.start()

        last_result = LyricsSearchResult.missed(fallback_source, MissReason.NO_MATCH, "No providers configured")

        for source in self.search_order:
            provider = self.providers.get(source)
            if provider is None:
                operation.warning(f"Provider not available: {source.value}")
                continue

            try:
                result = provider.search_lyrics(clean_artist, clean_title)
            except Exception as e:
                # Unexpected provider bug; still only a miss for this provider
                self.logger.error(f"Lyrics provider {source.value} failed unexpectedly: {e}")
                result = LyricsSearchResult.missed(source, MissReason.MALFORMED_BODY, str(e))

            if result.success:
                self.stats['successful_searches'] += 1
                self.stats['source_usage'][source] += 1
                operation.complete(f"found via {source.value}")
                return result

            self.logger.debug(
                f"No lyrics from {source.value}: {result.miss.value if result.miss else 'unknown'}"
                f"{' (' + result.error_message + ')' if result.error_message else ''}"
            )
            last_result = result

        self.stats['failed_searches'] += 1
        operation.complete("no lyrics found")
        return last_result

    def _translate(self, lyrics: str, detected: LanguageCode, target: LanguageCode) -> str:
        """Translate lyrics, falling back to the original text on failure"""
        started = time.time()
        try:
            translation = self.translator.translate_detailed(lyrics, detected, target)
        except Exception as e:
            self.logger.error(f"Lyrics translation failed: {e}")
            return lyrics

        if translation is None or translation.fully_failed:
            self.logger.warning("Lyrics translation unavailable, returning original lyrics")
            return lyrics

        self.stats['translations'] += 1
        self.logger.debug(
            f"Translated {translation.chunks_translated}/{translation.chunks_total} chunk(s) "
            f"in {time.time() - started:.2f}s"
        )
        return format_bilingual_lyrics(lyrics, translation.text, detected, target)

    def get_provider_status(self) -> List[Dict[str, str]]:
        """
        Describe configured lyrics providers for diagnostics

        Returns:
            One entry per provider in search order
        """
        status = []
        for source in self.search_order:
            status.append({
                'provider': source.value,
                'available': 'yes' if source in self.providers else 'no',
                'requires_api_key': 'no',
            })
        return status


# Global lyrics processor instance
_lyrics_processor: Optional[LyricsProcessor] = None


def get_lyrics_processor() -> LyricsProcessor:
    """
    Get global lyrics processor instance

    Returns:
        Shared LyricsProcessor built from the global settings
    """
    global _lyrics_processor
    if not _lyrics_processor:
        _lyrics_processor = LyricsProcessor()
    return _lyrics_processor


def reset_lyrics_processor() -> None:
    """Reset global lyrics processor instance (used after settings reload)"""
    global _lyrics_processor
    _lyrics_processor = None
