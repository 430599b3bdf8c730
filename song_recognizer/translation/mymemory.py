"""
MyMemory integration for chunked lyrics translation

This module translates lyrics through the free MyMemory translation API. The
service accepts short texts only, so lyrics are split by the line-respecting
chunker and each chunk is translated with its own GET request.

Key behaviors:
- One request per chunk, in order, with a short pause between requests
- A chunk whose request fails (transport error, bad status, quota warning,
  empty translation) is kept in its original language, so the output always
  has as many segments as the input
- Never raises for service problems

API Contract:
    GET {url}/get?q=<text>&langpair=<source>|<target>[&de=<email>]
    -> {"responseData": {"translatedText": "..."}, "responseStatus": 200}

Supplying an email address (``translation.email``) raises the daily quota
of the free tier.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import requests

from ..config.settings import Settings, get_settings
from ..models import LanguageCode
from ..utils.logger import get_logger, log_performance
from .chunker import chunk_text


# MyMemory reports quota exhaustion inside a 200 response body
QUOTA_WARNING_PREFIX = "MYMEMORY WARNING"


@dataclass
class TranslationResult:
    """
    Outcome of translating one text

    Attributes:
        text: Translated chunks (or original chunks on failure) joined with newlines
        chunks_total: Number of chunks the input was split into
        chunks_translated: Number of chunks the service actually translated
    """
    text: str
    chunks_total: int
    chunks_translated: int

    @property
    def fully_failed(self) -> bool:
        return self.chunks_translated == 0

    @property
    def partially_failed(self) -> bool:
        return 0 < self.chunks_translated < self.chunks_total


def parse_translation_response(payload: Any) -> Optional[str]:
    """
    Extract the translated text from a MyMemory JSON body

    Args:
        payload: Decoded JSON body

    Returns:
        Translated text, or None when the body reports an error or is empty
    """
    if not isinstance(payload, dict):
        return None

    status = payload.get('responseStatus')
    if status is not None and str(status) != "200":
        return None

    data = payload.get('responseData')
    if not isinstance(data, dict):
        return None

    translated = data.get('translatedText')
    if not isinstance(translated, str) or not translated.strip():
        return None

    if translated.strip().upper().startswith(QUOTA_WARNING_PREFIX):
        return None

    return translated.strip()


class MyMemoryTranslator:
    """
    Chunked translation client for the MyMemory API

    The client is stateless apart from its injected HTTP session and
    configuration, so one instance can serve any number of sequential calls.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize translator

        Args:
            settings: Application settings (global settings when omitted)
            session: HTTP session used for requests (new session when omitted)
            sleep: Function used for the pause between chunk requests
        """
        self.settings = settings or get_settings()
        self.logger = get_logger(__name__)
        self.session = session or requests.Session()
        self.sleep = sleep

        config = self.settings.translation
        self.url = config.url.rstrip('/') + '/get'
        self.max_chunk_size = config.max_chunk_size
        self.chunk_delay = config.chunk_delay
        self.timeout = config.timeout
        self.email = config.email

    @property
    def target_language(self) -> LanguageCode:
        return LanguageCode.from_value(self.settings.translation.target_language)

    def translate(
        self,
        text: str,
        source_lang: LanguageCode,
        target_lang: Optional[LanguageCode] = None
    ) -> Optional[str]:
        """
        Translate text, keeping untranslatable chunks in the original language

        Args:
            text: Text to translate (lyrics)
            source_lang: Detected language of the text
            target_lang: Language to translate into (configured target when omitted)

        Returns:
            Translated text joined with newlines, or None if the operation
            failed before any chunk was attempted
        """
        result = self.translate_detailed(text, source_lang, target_lang)
        return result.text if result else None

    @log_performance
    def translate_detailed(
        self,
        text: str,
        source_lang: LanguageCode,
        target_lang: Optional[LanguageCode] = None
    ) -> Optional[TranslationResult]:
        """
        Translate text and report how many chunks were actually translated

        Args:
            text: Text to translate
            source_lang: Detected language of the text
            target_lang: Language to translate into (configured target when omitted)

        Returns:
            TranslationResult, or None if the text could not be chunked
        """
        try:
            target = target_lang or self.target_language
            chunks = chunk_text(text, self.max_chunk_size)
        except ValueError as e:
            self.logger.error(f"Translation aborted before sending any chunk: {e}")
            return None

        if not chunks:
            return None

        if source_lang == target:
            return TranslationResult(text='\n'.join(chunks), chunks_total=len(chunks), chunks_translated=0)

        self.logger.debug(
            f"Translating {len(chunks)} chunk(s) {source_lang.value} -> {target.value}"
        )

        outputs: List[str] = []
        translated_count = 0

        for index, chunk in enumerate(chunks):
            if index > 0 and self.chunk_delay > 0:
                self.sleep(self.chunk_delay)

            translated = self._translate_chunk(chunk, source_lang, target)
            if translated is None:
                self.logger.debug(f"Chunk {index + 1}/{len(chunks)} kept untranslated")
                outputs.append(chunk)
            else:
                translated_count += 1
                outputs.append(translated)

        if translated_count < len(chunks):
            self.logger.warning(
                f"Translated {translated_count}/{len(chunks)} chunk(s), "
                f"the rest were kept in the original language"
            )

        return TranslationResult(
            text='\n'.join(outputs),
            chunks_total=len(chunks),
            chunks_translated=translated_count
        )

    def _translate_chunk(
        self,
        chunk: str,
        source_lang: LanguageCode,
        target_lang: LanguageCode
    ) -> Optional[str]:
        """
        Translate a single chunk

        Returns:
            Translated text, or None on any failure
        """
        params: Dict[str, str] = {
            'q': chunk,
            'langpair': f"{source_lang.value}|{target_lang.value}",
        }
        if self.email:
            params['de'] = self.email

        try:
            response = self.session.get(
                self.url,
                params=params,
                timeout=self.timeout,
                headers={'User-Agent': self.settings.network.user_agent}
            )
        except requests.RequestException as e:
            self.logger.debug(f"Translation request failed: {e}")
            return None

        if not response.ok:
            self.logger.debug(f"Translation service responded with {response.status_code}")
            return None

        try:
            payload = response.json()
        except ValueError:
            self.logger.debug("Translation service returned a non-JSON body")
            return None

        return parse_translation_response(payload)


# Global translator instance management using singleton pattern
_translator: Optional[MyMemoryTranslator] = None


def get_translator() -> MyMemoryTranslator:
    """
    Get global translator instance

    Returns:
        Shared MyMemoryTranslator built from the global settings
    """
    global _translator
    if not _translator:
        _translator = MyMemoryTranslator()
    return _translator


def reset_translator() -> None:
    """Reset global translator instance (used after settings reload)"""
    global _translator
    _translator = None
