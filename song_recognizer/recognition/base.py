"""
Shared plumbing for song recognition providers

A recognition attempt is one POST of the audio sample followed by a
provider-specific parse of the JSON answer. Credential checks, transport
errors, status handling and JSON decoding are the same for every provider
and live here. Each provider module supplies its request encoding and a
pure parse function.
"""

import time
from typing import Any, Dict, Optional

import requests

from ..config.settings import Settings, get_settings, is_configured
from ..models import MissReason, PartialSongFields, RecognitionResult, RecognitionSource
from ..utils.logger import get_logger


class BaseRecognizer:
    """
    Base class for recognition providers

    Subclasses set ``source``, return their credential from ``api_key`` and
    implement ``_send(audio_bytes)`` and ``_parse(payload)``.
    """

    source: RecognitionSource

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.logger = get_logger(self.__class__.__module__)
        self.session = session or requests.Session()

    @property
    def api_key(self) -> str:
        raise NotImplementedError

    def is_configured(self) -> bool:
        """True when the provider credential is present and not a placeholder"""
        return is_configured(self.api_key)

    def recognize(self, audio_bytes: bytes) -> RecognitionResult:
        """
        Submit an audio sample and normalize the answer

        Args:
            audio_bytes: Raw audio sample

        Returns:
            RecognitionResult holding a SongRecord, or the reason for the miss
        """
        if not self.is_configured():
            self.logger.warning(f"{self.source.value} API key not configured, skipping")
            return RecognitionResult.missed(self.source, MissReason.UNCONFIGURED)

        started = time.time()
        self.logger.debug(f"Sending {len(audio_bytes)} bytes to {self.source.value}")

        try:
            response = self._send(audio_bytes)
        except requests.RequestException as e:
            self.logger.warning(f"{self.source.value} request failed: {e}")
            return RecognitionResult.missed(self.source, MissReason.TRANSPORT_ERROR, str(e))

        if not response.ok:
            self.logger.warning(f"{self.source.value} responded with {response.status_code}")
            return RecognitionResult.missed(
                self.source, MissReason.BAD_STATUS, f"HTTP {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError:
            return RecognitionResult.missed(self.source, MissReason.MALFORMED_BODY, "Invalid JSON")

        fields = self._parse(payload)
        if fields is None:
            self.logger.info(f"{self.source.value} could not recognize the song")
            return RecognitionResult.missed(self.source, MissReason.NO_MATCH)

        if not fields.is_complete:
            self.logger.warning(f"{self.source.value} response incomplete (missing title or artist)")
            return RecognitionResult.missed(self.source, MissReason.INCOMPLETE)

        return RecognitionResult(
            source=self.source,
            song=fields.to_song_record(self.source),
            search_time=time.time() - started
        )

    def _send(self, audio_bytes: bytes) -> requests.Response:
        raise NotImplementedError

    def _parse(self, payload: Dict[str, Any]) -> Optional[PartialSongFields]:
        raise NotImplementedError
