"""
Recognition aggregator with ordered provider fallback

Providers are tried strictly in the configured order (AudD first, Shazam as
backup by default). The first provider returning a complete match wins and no
later provider is contacted. A provider that is not configured, fails, or
finds nothing is logged and skipped; when every provider misses the result is
None, never an exception.
"""

from typing import BinaryIO, Dict, List, Optional

import requests

from ..config.settings import Settings, get_settings
from ..models import MissReason, RecognitionResult, RecognitionSource, SongRecord
from ..utils.logger import get_logger, OperationLogger
from .audd import AudDRecognizer
from .base import BaseRecognizer
from .shazam import ShazamRecognizer


RECOGNIZER_CLASSES = {
    RecognitionSource.AUDD: AudDRecognizer,
    RecognitionSource.SHAZAM: ShazamRecognizer,
}


class RecognitionAggregator:
    """
    Ordered fallback over recognition providers

    Statistics are informational counters only; they never influence which
    provider is tried.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        providers: Optional[List[BaseRecognizer]] = None
    ):
        """
        Initialize aggregator

        Args:
            settings: Application settings (global settings when omitted)
            session: Shared HTTP session for all providers
            providers: Provider instances in priority order (built from settings when omitted)
        """
        self.settings = settings or get_settings()
        self.logger = get_logger(__name__)

        if providers is None:
            session = session or requests.Session()
            providers = [
                RECOGNIZER_CLASSES[RecognitionSource(name)](settings=self.settings, session=session)
                for name in self.settings.recognition.providers
            ]
        self.providers = providers

        self.stats = {
            'total_recognitions': 0,
            'successful_recognitions': 0,
            'failed_recognitions': 0,
            'source_usage': {source: 0 for source in RecognitionSource}
        }

    def recognize(self, audio_bytes: bytes) -> Optional[SongRecord]:
        """
        Identify a song from an audio sample

        Args:
            audio_bytes: Raw audio sample (any container the providers accept)

        Returns:
            SongRecord from the first provider with a complete match, None otherwise
        """
        self.stats['total_recognitions'] += 1
        operation = OperationLogger(self.logger, "Song Recognition")
        operation.start()

        for result in self._attempts(audio_bytes):
            if result.success:
                self.stats['successful_recognitions'] += 1
                self.stats['source_usage'][result.source] += 1
                operation.complete(f"{result.song} via {result.source.value}")
                return result.song

        self.stats['failed_recognitions'] += 1
        operation.warning("Song could not be recognized by any provider")
        operation.complete("no match")
        return None

    def recognize_stream(self, stream: BinaryIO, filename: str = "audio") -> Optional[SongRecord]:
        """
        Read a binary stream fully and recognize it

        Args:
            stream: Open binary file-like object
            filename: Name of the upload, used for logging only

        Returns:
            SongRecord or None
        """
        audio_bytes = stream.read()
        self.logger.debug(f"Read {len(audio_bytes)} bytes from {filename}")
        return self.recognize(audio_bytes)

    def _attempts(self, audio_bytes: bytes):
        """Yield one result per provider, lazily, in priority order"""
        for provider in self.providers:
            try:
                result = provider.recognize(audio_bytes)
            except Exception as e:
                self.logger.error(f"Recognition provider {provider.source.value} failed unexpectedly: {e}")
                result = RecognitionResult.missed(provider.source, MissReason.MALFORMED_BODY, str(e))

            if not result.success:
                self.logger.debug(
                    f"{result.source.value} miss: {result.miss.value if result.miss else 'unknown'}"
                )
            yield result

    def get_provider_status(self) -> List[Dict[str, str]]:
        """
        Describe configured recognition providers for diagnostics

        Returns:
            One entry per provider in priority order
        """
        return [
            {
                'provider': provider.source.value,
                'available': 'yes' if provider.is_configured() else 'no',
                'requires_api_key': 'yes',
            }
            for provider in self.providers
        ]


# Global aggregator instance
_aggregator: Optional[RecognitionAggregator] = None


def get_recognition_aggregator() -> RecognitionAggregator:
    """Get global recognition aggregator instance"""
    global _aggregator
    if not _aggregator:
        _aggregator = RecognitionAggregator()
    return _aggregator


def reset_recognition_aggregator() -> None:
    """Reset global recognition aggregator instance (used after settings reload)"""
    global _aggregator
    _aggregator = None
