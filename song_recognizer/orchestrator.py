"""
End-to-end song recognition service

SongRecognitionService is the entry point used by the hosting layer (the
CLI in this project). One call runs the whole chain sequentially:

    recognition aggregator -> [song found] lyrics aggregator -> Amazon link

Only the recognition step decides success. Missing lyrics or a missing
derived link leave the corresponding SongRecord field empty.

Usage:
    service = get_service()
    song = service.recognize_file("sample.mp3")
    print(service.build_response(song).to_dict())
"""

from pathlib import Path
from typing import BinaryIO, Optional

import requests

from .config.settings import Settings, get_settings
from .exceptions import AudioInputError
from .links import build_amazon_search_url
from .lyrics.processor import LyricsProcessor
from .models import RecognitionResponse, SongRecord
from .recognition.aggregator import RecognitionAggregator
from .utils.logger import get_logger
from .utils.validation import decode_audio_data_url, validate_audio_file


SUCCESS_MESSAGE = "Song recognized successfully."
NOT_FOUND_MESSAGE = "Could not recognize the song."
MICROPHONE_FILENAME = "microphone-recording.wav"


class SongRecognitionService:
    """
    Composes recognition, lyrics lookup and link generation

    Components are injectable so tests (and embedding applications) can
    supply their own HTTP session, providers or aggregators.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        recognizer: Optional[RecognitionAggregator] = None,
        lyrics_processor: Optional[LyricsProcessor] = None
    ):
        self.settings = settings or get_settings()
        self.logger = get_logger(__name__)

        session = session or requests.Session()
        self.recognizer = recognizer or RecognitionAggregator(settings=self.settings, session=session)
        self.lyrics_processor = lyrics_processor or LyricsProcessor(settings=self.settings, session=session)

    def recognize(
        self,
        audio_bytes: bytes,
        filename: str = "audio",
        include_lyrics: bool = True
    ) -> Optional[SongRecord]:
        """
        Recognize an audio sample and enrich the song

        Args:
            audio_bytes: Raw audio sample
            filename: Name of the sample, used for logging only
            include_lyrics: Skip the lyrics lookup when False

        Returns:
            Enriched SongRecord, or None when no provider recognized the sample
        """
        self.logger.info(f"Recognizing {filename} ({len(audio_bytes)} bytes)")

        song = self.recognizer.recognize(audio_bytes)
        if song is None:
            return None

        if include_lyrics and self.settings.lyrics.enabled:
            lyrics = self.lyrics_processor.get_lyrics(song.title, song.artist)
            if lyrics:
                song.lyrics = lyrics

        if self.settings.links.amazon_enabled:
            song.amazon_url = build_amazon_search_url(
                song.artist,
                album=song.album,
                title=song.title,
                template=self.settings.links.amazon_search_template
            )

        return song

    def recognize_stream(
        self,
        stream: BinaryIO,
        filename: str = "audio",
        include_lyrics: bool = True
    ) -> Optional[SongRecord]:
        """Read an open binary stream and recognize it"""
        return self.recognize(stream.read(), filename=filename, include_lyrics=include_lyrics)

    def recognize_file(self, path: str, include_lyrics: bool = True) -> Optional[SongRecord]:
        """
        Validate and recognize a local audio file

        Args:
            path: Path to the audio file
            include_lyrics: Skip the lyrics lookup when False

        Returns:
            Enriched SongRecord or None

        Raises:
            AudioInputError: If the file is missing, empty, too large or of a
                format outside the allowed extensions
        """
        upload = self.settings.upload
        is_valid, error = validate_audio_file(path, upload.allowed_extensions, upload.max_file_size_mb)
        if not is_valid:
            raise AudioInputError(error, details={'file_path': str(path)})

        file_path = Path(path)
        with open(file_path, 'rb') as f:
            return self.recognize_stream(f, filename=file_path.name, include_lyrics=include_lyrics)

    def recognize_data_url(self, data: str, include_lyrics: bool = True) -> Optional[SongRecord]:
        """
        Recognize a base64 microphone recording

        Args:
            data: Plain base64 or a "data:audio/...;base64," URL

        Returns:
            Enriched SongRecord or None

        Raises:
            AudioInputError: If the payload is empty or not valid base64
        """
        audio_bytes = decode_audio_data_url(data)
        return self.recognize(audio_bytes, filename=MICROPHONE_FILENAME, include_lyrics=include_lyrics)

    def get_lyrics(self, title: str, artist: str) -> Optional[str]:
        """Look up (and translate if needed) lyrics for a known song"""
        return self.lyrics_processor.get_lyrics(title, artist)

    @staticmethod
    def build_response(song: Optional[SongRecord]) -> RecognitionResponse:
        """Wrap a recognition outcome into the success/message/data envelope"""
        if song is None:
            return RecognitionResponse(success=False, message=NOT_FOUND_MESSAGE)
        return RecognitionResponse(success=True, message=SUCCESS_MESSAGE, data=song)


# Global service instance
_service: Optional[SongRecognitionService] = None


def get_service() -> SongRecognitionService:
    """Get global recognition service instance"""
    global _service
    if not _service:
        _service = SongRecognitionService()
    return _service


def reset_service() -> None:
    """Reset global recognition service instance (used after settings reload)"""
    global _service
    _service = None
