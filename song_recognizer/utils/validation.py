"""
Input validation utilities
"""
import base64
import binascii
from pathlib import Path
from typing import Iterable, Optional, Tuple

from ..exceptions import AudioInputError


def validate_audio_file(
    path: str,
    allowed_extensions: Iterable[str],
    max_size_mb: int
) -> Tuple[bool, Optional[str]]:
    """
    Validate a local audio file before recognition

    Args:
        path: Path to the audio file
        allowed_extensions: Accepted extensions including the dot (".mp3")
        max_size_mb: Maximum file size in megabytes

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not path:
        return False, "No audio file provided"

    file_path = Path(path)

    if not file_path.is_file():
        return False, f"File not found: {path}"

    allowed = [ext.lower() for ext in allowed_extensions]
    extension = file_path.suffix.lower()
    if extension not in allowed:
        return False, f"Invalid file format. Allowed formats: {', '.join(allowed)}"

    size = file_path.stat().st_size
    if size == 0:
        return False, "Audio file is empty"

    if size > max_size_mb * 1024 * 1024:
        return False, f"File is too large. Maximum size: {max_size_mb}MB"

    return True, None


def validate_language_code(code: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a language code against the supported languages

    Args:
        code: Language code such as "es"

    Returns:
        Tuple of (is_valid, error_message)
    """
    from ..models import LanguageCode

    try:
        LanguageCode.from_value(code)
    except (ValueError, AttributeError):
        supported = ', '.join(language.value for language in LanguageCode)
        return False, f"Unsupported language '{code}'. Supported: {supported}"
    return True, None


def decode_audio_data_url(data: str) -> bytes:
    """
    Decode a browser microphone recording

    Accepts either plain base64 or a data URL such as
    "data:audio/wav;base64,UklGR...".

    Args:
        data: Encoded audio payload

    Returns:
        Raw audio bytes

    Raises:
        AudioInputError: If the payload is empty or not valid base64
    """
    if not data or not data.strip():
        raise AudioInputError("No audio data provided")

    payload = data.strip()
    if ',' in payload:
        payload = payload.split(',', 1)[1]

    try:
        audio_bytes = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise AudioInputError("Audio data is not valid base64", details={'original_error': str(e)})

    if not audio_bytes:
        raise AudioInputError("No audio data provided")

    return audio_bytes
