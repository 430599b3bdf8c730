"""
Exception classes for Song-Recognizer.

Provider failures (bad status codes, timeouts, malformed bodies, missing
fields) are never raised: they travel as MissReason values inside the result
dataclasses defined in models.py, and the aggregators turn a full round of
misses into a plain "not found" result.

The exceptions below are reserved for problems owned by the hosting layer,
where stopping the current command is the correct reaction.

Exception Hierarchy:
    SongRecognizerError (base)
        ConfigError - Configuration file or value issues
        AudioInputError - Audio input that cannot be read or decoded
"""

from typing import Any, Dict, Optional


class SongRecognizerError(Exception):
    """
    Base exception for all Song-Recognizer errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch them with a single except clause.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (file path, size, ...).

    Example:
        try:
            service.recognize_file(path)
        except SongRecognizerError as e:
            logger.error(f"Recognition failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description shown to the user.
            details: Optional dictionary containing additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(SongRecognizerError):
    """
    Raised when the configuration cannot be loaded, saved or validated.

    This is a CRITICAL error that should stop the current command.

    Common causes:
        - config.yaml has invalid YAML syntax
        - target_language is not a supported language code
        - Provider order lists an unknown provider name

    Example:
        raise ConfigError(
            "Unknown recognition provider 'acrcloud'",
            details={'section': 'recognition', 'key': 'providers'}
        )
    """
    pass


class AudioInputError(SongRecognizerError):
    """
    Raised when the audio handed to the service cannot be used.

    Common causes:
        - File missing, empty or larger than the configured limit
        - Extension not in the allowed list
        - Microphone payload is not valid base64

    Example:
        raise AudioInputError(
            "Invalid file format. Allowed formats: .mp3, .wav",
            details={'file_path': '/tmp/sample.txt', 'extension': '.txt'}
        )
    """
    pass
