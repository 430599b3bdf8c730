# song_recognizer/utils/__init__.py
"""
Utilities package
Logging, text cleaning helpers and input validation
"""

from .logger import (
    get_logger,
    configure_from_settings,
    setup_logging,
    OperationLogger,
    log_performance,
    get_current_log_file,
    parse_size
)
from .helpers import (
    collapse_whitespace,
    clean_search_term,
    normalize_newlines,
    strip_lrc_timestamps,
    decode_html_entities,
    clean_lyrics_text,
    truncate_string
)
from .validation import (
    validate_audio_file,
    validate_language_code,
    decode_audio_data_url
)

__all__ = [
    # Logger exports
    'get_logger',
    'configure_from_settings',
    'setup_logging',
    'OperationLogger',
    'log_performance',
    'get_current_log_file',
    'parse_size',

    # Helper exports
    'collapse_whitespace',
    'clean_search_term',
    'normalize_newlines',
    'strip_lrc_timestamps',
    'decode_html_entities',
    'clean_lyrics_text',
    'truncate_string',

    # Validation exports
    'validate_audio_file',
    'validate_language_code',
    'decode_audio_data_url',
]
