# song_recognizer/recognition/__init__.py
"""
Song recognition package

Key components:
- RecognitionAggregator: Ordered provider fallback returning a SongRecord or None
- AudDRecognizer: Primary provider (api.audd.io)
- ShazamRecognizer: Fallback provider (Shazam via RapidAPI)

Usage:
    aggregator = get_recognition_aggregator()
    song = aggregator.recognize(audio_bytes)
"""

from .aggregator import (
    get_recognition_aggregator,
    reset_recognition_aggregator,
    RecognitionAggregator
)
from .base import BaseRecognizer
from .audd import AudDRecognizer, parse_audd_response
from .shazam import ShazamRecognizer, parse_shazam_response

__all__ = [
    'get_recognition_aggregator',
    'reset_recognition_aggregator',
    'RecognitionAggregator',
    'BaseRecognizer',
    'AudDRecognizer',
    'ShazamRecognizer',
    'parse_audd_response',
    'parse_shazam_response',
]
