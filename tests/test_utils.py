# tests/test_utils.py
"""Test utilities and helpers"""

import base64
import logging

import pytest

from song_recognizer.exceptions import AudioInputError
from song_recognizer.utils.helpers import (
    clean_search_term,
    strip_lrc_timestamps,
    decode_html_entities,
    clean_lyrics_text,
    truncate_string
)
from song_recognizer.utils.logger import OperationLogger, get_logger, parse_size
from song_recognizer.utils.validation import (
    validate_audio_file,
    validate_language_code,
    decode_audio_data_url
)


class TestHelpers:
    """Test helper functions"""

    def test_clean_search_term(self):
        """Test title/artist cleaning"""
        assert clean_search_term("Song (Live) [Remastered]") == "Song"
        assert clean_search_term("Artist feat. Other") == "Artist"
        assert clean_search_term("Artist ft. Other") == "Artist"
        assert clean_search_term("Artist featuring Other & Friend") == "Artist"
        assert clean_search_term("  Too    many   spaces ") == "Too many spaces"
        assert clean_search_term("(Intro)") == ""
        assert clean_search_term(None) == ""

    def test_clean_search_term_keeps_words_containing_ft(self):
        """Only a standalone featuring credit is removed"""
        assert clean_search_term("Daft Punk") == "Daft Punk"
        assert clean_search_term("Left Behind") == "Left Behind"

    def test_strip_lrc_timestamps(self):
        """Test LRC tag removal"""
        lrc = "[ti:Yesterday]\n[00:01.50]Yesterday\n[00:05.123] All my troubles\n[01:02]"
        assert strip_lrc_timestamps(lrc) == "Yesterday\nAll my troubles"

    def test_decode_html_entities(self):
        """Test single and double encoded entities"""
        assert decode_html_entities("Rock &amp; Roll") == "Rock & Roll"
        assert decode_html_entities("I&amp;#39;m") == "I'm"

    def test_clean_lyrics_text(self):
        """Test line trimming and blank line squeezing"""
        raw = "  first line \r\n\r\n\r\n second line\n\n\nthird  "
        assert clean_lyrics_text(raw) == "first line\n\nsecond line\n\nthird"
        assert clean_lyrics_text(None) == ""

    def test_truncate_string(self):
        """Test string truncation"""
        assert truncate_string("short", 10) == "short"
        assert truncate_string("a long sentence", 8) == "a lon..."


class TestValidation:
    """Test input validation"""

    def test_valid_audio_file(self, temp_dir):
        path = temp_dir / "clip.MP3"
        path.write_bytes(b"audio")
        assert validate_audio_file(str(path), [".mp3"], 10) == (True, None)

    def test_invalid_audio_files(self, temp_dir):
        text_file = temp_dir / "notes.txt"
        text_file.write_text("text")
        empty_file = temp_dir / "empty.wav"
        empty_file.write_bytes(b"")
        big_file = temp_dir / "big.wav"
        big_file.write_bytes(b"x" * (1024 * 1024 + 1))

        assert validate_audio_file(str(temp_dir / "missing.mp3"), [".mp3"], 10)[1].startswith("File not found")
        assert validate_audio_file(str(text_file), [".mp3", ".wav"], 10)[1] == \
            "Invalid file format. Allowed formats: .mp3, .wav"
        assert validate_audio_file(str(empty_file), [".wav"], 10)[1] == "Audio file is empty"
        assert validate_audio_file(str(big_file), [".wav"], 1)[1] == "File is too large. Maximum size: 1MB"

    def test_validate_language_code(self):
        assert validate_language_code("ES")[0]
        assert not validate_language_code("it")[0]

    def test_decode_audio_data_url(self):
        encoded = base64.b64encode(b"wav-bytes").decode('ascii')
        assert decode_audio_data_url(f"data:audio/wav;base64,{encoded}") == b"wav-bytes"
        assert decode_audio_data_url(encoded) == b"wav-bytes"

    def test_decode_audio_data_url_errors(self):
        with pytest.raises(AudioInputError):
            decode_audio_data_url("")
        with pytest.raises(AudioInputError):
            decode_audio_data_url("data:audio/wav;base64,@@@")


class TestLogger:
    """Test logging helpers"""

    def test_parse_size(self):
        assert parse_size("10MB") == 10 * 1024 * 1024
        assert parse_size("512KB") == 512 * 1024

    def test_operation_logger(self, caplog):
        logger = get_logger("song_recognizer.tests")
        with caplog.at_level(logging.INFO, logger="song_recognizer.tests"):
            operation = OperationLogger(logger, "Song Recognition")
            operation.start()
            operation.complete("found")

        messages = [record.getMessage() for record in caplog.records]
        assert "Operation started: Song Recognition" in messages
        assert any(message.startswith("Operation completed: Song Recognition") for message in messages)
