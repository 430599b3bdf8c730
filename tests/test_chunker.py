# tests/test_chunker.py
"""Test line-respecting text chunker"""

import pytest

from song_recognizer.translation.chunker import chunk_text


def _lines_text(line_count=20, line_length=49):
    lines = [f"{index:02d}" + "x" * (line_length - 2) for index in range(line_count)]
    return '\n'.join(lines), lines


class TestChunkText:
    """Test chunk_text"""

    def test_no_chunk_exceeds_max_size(self):
        """1000 characters with a line break every ~50 characters"""
        text, _ = _lines_text()
        assert len(text) >= 999

        chunks = chunk_text(text, 400)

        assert len(chunks) > 1
        assert all(len(chunk) <= 400 for chunk in chunks)

    def test_rejoining_reproduces_lines(self):
        """Joining chunks with newlines gives back the original lines in order"""
        text, lines = _lines_text()
        chunks = chunk_text(text, 400)
        assert '\n'.join(chunks).split('\n') == lines

    def test_short_text_single_chunk(self):
        """Text under the limit stays one chunk"""
        assert chunk_text("one\ntwo\nthree", 400) == ["one\ntwo\nthree"]

    def test_long_single_line_not_split(self):
        """A line longer than max_size becomes its own chunk"""
        long_line = "a" * 50
        chunks = chunk_text(f"short\n{long_line}\nend", 20)
        assert chunks == ["short", long_line, "end"]

    def test_exact_fit(self):
        """Lines that fit exactly stay together"""
        assert chunk_text("abcd\nefgh", 9) == ["abcd\nefgh"]
        assert chunk_text("abcd\nefgh", 8) == ["abcd", "efgh"]

    def test_empty_text(self):
        """Empty text yields no chunks"""
        assert chunk_text("", 400) == []

    def test_invalid_max_size(self):
        """Non-positive max_size is rejected"""
        with pytest.raises(ValueError):
            chunk_text("text", 0)
