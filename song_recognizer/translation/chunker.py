"""
Line-respecting text chunker

Translation services cap the amount of text accepted by a single request.
Lyrics are therefore split into chunks that never cut a line in half: lines
are accumulated greedily until the next one would push the chunk over the
limit.
"""

from typing import List


def chunk_text(text: str, max_size: int) -> List[str]:
    """
    Split text into size-bounded chunks along line breaks

    Lines are joined with "\\n" inside a chunk. When adding the next line plus
    its separator would exceed max_size, the current chunk is flushed
    (trimmed) and the line starts a new chunk. A single line longer than
    max_size becomes a chunk on its own and is not split further.

    Args:
        text: Text to split
        max_size: Maximum chunk length in characters

    Returns:
        Ordered list of non-empty chunks. Joining them with "\\n" reproduces
        the original line sequence, surrounding whitespace aside.

    Raises:
        ValueError: If max_size is not positive
    """
    if max_size <= 0:
        raise ValueError(f"max_size must be positive, got {max_size}")

    if not text:
        return []

    chunks: List[str] = []
    current: List[str] = []
    current_length = 0

    for line in text.replace('\r\n', '\n').split('\n'):
        if current and current_length + 1 + len(line) > max_size:
            _flush(current, chunks)
            current = []
            current_length = 0

        if current:
            current_length += 1 + len(line)
        else:
            current_length = len(line)
        current.append(line)

    _flush(current, chunks)

    return chunks


def _flush(lines: List[str], chunks: List[str]) -> None:
    chunk = '\n'.join(lines).strip()
    if chunk:
        chunks.append(chunk)
