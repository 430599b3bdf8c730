"""
Derived commerce links for recognized songs

The Amazon link is never reported by a recognition provider; it is built
locally from the song metadata as a marketplace search URL.
"""

from typing import Optional
from urllib.parse import quote

DEFAULT_AMAZON_TEMPLATE = "https://www.amazon.com/s?k={query}&i=popular"


def build_amazon_search_url(
    artist: str,
    album: Optional[str] = None,
    title: Optional[str] = None,
    template: str = DEFAULT_AMAZON_TEMPLATE
) -> Optional[str]:
    """
    Build a marketplace search URL for a song

    The query is "<artist> <album>", or "<artist> <title>" when the album is
    unknown, percent-escaped as a whole so that spaces and punctuation such as
    "!" are encoded.

    Args:
        artist: Artist name
        album: Album name, preferred search term
        title: Song title, used when album is empty
        template: URL template with a {query} placeholder

    Returns:
        Search URL, or None when artist is empty

    Example:
        >>> build_amazon_search_url("The Beatles", "Help!", "Yesterday")
        'https://www.amazon.com/s?k=The%20Beatles%20Help%21&i=popular'
    """
    if not artist or not artist.strip():
        return None

    term = album or title or ""
    query = f"{artist} {term}".strip()
    return template.format(query=quote(query, safe=""))
