"""
lyrics.ovh integration - free plain text lyrics without API key

API Contract:
    GET {base}/v1/{artist}/{title}
    -> 200 {"lyrics": "..."}
    -> 404 {"error": "No lyrics found"}

Artist and title are path segments and must be fully percent-escaped.
The service sometimes prepends a French header line
("Paroles de la chanson X par Y") that is not part of the song.
"""

import re
import time
from typing import Any, Optional
from urllib.parse import quote

from ..models import LyricsSearchResult, LyricsSource, MissReason
from .base import BaseLyricsProvider


_HEADER_PATTERN = re.compile(r'^\s*Paroles de la chanson .+ par .+?(\r?\n|$)', re.IGNORECASE)


def parse_lyrics_ovh_response(payload: Any) -> Optional[str]:
    """
    Extract lyrics from a lyrics.ovh JSON body

    Returns:
        Lyrics text, or None when the body holds no lyrics
    """
    if not isinstance(payload, dict):
        return None

    lyrics = payload.get('lyrics')
    if not isinstance(lyrics, str) or not lyrics.strip():
        return None

    return _HEADER_PATTERN.sub('', lyrics, count=1)


class LyricsOvhProvider(BaseLyricsProvider):
    """Lyrics provider backed by api.lyrics.ovh"""

    source = LyricsSource.LYRICS_OVH

    def search_lyrics(self, artist: str, title: str) -> LyricsSearchResult:
        """
        Look up lyrics by exact artist and title

        Args:
            artist: Cleaned artist name
            title: Cleaned song title

        Returns:
            LyricsSearchResult with lyrics, or a miss
        """
        started = time.time()
        base = self.settings.lyrics.lyrics_ovh_url.rstrip('/')
        url = f"{base}/v1/{quote(artist, safe='')}/{quote(title, safe='')}"

        self.logger.debug(f"Searching lyrics.ovh for: {artist} - {title}")
        response = self._fetch(url, self.settings.lyrics.lyrics_ovh_timeout)
        if isinstance(response, LyricsSearchResult):
            return response

        try:
            payload = response.json()
        except ValueError:
            return LyricsSearchResult.missed(self.source, MissReason.MALFORMED_BODY, "Invalid JSON")

        return self._finish(parse_lyrics_ovh_response(payload), started)
