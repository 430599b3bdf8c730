"""
LRCLIB integration - open lyrics database with synchronized lyrics

API Contract:
    GET {base}/api/get?artist_name=<artist>&track_name=<title>
    -> 200 {"plainLyrics": "...", "syncedLyrics": "[00:12.34] ...", "instrumental": false}
    -> 404 when the track is unknown

Plain lyrics are preferred. When only synchronized lyrics exist, the LRC
timing tags are stripped so callers always receive plain text.
"""

import time
from typing import Any, Optional

from ..models import LyricsSearchResult, LyricsSource, MissReason
from ..utils.helpers import strip_lrc_timestamps
from .base import BaseLyricsProvider


def parse_lrclib_response(payload: Any) -> Optional[str]:
    """
    Extract plain lyrics from an LRCLIB JSON body

    Returns:
        Lyrics text, or None for instrumental tracks and empty bodies
    """
    if not isinstance(payload, dict) or payload.get('instrumental'):
        return None

    plain = payload.get('plainLyrics')
    if isinstance(plain, str) and plain.strip():
        return plain

    synced = payload.get('syncedLyrics')
    if isinstance(synced, str) and synced.strip():
        return strip_lrc_timestamps(synced) or None

    return None


class LrclibProvider(BaseLyricsProvider):
    """Lyrics provider backed by lrclib.net"""

    source = LyricsSource.LRCLIB

    def search_lyrics(self, artist: str, title: str) -> LyricsSearchResult:
        """
        Look up lyrics by artist and track name

        Args:
            artist: Cleaned artist name
            title: Cleaned song title

        Returns:
            LyricsSearchResult with lyrics, or a miss
        """
        started = time.time()
        url = self.settings.lyrics.lrclib_url.rstrip('/') + '/api/get'

        self.logger.debug(f"Searching LRCLIB for: {artist} - {title}")
        response = self._fetch(
            url,
            self.settings.lyrics.lrclib_timeout,
            params={'artist_name': artist, 'track_name': title}
        )
        if isinstance(response, LyricsSearchResult):
            return response

        try:
            payload = response.json()
        except ValueError:
            return LyricsSearchResult.missed(self.source, MissReason.MALFORMED_BODY, "Invalid JSON")

        return self._finish(parse_lrclib_response(payload), started)
