"""
Shared plumbing for lyrics providers

Every lyrics provider issues a single GET request, turns transport problems
and bad status codes into misses, and parses its own response shape. The
request part is identical across providers and lives here; parsing stays in
each provider module as a pure function.
"""

import time
from typing import Any, Dict, Optional, Union

import requests

from ..config.settings import Settings, get_settings
from ..models import LyricsSearchResult, LyricsSource, MissReason
from ..utils.helpers import clean_lyrics_text
from ..utils.logger import get_logger


class BaseLyricsProvider:
    """
    Base class for GET-based lyrics providers

    Subclasses set ``source`` and implement ``search_lyrics(artist, title)``
    on top of ``_fetch`` and ``_finish``.
    """

    source: LyricsSource

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.logger = get_logger(self.__class__.__module__)
        self.session = session or requests.Session()

    def _fetch(
        self,
        url: str,
        timeout: float,
        params: Optional[Dict[str, Any]] = None
    ) -> Union[requests.Response, LyricsSearchResult]:
        """
        Issue the GET request

        Returns:
            The response on a 2xx status, otherwise a LyricsSearchResult miss
        """
        try:
            response = self.session.get(
                url,
                params=params,
                timeout=timeout,
                headers={'User-Agent': self.settings.network.user_agent}
            )
        except requests.RequestException as e:
            self.logger.debug(f"{self.source.value} request failed: {e}")
            return LyricsSearchResult.missed(self.source, MissReason.TRANSPORT_ERROR, str(e))

        if response.status_code == 404:
            return LyricsSearchResult.missed(self.source, MissReason.NO_MATCH, "404 Not Found")

        if not response.ok:
            self.logger.debug(f"{self.source.value} responded with {response.status_code}")
            return LyricsSearchResult.missed(
                self.source, MissReason.BAD_STATUS, f"HTTP {response.status_code}"
            )

        return response

    def _finish(self, lyrics: Optional[str], started: float) -> LyricsSearchResult:
        """Wrap parsed lyrics into a result, treating blank text as a miss"""
        cleaned = clean_lyrics_text(lyrics)
        elapsed = time.time() - started
        if not cleaned:
            return LyricsSearchResult(source=self.source, miss=MissReason.EMPTY, search_time=elapsed)
        return LyricsSearchResult(source=self.source, lyrics=cleaned, search_time=elapsed)

    def search_lyrics(self, artist: str, title: str) -> LyricsSearchResult:
        raise NotImplementedError
