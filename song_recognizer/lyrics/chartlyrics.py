"""
ChartLyrics integration - legacy XML lyrics web service

API Contract:
    GET {base}/apiv1.asmx/SearchLyricDirect?artist=<artist>&song=<title>
    -> 200 <GetLyricResult xmlns="http://api.chartlyrics.com/">
              ...
              <Lyric>...</Lyric>
           </GetLyricResult>

The Lyric element is frequently HTML-encoded on top of the XML escaping, so
entities are decoded after the XML has been parsed. An unknown song yields a
200 response with an empty Lyric element.
"""

import time
from typing import Optional
from xml.etree import ElementTree

from ..models import LyricsSearchResult, LyricsSource, MissReason
from ..utils.helpers import decode_html_entities
from .base import BaseLyricsProvider


def _local_name(tag: str) -> str:
    return tag.rsplit('}', 1)[-1]


def parse_chartlyrics_response(xml_text: str) -> Optional[str]:
    """
    Extract lyrics from a ChartLyrics XML body

    Args:
        xml_text: Raw response body

    Returns:
        Decoded lyrics text, or None when the Lyric element is absent or empty

    Raises:
        ElementTree.ParseError: If the body is not well-formed XML
    """
    root = ElementTree.fromstring(xml_text)

    for element in root.iter():
        if _local_name(element.tag) == 'Lyric':
            text = decode_html_entities(element.text or "")
            return text if text.strip() else None

    return None


class ChartLyricsProvider(BaseLyricsProvider):
    """Lyrics provider backed by api.chartlyrics.com"""

    source = LyricsSource.CHARTLYRICS

    def search_lyrics(self, artist: str, title: str) -> LyricsSearchResult:
        """
        Look up lyrics with the SearchLyricDirect operation

        Args:
            artist: Cleaned artist name
            title: Cleaned song title

        Returns:
            LyricsSearchResult with lyrics, or a miss
        """
        started = time.time()
        url = self.settings.lyrics.chartlyrics_url.rstrip('/') + '/apiv1.asmx/SearchLyricDirect'

        self.logger.debug(f"Searching ChartLyrics for: {artist} - {title}")
        response = self._fetch(
            url,
            self.settings.lyrics.chartlyrics_timeout,
            params={'artist': artist, 'song': title}
        )
        if isinstance(response, LyricsSearchResult):
            return response

        try:
            lyrics = parse_chartlyrics_response(response.text)
        except ElementTree.ParseError as e:
            return LyricsSearchResult.missed(self.source, MissReason.MALFORMED_BODY, str(e))

        return self._finish(lyrics, started)
