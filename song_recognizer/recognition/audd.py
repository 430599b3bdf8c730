"""
AudD integration - primary song recognition provider

API Contract:
    POST https://api.audd.io/  (multipart/form-data)
        api_token = <key>
        audio     = <base64 of the raw sample>
        return    = apple_music,spotify
    -> {"status": "success", "result": {"title", "artist", "album",
        "release_date", "label", "apple_music": {...}, "spotify": {...}}}
    -> {"status": "success", "result": null} when nothing matched

All three parts are plain text fields, the audio included, which is why the
sample is base64 encoded instead of being sent as a file part.
"""

import base64
from typing import Any, Dict, Optional

import requests

from ..models import PartialSongFields, RecognitionSource
from .base import BaseRecognizer


DEFAULT_ARTWORK_SIZE = 600


def _first_image_url(spotify: Dict[str, Any]) -> Optional[str]:
    album = spotify.get('album')
    if not isinstance(album, dict):
        return None
    images = album.get('images')
    if not isinstance(images, list) or not images or not isinstance(images[0], dict):
        return None
    return images[0].get('url')


def _apple_artwork_url(apple_music: Dict[str, Any], size: int) -> Optional[str]:
    artwork = apple_music.get('artwork')
    if not isinstance(artwork, dict) or not isinstance(artwork.get('url'), str):
        return None
    return artwork['url'].replace('{w}', str(size)).replace('{h}', str(size))


def parse_audd_response(
    payload: Any,
    artwork_size: int = DEFAULT_ARTWORK_SIZE
) -> Optional[PartialSongFields]:
    """
    Extract song fields from an AudD JSON body

    Cover art comes from the first Spotify album image; when Spotify has
    none, the Apple Music artwork template is sized to ``artwork_size``.

    Args:
        payload: Decoded JSON body
        artwork_size: Pixel size substituted into Apple Music artwork templates

    Returns:
        Parsed fields (possibly incomplete), or None when AudD found no match
    """
    if not isinstance(payload, dict) or payload.get('status') != 'success':
        return None

    result = payload.get('result')
    if not isinstance(result, dict):
        return None

    apple_music = result.get('apple_music')
    if not isinstance(apple_music, dict):
        apple_music = {}

    spotify = result.get('spotify')
    if not isinstance(spotify, dict):
        spotify = {}

    external_urls = spotify.get('external_urls')
    spotify_url = external_urls.get('spotify') if isinstance(external_urls, dict) else None

    return PartialSongFields(
        title=result.get('title'),
        artist=result.get('artist'),
        album=result.get('album'),
        release_date=result.get('release_date'),
        label=result.get('label'),
        cover_art_url=_first_image_url(spotify) or _apple_artwork_url(apple_music, artwork_size),
        spotify_url=spotify_url,
        apple_music_url=apple_music.get('url'),
    )


class AudDRecognizer(BaseRecognizer):
    """Recognition provider backed by api.audd.io"""

    source = RecognitionSource.AUDD

    @property
    def api_key(self) -> str:
        return self.settings.recognition.audd_api_key

    def _send(self, audio_bytes: bytes) -> requests.Response:
        config = self.settings.recognition
        encoded = base64.b64encode(audio_bytes).decode('ascii')

        # (None, value) tuples make requests emit plain multipart text fields
        return self.session.post(
            config.audd_url,
            files={
                'api_token': (None, self.api_key),
                'audio': (None, encoded),
                'return': (None, config.audd_return),
            },
            headers={'User-Agent': self.settings.network.user_agent},
            timeout=config.timeout
        )

    def _parse(self, payload: Dict[str, Any]) -> Optional[PartialSongFields]:
        return parse_audd_response(payload, self.settings.recognition.artwork_size)
