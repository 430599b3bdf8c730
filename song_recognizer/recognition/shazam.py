"""
Shazam integration through RapidAPI - fallback song recognition provider

API Contract:
    POST https://shazam.p.rapidapi.com/songs/v2/detect  (multipart/form-data)
        upload_file = <raw sample, filename audio.mp3>
        headers X-RapidAPI-Key, X-RapidAPI-Host
    -> {"track": {"title", "subtitle", "images": {...}, "hub": {"actions": [...]},
        "sections": [{"metadata": [{"title": "Album", "text": "..."}]}]}}
    -> {"matches": []} without "track" when nothing matched

Shazam calls the artist "subtitle". Album, release year and label are not
top-level fields; they only appear as titled entries in the song section
metadata.
"""

from typing import Any, Dict, Optional

import requests

from ..models import PartialSongFields, RecognitionSource
from .base import BaseRecognizer


_METADATA_FIELDS = {
    'Album': 'album',
    'Released': 'release_date',
    'Label': 'label',
}


def _section_metadata(track: Dict[str, Any]) -> Dict[str, str]:
    """Collect Album / Released / Label entries from track sections"""
    found: Dict[str, str] = {}
    sections = track.get('sections')
    if not isinstance(sections, list):
        return found

    for section in sections:
        if not isinstance(section, dict) or not isinstance(section.get('metadata'), list):
            continue
        for entry in section['metadata']:
            if not isinstance(entry, dict):
                continue
            name = _METADATA_FIELDS.get(entry.get('title'))
            if name and name not in found and entry.get('text'):
                found[name] = entry['text']

    return found


def _streaming_urls(track: Dict[str, Any]) -> Dict[str, str]:
    urls: Dict[str, str] = {}
    hub = track.get('hub')
    actions = hub.get('actions') if isinstance(hub, dict) else None
    if not isinstance(actions, list):
        return urls

    for action in actions:
        uri = action.get('uri') if isinstance(action, dict) else None
        if not isinstance(uri, str) or not uri:
            continue
        if 'spotify' in uri:
            urls['spotify_url'] = uri
        elif 'apple' in uri:
            urls['apple_music_url'] = uri

    return urls


def parse_shazam_response(payload: Any) -> Optional[PartialSongFields]:
    """
    Extract song fields from a Shazam detect JSON body

    Args:
        payload: Decoded JSON body

    Returns:
        Parsed fields (possibly incomplete), or None when Shazam found no track
    """
    if not isinstance(payload, dict):
        return None

    track = payload.get('track')
    if not isinstance(track, dict):
        return None

    images = track.get('images')
    if not isinstance(images, dict):
        images = {}

    return PartialSongFields(
        title=track.get('title'),
        artist=track.get('subtitle'),
        cover_art_url=images.get('coverart') or images.get('coverarthq'),
        **_section_metadata(track),
        **_streaming_urls(track)
    )


class ShazamRecognizer(BaseRecognizer):
    """Recognition provider backed by the Shazam RapidAPI endpoint"""

    source = RecognitionSource.SHAZAM

    @property
    def api_key(self) -> str:
        return self.settings.recognition.rapidapi_key

    def _send(self, audio_bytes: bytes) -> requests.Response:
        config = self.settings.recognition
        return self.session.post(
            config.shazam_url,
            files={'upload_file': ('audio.mp3', audio_bytes)},
            headers={
                'X-RapidAPI-Key': self.api_key,
                'X-RapidAPI-Host': config.shazam_host,
                'User-Agent': self.settings.network.user_agent,
            },
            timeout=config.timeout
        )

    def _parse(self, payload: Dict[str, Any]) -> Optional[PartialSongFields]:
        return parse_shazam_response(payload)
