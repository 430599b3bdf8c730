"""
Data models for song recognition, lyrics lookup and provider results

This module defines the data structures shared by every part of Song-Recognizer.
It is the single vocabulary spoken between the recognition providers, the lyrics
providers, the translation client and the request orchestrator.

Architecture Overview:

1. **Enum Layer**: Identification of providers, languages and miss reasons
   - RecognitionSource: Which recognition service produced a result
   - LyricsSource: Which lyrics service produced a result
   - LanguageCode: Languages the lyrics language detector can recognize
   - MissReason: Why a provider call produced no usable result

2. **Song Layer**: The canonical recognition result
   - PartialSongFields: Output of a provider-specific parse step (all optional)
   - SongRecord: Normalized song, only built when title and artist are present

3. **Result Layer**: Explicit success/miss values returned by providers
   - RecognitionResult: One recognition provider attempt
   - LyricsSearchResult: One lyrics provider attempt
   - RecognitionResponse: success/message/data envelope for the hosting layer

Design Notes:

Provider misses are values, not exceptions. Every provider call returns a result
dataclass carrying either the payload or a MissReason, and the aggregators walk
an ordered provider list until the first success. Nothing here is persisted;
every instance lives for a single orchestration call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class RecognitionSource(Enum):
    """
    Enumeration of supported song recognition services

    Values:
        AUDD: AudD music recognition API (base64 audio in a multipart text field)
        SHAZAM: Shazam through RapidAPI (raw audio in a multipart file field)
    """
    AUDD = "audd"
    SHAZAM = "shazam"


class LyricsSource(Enum):
    """
    Enumeration of supported lyrics provider services

    Provider Characteristics:
    - LYRICS_OVH: Plain text lyrics in a flat JSON object
    - LRCLIB: Plain and time-synchronized (LRC) lyrics
    - CHARTLYRICS: XML web service with HTML-encoded lyrics
    """
    LYRICS_OVH = "lyrics_ovh"
    LRCLIB = "lrclib"
    CHARTLYRICS = "chartlyrics"


class LanguageCode(Enum):
    """
    Languages recognized by the lyrics language detector

    Declaration order matters: it is the tie-break order used when two
    languages reach the same stop-word count (es, en, de, fr).
    """
    ES = "es"
    EN = "en"
    DE = "de"
    FR = "fr"

    @property
    def display_name(self) -> str:
        """Human readable language name used in bilingual lyrics headers"""
        return _LANGUAGE_NAMES[self]

    @classmethod
    def from_value(cls, value: str) -> 'LanguageCode':
        """
        Resolve a language code string such as "es" or "EN"

        Raises:
            ValueError: If the code is not one of the supported languages
        """
        return cls(value.strip().lower())


_LANGUAGE_NAMES = {
    LanguageCode.ES: "Spanish",
    LanguageCode.EN: "English",
    LanguageCode.DE: "German",
    LanguageCode.FR: "French",
}


class MissReason(Enum):
    """
    Reasons a provider call finished without a usable result

    Every value is non-fatal. The aggregators log the reason and move on to
    the next provider in priority order.

    Values:
        UNCONFIGURED: Required credential absent or still a placeholder
        BAD_STATUS: Provider answered with a non-2xx HTTP status
        TRANSPORT_ERROR: Timeout, DNS or connection failure
        MALFORMED_BODY: Body could not be parsed as JSON / XML
        NO_MATCH: Provider answered but found nothing
        INCOMPLETE: Match found but title or artist missing
        EMPTY: Provider returned an empty or instrumental lyrics body
    """
    UNCONFIGURED = "unconfigured"
    BAD_STATUS = "bad_status"
    TRANSPORT_ERROR = "transport_error"
    MALFORMED_BODY = "malformed_body"
    NO_MATCH = "no_match"
    INCOMPLETE = "incomplete"
    EMPTY = "empty"


def _clean_field(value: Any) -> Optional[str]:
    """Coerce a raw JSON scalar to a stripped string, None when blank or not a scalar"""
    # bool is an int subclass but never a meaningful field value
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    text = str(value).strip()
    return text or None


@dataclass
class SongRecord:
    """
    Canonical normalized song produced by the recognition aggregator

    Independent of which provider recognized the audio. The request
    orchestrator attaches lyrics and the derived Amazon link afterwards;
    no other component changes a record once it is built.

    Attributes:
        title: Song title (required, non-empty)
        artist: Artist name (required, non-empty)
        album: Album name when the provider reports one
        release_date: Provider-formatted release date, kept as an opaque string
        label: Record label
        cover_art_url: Album artwork URL
        spotify_url: Spotify track link
        apple_music_url: Apple Music track link
        amazon_url: Marketplace search link, derived locally, never from a provider
        lyrics: Lyrics text, possibly a bilingual original + translation block
        source: Recognition provider that produced the record
    """
    title: str
    artist: str
    album: Optional[str] = None
    release_date: Optional[str] = None
    label: Optional[str] = None
    cover_art_url: Optional[str] = None
    spotify_url: Optional[str] = None
    apple_music_url: Optional[str] = None
    amazon_url: Optional[str] = None
    lyrics: Optional[str] = None
    source: Optional[RecognitionSource] = None

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValueError("SongRecord requires a non-empty title")
        if not self.artist or not self.artist.strip():
            raise ValueError("SongRecord requires a non-empty artist")

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the JSON shape exposed by the hosting layer

        Keys use camelCase so the output matches what the web and mobile
        clients of the recognition API already consume.
        """
        return {
            'title': self.title,
            'artist': self.artist,
            'album': self.album,
            'releaseDate': self.release_date,
            'label': self.label,
            'coverArtUrl': self.cover_art_url,
            'spotifyUrl': self.spotify_url,
            'appleMusicUrl': self.apple_music_url,
            'amazonUrl': self.amazon_url,
            'lyrics': self.lyrics,
            'source': self.source.value if self.source else None,
        }

    def __str__(self) -> str:
        return f"{self.artist} - {self.title}"


@dataclass
class PartialSongFields:
    """
    Fields extracted from one provider response before validation

    Each provider has a small pure parse function returning an instance of
    this class (or None when the response holds no match at all). The
    aggregator then checks is_complete before building a SongRecord, so a
    response lacking title or artist becomes a miss rather than a partial record.
    """
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    release_date: Optional[str] = None
    label: Optional[str] = None
    cover_art_url: Optional[str] = None
    spotify_url: Optional[str] = None
    apple_music_url: Optional[str] = None

    def __post_init__(self):
        for name in ('title', 'artist', 'album', 'release_date', 'label',
                     'cover_art_url', 'spotify_url', 'apple_music_url'):
            setattr(self, name, _clean_field(getattr(self, name)))

    @property
    def is_complete(self) -> bool:
        """True when both required fields are present"""
        return bool(self.title and self.artist)

    def to_song_record(self, source: Optional[RecognitionSource] = None) -> SongRecord:
        """
        Build the canonical record

        Raises:
            ValueError: If title or artist is missing (check is_complete first)
        """
        return SongRecord(
            title=self.title or "",
            artist=self.artist or "",
            album=self.album,
            release_date=self.release_date,
            label=self.label,
            cover_art_url=self.cover_art_url,
            spotify_url=self.spotify_url,
            apple_music_url=self.apple_music_url,
            source=source,
        )


@dataclass
class RecognitionResult:
    """
    Outcome of a single recognition provider attempt

    Exactly one of song / miss is set. error_message carries diagnostic
    detail for the log (HTTP status, exception text) and is never shown
    to end users.
    """
    source: RecognitionSource
    song: Optional[SongRecord] = None
    miss: Optional[MissReason] = None
    error_message: Optional[str] = None
    search_time: Optional[float] = None

    @property
    def success(self) -> bool:
        return self.song is not None

    @classmethod
    def missed(
        cls,
        source: RecognitionSource,
        reason: MissReason,
        error_message: Optional[str] = None
    ) -> 'RecognitionResult':
        return cls(source=source, miss=reason, error_message=error_message)


@dataclass
class LyricsSearchResult:
    """
    Outcome of a single lyrics provider attempt

    Attributes:
        source: Provider queried
        lyrics: Plain lyrics text (timestamps and markup already removed)
        miss: Reason no lyrics were produced
        error_message: Diagnostic detail for failed searches
        search_time: Seconds spent on the request
    """
    source: LyricsSource
    lyrics: Optional[str] = None
    miss: Optional[MissReason] = None
    error_message: Optional[str] = None
    search_time: Optional[float] = None

    @property
    def success(self) -> bool:
        return bool(self.lyrics)

    @classmethod
    def missed(
        cls,
        source: LyricsSource,
        reason: MissReason,
        error_message: Optional[str] = None
    ) -> 'LyricsSearchResult':
        return cls(source=source, miss=reason, error_message=error_message)


@dataclass
class RecognitionResponse:
    """
    success / message / data envelope returned to callers of the service

    Mirrors the response body of the public recognition endpoint so CLI
    JSON output and API output stay interchangeable.
    """
    success: bool
    message: str
    data: Optional[SongRecord] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'message': self.message,
            'data': self.data.to_dict() if self.data else None,
        }
