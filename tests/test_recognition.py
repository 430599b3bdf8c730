# tests/test_recognition.py
"""Test recognition providers and the fallback aggregator"""

import base64
from unittest.mock import Mock

import requests

from song_recognizer.models import MissReason, RecognitionResult, RecognitionSource, SongRecord
from song_recognizer.recognition.aggregator import RecognitionAggregator
from song_recognizer.recognition.audd import AudDRecognizer, parse_audd_response
from song_recognizer.recognition.shazam import ShazamRecognizer, parse_shazam_response


AUDIO = b"RIFF fake audio bytes"


def _provider(source, song=None, miss=MissReason.NO_MATCH):
    provider = Mock()
    provider.source = source
    if song:
        provider.recognize.return_value = RecognitionResult(source=source, song=song)
    else:
        provider.recognize.return_value = RecognitionResult.missed(source, miss)
    return provider


class TestParseAuddResponse:
    """Test parse_audd_response"""

    def test_full_match(self, audd_payload):
        fields = parse_audd_response(audd_payload)

        assert fields.is_complete
        assert fields.title == "Yesterday"
        assert fields.artist == "The Beatles"
        assert fields.album == "Help!"
        assert fields.release_date == "1965-08-06"
        assert fields.label == "Parlophone"
        assert fields.spotify_url == "https://open.spotify.com/track/3BQHpFgAp4l80e1XslIjNI"
        assert fields.apple_music_url.startswith("https://music.apple.com/")

    def test_cover_art_from_spotify_first(self, audd_payload):
        audd_payload['result']['spotify']['album']['images'] = [
            {'url': "https://i.scdn.co/image/large", 'height': 640},
            {'url': "https://i.scdn.co/image/small", 'height': 64},
        ]
        assert parse_audd_response(audd_payload).cover_art_url == "https://i.scdn.co/image/large"

    def test_cover_art_falls_back_to_apple_artwork(self, audd_payload):
        """Without Spotify images the Apple Music artwork template is sized"""
        fields = parse_audd_response(audd_payload, artwork_size=600)
        assert fields.cover_art_url == "https://is1-ssl.mzstatic.com/image/600x600bb.jpg"

    def test_no_match(self):
        assert parse_audd_response({'status': 'success', 'result': None}) is None
        assert parse_audd_response({'status': 'error', 'error': {'error_code': 900}}) is None

    def test_missing_artist_is_incomplete(self):
        fields = parse_audd_response({'status': 'success', 'result': {'title': "Song", 'artist': "  "}})
        assert not fields.is_complete

    def test_non_string_title_and_artist_are_incomplete(self):
        fields = parse_audd_response({'status': 'success', 'result': {'title': {'x': 1}, 'artist': ['a']}})

        assert not fields.is_complete
        assert fields.title is None
        assert fields.artist is None


class TestParseShazamResponse:
    """Test parse_shazam_response"""

    def test_full_match(self, shazam_payload):
        fields = parse_shazam_response(shazam_payload)

        assert fields.title == "Yesterday"
        assert fields.artist == "The Beatles"
        assert fields.album == "Help!"
        assert fields.label == "Parlophone"
        assert fields.release_date == "1965"
        assert fields.cover_art_url == "https://is1-ssl.mzstatic.com/cover/400x400cc.jpg"
        assert fields.apple_music_url == "https://music.apple.com/track/1441164430"
        assert fields.spotify_url is None

    def test_cover_art_hq_fallback(self, shazam_payload):
        del shazam_payload['track']['images']['coverart']
        fields = parse_shazam_response(shazam_payload)
        assert fields.cover_art_url == "https://is1-ssl.mzstatic.com/cover/hq.jpg"

    def test_spotify_action(self, shazam_payload):
        shazam_payload['track']['hub']['actions'].append({'uri': "spotify:search:yesterday"})
        assert parse_shazam_response(shazam_payload).spotify_url == "spotify:search:yesterday"

    def test_no_track(self):
        assert parse_shazam_response({'matches': []}) is None

    def test_non_string_title_and_artist_are_incomplete(self):
        fields = parse_shazam_response({'track': {'title': ['Yesterday'], 'subtitle': {'name': "The Beatles"}}})
        assert not fields.is_complete


class TestRecognizers:
    """Test provider request encoding and miss handling"""

    def test_audd_request(self, settings, mock_session, response_factory, audd_payload):
        """AudD receives base64 audio in plain multipart fields"""
        mock_session.post.return_value = response_factory(json_data=audd_payload)

        result = AudDRecognizer(settings=settings, session=mock_session).recognize(AUDIO)

        assert result.success
        assert result.song.source == RecognitionSource.AUDD
        args, kwargs = mock_session.post.call_args
        assert args[0] == "https://api.audd.io/"
        assert kwargs['files']['api_token'] == (None, "test-audd-key")
        assert kwargs['files']['audio'] == (None, base64.b64encode(AUDIO).decode('ascii'))
        assert kwargs['files']['return'] == (None, "apple_music,spotify")
        assert kwargs['timeout'] == 30

    def test_shazam_request(self, settings, mock_session, response_factory, shazam_payload):
        """Shazam receives raw audio as a file part with RapidAPI headers"""
        mock_session.post.return_value = response_factory(json_data=shazam_payload)

        result = ShazamRecognizer(settings=settings, session=mock_session).recognize(AUDIO)

        assert result.success
        args, kwargs = mock_session.post.call_args
        assert args[0] == "https://shazam.p.rapidapi.com/songs/v2/detect"
        assert kwargs['files'] == {'upload_file': ('audio.mp3', AUDIO)}
        assert kwargs['headers']['X-RapidAPI-Key'] == "test-rapidapi-key"
        assert kwargs['headers']['X-RapidAPI-Host'] == "shazam.p.rapidapi.com"

    def test_unconfigured_key_skips_request(self, settings, mock_session):
        settings.recognition.audd_api_key = "YOUR_AUDD_API_KEY_HERE"

        result = AudDRecognizer(settings=settings, session=mock_session).recognize(AUDIO)

        assert result.miss == MissReason.UNCONFIGURED
        mock_session.post.assert_not_called()

    def test_bad_status(self, settings, mock_session, response_factory):
        mock_session.post.return_value = response_factory(status_code=401)
        result = ShazamRecognizer(settings=settings, session=mock_session).recognize(AUDIO)
        assert result.miss == MissReason.BAD_STATUS

    def test_transport_error(self, settings, mock_session):
        mock_session.post.side_effect = requests.ConnectionError("refused")
        result = AudDRecognizer(settings=settings, session=mock_session).recognize(AUDIO)
        assert result.miss == MissReason.TRANSPORT_ERROR

    def test_malformed_body(self, settings, mock_session, response_factory):
        mock_session.post.return_value = response_factory(json_error=True)
        result = AudDRecognizer(settings=settings, session=mock_session).recognize(AUDIO)
        assert result.miss == MissReason.MALFORMED_BODY

    def test_incomplete_match(self, settings, mock_session, response_factory):
        mock_session.post.return_value = response_factory(json_data={'track': {'title': "Only title"}})
        result = ShazamRecognizer(settings=settings, session=mock_session).recognize(AUDIO)
        assert result.miss == MissReason.INCOMPLETE

    def test_non_string_fields_never_become_a_song(self, settings, mock_session, response_factory):
        mock_session.post.return_value = response_factory(json_data={
            'status': 'success',
            'result': {'title': {'x': 1}, 'artist': ['a']},
        })
        result = AudDRecognizer(settings=settings, session=mock_session).recognize(AUDIO)

        assert result.miss == MissReason.INCOMPLETE
        assert result.song is None
        assert result.song is None


class TestRecognitionAggregator:
    """Test ordered fallback"""

    def test_primary_success_short_circuits(self, settings):
        song = SongRecord(title="Yesterday", artist="The Beatles")
        primary = _provider(RecognitionSource.AUDD, song=song)
        secondary = _provider(RecognitionSource.SHAZAM, song=SongRecord(title="Other", artist="Other"))
        aggregator = RecognitionAggregator(settings=settings, providers=[primary, secondary])

        assert aggregator.recognize(AUDIO) is song
        secondary.recognize.assert_not_called()

    def test_secondary_used_after_primary_miss(self, settings):
        song = SongRecord(title="Yesterday", artist="The Beatles", source=RecognitionSource.SHAZAM)
        for reason in MissReason:
            primary = _provider(RecognitionSource.AUDD, miss=reason)
            secondary = _provider(RecognitionSource.SHAZAM, song=song)
            aggregator = RecognitionAggregator(settings=settings, providers=[primary, secondary])

            assert aggregator.recognize(AUDIO) is song

    def test_both_miss_returns_none(self, settings):
        primary = _provider(RecognitionSource.AUDD, miss=MissReason.BAD_STATUS)
        secondary = _provider(RecognitionSource.SHAZAM, miss=MissReason.TRANSPORT_ERROR)
        aggregator = RecognitionAggregator(settings=settings, providers=[primary, secondary])

        assert aggregator.recognize(AUDIO) is None
        assert aggregator.stats['failed_recognitions'] == 1

    def test_provider_exception_is_absorbed(self, settings):
        primary = _provider(RecognitionSource.AUDD)
        primary.recognize.side_effect = KeyError("unexpected")
        song = SongRecord(title="Yesterday", artist="The Beatles")
        secondary = _provider(RecognitionSource.SHAZAM, song=song)
        aggregator = RecognitionAggregator(settings=settings, providers=[primary, secondary])

        assert aggregator.recognize(AUDIO) is song

    def test_end_to_end_with_http_fallback(self, settings, mock_session, response_factory, shazam_payload):
        """AudD answers 500, Shazam's normalized song is returned"""
        mock_session.post.side_effect = [
            response_factory(status_code=500),
            response_factory(json_data=shazam_payload),
        ]
        aggregator = RecognitionAggregator(settings=settings, session=mock_session)

        song = aggregator.recognize(AUDIO)

        assert song.title == "Yesterday"
        assert song.source == RecognitionSource.SHAZAM
        assert mock_session.post.call_count == 2

    def test_recognize_stream(self, settings, temp_dir):
        song = SongRecord(title="Yesterday", artist="The Beatles")
        primary = _provider(RecognitionSource.AUDD, song=song)
        aggregator = RecognitionAggregator(settings=settings, providers=[primary])

        path = temp_dir / "sample.mp3"
        path.write_bytes(AUDIO)
        with open(path, 'rb') as f:
            assert aggregator.recognize_stream(f, "sample.mp3") is song

        primary.recognize.assert_called_once_with(AUDIO)
