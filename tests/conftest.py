"""Test configuration and fixtures"""

import pytest
import tempfile
from pathlib import Path
from unittest.mock import Mock

import requests

from song_recognizer.config.settings import Settings


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def settings():
    """Settings built from defaults only, with provider keys set"""
    settings = Settings(load_sources=False)
    settings.recognition.audd_api_key = "test-audd-key"
    settings.recognition.rapidapi_key = "test-rapidapi-key"
    settings.translation.chunk_delay = 0
    return settings


def make_response(status_code=200, json_data=None, text="", json_error=False):
    """Build a Mock standing in for requests.Response"""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def response_factory():
    """Factory fixture for mock HTTP responses"""
    return make_response


@pytest.fixture
def mock_session():
    """Mock requests session; configure .get / .post per test"""
    return Mock(spec=requests.Session)


@pytest.fixture
def audd_payload():
    """Successful AudD response without Spotify artwork"""
    return {
        'status': 'success',
        'result': {
            'title': 'Yesterday',
            'artist': 'The Beatles',
            'album': 'Help!',
            'release_date': '1965-08-06',
            'label': 'Parlophone',
            'apple_music': {
                'url': 'https://music.apple.com/us/album/yesterday/1441164426?i=1441164430',
                'artwork': {'url': 'https://is1-ssl.mzstatic.com/image/{w}x{h}bb.jpg'},
            },
            'spotify': {
                'external_urls': {'spotify': 'https://open.spotify.com/track/3BQHpFgAp4l80e1XslIjNI'},
                'album': {'images': []},
            },
        }
    }


@pytest.fixture
def shazam_payload():
    """Successful Shazam detect response"""
    return {
        'matches': [{'id': '1'}],
        'track': {
            'title': 'Yesterday',
            'subtitle': 'The Beatles',
            'images': {
                'coverart': 'https://is1-ssl.mzstatic.com/cover/400x400cc.jpg',
                'coverarthq': 'https://is1-ssl.mzstatic.com/cover/hq.jpg',
            },
            'hub': {
                'actions': [
                    {'name': 'apple', 'uri': 'https://music.apple.com/track/1441164430'},
                ],
                'providers': [],
            },
            'sections': [
                {
                    'type': 'SONG',
                    'metadata': [
                        {'title': 'Album', 'text': 'Help!'},
                        {'title': 'Label', 'text': 'Parlophone'},
                        {'title': 'Released', 'text': '1965'},
                    ],
                },
                {'type': 'LYRICS', 'text': ['Yesterday']},
            ],
        }
    }


@pytest.fixture
def english_lyrics():
    """Short English lyrics body"""
    return (
        "Yesterday, all my troubles seemed so far away\n"
        "Now it looks as though they're here to stay\n"
        "Oh, I believe in yesterday"
    )
