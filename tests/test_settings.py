# tests/test_settings.py
"""Test configuration loading and validation"""

import pytest
import yaml

from song_recognizer.config.settings import Settings, is_configured
from song_recognizer.exceptions import ConfigError


class TestSettings:
    """Test Settings"""

    def test_defaults(self):
        settings = Settings(load_sources=False)

        assert settings.recognition.providers == ["audd", "shazam"]
        assert settings.recognition.timeout == 30
        assert settings.lyrics.providers == ["lyrics_ovh", "lrclib", "chartlyrics"]
        assert settings.translation.target_language == "es"
        assert settings.translation.max_chunk_size == 400
        assert settings.validate()

    def test_yaml_file_overrides_defaults(self, temp_dir, monkeypatch):
        for var in ('AUDD_API_KEY', 'RAPIDAPI_KEY', 'SONG_RECOGNIZER_TARGET_LANGUAGE'):
            monkeypatch.delenv(var, raising=False)
        config_file = temp_dir / "config.yaml"
        config_file.write_text(yaml.dump({
            'recognition': {'providers': ["shazam"], 'unknown_key': 1},
            'translation': {'target_language': "fr"},
        }))

        settings = Settings(str(config_file))

        assert settings.recognition.providers == ["shazam"]
        assert settings.translation.target_language == "fr"
        assert not hasattr(settings.recognition, 'unknown_key')

    def test_environment_overrides_file(self, temp_dir, monkeypatch):
        config_file = temp_dir / "config.yaml"
        config_file.write_text(yaml.dump({'recognition': {'audd_api_key': "from-file"}}))
        monkeypatch.setenv('AUDD_API_KEY', "from-env")

        settings = Settings(str(config_file))

        assert settings.recognition.audd_api_key == "from-env"

    def test_missing_explicit_file(self, temp_dir):
        with pytest.raises(ConfigError):
            Settings(str(temp_dir / "nope.yaml"))

    def test_invalid_yaml(self, temp_dir):
        config_file = temp_dir / "config.yaml"
        config_file.write_text("recognition: [unclosed")
        with pytest.raises(ConfigError):
            Settings(str(config_file))

    def test_validation_errors(self):
        settings = Settings(load_sources=False)
        settings.recognition.providers = ["audd", "acrcloud"]
        settings.translation.target_language = "it"
        settings.translation.max_chunk_size = 0
        settings.links.amazon_search_template = "https://example.com"

        errors = settings.get_validation_errors()

        assert "Invalid recognition provider: acrcloud" in errors
        assert "Invalid target language: it" in errors
        assert len(errors) == 4
        assert not settings.validate()

    def test_save_config_strips_secrets(self, temp_dir):
        settings = Settings(load_sources=False)
        settings.recognition.audd_api_key = "secret"
        settings.translation.target_language = "de"

        path = settings.save_config(str(temp_dir / "out" / "config.yaml"))
        saved = yaml.safe_load(path.read_text())

        assert saved['recognition']['audd_api_key'] == ""
        assert saved['translation']['target_language'] == "de"


class TestIsConfigured:
    """Test credential presence check"""

    def test_values(self):
        assert is_configured("abc123")
        assert not is_configured("")
        assert not is_configured("   ")
        assert not is_configured(None)
        assert not is_configured("YOUR_AUDD_API_KEY_HERE")
