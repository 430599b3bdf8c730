"""
Configuration management for Song-Recognizer

Settings are read from a YAML file and from environment variables (a .env
file is honored through python-dotenv). Each YAML section maps onto one
dataclass:
- Recognition provider settings (credentials, provider order, timeouts)
- Lyrics provider settings (provider order, endpoints, timeouts)
- Translation settings (chunk size, throttling delay, target language)
- Derived link templates
- Upload limits for local audio files
- Logging and network configuration

All sensitive data (API keys) can be loaded from environment variables for
security, while non-sensitive settings can be stored in YAML files.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field, asdict
from dotenv import load_dotenv

from ..exceptions import ConfigError

load_dotenv()

# Placeholder values shipped in sample configuration files; treated as "not configured"
PLACEHOLDER_PREFIX = "YOUR_"

@dataclass
class RecognitionConfig:
    """
    Song recognition provider configuration

    Providers are tried in the order listed in ``providers``; the first one
    returning a complete match wins. A provider whose credential is empty
    is skipped without any network call.
    """
    providers: List[str] = field(default_factory=lambda: ["audd", "shazam"])
    audd_api_key: str = ""
    audd_url: str = "https://api.audd.io/"
    audd_return: str = "apple_music,spotify"
    rapidapi_key: str = ""
    shazam_url: str = "https://shazam.p.rapidapi.com/songs/v2/detect"
    shazam_host: str = "shazam.p.rapidapi.com"
    timeout: int = 30
    artwork_size: int = 600

@dataclass
class LyricsConfig:
    """
    Lyrics lookup configuration

    Controls which lyrics services are queried, in which order, and
    whether lyrics in a foreign language get translated.
    """
    enabled: bool = True
    translate: bool = True
    providers: List[str] = field(default_factory=lambda: ["lyrics_ovh", "lrclib", "chartlyrics"])
    lyrics_ovh_url: str = "https://api.lyrics.ovh"
    lyrics_ovh_timeout: int = 10
    lrclib_url: str = "https://lrclib.net"
    lrclib_timeout: int = 15
    chartlyrics_url: str = "http://api.chartlyrics.com"
    chartlyrics_timeout: int = 15

@dataclass
class TranslationConfig:
    """
    Translation client configuration

    Lyrics are split into chunks no longer than ``max_chunk_size`` characters
    because the translation service limits the size of a single request.
    ``chunk_delay`` seconds are waited between consecutive chunk requests.
    """
    target_language: str = "es"
    url: str = "https://api.mymemory.translated.net"
    max_chunk_size: int = 400
    chunk_delay: float = 0.5
    timeout: int = 10
    email: str = ""

@dataclass
class LinksConfig:
    """
    Derived link configuration

    ``amazon_search_template`` must contain a ``{query}`` placeholder that
    receives the URL-escaped "artist album" (or "artist title") string.
    """
    amazon_enabled: bool = True
    amazon_search_template: str = "https://www.amazon.com/s?k={query}&i=popular"

@dataclass
class UploadConfig:
    """
    Limits applied to local audio files before they are sent to a provider
    """
    allowed_extensions: List[str] = field(
        default_factory=lambda: [".mp3", ".wav", ".m4a", ".ogg", ".flac", ".webm"]
    )
    max_file_size_mb: int = 10

@dataclass
class LoggingConfig:
    """
    Console and rotating log file output

    ``level`` applies to the log file; the console only shows warnings,
    errors and messages marked for the user.
    """
    level: str = "INFO"
    file: str = ""
    max_size: str = "10MB"
    backup_count: int = 3
    console_output: bool = True
    colored_output: bool = True

@dataclass
class NetworkConfig:
    """
    HTTP client settings shared by every provider
    """
    user_agent: str = "Song-Recognizer/1.0"

@dataclass
class SecurityConfig:
    """
    Location of the per-user configuration directory
    """
    config_directory: str = "~/.song-recognizer/"

# Environment variable -> (section, attribute). Environment wins over YAML.
ENV_OVERRIDES = {
    'AUDD_API_KEY': ('recognition', 'audd_api_key'),
    'RAPIDAPI_KEY': ('recognition', 'rapidapi_key'),
    'MYMEMORY_EMAIL': ('translation', 'email'),
    'SONG_RECOGNIZER_TARGET_LANGUAGE': ('translation', 'target_language'),
    'SONG_RECOGNIZER_LOG_LEVEL': ('logging', 'level'),
}

# Credentials never written back by save_config
SECRET_FIELDS = [
    ('recognition', 'audd_api_key'),
    ('recognition', 'rapidapi_key'),
    ('translation', 'email'),
]

class Settings:
    """
    Effective configuration of one Song-Recognizer process

    Built from the dataclass defaults, then the first YAML file found, then
    the environment (ENV_OVERRIDES). Each section is exposed as an attribute
    named after its YAML key: ``settings.recognition.timeout``,
    ``settings.translation.target_language`` and so on.
    """

    def __init__(self, config_path: Optional[str] = None, load_sources: bool = True):
        """
        Args:
            config_path: YAML file to use instead of the default search locations
            load_sources: When False only the built-in defaults are used
                (tests construct settings this way)
        """
        self.config_path = config_path

        self.recognition = RecognitionConfig()
        self.lyrics = LyricsConfig()
        self.translation = TranslationConfig()
        self.links = LinksConfig()
        self.upload = UploadConfig()
        self.logging = LoggingConfig()
        self.network = NetworkConfig()
        self.security = SecurityConfig()

        if load_sources:
            self._load_config()
            self._load_environment_variables()

    def _sections(self) -> Dict[str, Any]:
        return {
            'recognition': self.recognition,
            'lyrics': self.lyrics,
            'translation': self.translation,
            'links': self.links,
            'upload': self.upload,
            'logging': self.logging,
            'network': self.network,
            'security': self.security,
        }

    def _candidate_files(self) -> List[Path]:
        if self.config_path:
            return [Path(self.config_path)]
        return [
            self.get_config_directory() / "config.yaml",
            Path("config") / "config.yaml",
            Path("config.yaml"),
        ]

    def _load_config(self) -> None:
        """
        Read the first existing YAML file among the candidate locations

        Raises:
            ConfigError: If an explicitly requested file is missing, or the
                file found cannot be read or parsed
        """
        if self.config_path and not Path(self.config_path).exists():
            raise ConfigError(
                f"Config file not found: {self.config_path}",
                details={'file_path': str(self.config_path)}
            )

        source = next((path for path in self._candidate_files() if path.exists()), None)
        if source is None:
            return

        try:
            data = yaml.safe_load(source.read_text(encoding='utf-8')) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {source}: {e}", details={'file_path': str(source)})

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {source} must contain a mapping", details={'file_path': str(source)})

        self._apply_config(data)

    def _apply_config(self, config_data: Dict[str, Any]) -> None:
        """Copy known keys of known sections onto the dataclasses; the rest is ignored"""
        sections = self._sections()
        for section_name, values in config_data.items():
            section = sections.get(section_name)
            if section is None or not isinstance(values, dict):
                continue
            for key, value in values.items():
                if hasattr(section, key):
                    setattr(section, key, value)

    def _load_environment_variables(self) -> None:
        """Apply ENV_OVERRIDES for every variable that is set and non-empty"""
        sections = self._sections()
        for env_var, (section_name, attribute) in ENV_OVERRIDES.items():
            value = os.getenv(env_var)
            if value:
                setattr(sections[section_name], attribute, value)

    def get_config_directory(self) -> Path:
        """Per-user configuration directory with ``~`` expanded"""
        return Path(self.security.config_directory).expanduser()

    def save_config(self, path: Optional[str] = None) -> Path:
        """
        Write the current configuration as YAML, with credentials blanked

        Args:
            path: Target file, defaults to config.yaml in the config directory

        Returns:
            Path of the written file

        Raises:
            ConfigError: If the file cannot be written
        """
        target = Path(path) if path else self.get_config_directory() / "config.yaml"

        config_data = {name: asdict(section) for name, section in self._sections().items()}
        for section_name, attribute in SECRET_FIELDS:
            config_data[section_name][attribute] = ""

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(yaml.dump(config_data, default_flow_style=False, indent=2), encoding='utf-8')
        except OSError as e:
            raise ConfigError(f"Failed to save config to {target}: {e}", details={'file_path': str(target)})

        return target

    def get_validation_errors(self) -> List[str]:
        """
        Collect every configuration problem

        Returns:
            Human readable messages, empty when the configuration is usable
        """
        from ..models import LanguageCode, LyricsSource, RecognitionSource

        errors = []

        known_recognizers = {source.value for source in RecognitionSource}
        errors.extend(
            f"Invalid recognition provider: {name}"
            for name in self.recognition.providers if name not in known_recognizers
        )

        known_lyrics = {source.value for source in LyricsSource}
        errors.extend(
            f"Invalid lyrics provider: {name}"
            for name in self.lyrics.providers if name not in known_lyrics
        )

        if str(self.translation.target_language).strip().lower() not in {code.value for code in LanguageCode}:
            errors.append(f"Invalid target language: {self.translation.target_language}")

        if self.translation.max_chunk_size <= 0:
            errors.append(f"Invalid max_chunk_size: {self.translation.max_chunk_size}")

        if self.translation.chunk_delay < 0:
            errors.append(f"Invalid chunk_delay: {self.translation.chunk_delay}")

        if "{query}" not in self.links.amazon_search_template:
            errors.append("amazon_search_template must contain a {query} placeholder")

        if self.upload.max_file_size_mb <= 0:
            errors.append(f"Invalid max_file_size_mb: {self.upload.max_file_size_mb}")

        return errors

    def validate(self) -> bool:
        """True when get_validation_errors() finds nothing"""
        return not self.get_validation_errors()

    def __str__(self) -> str:
        return (
            f"Settings(Recognition: {' > '.join(self.recognition.providers)}, "
            f"Lyrics: {'on' if self.lyrics.enabled else 'off'}, "
            f"Target language: {self.translation.target_language})"
        )

def is_configured(value: Optional[str]) -> bool:
    """
    Check whether a credential holds a real value

    Empty strings and sample-file placeholders such as
    ``YOUR_AUDD_API_KEY_HERE`` count as missing.
    """
    if not value or not value.strip():
        return False
    return not value.strip().upper().startswith(PLACEHOLDER_PREFIX)

_settings: Optional[Settings] = None

def get_settings() -> Settings:
    """Process-wide settings, loaded on first access"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

def reload_settings(config_path: Optional[str] = None) -> Settings:
    """
    Replace the process-wide settings

    Components created before the reload keep the old instance; the CLI
    resets its cached services after calling this.

    Args:
        config_path: YAML file to load instead of the default locations

    Returns:
        The new Settings instance
    """
    global _settings
    _settings = Settings(config_path)
    return _settings
