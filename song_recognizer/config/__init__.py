"""
Configuration management package for Song-Recognizer

Provides the settings system used by every provider client, the lyrics
processor and the CLI. Settings come from, in order of precedence:

1. Environment variables (highest priority, for API keys)
2. YAML configuration files (primary configuration method)
3. Default values (fallback for missing configuration)

Usage:

    from song_recognizer.config import get_settings

    settings = get_settings()
    timeout = settings.recognition.timeout
"""

from .settings import get_settings, reload_settings, is_configured, Settings

__all__ = [
    'get_settings',      # Factory function for singleton settings access
    'reload_settings',   # Function to reload settings from files
    'is_configured',     # Credential presence check (rejects placeholders)
    'Settings',          # Settings class for direct instantiation
]
