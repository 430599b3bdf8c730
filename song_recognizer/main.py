"""
Main CLI interface for Song-Recognizer

This module provides the command-line interface used to operate the service:
recognizing audio files, looking up and translating lyrics, inspecting the
configuration and running diagnostics.

The CLI is built using Click framework and provides:
- recognize: Identify a song from an audio file (with lyrics and links)
- lyrics: Look up lyrics for a known title and artist
- detect-language / translate: Run the language and translation steps alone
- config show: Display the effective configuration
- doctor: Check which providers are configured
"""

import json
import sys
import click
import functools
from pathlib import Path

from . import __version__
from .config.settings import get_settings, reload_settings
from .lyrics.language import detect_language, language_scores
from .lyrics.processor import get_lyrics_processor, reset_lyrics_processor
from .models import LanguageCode
from .orchestrator import get_service, reset_service
from .recognition.aggregator import get_recognition_aggregator, reset_recognition_aggregator
from .translation.mymemory import get_translator, reset_translator
from .utils.helpers import truncate_string
from .utils.logger import configure_from_settings, get_logger, get_current_log_file
from .utils.validation import validate_language_code


# Initialize logging system from configuration settings
configure_from_settings()
logger = get_logger(__name__)

LYRICS_PREVIEW_LENGTH = 600


def handle_error(func):
    """
    Decorator to handle common CLI errors gracefully

    Catches exceptions raised by a command, logs them and exits with a
    non-zero status instead of printing a traceback.

    Args:
        func: The CLI command function to wrap

    Returns:
        Wrapped function with error handling
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo(click.style("\n\nOperation cancelled by user", fg='yellow'))
            sys.exit(130)  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Command failed: {e}")
            click.echo(click.style(f"Error: {e}", fg='red'), err=True)
            sys.exit(1)
    return wrapper


def reset_components() -> None:
    """Drop cached service instances so they pick up reloaded settings"""
    reset_service()
    reset_recognition_aggregator()
    reset_lyrics_processor()
    reset_translator()


def parse_language(value: str) -> LanguageCode:
    is_valid, error_msg = validate_language_code(value)
    if not is_valid:
        raise click.BadParameter(error_msg)
    return LanguageCode.from_value(value)


def print_song(song, verbose: bool = False) -> None:
    """Print a recognized song in human readable form"""
    click.echo(click.style(f"\n{song.artist} - {song.title}", fg='green', bold=True))

    fields = [
        ("Album", song.album),
        ("Released", song.release_date),
        ("Label", song.label),
        ("Cover art", song.cover_art_url),
        ("Spotify", song.spotify_url),
        ("Apple Music", song.apple_music_url),
        ("Amazon", song.amazon_url),
        ("Recognized by", song.source.value if song.source else None),
    ]
    for name, value in fields:
        if value:
            click.echo(f"   {name}: {value}")

    if song.lyrics:
        lyrics = song.lyrics if verbose else truncate_string(song.lyrics, LYRICS_PREVIEW_LENGTH)
        click.echo(f"\nLyrics:\n{lyrics}")


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--config', type=click.Path(), help='Path to config file')
@click.pass_context
def cli(ctx, version, verbose, config):
    """
    Song-Recognizer - Identify songs from audio samples

    Recognizes a song with AudD (Shazam as backup), fetches its lyrics,
    translates them when they are not in the target language and adds
    streaming and shopping links.
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    if version:
        click.echo(f"Song-Recognizer v{__version__}")
        return

    if config:
        reload_settings(config)
        configure_from_settings()
        reset_components()
        logger.console_info(f"Loaded config: {config}")

    if verbose:
        logger.info("Verbose mode enabled")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument('audio_file', type=click.Path())
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON')
@click.option('--no-lyrics', is_flag=True, help='Skip lyrics lookup')
@click.pass_context
@handle_error
def recognize(ctx, audio_file, as_json, no_lyrics):
    """
    Recognize a song from an audio file

    Exits with status 2 when no provider recognized the sample.
    """
    service = get_service()
    song = service.recognize_file(audio_file, include_lyrics=not no_lyrics)
    response = service.build_response(song)

    if as_json:
        click.echo(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))
    elif song:
        click.echo(response.message)
        print_song(song, verbose=ctx.obj.get('verbose', False))
    else:
        click.echo(click.style(response.message, fg='yellow'))

    if not response.success:
        sys.exit(2)


@cli.command(name='lyrics')
@click.argument('title')
@click.argument('artist')
@click.option('--no-translate', is_flag=True, help='Return lyrics in their original language')
@handle_error
def lyrics_command(title, artist, no_translate):
    """Look up lyrics for TITLE by ARTIST"""
    processor = get_lyrics_processor()

    if no_translate:
        result = processor.search_lyrics(title, artist)
        text = result.lyrics if result.success else None
        if text:
            logger.console_info(f"Lyrics found via {result.source.value}")
    else:
        text = processor.get_lyrics(title, artist)

    if not text:
        click.echo(click.style("No lyrics found", fg='yellow'))
        sys.exit(2)

    click.echo(text)


@cli.command(name='detect-language')
@click.argument('text', required=False)
@click.option('--file', 'file_path', type=click.Path(exists=True, dir_okay=False), help='Read text from file')
@click.pass_context
@handle_error
def detect_language_command(ctx, text, file_path):
    """Detect the language of TEXT (or of a file)"""
    if file_path:
        text = Path(file_path).read_text(encoding='utf-8')

    if not text:
        raise click.UsageError("Provide TEXT or --file")

    language = detect_language(text)
    click.echo(f"{language.value} ({language.display_name})")

    if ctx.obj.get('verbose'):
        for code, score in language_scores(text).items():
            click.echo(f"   {code.value}: {score}")


@cli.command()
@click.argument('text')
@click.option('--source', '-s', required=True, help='Language of TEXT (es, en, de, fr)')
@click.option('--target', '-t', help='Target language (defaults to configured target)')
@handle_error
def translate(text, source, target):
    """Translate TEXT with the configured translation service"""
    source_lang = parse_language(source)
    target_lang = parse_language(target) if target else None

    translated = get_translator().translate(text, source_lang, target_lang)
    if translated is None:
        click.echo(click.style("Translation failed", fg='red'), err=True)
        sys.exit(1)

    click.echo(translated)


@cli.group(name='config')
def config_group():
    """
    Configuration management commands
    """
    pass


@config_group.command()
@handle_error
def show():
    """Show current configuration (API keys are masked)"""
    settings = get_settings()

    def mask(value: str) -> str:
        return "set" if value else "not set"

    click.echo("Current Configuration:\n")

    click.echo("Recognition:")
    click.echo(f"   Providers: {', '.join(settings.recognition.providers)}")
    click.echo(f"   AudD API key: {mask(settings.recognition.audd_api_key)}")
    click.echo(f"   RapidAPI key: {mask(settings.recognition.rapidapi_key)}")
    click.echo(f"   Timeout: {settings.recognition.timeout}s")

    click.echo("\nLyrics:")
    click.echo(f"   Enabled: {settings.lyrics.enabled}")
    click.echo(f"   Translate: {settings.lyrics.translate}")
    click.echo(f"   Providers: {', '.join(settings.lyrics.providers)}")

    click.echo("\nTranslation:")
    click.echo(f"   Target language: {settings.translation.target_language}")
    click.echo(f"   Max chunk size: {settings.translation.max_chunk_size}")
    click.echo(f"   Chunk delay: {settings.translation.chunk_delay}s")

    click.echo("\nLinks:")
    click.echo(f"   Amazon: {settings.links.amazon_enabled}")

    click.echo("\nUpload:")
    click.echo(f"   Allowed formats: {', '.join(settings.upload.allowed_extensions)}")
    click.echo(f"   Max file size: {settings.upload.max_file_size_mb}MB")


@cli.command()
@handle_error
def doctor():
    """
    Run configuration diagnostics

    Reports which recognition providers have credentials, which lyrics
    providers are enabled and whether the configuration validates.
    """
    click.echo("Running diagnostics...\n")

    issues = []
    settings = get_settings()

    for error in settings.get_validation_errors():
        issues.append(error)

    recognition_status = get_recognition_aggregator().get_provider_status()
    for entry in recognition_status:
        state = "OK" if entry['available'] == 'yes' else "API key not configured"
        click.echo(f"Recognition {entry['provider']}: {state}")

    if not any(entry['available'] == 'yes' for entry in recognition_status):
        issues.append("No recognition provider is configured (set AUDD_API_KEY or RAPIDAPI_KEY)")

    lyrics_status = get_lyrics_processor().get_provider_status()
    if settings.lyrics.enabled and lyrics_status:
        click.echo(f"Lyrics sources: {', '.join(entry['provider'] for entry in lyrics_status)}")
    else:
        click.echo("Lyrics sources: disabled")

    click.echo(f"Translation target: {settings.translation.target_language}")

    current_log = get_current_log_file()
    if current_log:
        click.echo(f"Logging: {current_log}")
    else:
        click.echo("Logging: Console only")

    if issues:
        click.echo(f"\nFound {len(issues)} issues:")
        for issue in issues:
            click.echo(f"   • {issue}")
    else:
        click.echo("\nAll systems operational!")


# Entry point for module execution
if __name__ == '__main__':
    cli()
