"""
Song-Recognizer: identify songs from short audio samples, with lyrics and links

Song-Recognizer takes an audio sample (a file or a microphone recording),
hands it to remote recognition services and returns one normalized song
record enriched with lyrics and streaming / shopping links. No audio analysis
happens locally; the work here is provider orchestration, fallback and
normalization.

## Core Architecture

**Recognition (`song_recognizer/recognition/`)**
- AudD as primary provider, Shazam (RapidAPI) as backup
- Pure parse functions turning each provider's JSON into the same fields
- First complete match wins; misses never raise

**Lyrics (`song_recognizer/lyrics/`)**
- lyrics.ovh, LRCLIB and ChartLyrics queried in priority order
- Stop-word language detection
- Bilingual original + translation block when the lyrics are not in the
  target language

**Translation (`song_recognizer/translation/`)**
- Line-respecting chunker sized to the translation service limit
- MyMemory client keeping untranslatable chunks in the original language

**Orchestration (`song_recognizer/orchestrator.py`)**
- Recognition, then lyrics, then the derived Amazon search link

**Configuration and utilities (`song_recognizer/config/`, `song_recognizer/utils/`)**
- YAML + environment variable settings
- Console / rotating file logging, input validation, text cleaning
"""

__version__ = "1.0.0"

__author__ = "Song-Recognizer contributors"

__description__ = "Identify songs from audio samples with multi-provider fallback, lyrics and translation"

__all__ = [
    "__version__",
    "__author__",
    "__description__"
]
