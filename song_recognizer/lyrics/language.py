"""
Stop-word based language detection for lyrics

A deliberately coarse heuristic: every candidate language has a fixed list of
very common words, and the language whose list has the most words present in
the text wins. Lyrics are always long enough for this to work well, and the
behavior stays predictable, which matters more here than statistical accuracy.

Rules:
- Matching is case-insensitive and on whole words only
- A list word counts once when present, however often it repeats
- Ties go to the first language in LanguageCode order (es, en, de, fr)
- Fewer than MIN_MATCHES hits means low confidence: English is returned
"""

import re
from typing import Dict, List, Pattern

from ..models import LanguageCode


DEFAULT_LANGUAGE = LanguageCode.EN

MIN_MATCHES = 2

STOP_WORDS: Dict[LanguageCode, List[str]] = {
    LanguageCode.ES: [
        'que', 'la', 'de', 'en', 'y', 'el', 'los', 'las', 'un', 'una', 'por', 'con',
        'para', 'es', 'mi', 'tu', 'me', 'te', 'se', 'lo', 'del', 'al', 'como', 'pero',
        'más', 'yo', 'sin', 'cuando', 'porque', 'muy', 'ya', 'todo', 'nada', 'amor',
        'corazón', 'quiero', 'vida', 'estoy', 'eres', 'soy',
    ],
    LanguageCode.EN: [
        'the', 'and', 'you', 'i', 'to', 'is', 'it', 'my', 'me', 'in', 'of', 'that',
        'your', 'on', 'for', 'with', 'be', 'we', 'love', 'this', 'all', 'what', 'so',
        'but', 'are', 'was', 'just', 'like', "don't", "i'm", 'know', 'when', 'can',
        'now', 'baby', 'yesterday', 'oh', 'she', 'he', 'they',
    ],
    LanguageCode.DE: [
        'der', 'die', 'das', 'und', 'ich', 'du', 'nicht', 'ist', 'ein', 'eine', 'zu',
        'mit', 'sich', 'auf', 'für', 'dich', 'mich', 'mir', 'dir', 'wir', 'sie', 'es',
        'auch', 'noch', 'nur', 'wenn', 'aber', 'bin', 'bist', 'liebe', 'immer', 'kein',
        'mein', 'dein', 'was', 'wie', 'so', 'doch', 'hab', 'nie',
    ],
    LanguageCode.FR: [
        'le', 'les', 'et', 'je', 'tu', 'il', 'elle', 'nous', 'vous', 'est', 'pas',
        'une', 'des', 'du', 'que', 'qui', 'dans', 'pour', 'sur', 'avec', 'mon', 'ma',
        'mes', 'ton', 'ta', 'moi', 'toi', 'mais', 'suis', 'plus', 'tout', 'amour',
        "c'est", "j'ai", 'ce', 'au', 'sans', 'jamais', 'coeur', 'cœur',
    ],
}


def _compile(words: List[str]) -> List[Pattern]:
    return [re.compile(r'(?<!\w)' + re.escape(word) + r'(?!\w)') for word in words]


_PATTERNS: Dict[LanguageCode, List[Pattern]] = {
    language: _compile(words) for language, words in STOP_WORDS.items()
}


def language_scores(text: str) -> Dict[LanguageCode, int]:
    """
    Count how many stop words of each language are present in text

    Args:
        text: Free text (lyrics)

    Returns:
        Mapping of every candidate language to its number of present stop words
    """
    lowered = (text or "").lower()
    return {
        language: sum(1 for pattern in patterns if pattern.search(lowered))
        for language, patterns in _PATTERNS.items()
    }


def detect_language(text: str) -> LanguageCode:
    """
    Detect the language of a lyrics text

    Args:
        text: Free text (lyrics)

    Returns:
        Detected language, English when no language reaches MIN_MATCHES
    """
    scores = language_scores(text)

    best_language = DEFAULT_LANGUAGE
    best_score = -1
    # Strict comparison keeps the first language reaching the maximum
    for language in LanguageCode:
        if scores[language] > best_score:
            best_language = language
            best_score = scores[language]

    if best_score < MIN_MATCHES:
        return DEFAULT_LANGUAGE

    return best_language
