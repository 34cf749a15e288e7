"""Turn a tapped token into a dictionary lookup key."""

import re

from utils.text_patterns import (
    CJK_HANGUL_CHARS,
    LATIN_ONLY_RE,
    LATIN_WORD_CHARS,
    contains_cjk_hangul,
)

_STRIP_RE = re.compile(f"[^{LATIN_WORD_CHARS}{CJK_HANGUL_CHARS}]")


def normalize(raw: str) -> str:
    """Strip everything but Latin word characters and CJK/Hangul.

    Latin-only results are lower-cased (and stripped again, since a few
    capitals lower-case to characters outside the kept class); anything
    containing CJK/Hangul is returned unchanged. An empty string means
    "not a word".

    Examples:
        normalize("RESILIENT")  → "resilient"
        normalize("café!")      → "café"
        normalize("学校。")      → "学校"
        normalize("42")         → ""
    """
    if not raw:
        return ""
    kept = _STRIP_RE.sub("", raw)
    if not kept:
        return ""
    if LATIN_ONLY_RE.match(kept):
        return _STRIP_RE.sub("", kept.lower())
    return kept


def is_actionable(word: str) -> bool:
    """Whether a normalized word should trigger a lookup.

    Single Latin letters are ignored; a single CJK/Hangul character is fine.
    """
    if not word:
        return False
    return len(word) >= 2 or contains_cjk_hangul(word)
