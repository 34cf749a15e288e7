"""Split paragraph text into clickable units.

Priority per position: whitespace run, Latin word run, one CJK/Hangul
character, any other single character. Concatenating the tokens gives back
the input exactly.
"""

import re

from utils.text_patterns import CJK_HANGUL_CHARS, LATIN_WORD_CHARS

_TOKEN_RE = re.compile(
    rf"\s+|[{LATIN_WORD_CHARS}]+|[{CJK_HANGUL_CHARS}]|.",
    re.DOTALL,
)
_WHITESPACE_RE = re.compile(r"^\s+$")


def tokenize(text: str) -> list[str]:
    """Tokenize text for click targets.

    Examples:
        tokenize("Hi, 세계")  → ["Hi", ",", " ", "세", "계"]
        tokenize("")          → []
    """
    if not text:
        return []
    return _TOKEN_RE.findall(text)


def is_whitespace_token(token: str) -> bool:
    return bool(_WHITESPACE_RE.match(token))
