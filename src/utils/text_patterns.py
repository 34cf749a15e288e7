"""Character classes shared by the tokenizer and the normalizer."""

import re

# Hiragana, Katakana, CJK Unified Ideographs, Hangul syllables
CJK_HANGUL_CHARS = "\u3040-\u309f\u30a0-\u30ff\u4e00-\u9fff\uac00-\ud7a3"

# ASCII letters plus accented Latin-1 / Latin Extended-A/B letters (× and ÷ excluded)
LATIN_LETTERS = "A-Za-z\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u024f"

# Latin word characters: letters, apostrophe, hyphen
LATIN_WORD_CHARS = LATIN_LETTERS + "'\\-"

CJK_HANGUL_RE = re.compile(f"[{CJK_HANGUL_CHARS}]")
LATIN_ONLY_RE = re.compile(f"^[{LATIN_WORD_CHARS}]*$")


def contains_cjk_hangul(text: str) -> bool:
    return CJK_HANGUL_RE.search(text) is not None
