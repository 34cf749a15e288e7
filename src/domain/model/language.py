"""Language Value Object and registry.

Every language code that arrives from outside the process (query strings,
request bodies, stored preferences) goes through resolve_language() before
it is used to build a prompt or pick a fallback branch.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    """Immutable value object representing a supported content language."""

    code: str
    name: str


# ── Language instances ────────────────────────────────────────

KOREAN = Language(code="ko", name="Korean")
CHINESE = Language(code="zh", name="Chinese")
JAPANESE = Language(code="ja", name="Japanese")
ENGLISH = Language(code="en", name="English")
SPANISH = Language(code="es", name="Spanish")
FRENCH = Language(code="fr", name="French")
GERMAN = Language(code="de", name="German")
PORTUGUESE = Language(code="pt", name="Portuguese")
ITALIAN = Language(code="it", name="Italian")


# ── Registry ──────────────────────────────────────────────────

LANGUAGES: dict[str, Language] = {
    lang.code: lang
    for lang in (
        KOREAN, CHINESE, JAPANESE, ENGLISH, SPANISH,
        FRENCH, GERMAN, PORTUGUESE, ITALIAN,
    )
}

SUPPORTED_CODES: frozenset[str] = frozenset(LANGUAGES)

# Defaults applied when an external code is missing or unsupported
DEFAULT_DEFINITION_LANGUAGE = KOREAN.code
DEFAULT_PARAGRAPH_LANGUAGE = ENGLISH.code
DEFAULT_TRANSLATION_LANGUAGE = KOREAN.code


def resolve_language(code: str | None, fallback: str) -> str:
    """Coerce an untrusted language code to a supported one.

    Examples:
        resolve_language("FR", "ko")  → "fr"
        resolve_language("xx", "ko")  → "ko"
        resolve_language(None, "en")  → "en"
    """
    if not code:
        return fallback
    normalized = code.strip().lower()
    if normalized in SUPPORTED_CODES:
        return normalized
    return fallback


def resolve_optional_language(code: str | None) -> str | None:
    """Like resolve_language(), but an unsupported code becomes None."""
    if not code:
        return None
    normalized = code.strip().lower()
    return normalized if normalized in SUPPORTED_CODES else None


def language_name(code: str | None) -> str:
    """Display name for a code; unknown codes read as English."""
    lang = LANGUAGES.get(code or "")
    return lang.name if lang else ENGLISH.name
