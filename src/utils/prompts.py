"""Prompt templates for LLM interactions."""

from domain.model.language import ENGLISH, language_name
from domain.model.paragraph import DifficultyTier

DIFFICULTY_RULES: dict[str, str] = {
    DifficultyTier.ELEMENTARY: (
        "Elementary level (grade-school). Very simple words only, "
        "very short sentences (under 10 words). Daily life only."
    ),
    DifficultyTier.EASY: (
        "Easy (A1–A2). Simple everyday vocabulary. "
        "Short sentences (under 15 words). Familiar topics only."
    ),
    DifficultyTier.INTERMEDIATE: (
        "Intermediate (B1–B2). Normal vocabulary and sentence length. "
        "General interest, work or life."
    ),
    DifficultyTier.ADVANCED: (
        "Advanced (C1). Rich vocabulary, longer sentences. "
        "Can be professional or abstract."
    ),
    DifficultyTier.VERY_ADVANCED: (
        "Very advanced (C2). Sophisticated, nuanced vocabulary and complex sentences. "
        "Specialized or academic style."
    ),
}


def get_difficulty_rule(level: int) -> str:
    """Instruction fragment for a difficulty level (1 = elementary, 10 = very advanced)."""
    return DIFFICULTY_RULES[DifficultyTier.for_level(level)]


def build_definition_prompt(word: str, target_lang: str, source_lang: str | None = None) -> str:
    """Ask for 1–2 short definitions of word, written in target_lang."""
    target_name = language_name(target_lang)
    if source_lang and source_lang != ENGLISH.code:
        word_desc = f'{language_name(source_lang)} word "{word}"'
    else:
        word_desc = f'English word "{word}"'
    return (
        f"Give the meaning of the {word_desc} in {target_name}. "
        f"Return 1–2 short definitions only, one per line, in {target_name} only. "
        "No numbers, bullets, or extra explanation. Output only the definitions."
    )


def build_paragraph_prompt(
    difficulty_level: int,
    profession: str | None = None,
    style: str | None = None,
    target_lang: str = ENGLISH.code,
) -> str:
    """Instruction for one 80–120 word reading paragraph."""
    rule = get_difficulty_rule(difficulty_level)
    lang_name = language_name(target_lang)

    profession_part = ""
    if profession and profession.strip():
        profession_part = (
            f' The paragraph should be relevant to someone working in or studying: "{profession.strip()}".'
            f" Use vocabulary and situations useful in that field (professional {lang_name})."
        )

    style_part = ""
    if style and style.strip():
        style_part = f' Write it in this style or tone: "{style.strip()}".'

    return (
        f"Write one short {lang_name} paragraph (80–120 words). Rules: {rule}"
        f"{profession_part}{style_part}"
        " No questions, no lists, no headings, plain text only. Output only the paragraph."
    )


def build_translation_prompt(text: str, target_lang: str) -> str:
    return (
        f"Translate the following text into {language_name(target_lang)}. "
        "Preserve the paragraph structure. Output only the translation, no explanation."
        f"\n\n{text}"
    )
