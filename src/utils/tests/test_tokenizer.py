"""Unit tests for the paragraph tokenizer."""

import unittest

from utils.tokenizer import is_whitespace_token, tokenize


class TestTokenize(unittest.TestCase):

    def test_empty_text(self):
        self.assertEqual(tokenize(""), [])

    def test_words_punctuation_and_spaces(self):
        self.assertEqual(
            tokenize("Hello, world!"),
            ["Hello", ",", " ", "world", "!"],
        )

    def test_apostrophes_and_hyphens_stay_in_word(self):
        self.assertEqual(tokenize("don't well-known"), ["don't", " ", "well-known"])

    def test_accented_latin_is_one_token(self):
        self.assertEqual(tokenize("café naïve"), ["café", " ", "naïve"])

    def test_cjk_and_hangul_split_per_character(self):
        self.assertEqual(tokenize("学校에"), ["学", "校", "에"])

    def test_mixed_script(self):
        self.assertEqual(tokenize("Hi, 세계"), ["Hi", ",", " ", "세", "계"])

    def test_whitespace_runs_kept_together(self):
        self.assertEqual(tokenize("a  \n\tb"), ["a", "  \n\t", "b"])

    def test_digits_are_single_tokens(self):
        self.assertEqual(tokenize("42"), ["4", "2"])

    def test_concatenation_reproduces_input(self):
        samples = [
            "Morning light filled the kitchen.\n\nIt was 7 o'clock.",
            "日本語のテキストと English が混ざる。",
            "  leading and trailing  ",
            "Ça va? Très bien — merci!",
            "😀 emoji ✓ and symbols ×÷",
        ]
        for text in samples:
            self.assertEqual("".join(tokenize(text)), text, text)


class TestIsWhitespaceToken(unittest.TestCase):

    def test_whitespace(self):
        self.assertTrue(is_whitespace_token(" \n"))

    def test_non_whitespace(self):
        self.assertFalse(is_whitespace_token("a"))
        self.assertFalse(is_whitespace_token(""))


if __name__ == '__main__':
    unittest.main()
