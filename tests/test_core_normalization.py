"""
Unit tests for coursescout.core.professors.normalization.

Covers:
- Title stripping
- Punctuation, accent and hyphen handling
- Idempotence
- Tokenization helpers
"""

import unittest

from coursescout.core.professors.normalization import (
    name_parts,
    normalize_name,
    split_compound,
    tokenize,
)


class TestNormalizeName(unittest.TestCase):
    def test_strips_titles(self):
        self.assertEqual(normalize_name("Dr. Jane Doe"), "jane doe")
        self.assertEqual(normalize_name("Jane Doe"), "jane doe")
        self.assertEqual(normalize_name("PROFESSOR Jane Doe"), "jane doe")
        self.assertEqual(normalize_name("Mrs Jane Doe"), "jane doe")

    def test_strips_titles_joined_by_period(self):
        self.assertEqual(normalize_name("Dr.Jane Doe"), "jane doe")
        self.assertEqual(normalize_name("Prof.Smith"), "smith")

    def test_strips_titles_inside_hyphenated_tokens(self):
        self.assertEqual(normalize_name("dr-smith"), "smith")
        self.assertEqual(normalize_name("Jane Doe-D'r"), "jane doe")

    def test_title_only_removed_as_whole_word(self):
        self.assertEqual(normalize_name("Drew Mrsic"), "drew mrsic")
        self.assertEqual(normalize_name("Profeta Msimang"), "profeta msimang")

    def test_initials_keep_their_letter(self):
        self.assertEqual(normalize_name("Prof. J. Smith"), "j smith")

    def test_removes_punctuation_and_digits(self):
        self.assertEqual(normalize_name("O'Brien, Pat (2nd)"), "obrien pat nd")

    def test_folds_accents(self):
        self.assertEqual(normalize_name("José Álvarez"), "jose alvarez")
        self.assertEqual(normalize_name("Zoë Brüggen"), "zoe bruggen")

    def test_keeps_compound_surnames(self):
        self.assertEqual(
            normalize_name("Mohammad Rafsanjani-Sadeghi"),
            "mohammad rafsanjani-sadeghi",
        )

    def test_tidies_stray_hyphens(self):
        self.assertEqual(normalize_name("--Smith--Jones-"), "smith-jones")
        self.assertEqual(normalize_name("Anne - Marie"), "anne marie")

    def test_collapses_whitespace(self):
        self.assertEqual(normalize_name("  Jane \t  Doe \n"), "jane doe")

    def test_empty_and_unparseable_input(self):
        self.assertEqual(normalize_name(""), "")
        self.assertEqual(normalize_name(None), "")
        self.assertEqual(normalize_name("Dr. Mr."), "")
        self.assertEqual(normalize_name("123 !!!"), "")

    def test_idempotent(self):
        samples = [
            "Dr. Jane Doe",
            "D.R. Smith",
            "Prof.Mike O'Neil",
            "--Smith--Jones-",
            "dr-smith",
            "José Álvarez-Núñez",
            "Mr. Ms. Mrs.",
            "  ",
            "M. Rafsanjani - Sadeghi",
            "Dr.Jane Doe",
            "a-d'r smith",
            "Prof.Smith",
        ]
        for sample in samples:
            once = normalize_name(sample)
            self.assertEqual(normalize_name(once), once, sample)


class TestTokenHelpers(unittest.TestCase):
    def test_tokenize_keeps_hyphenated_token(self):
        self.assertEqual(
            tokenize("Dr. Mohammad Rafsanjani-Sadeghi"),
            ["mohammad", "rafsanjani-sadeghi"],
        )

    def test_split_compound(self):
        self.assertEqual(split_compound("rafsanjani-sadeghi"), ["rafsanjani", "sadeghi"])
        self.assertEqual(split_compound("smith"), ["smith"])

    def test_name_parts_splits_hyphens(self):
        self.assertEqual(
            name_parts("Mohammad Rafsanjani-Sadeghi"),
            ["mohammad", "rafsanjani", "sadeghi"],
        )

    def test_tokenize_empty(self):
        self.assertEqual(tokenize(""), [])


if __name__ == "__main__":
    unittest.main()
