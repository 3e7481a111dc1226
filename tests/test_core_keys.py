import unittest

from coursescout.core.professors.keys import generate_search_keys
from coursescout.core.professors.nicknames import build_nickname_table


class TestGenerateSearchKeys(unittest.TestCase):
    def test_compound_surname_keys(self):
        self.assertEqual(
            generate_search_keys("Mohammad Rafsanjani-Sadeghi"),
            {
                "mohammad rafsanjani-sadeghi",
                "mohammad",
                "rafsanjani",
                "sadeghi",
                "mohammad sadeghi",
                "m sadeghi",
            },
        )

    def test_nickname_keys(self):
        self.assertEqual(
            generate_search_keys("Mike Smith"),
            {"mike smith", "mike", "smith", "m smith", "michael"},
        )

    def test_formal_name_adds_all_nicknames(self):
        keys = generate_search_keys("Dr. William Bell")
        for expected in ("william bell", "w bell", "bill", "will", "billy", "bell"):
            self.assertIn(expected, keys)
        self.assertNotIn("dr", keys)

    def test_middle_name_dropped_in_first_last_key(self):
        keys = generate_search_keys("Jane Q Public")
        self.assertIn("jane public", keys)
        self.assertIn("j public", keys)
        self.assertNotIn("q", keys)

    def test_initial_query_keys(self):
        self.assertEqual(generate_search_keys("J. Smith"), {"j smith", "smith"})

    def test_single_letter_surname_is_still_keyed(self):
        keys = generate_search_keys("John X")
        self.assertIn("x", keys)
        self.assertIn("j x", keys)

    def test_raw_and_normalized_input_agree(self):
        self.assertEqual(
            generate_search_keys("Prof. Mohammad Rafsanjani-Sadeghi"),
            generate_search_keys("mohammad rafsanjani-sadeghi"),
        )

    def test_single_token(self):
        self.assertEqual(generate_search_keys("Sadeghi"), {"sadeghi"})

    def test_empty_name_keeps_full_name_key(self):
        self.assertEqual(generate_search_keys(""), {""})
        self.assertEqual(generate_search_keys("Dr."), {""})

    def test_custom_nickname_table(self):
        table = build_nickname_table({"mohammad": ["mo"]})
        keys = generate_search_keys("Mohammad Sadeghi", table)
        self.assertIn("mo", keys)
        self.assertNotIn("mike", generate_search_keys("Michael Smith", table))


if __name__ == "__main__":
    unittest.main()
