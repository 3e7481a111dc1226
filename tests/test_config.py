import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from coursescout.config import MatchingSettings, Settings, StoreSettings, find_config
from coursescout.core.professors.nicknames import DEFAULT_NICKNAMES


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings()
        self.assertEqual(settings.matching.substring_min_length, 3)
        self.assertTrue(settings.matching.allow_surname_only)
        self.assertEqual(settings.store.stale_days, 30)
        self.assertEqual(settings.ratemyprof.school_name, "Carleton University")
        self.assertTrue(settings.store.path.is_absolute())
        self.assertEqual(settings.store.path, (Path.cwd() / "cache" / "professors.sqlite3").resolve())

    def test_load_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            config = tmp / "config.yaml"
            config.write_text(
                "matching:\n"
                "  allow_surname_only: false\n"
                "  min_token_matches: 3\n"
                "store:\n"
                f"  path: {tmp / 'store.sqlite3'}\n"
                "  stale_days: 7\n"
                "ratemyprof:\n"
                "  school_name: Example College\n",
                encoding="utf-8",
            )
            settings = Settings.load(config)
        self.assertFalse(settings.matching.allow_surname_only)
        self.assertEqual(settings.matching.min_token_matches, 3)
        self.assertEqual(settings.store.stale_days, 7)
        self.assertEqual(settings.store.path.name, "store.sqlite3")
        self.assertEqual(settings.ratemyprof.school_name, "Example College")

    def test_empty_file_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = Path(tmpdir) / "config.yaml"
            config.write_text("", encoding="utf-8")
            settings = Settings.load(config)
        self.assertEqual(settings.matching, MatchingSettings())

    def test_invalid_ratio_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            MatchingSettings(substring_min_ratio=1.5)
        with self.assertRaises(ValidationError):
            StoreSettings(stale_days=-1)

    def test_to_options_uses_builtin_nicknames(self) -> None:
        options = MatchingSettings(token_match_ratio=0.75).to_options()
        self.assertEqual(options.token_match_ratio, 0.75)
        self.assertIs(options.nicknames, DEFAULT_NICKNAMES)

    def test_to_options_loads_nickname_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nicknames.yaml"
            path.write_text("mohammad: [mo]\n", encoding="utf-8")
            options = MatchingSettings(nicknames_path=str(path)).to_options()
        self.assertEqual(options.nicknames["mo"], {"mohammad"})
        self.assertNotIn("mike", options.nicknames)


class TestFindConfig(unittest.TestCase):
    def test_explicit_path_wins(self) -> None:
        explicit = Path("/tmp/elsewhere.yaml")
        self.assertEqual(find_config(explicit), explicit)

    def test_finds_config_in_cwd(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            (tmp / "config.yml").write_text("{}", encoding="utf-8")
            with patch("coursescout.config.Path.cwd", return_value=tmp):
                self.assertEqual(find_config(None), tmp / "config.yml")

    def test_missing_config_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with patch("coursescout.config.Path.cwd", return_value=Path(tmpdir)):
                with self.assertRaises(FileNotFoundError):
                    find_config(None)


if __name__ == "__main__":
    unittest.main()
