import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import MagicMock

from coursescout.cache import ProfessorStore
from coursescout.core.professors.models import CandidateRecord
from coursescout.models import ProfessorRecord
from coursescout.providers.ratemyprof import RateMyProfClient, TeacherNode
from coursescout.services.professor_service import ProfessorService

NOW = datetime(2024, 9, 1, tzinfo=timezone.utc)


def _teacher(first, last, legacy_id, avg_rating=4.0, num_ratings=10):
    return TeacherNode(
        id=f"T{legacy_id}",
        first_name=first,
        last_name=last,
        legacy_id=str(legacy_id),
        department="Computer Science",
        avg_rating=avg_rating,
        num_ratings=num_ratings,
    )


class TestProfessorService(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.store = ProfessorStore(Path(self._tmp.name) / "professors.sqlite3")
        self.client = MagicMock(spec=RateMyProfClient)
        self.service = ProfessorService(
            store=self.store,
            client=self.client,
            stale_days=30,
            default_school="Carleton University",
        )

    def tearDown(self) -> None:
        self.store.close()
        self._tmp.cleanup()

    def test_fetches_then_serves_from_store(self) -> None:
        self.client.best_match.return_value = _teacher("Mohammad", "Rafsanjani-Sadeghi", 11)

        first = self.service.get_professor("Dr. Mohammad Sadeghi")
        self.assertEqual(first.full_name, "Mohammad Rafsanjani-Sadeghi")
        self.assertEqual(first.school, "Carleton University")
        self.assertEqual(self.store.count(), 1)

        second = self.service.get_professor("M Sadeghi")
        self.assertEqual(second.id, first.id)
        self.assertEqual(self.client.best_match.call_count, 1)

    def test_not_found_anywhere(self) -> None:
        self.client.best_match.return_value = None
        self.assertIsNone(self.service.get_professor("Nobody Here"))
        self.assertEqual(self.store.count(), 0)

    def test_unrated_professor_is_not_stored(self) -> None:
        self.client.best_match.return_value = _teacher("Jane", "Doe", 8, avg_rating=None, num_ratings=0)
        with self.assertLogs("coursescout.services.professor_service", level="INFO") as captured:
            self.assertIsNone(self.service.get_professor("Jane Doe"))
        self.assertEqual(self.store.count(), 0)
        self.assertTrue(any("has no ratings" in line for line in captured.output))

    def test_stale_record_kept_when_professor_lost_ratings(self) -> None:
        old = self.store.save(
            ProfessorRecord(full_name="Jane Doe", avg_rating=3.0, num_ratings=4, last_checked_at=NOW - timedelta(days=60))
        )
        self.client.best_match.return_value = _teacher("Jane", "Doe", 8, avg_rating=None, num_ratings=0)

        result = self.service.get_professor("Jane Doe", now=NOW)

        self.assertEqual(result.num_ratings, 4)
        self.assertEqual(self.store.get(old.id).num_ratings, 4)
        self.assertEqual(self.store.get(old.id).last_checked_at, NOW)

    def test_stale_record_is_refreshed(self) -> None:
        old = self.store.save(
            ProfessorRecord(
                full_name="Jane Doe",
                rmp_id="5",
                avg_rating=3.0,
                department="History",
                last_checked_at=NOW - timedelta(days=60),
            )
        )
        self.client.best_match.return_value = _teacher("Jane", "Doe", 5, avg_rating=4.5, num_ratings=20)

        refreshed = self.service.get_professor("Jane Doe", now=NOW)

        self.assertEqual(refreshed.id, old.id)
        self.assertEqual(refreshed.avg_rating, 4.5)
        self.assertEqual(refreshed.num_ratings, 20)
        self.assertEqual(refreshed.department, "Computer Science")
        self.assertEqual(self.store.get(old.id).last_checked_at, NOW)
        self.assertEqual(self.store.count(), 1)

    def test_stale_record_kept_when_refresh_finds_nothing(self) -> None:
        old = self.store.save(
            ProfessorRecord(full_name="Jane Doe", avg_rating=3.0, last_checked_at=NOW - timedelta(days=60))
        )
        self.client.best_match.return_value = None

        result = self.service.get_professor("Jane Doe", now=NOW)

        self.assertEqual(result.id, old.id)
        self.assertEqual(result.avg_rating, 3.0)
        self.assertEqual(self.store.get(old.id).last_checked_at, NOW)

    def test_fresh_record_needs_no_network(self) -> None:
        self.store.save(ProfessorRecord(full_name="Jane Doe", last_checked_at=NOW - timedelta(days=2)))
        result = self.service.get_professor("Dr. Jane Doe", now=NOW)
        self.assertEqual(result.full_name, "Jane Doe")
        self.client.best_match.assert_not_called()

    def test_find_in_store_uses_matcher(self) -> None:
        self.store.save(ProfessorRecord(full_name="Mohammad Rafsanjani-Sadeghi"))
        self.store.save(ProfessorRecord(full_name="Mary Sadeghi"))
        self.store.save(ProfessorRecord(full_name="John Smith"))

        found = self.service.find_in_store("Dr. M. Rafsanjani-Sadeghi")
        self.assertEqual(found.full_name, "Mohammad Rafsanjani-Sadeghi")
        self.assertIsNone(self.service.find_in_store("Sadeghi"))
        self.assertIsNone(self.service.find_in_store("John Jones"))

    def test_get_professors_keeps_order(self) -> None:
        self.store.save(ProfessorRecord(full_name="Jane Doe", last_checked_at=NOW))
        self.client.best_match.return_value = None
        results = self.service.get_professors(["Nobody Here", "Jane Doe"])
        self.assertEqual([name for name, _ in results], ["Nobody Here", "Jane Doe"])
        self.assertIsNone(results[0][1])
        self.assertEqual(results[1][1].full_name, "Jane Doe")

    def test_match_roster(self) -> None:
        roster = [CandidateRecord("Amy Wong"), CandidateRecord("Amy Chen"), CandidateRecord("Bob Chen")]
        results = self.service.match_roster(["Amy Chen", "B. Chen", "Zed Quux"], roster)
        self.assertIs(results["Amy Chen"].candidate, roster[1])
        self.assertIs(results["B. Chen"].candidate, roster[2])
        self.assertFalse(results["Zed Quux"].matched)


if __name__ == "__main__":
    unittest.main()
