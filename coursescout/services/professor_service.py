"""
Professor enrichment workflow.

Names extracted from discussions are resolved in three steps:
1. The local store (persisted search keys, then the matcher)
2. RateMyProfessors search when the store has nothing
3. A refresh from RateMyProfessors when the stored data is stale
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..cache import ProfessorStore
from ..core.professors.keys import generate_search_keys
from ..core.professors.matching import ProfessorMatcher
from ..core.professors.models import CandidateRecord, MatchResult
from ..models import ProfessorRecord, utcnow
from ..providers.ratemyprof import RateMyProfClient, TeacherNode

logger = logging.getLogger(__name__)


@dataclass
class ProfessorService:
    store: ProfessorStore
    client: RateMyProfClient
    matcher: ProfessorMatcher = field(default_factory=ProfessorMatcher)
    stale_days: int = 30
    default_school: Optional[str] = None

    def get_professor(self, name: str, now: Optional[datetime] = None) -> Optional[ProfessorRecord]:
        """Return stored data for a professor, fetching or refreshing it from RMP as needed."""
        cached = self.find_in_store(name)
        if cached is None:
            logger.info("%s not found in store - fetching from RateMyProfessors", name)
            return self._fetch_and_store(name)

        now = now or utcnow()
        if cached.is_stale(self.stale_days, now):
            logger.info(
                "%s data is %d days old (stale) - refreshing",
                cached.full_name,
                cached.days_since_check(now),
            )
            refreshed = self._refresh(cached, now)
            return refreshed or cached

        return cached

    def get_professors(self, names: Sequence[str]) -> list[tuple[str, Optional[ProfessorRecord]]]:
        started = time.perf_counter()
        results = [(name, self.get_professor(name)) for name in names]
        if names:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                "Professor lookup for %d names finished in %.0fms (avg %.0fms)",
                len(names),
                elapsed_ms,
                elapsed_ms / len(names),
            )
        return results

    def find_in_store(self, name: str) -> Optional[ProfessorRecord]:
        keys = generate_search_keys(name, self.matcher.options.nicknames)
        stored = self.store.find_candidates(keys)
        if not stored:
            return None
        result = self.matcher.match(name, [record.as_candidate() for record in stored])
        return result.candidate.payload if result.matched else None

    def match_roster(
        self, names: Iterable[str], roster: Iterable[CandidateRecord]
    ) -> dict[str, MatchResult]:
        """Resolve many names against one roster, indexing it only once."""
        index = self.matcher.index(roster)
        logger.info("Matching names against a roster of %d professors", index.candidate_count)
        return {name: self.matcher.match_index(name, index) for name in names}

    def _find_rated(self, name: str) -> Optional[TeacherNode]:
        """RMP match for a name, or None when there is none or it has no ratings."""
        node = self.client.best_match(name, self.matcher)
        if node is None:
            logger.info("Professor not found on RateMyProfessors: %s", name)
            return None
        if node.num_ratings <= 0:
            logger.info("Professor %s has no ratings on RateMyProfessors", node.full_name)
            return None
        return node

    def _fetch_and_store(self, name: str) -> Optional[ProfessorRecord]:
        node = self._find_rated(name)
        if node is None:
            return None
        record = node.to_record(self.default_school)
        return self.store.save(record)

    def _refresh(self, existing: ProfessorRecord, now: datetime) -> Optional[ProfessorRecord]:
        node = self._find_rated(existing.full_name)
        if node is None:
            if existing.id is not None:
                self.store.mark_checked(existing.id, now)
            return None

        fresh = node.to_record(self.default_school)
        existing.rmp_id = fresh.rmp_id or existing.rmp_id
        existing.full_name = fresh.full_name or existing.full_name
        existing.avg_rating = _prefer(fresh.avg_rating, existing.avg_rating)
        existing.num_ratings = fresh.num_ratings
        existing.avg_difficulty = _prefer(fresh.avg_difficulty, existing.avg_difficulty)
        existing.would_take_again = _prefer(fresh.would_take_again, existing.would_take_again)
        existing.department = _prefer(fresh.department, existing.department)
        existing.school = _prefer(fresh.school, existing.school)
        existing.last_checked_at = now
        return self.store.save(existing)


def _prefer(value, fallback):
    return value if value is not None else fallback
