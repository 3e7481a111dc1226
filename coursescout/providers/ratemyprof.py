from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Optional

from ..config import RateMyProfSettings
from ..core.professors.matching import ProfessorMatcher
from ..core.professors.models import CandidateRecord
from ..models import ProfessorRecord

logger = logging.getLogger(__name__)

_TEACHER_FIELDS = """
            id
            legacyId
            firstName
            lastName
            department
            avgRating
            numRatings
            wouldTakeAgainPercent
            avgDifficulty
            school {
              name
            }
"""

TEACHER_SEARCH_QUERY = (
    """
query TeacherSearchResultsPageQuery($query: TeacherSearchQuery!, $first: Int!, $after: String) {
  newSearch {
    teachers(query: $query, first: $first, after: $after) {
      edges {
        cursor
        node {"""
    + _TEACHER_FIELDS
    + """        }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""
)


class RateMyProfError(RuntimeError):
    pass


@dataclass(slots=True)
class TeacherNode:
    id: str
    first_name: str
    last_name: str
    legacy_id: Optional[str] = None
    department: Optional[str] = None
    avg_rating: Optional[float] = None
    num_ratings: int = 0
    avg_difficulty: Optional[float] = None
    would_take_again_percent: Optional[float] = None
    school_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @classmethod
    def from_graphql(cls, node: dict[str, Any]) -> "TeacherNode":
        school = node.get("school") or {}
        legacy_id = node.get("legacyId")
        return cls(
            id=str(node.get("id") or ""),
            first_name=node.get("firstName") or "",
            last_name=node.get("lastName") or "",
            legacy_id=str(legacy_id) if legacy_id is not None else None,
            department=node.get("department"),
            avg_rating=_as_float(node.get("avgRating")),
            num_ratings=int(node.get("numRatings") or 0),
            avg_difficulty=_as_float(node.get("avgDifficulty")),
            would_take_again_percent=_as_float(node.get("wouldTakeAgainPercent")),
            school_name=school.get("name"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "legacyId": self.legacy_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "name": self.full_name,
            "department": self.department,
            "avgRating": self.avg_rating,
            "numRatings": self.num_ratings,
            "avgDifficulty": self.avg_difficulty,
            "wouldTakeAgainPercent": self.would_take_again_percent,
            "school": self.school_name,
        }

    def as_candidate(self) -> CandidateRecord:
        return CandidateRecord(name=self.full_name, num_ratings=self.num_ratings, payload=self)

    def to_record(self, default_school: Optional[str] = None) -> ProfessorRecord:
        would_take_again = self.would_take_again_percent
        return ProfessorRecord(
            full_name=self.full_name,
            rmp_id=self.legacy_id,
            avg_rating=self.avg_rating,
            num_ratings=self.num_ratings,
            avg_difficulty=self.avg_difficulty,
            would_take_again=round(would_take_again) if would_take_again is not None else None,
            department=self.department,
            school=self.school_name or default_school,
        )


class RateMyProfClient:
    def __init__(self, settings: RateMyProfSettings) -> None:
        self.settings = settings

    def search_teachers(self, text: str) -> list[TeacherNode]:
        """Search the configured school for teachers matching free text."""
        data = self._request(self._variables(text, self.settings.search_limit))
        if not data:
            return []
        nodes, _ = self._parse_page(data)
        logger.debug("RMP search for '%s' returned %d teachers", text, len(nodes))
        return nodes

    def fetch_roster(self) -> list[TeacherNode]:
        """Page through every teacher listed for the configured school."""
        roster: list[TeacherNode] = []
        after: Optional[str] = None
        for page in range(self.settings.roster_max_pages):
            data = self._request(self._variables("", self.settings.roster_page_size, after))
            if not data:
                break
            nodes, after = self._parse_page(data)
            roster.extend(nodes)
            logger.debug("RMP roster page %d: %d teachers", page + 1, len(nodes))
            if not after:
                break
        else:
            logger.warning(
                "RMP roster truncated after %d pages (%d teachers)",
                self.settings.roster_max_pages,
                len(roster),
            )
        logger.info("Fetched %d teachers for %s", len(roster), self.settings.school_name)
        return roster

    def best_match(self, name: str, matcher: ProfessorMatcher) -> Optional[TeacherNode]:
        """Search RMP for a name and keep the result the matcher accepts."""
        nodes = self.search_teachers(name)
        if not nodes:
            return None
        result = matcher.match(name, [node.as_candidate() for node in nodes])
        if not result.matched:
            logger.debug("None of %d RMP results accepted for '%s'", len(nodes), name)
            return None
        return result.candidate.payload

    def validate(self) -> None:
        """Preflight check that the endpoint answers GraphQL for the school."""
        payload = self._encode(self._variables("", 1))
        req = self._build_request(payload)
        try:
            with urllib.request.urlopen(req, timeout=self.settings.timeout_seconds) as resp:
                body = json.load(resp)
        except urllib.error.HTTPError as exc:
            raise RateMyProfError(f"RateMyProfessors HTTP error {exc.code}") from exc
        except urllib.error.URLError as exc:
            raise RateMyProfError(f"unable to reach RateMyProfessors: {exc}") from exc
        except ValueError as exc:
            raise RateMyProfError(f"invalid RateMyProfessors response: {exc}") from exc
        if body.get("errors"):
            raise RateMyProfError(f"RateMyProfessors rejected query: {body['errors']}")

    def _variables(self, text: str, first: int, after: Optional[str] = None) -> dict[str, Any]:
        return {
            "query": {
                "text": text,
                "schoolID": self.settings.school_id,
                "fallback": True,
                "departmentID": None,
            },
            "first": first,
            "after": after,
        }

    def _encode(self, variables: dict[str, Any]) -> bytes:
        return json.dumps({"query": TEACHER_SEARCH_QUERY, "variables": variables}).encode("utf-8")

    def _build_request(self, payload: bytes) -> urllib.request.Request:
        return urllib.request.Request(
            self.settings.endpoint,
            data=payload,
            method="POST",
            headers={
                "Content-Type": "application/json",
                "Authorization": self.settings.authorization,
                "User-Agent": self.settings.useragent,
            },
        )

    def _request(self, variables: dict[str, Any]) -> Optional[dict]:
        req = self._build_request(self._encode(variables))
        try:
            with urllib.request.urlopen(req, timeout=self.settings.timeout_seconds) as resp:
                body = json.load(resp)
        except urllib.error.HTTPError as exc:
            logger.warning("RMP request failed with HTTP %s: %s", exc.code, exc)
            return None
        except urllib.error.URLError as exc:
            logger.warning("RMP request failed: %s", exc)
            return None
        except (TimeoutError, ValueError) as exc:
            logger.warning("RMP response unusable: %s", exc)
            return None
        if not isinstance(body, dict):
            logger.warning("RMP response was not a JSON object")
            return None
        if body.get("errors"):
            logger.warning("RMP returned errors: %s", body["errors"])
        return body.get("data")

    @staticmethod
    def _parse_page(data: dict) -> tuple[list[TeacherNode], Optional[str]]:
        teachers = ((data.get("newSearch") or {}).get("teachers")) or {}
        nodes = [
            TeacherNode.from_graphql(edge["node"])
            for edge in teachers.get("edges") or []
            if edge.get("node")
        ]
        page_info = teachers.get("pageInfo") or {}
        next_cursor = page_info.get("endCursor") if page_info.get("hasNextPage") else None
        return nodes, next_cursor


def _as_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
