"""
Domain models for professor matching.

These are plain data containers; the behaviour lives in keys, index and
matching.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional


@dataclass(eq=False)
class CandidateRecord:
    """
    One professor entry from an external roster.

    Identity (not equality) distinguishes records, so two roster rows with
    the same name stay separate entries.
    """
    name: str
    """Display name as provided by the roster source"""

    num_ratings: int = 0
    """Rating count, used only to break ties between equally good matches"""

    payload: Any = None
    """Opaque caller data (ratings, ids, stored rows); never inspected"""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CandidateRecord":
        """
        Build a record from a roster row.

        Accepts either a "name" field or RateMyProfessors style
        "firstName"/"lastName" fields; the whole row becomes the payload.
        """
        name = data.get("name")
        if not name:
            name = f"{data.get('firstName') or ''} {data.get('lastName') or ''}".strip()
        ratings = data.get("num_ratings", data.get("numRatings")) or 0
        try:
            num_ratings = int(ratings)
        except (TypeError, ValueError):
            num_ratings = 0
        return cls(name=str(name or ""), num_ratings=num_ratings, payload=dict(data))


@dataclass
class SearchIndex:
    """
    Search key → candidates map for one roster.

    Built by build_index and never mutated afterwards; a new roster means a
    new index.
    """
    candidates: tuple[CandidateRecord, ...]
    """The roster, in the order it was supplied"""

    entries: dict[str, list[int]] = field(default_factory=dict)
    """Search key → roster positions, in insertion order"""

    def get(self, key: str) -> list[CandidateRecord]:
        return [self.candidates[pos] for pos in self.entries.get(key, ())]

    def keys(self) -> Iterator[str]:
        return iter(self.entries)

    @property
    def candidate_count(self) -> int:
        return len(self.candidates)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries


@dataclass
class MatchResult:
    """
    Outcome of resolving one free-text name against a roster.

    matched=False is the normal answer for a professor who is not in the
    roster; it is not an error.
    """
    matched: bool
    """Whether a candidate was accepted"""

    candidate: Optional[CandidateRecord] = None
    """The accepted candidate (None when matched is False)"""

    strategy: Optional[str] = None
    """How the match was decided (exact, tokens, surname_only)"""

    confidence: float = 0.0
    """Confidence score (0.0 to 1.0)"""

    matched_tokens: int = 0
    """Number of query tokens that found a counterpart"""

    details: Optional[str] = None
    """Human-readable explanation"""

    @classmethod
    def no_match(cls, details: Optional[str] = None) -> "MatchResult":
        return cls(matched=False, details=details)
