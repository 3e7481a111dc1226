from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .core.professors.models import CandidateRecord

DAY_SECONDS = 24 * 60 * 60


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ProfessorRecord:
    full_name: str
    id: Optional[int] = None
    rmp_id: Optional[str] = None
    avg_rating: Optional[float] = None
    num_ratings: int = 0
    avg_difficulty: Optional[float] = None
    would_take_again: Optional[int] = None
    department: Optional[str] = None
    school: Optional[str] = None
    last_checked_at: datetime = field(default_factory=utcnow)

    def as_candidate(self) -> CandidateRecord:
        return CandidateRecord(name=self.full_name, num_ratings=self.num_ratings, payload=self)

    def days_since_check(self, now: Optional[datetime] = None) -> int:
        now = now or utcnow()
        return int((now - self.last_checked_at).total_seconds() // DAY_SECONDS)

    def is_stale(self, stale_days: int, now: Optional[datetime] = None) -> bool:
        return self.days_since_check(now) > stale_days

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "rmp_id": self.rmp_id,
            "full_name": self.full_name,
            "avg_rating": self.avg_rating,
            "num_ratings": self.num_ratings,
            "avg_difficulty": self.avg_difficulty,
            "would_take_again": self.would_take_again,
            "department": self.department,
            "school": self.school,
            "last_checked_at": self.last_checked_at.isoformat(),
        }
