from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.professors.models import MatchResult


@dataclass(frozen=True, slots=True)
class CheckLine:
    label: str
    status: str
    detail: Optional[str] = None

    def render(self) -> str:
        if self.detail:
            return f"{self.label}: {self.status} ({self.detail})"
        return f"{self.label}: {self.status}"


def ok(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "OK", detail).render()


def error(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "ERROR", detail).render()


def skipped(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "SKIPPED", detail).render()


def match_line(query: str, result: MatchResult) -> str:
    if not result.matched or result.candidate is None:
        return CheckLine(query, "NO MATCH").render()
    detail = f"{result.strategy}, confidence {result.confidence:.2f}"
    return CheckLine(query, result.candidate.name, detail).render()


def match_payload(query: str, result: MatchResult) -> dict:
    return {
        "query": query,
        "matched": result.matched,
        "name": result.candidate.name if result.candidate else None,
        "num_ratings": result.candidate.num_ratings if result.candidate else None,
        "strategy": result.strategy,
        "confidence": round(result.confidence, 3),
        "matched_tokens": result.matched_tokens,
        "details": result.details,
    }
