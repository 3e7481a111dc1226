"""
Professor name matching.

Resolving a free-text name against a roster happens in two phases:
1. Narrowing: the query's search keys select a small subset of the roster
   from a SearchIndex
2. Scoring: every subset candidate is compared token by token and the best
   accepted candidate wins

A candidate is accepted only when its surname agrees with the query's, the
query's first name finds a counterpart, and at least half of the query
tokens (minimum two) correspond.

Token correspondence strategies, in priority order:
- Exact token ("smith" = "smith", also bare initials "j" = "j")
- Substring ("chris" in "christoph"), only when neither side is tiny
- Initial ("j" matches "john")
- Nickname ("mike" matches "michael")
- Compound surname ("sadeghi" matches "rafsanjani-sadeghi")

All functions are pure; the only side effect is optional debug logging.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .index import build_index, lookup
from .keys import generate_search_keys
from .models import CandidateRecord, MatchResult, SearchIndex
from .nicknames import DEFAULT_NICKNAMES, NicknameTable, are_nicknames
from .normalization import normalize_name, split_compound

logger = logging.getLogger(__name__)

SURNAME_ONLY_CONFIDENCE = 0.5


@dataclass(frozen=True)
class MatchOptions:
    """Tunable thresholds for the scoring phase."""

    substring_min_ratio: float = 0.5
    """Shorter token must be at least this fraction of the longer one"""

    substring_min_length: int = 3
    """Both tokens need this many letters before substring matching applies"""

    min_token_matches: int = 2
    """Absolute minimum of corresponding query tokens"""

    token_match_ratio: float = 0.5
    """Fraction of query tokens that must correspond"""

    allow_surname_only: bool = True
    """Accept a bare surname query when exactly one roster person carries it"""

    nicknames: NicknameTable = field(default_factory=lambda: DEFAULT_NICKNAMES, compare=False, repr=False)


DEFAULT_OPTIONS = MatchOptions()


def token_correspondence(
    query_token: str, candidate_token: str, options: MatchOptions = DEFAULT_OPTIONS
) -> Optional[str]:
    """
    Decide whether two name tokens refer to the same name part.

    Examples:
        ("smith", "smith") → "exact"
        ("j", "john") → "initial"
        ("mike", "michael") → "nickname"
        ("sadeghi", "rafsanjani-sadeghi") → "compound"
        ("al", "alice") → None (too short for substring matching)

    Returns:
        The name of the strategy that matched, or None
    """
    if query_token == candidate_token:
        return "exact"

    if (
        len(query_token) >= options.substring_min_length
        and len(candidate_token) >= options.substring_min_length
    ):
        short, long = sorted((query_token, candidate_token), key=len)
        if short in long and len(short) / len(long) >= options.substring_min_ratio:
            return "substring"

    if len(query_token) == 1 and len(candidate_token) > 1 and candidate_token.startswith(query_token):
        return "initial"
    if len(candidate_token) == 1 and len(query_token) > 1 and query_token.startswith(candidate_token):
        return "initial"

    if are_nicknames(query_token, candidate_token, options.nicknames):
        return "nickname"

    if "-" in query_token and candidate_token in split_compound(query_token):
        return "compound"
    if "-" in candidate_token and query_token in split_compound(candidate_token):
        return "compound"

    return None


def surnames_match(query_surname: str, candidate_surname: str) -> bool:
    """
    Surname gate: last tokens must agree.

    A hyphenated surname also agrees with any one of its parts, so
    "sadeghi" and "rafsanjani-sadeghi" pass while "smith" and "jones" do not.
    """
    if not query_surname or not candidate_surname:
        return False
    if query_surname == candidate_surname:
        return True
    if "-" in candidate_surname and query_surname in split_compound(candidate_surname):
        return True
    if "-" in query_surname and candidate_surname in split_compound(query_surname):
        return True
    return False


def required_matches(query_token_count: int, options: MatchOptions = DEFAULT_OPTIONS) -> int:
    return max(options.min_token_matches, math.ceil(options.token_match_ratio * query_token_count))


def count_token_matches(
    query_tokens: list[str], candidate_tokens: list[str], options: MatchOptions = DEFAULT_OPTIONS
) -> tuple[int, bool]:
    """
    Count query tokens that have a counterpart among the candidate tokens.

    Candidate tokens are not consumed; two query tokens may both match the
    same candidate token.

    Returns:
        (number of matched query tokens, whether the first query token matched)
    """
    matched = 0
    first_matched = False
    for position, query_token in enumerate(query_tokens):
        if any(token_correspondence(query_token, token, options) for token in candidate_tokens):
            matched += 1
            if position == 0:
                first_matched = True
    return matched, first_matched


def match_candidates(
    query: str,
    candidates: Iterable[CandidateRecord],
    options: Optional[MatchOptions] = None,
    log: Optional[logging.Logger] = None,
) -> MatchResult:
    """
    Score every candidate against the query and return the best accepted one.

    This is the detailed phase on its own. match_name runs it on the
    index-narrowed subset; running it on a full roster gives the same answer.

    Ranking among accepted candidates:
    1. Exact normalized name before token overlap
    2. More matched tokens
    3. Higher num_ratings
    4. Earlier in roster order

    Args:
        query: Free-text professor name
        candidates: Candidates to score, in roster order
        options: Thresholds (defaults when omitted)
        log: Logger for per-candidate debug traces

    Returns:
        MatchResult for the best candidate, or a no-match result
    """
    options = options or DEFAULT_OPTIONS
    log = log or logger

    normalized = normalize_name(query)
    if not normalized:
        return MatchResult.no_match("Empty name after normalization")

    query_tokens = normalized.split()
    required = required_matches(len(query_tokens), options)

    best: Optional[MatchResult] = None
    best_rank: Optional[tuple[int, int, int]] = None
    surname_hits: list[tuple[CandidateRecord, str]] = []

    for candidate in candidates:
        candidate_name = normalize_name(candidate.name)
        if not candidate_name:
            continue

        if candidate_name == normalized:
            rank = (2, len(query_tokens), candidate.num_ratings)
            result = MatchResult(
                matched=True,
                candidate=candidate,
                strategy="exact",
                confidence=1.0,
                matched_tokens=len(query_tokens),
                details=f"Exact name match: '{normalized}'",
            )
        else:
            candidate_tokens = candidate_name.split()
            if not surnames_match(query_tokens[-1], candidate_tokens[-1]):
                continue

            if len(query_tokens) == 1:
                surname_hits.append((candidate, candidate_name))
                continue

            matched, first_matched = count_token_matches(query_tokens, candidate_tokens, options)
            if not first_matched or matched < required:
                log.debug(
                    "Rejecting '%s' for '%s': %d/%d tokens matched (need %d), first name %s",
                    candidate.name,
                    query,
                    matched,
                    len(query_tokens),
                    required,
                    "matched" if first_matched else "unmatched",
                )
                continue

            rank = (1, matched, candidate.num_ratings)
            result = MatchResult(
                matched=True,
                candidate=candidate,
                strategy="tokens",
                confidence=matched / max(len(query_tokens), len(candidate_tokens)),
                matched_tokens=matched,
                details=f"{matched}/{len(query_tokens)} tokens of '{normalized}' matched '{candidate_name}'",
            )

        if best_rank is None or rank > best_rank:
            best, best_rank = result, rank

    if best is None and surname_hits:
        best = _resolve_surname_only(normalized, surname_hits, options, log)

    if best is None:
        return MatchResult.no_match(f"No candidate accepted for '{normalized}'")

    log.debug("Matched '%s' to '%s' via %s", query, best.candidate.name, best.strategy)
    return best


def _resolve_surname_only(
    surname: str,
    hits: list[tuple[CandidateRecord, str]],
    options: MatchOptions,
    log: logging.Logger,
) -> Optional[MatchResult]:
    if not options.allow_surname_only or len(surname) < 2:
        return None

    distinct_names = {name for _, name in hits}
    if len(distinct_names) != 1:
        log.debug(
            "Surname '%s' is ambiguous across %d roster names", surname, len(distinct_names)
        )
        return None

    chosen = hits[0][0]
    for candidate, _ in hits[1:]:
        if candidate.num_ratings > chosen.num_ratings:
            chosen = candidate

    return MatchResult(
        matched=True,
        candidate=chosen,
        strategy="surname_only",
        confidence=SURNAME_ONLY_CONFIDENCE,
        matched_tokens=1,
        details=f"Surname '{surname}' is unique in roster: '{hits[0][1]}'",
    )


def match_name(
    query: str,
    index: SearchIndex,
    options: Optional[MatchOptions] = None,
    log: Optional[logging.Logger] = None,
) -> MatchResult:
    """
    Resolve a name against an indexed roster.

    Args:
        query: Free-text professor name
        index: SearchIndex from build_index; it carries the full roster
        options: Thresholds (defaults when omitted)
        log: Logger for debug traces

    Returns:
        MatchResult (matched=False when nothing qualifies)
    """
    options = options or DEFAULT_OPTIONS
    log = log or logger

    if not normalize_name(query):
        return MatchResult.no_match("Empty name after normalization")

    keys = generate_search_keys(query, options.nicknames)
    subset = lookup(index, keys)
    log.debug(
        "Search for '%s' with keys [%s] narrowed %d candidates to %d",
        query,
        ", ".join(sorted(keys)),
        index.candidate_count,
        len(subset),
    )
    if not subset:
        return MatchResult.no_match(f"No roster entry shares a search key with '{query}'")

    return match_candidates(query, subset, options, log)


class ProfessorMatcher:
    """
    Matches free-text professor names against rosters.

    Usage:
        matcher = ProfessorMatcher()
        result = matcher.match("M Sadeghi", roster)
        if result.matched:
            print(result.candidate.name)

    For many names against one roster, build the index once with index()
    and call match_index() for each name.
    """

    def __init__(
        self, options: Optional[MatchOptions] = None, log: Optional[logging.Logger] = None
    ) -> None:
        self.options = options or DEFAULT_OPTIONS
        self.log = log or logger

    def index(self, candidates: Iterable[CandidateRecord]) -> SearchIndex:
        return build_index(candidates, self.options.nicknames, self.log)

    def match_index(self, query: str, index: SearchIndex) -> MatchResult:
        return match_name(query, index, self.options, self.log)

    def match(self, query: str, candidates: Iterable[CandidateRecord]) -> MatchResult:
        return self.match_index(query, self.index(candidates))
