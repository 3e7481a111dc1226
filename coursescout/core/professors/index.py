"""
In-memory search index over a professor roster.

build_index runs once per roster fetch; lookup narrows the roster to the few
candidates that share a search key with a query name.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable, Optional

from .keys import generate_search_keys
from .models import CandidateRecord, SearchIndex
from .nicknames import DEFAULT_NICKNAMES, NicknameTable

logger = logging.getLogger(__name__)


def build_index(
    candidates: Iterable[CandidateRecord],
    nicknames: NicknameTable = DEFAULT_NICKNAMES,
    log: Optional[logging.Logger] = None,
) -> SearchIndex:
    """
    Index every candidate under each of its search keys.

    Args:
        candidates: The roster; its order is kept and used for tie-breaking
        nicknames: Nickname table for key generation
        log: Logger for build statistics (module logger by default)

    Returns:
        A fresh SearchIndex
    """
    log = log or logger
    started = time.perf_counter()
    index = SearchIndex(candidates=tuple(candidates))

    for position, candidate in enumerate(index.candidates):
        for key in generate_search_keys(candidate.name, nicknames):
            index.entries.setdefault(key, []).append(position)

    elapsed_ms = (time.perf_counter() - started) * 1000
    log.debug(
        "Built professor index for %d candidates with %d keys in %.1fms",
        index.candidate_count,
        len(index),
        elapsed_ms,
    )
    return index


def lookup(index: SearchIndex, keys: Iterable[str]) -> list[CandidateRecord]:
    """
    Collect the candidates listed under any of the keys.

    Each candidate appears once (by identity) and the result follows roster
    order, so narrowing never changes which of two equal matches wins.
    """
    positions: set[int] = set()
    for key in keys:
        positions.update(index.entries.get(key, ()))

    found: list[CandidateRecord] = []
    seen: set[int] = set()
    for position in sorted(positions):
        candidate = index.candidates[position]
        if id(candidate) in seen:
            continue
        seen.add(id(candidate))
        found.append(candidate)
    return found
