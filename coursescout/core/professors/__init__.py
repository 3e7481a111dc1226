"""
Professor name matching domain logic.

This module handles:
- Name normalization (titles, punctuation, accents)
- Search key generation (tokens, initials, nicknames, compound surnames)
- Roster indexing for fast narrowing
- Token-overlap matching with a mandatory surname gate

Apart from load_nickname_table reading a YAML file, everything here is pure.
"""

from __future__ import annotations

from .index import build_index, lookup
from .keys import generate_search_keys
from .matching import (
    DEFAULT_OPTIONS,
    MatchOptions,
    ProfessorMatcher,
    match_candidates,
    match_name,
)
from .models import CandidateRecord, MatchResult, SearchIndex
from .nicknames import DEFAULT_NICKNAMES, build_nickname_table, load_nickname_table
from .normalization import normalize_name, tokenize

__all__ = [
    "CandidateRecord",
    "DEFAULT_NICKNAMES",
    "DEFAULT_OPTIONS",
    "MatchOptions",
    "MatchResult",
    "ProfessorMatcher",
    "SearchIndex",
    "build_index",
    "build_nickname_table",
    "generate_search_keys",
    "load_nickname_table",
    "lookup",
    "match_candidates",
    "match_name",
    "normalize_name",
    "tokenize",
]
