"""
Professor name normalization.

Names arrive from two very different places: roster entries from
RateMyProfessors ("Mohammad Rafsanjani-Sadeghi") and free text extracted
from discussions ("Dr. M. Sadeghi", "prof sadeghi"). Everything that compares
names goes through normalize_name first so both sides speak the same form.

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Optional

TITLE_TOKENS = frozenset({"dr", "prof", "professor", "mr", "ms", "mrs"})

_TITLE_RE = re.compile(r"\b(?:dr|prof|professor|mr|ms|mrs)\b\.?")
_DISALLOWED_RE = re.compile(r"[^a-z\s-]+")


def _fold_ascii(value: str) -> str:
    normalized = unicodedata.normalize("NFKD", value)
    return normalized.encode("ascii", "ignore").decode("ascii")


def _clean_token(token: str) -> str:
    return "-".join(part for part in token.split("-") if part and part not in TITLE_TOKENS)


def normalize_name(raw: Optional[str]) -> str:
    """
    Canonicalize a display name.

    Process:
    1. Fold accents to ASCII and lowercase
    2. Remove honorifics (dr, prof, professor, mr, ms, mrs) written as
       whole words, with their period
    3. Remove everything except letters, whitespace and hyphens
    4. Tidy hyphens inside each token
    5. Drop honorifics left over from step 3 as tokens or hyphen parts
       ("D.R." → "dr")
    6. Collapse whitespace

    Examples:
        "Dr. Jane Doe" → "jane doe"
        "Dr.Jane Doe" → "jane doe"
        "Prof. J. Smith" → "j smith"
        "Mohammad Rafsanjani-Sadeghi" → "mohammad rafsanjani-sadeghi"
        "José Álvarez" → "jose alvarez"

    Args:
        raw: The name as displayed or extracted

    Returns:
        Normalized name, or "" when nothing alphabetic is left
    """
    if not raw:
        return ""

    lowered = _TITLE_RE.sub(" ", _fold_ascii(raw).lower())
    cleaned = _DISALLOWED_RE.sub("", lowered)

    tokens = []
    for token in cleaned.split():
        token = _clean_token(token)
        if token:
            tokens.append(token)

    return " ".join(tokens)


def tokenize(name: str) -> list[str]:
    """Whitespace tokens of a normalized name; hyphenated surnames stay whole."""
    return normalize_name(name).split()


def split_compound(token: str) -> list[str]:
    """
    Split a hyphenated token into its parts.

    Examples:
        "rafsanjani-sadeghi" → ["rafsanjani", "sadeghi"]
        "smith" → ["smith"]
    """
    return [part for part in token.split("-") if part]


def name_parts(name: str) -> list[str]:
    """Whitespace and hyphen delimited parts of a name, in order."""
    parts: list[str] = []
    for token in tokenize(name):
        parts.extend(split_compound(token))
    return parts
