"""
Search key generation.

A name is expanded into a handful of short keys so a dictionary lookup on
any reasonable variant of it reaches the right roster entry. The keys only
narrow the roster; the matcher makes the actual decision.
"""

from __future__ import annotations

from .nicknames import DEFAULT_NICKNAMES, NicknameTable, nickname_variants
from .normalization import normalize_name, split_compound


def generate_search_keys(name: str, nicknames: NicknameTable = DEFAULT_NICKNAMES) -> set[str]:
    """
    Expand a name into its search keys.

    Examples:
        generate_search_keys("Mohammad Rafsanjani-Sadeghi") →
            {"mohammad rafsanjani-sadeghi", "mohammad", "rafsanjani",
             "sadeghi", "mohammad sadeghi", "m sadeghi"}
        generate_search_keys("Mike Smith") →
            {"mike smith", "mike", "smith", "m smith", "michael"}

    Args:
        name: Raw or already normalized name (normalized again here)
        nicknames: Nickname table used for given-name variants

    Returns:
        Set of keys; always contains the full normalized name
    """
    normalized = normalize_name(name)
    tokens = normalized.split()
    parts = [part for token in tokens for part in split_compound(token)]

    keys = {normalized}

    for part in parts:
        if len(part) > 1:
            keys.add(part)

    if len(parts) >= 2:
        first, last = parts[0], parts[-1]
        keys.add(f"{first} {last}")
        keys.add(f"{first[0]} {last}")

    for token in tokens:
        if "-" in token:
            keys.update(part for part in split_compound(token) if len(part) > 1)

    for part in parts:
        keys.update(nickname_variants(part, nicknames))

    # Surname parts are keyed whatever their length: every candidate that
    # passes the matcher's surname gate must share at least one key.
    if tokens:
        keys.update(split_compound(tokens[-1]))

    return keys
