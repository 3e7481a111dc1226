from __future__ import annotations

from ..core.professors.keys import generate_search_keys
from ..core.professors.matching import MatchOptions
from ..core.professors.normalization import normalize_name


def run(name: str, options: MatchOptions) -> list[str]:
    lines = [f"Normalized: {normalize_name(name) or '(empty)'}"]
    for key in sorted(generate_search_keys(name, options.nicknames)):
        lines.append(f" - {key}")
    return lines
