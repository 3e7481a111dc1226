from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from ..core.professors.matching import ProfessorMatcher
from ..roster import load_roster
from .output import match_line, match_payload


def run(
    matcher: ProfessorMatcher,
    roster_path: Path,
    names: Sequence[str],
    *,
    json_output: bool = False,
) -> list[str]:
    roster = load_roster(roster_path)
    index = matcher.index(roster)
    results = [(name, matcher.match_index(name, index)) for name in names]
    if json_output:
        return [json.dumps([match_payload(name, result) for name, result in results], indent=2)]
    return [match_line(name, result) for name, result in results]
