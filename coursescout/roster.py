from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

import yaml

from .core.professors.models import CandidateRecord

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def load_roster(path: Path) -> list[CandidateRecord]:
    """
    Read a roster file (JSON or YAML list of professor mappings).

    Rows without any usable name are skipped with a warning.
    """
    with path.open("r", encoding="utf-8") as fh:
        if path.suffix.lower() in YAML_SUFFIXES:
            raw = yaml.safe_load(fh)
        else:
            raw = json.load(fh)
    if isinstance(raw, dict):
        raw = raw.get("professors", [])
    if not isinstance(raw, list):
        raise ValueError(f"Roster {path} must contain a list of professors")

    roster: list[CandidateRecord] = []
    for position, row in enumerate(raw):
        if isinstance(row, str):
            row = {"name": row}
        if not isinstance(row, dict):
            logger.warning("Skipping roster entry %d in %s: not a mapping", position, path)
            continue
        record = CandidateRecord.from_mapping(row)
        if not record.name:
            logger.warning("Skipping roster entry %d in %s: no name", position, path)
            continue
        roster.append(record)
    logger.debug("Loaded %d roster entries from %s", len(roster), path)
    return roster


def save_roster(path: Path, rows: Iterable[dict[str, Any]]) -> int:
    rows = list(rows)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(rows, fh, indent=2)
    return len(rows)
