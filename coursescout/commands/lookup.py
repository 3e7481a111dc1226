from __future__ import annotations

import json
from typing import Sequence

from ..services.professor_service import ProfessorService
from .output import CheckLine


def run(service: ProfessorService, names: Sequence[str], *, json_output: bool = False) -> list[str]:
    results = service.get_professors(names)
    if json_output:
        payload = [
            {"query": name, "professor": record.to_dict() if record else None}
            for name, record in results
        ]
        return [json.dumps(payload, indent=2)]

    lines: list[str] = []
    for name, record in results:
        if record is None:
            lines.append(CheckLine(name, "NOT FOUND").render())
            continue
        rating = f"{record.avg_rating:.1f}" if record.avg_rating is not None else "n/a"
        detail = f"rating {rating}, {record.num_ratings} ratings, {record.department or 'unknown department'}"
        lines.append(CheckLine(name, record.full_name, detail).render())
    return lines
