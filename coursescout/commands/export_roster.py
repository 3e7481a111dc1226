from __future__ import annotations

from pathlib import Path

from ..providers.ratemyprof import RateMyProfClient
from ..roster import save_roster


def run(client: RateMyProfClient, out: Path) -> int:
    nodes = client.fetch_roster()
    return save_roster(out, (node.to_dict() for node in nodes))
