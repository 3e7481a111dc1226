from __future__ import annotations

from dataclasses import dataclass

from ..app import CourseScoutApp
from ..config import Settings
from ..providers.ratemyprof import RateMyProfError
from .output import error, ok as ok_line, skipped


@dataclass(slots=True)
class DoctorReport:
    ok: bool
    checks: list[str]


def run(settings: Settings, *, validate_provider_online: bool = False) -> DoctorReport:
    checks: list[str] = []
    ok = True

    try:
        options = settings.matching.to_options()
    except (OSError, ValueError) as exc:
        return DoctorReport(ok=False, checks=[error("Nicknames", str(exc))])
    source = str(settings.matching.nicknames_path) if settings.matching.nicknames_path else "built-in"
    checks.append(ok_line("Nicknames", f"{len(options.nicknames)} names ({source})"))

    app = CourseScoutApp.create(settings)
    try:
        checks.append(ok_line("Store", f"{settings.store.path} ({app.store.count()} professors)"))
        if validate_provider_online:
            try:
                app.client.validate()
            except RateMyProfError as exc:
                ok = False
                checks.append(error("RateMyProfessors", str(exc)))
            else:
                checks.append(ok_line("RateMyProfessors", settings.ratemyprof.school_name))
        else:
            checks.append(skipped("RateMyProfessors", "pass --provider to check online"))
    finally:
        app.close()

    return DoctorReport(ok=ok, checks=checks)
