from __future__ import annotations

import logging
from dataclasses import dataclass

from .cache import ProfessorStore
from .config import Settings
from .core.professors.matching import ProfessorMatcher
from .providers.ratemyprof import RateMyProfClient
from .services.professor_service import ProfessorService


@dataclass
class CourseScoutApp:
    settings: Settings
    store: ProfessorStore
    client: RateMyProfClient
    matcher: ProfessorMatcher
    service: ProfessorService

    @classmethod
    def create(cls, settings: Settings) -> "CourseScoutApp":
        options = settings.matching.to_options()
        matcher = ProfessorMatcher(options, logging.getLogger("coursescout.matching"))
        store = ProfessorStore(settings.store.path, nicknames=options.nicknames)
        client = RateMyProfClient(settings.ratemyprof)
        service = ProfessorService(
            store=store,
            client=client,
            matcher=matcher,
            stale_days=settings.store.stale_days,
            default_school=settings.ratemyprof.school_name,
        )
        return cls(
            settings=settings,
            store=store,
            client=client,
            matcher=matcher,
            service=service,
        )

    def close(self) -> None:
        self.store.close()
