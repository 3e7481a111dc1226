from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .core.professors.matching import MatchOptions
from .core.professors.nicknames import DEFAULT_NICKNAMES, load_nickname_table


class MatchingSettings(BaseModel):
    substring_min_ratio: float = Field(default=0.5, gt=0, le=1)
    substring_min_length: int = Field(default=3, ge=1)
    min_token_matches: int = Field(default=2, ge=1)
    token_match_ratio: float = Field(default=0.5, gt=0, le=1)
    allow_surname_only: bool = True
    nicknames_path: Optional[Path] = None

    @field_validator("nicknames_path", mode="before")
    @classmethod
    def _expand_nicknames(cls, value: Optional[str | Path]) -> Optional[Path]:
        if value is None:
            return None
        return Path(value).expanduser().resolve()

    def to_options(self) -> MatchOptions:
        nicknames = load_nickname_table(self.nicknames_path) if self.nicknames_path else DEFAULT_NICKNAMES
        return MatchOptions(
            substring_min_ratio=self.substring_min_ratio,
            substring_min_length=self.substring_min_length,
            min_token_matches=self.min_token_matches,
            token_match_ratio=self.token_match_ratio,
            allow_surname_only=self.allow_surname_only,
            nicknames=nicknames,
        )


class RateMyProfSettings(BaseModel):
    endpoint: str = "https://www.ratemyprofessors.com/graphql"
    school_id: str = "U2Nob29sLTE1Mg=="
    school_name: str = "Carleton University"
    # Any basic credentials are accepted; the API only checks that the header exists.
    authorization: str = "Basic dGVzdDp0ZXN0"
    useragent: str = "coursescout/0.1"
    search_limit: int = Field(default=10, ge=1)
    timeout_seconds: float = Field(default=10.0, gt=0)
    roster_page_size: int = Field(default=100, ge=1)
    roster_max_pages: int = Field(default=50, ge=1)


class StoreSettings(BaseModel):
    path: Path = Field(default=Path("./cache/professors.sqlite3"), validate_default=True)
    stale_days: int = Field(default=30, ge=0)

    @field_validator("path", mode="before")
    @classmethod
    def _expand_path(cls, value: str | Path) -> Path:
        return Path(value).expanduser().resolve()


class Settings(BaseModel):
    matching: MatchingSettings = MatchingSettings()
    ratemyprof: RateMyProfSettings = RateMyProfSettings()
    store: StoreSettings = StoreSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Path:
    if explicit_path:
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "config.yaml", cwd / "config.yml"):
        if candidate.exists():
            return candidate
    raise FileNotFoundError("Could not find config.yaml - pass --config explicitly.")
