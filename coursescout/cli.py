from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from .app import CourseScoutApp
from .commands import doctor as cmd_doctor
from .commands import export_roster as cmd_export_roster
from .commands import keys as cmd_keys
from .commands import lookup as cmd_lookup
from .commands import match as cmd_match
from .config import Settings, find_config
from .core.professors.matching import ProfessorMatcher

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CourseScout professor matching")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--log-level", default="INFO", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    keys_parser = subparsers.add_parser("keys", help="Show the normalized name and search keys")
    keys_parser.add_argument("name")

    match_parser = subparsers.add_parser("match", help="Match names against a roster file")
    match_parser.add_argument("names", nargs="+")
    match_parser.add_argument(
        "--roster", type=Path, required=True, help="Roster file (JSON or YAML list of professors)"
    )
    match_parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    lookup_parser = subparsers.add_parser(
        "lookup", help="Resolve names through the professor store and RateMyProfessors"
    )
    lookup_parser.add_argument("names", nargs="+")
    lookup_parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    export_parser = subparsers.add_parser(
        "export-roster", help="Download the school roster from RateMyProfessors"
    )
    export_parser.add_argument("--out", type=Path, default=Path("roster.json"))

    subparsers.add_parser("clear-store", help="Delete all stored professors")

    doctor_parser = subparsers.add_parser("doctor", help="Run basic config/store checks")
    doctor_parser.add_argument(
        "--provider", action="store_true", help="Also check RateMyProfessors with a network call"
    )
    return parser


def load_settings(explicit_path: Optional[Path]) -> Settings:
    try:
        config_path = find_config(explicit_path)
    except FileNotFoundError:
        return Settings()
    try:
        return Settings.load(config_path)
    except FileNotFoundError as exc:
        raise SystemExit(f"Config file not found: {config_path}") from exc
    except ValidationError as exc:
        raise SystemExit(f"Invalid config {config_path}:\n{exc}") from exc


def configure_logging(level_name: str) -> WarningBufferHandler:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    color_handler = logging.StreamHandler()
    color_handler.setFormatter(ColorFormatter(LOG_FORMAT))
    root_logger.addHandler(color_handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(warn_buffer)
    return warn_buffer


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings(args.config)
    warn_buffer = configure_logging(args.log_level)

    lines: list[str] = []
    try:
        match args.command:
            case "keys":
                lines = cmd_keys.run(args.name, settings.matching.to_options())
            case "match":
                matcher = ProfessorMatcher(
                    settings.matching.to_options(), logging.getLogger("coursescout.matching")
                )
                lines = cmd_match.run(matcher, args.roster, args.names, json_output=args.json)
            case "lookup":
                app = CourseScoutApp.create(settings)
                try:
                    lines = cmd_lookup.run(app.service, args.names, json_output=args.json)
                finally:
                    app.close()
            case "export-roster":
                app = CourseScoutApp.create(settings)
                try:
                    count = cmd_export_roster.run(app.client, args.out)
                finally:
                    app.close()
                lines = [f"Wrote {count} professors to {args.out}"]
            case "clear-store":
                app = CourseScoutApp.create(settings)
                try:
                    removed = app.store.clear()
                finally:
                    app.close()
                lines = [f"Removed {removed} stored professors."]
            case "doctor":
                report = cmd_doctor.run(settings, validate_provider_online=args.provider)
                for line in report.checks:
                    print(line)
                if not report.ok:
                    raise SystemExit(1)
            case _:
                parser.error("Unknown command")
        for line in lines:
            print(line)
    finally:
        if warn_buffer.records:
            print("\n\033[33mWarnings/Errors summary:\033[0m")
            for line in warn_buffer.records:
                print(f" - {line}")


if __name__ == "__main__":  # pragma: no cover
    main()
