from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Iterable, Optional

from .core.professors.keys import generate_search_keys
from .core.professors.nicknames import DEFAULT_NICKNAMES, NicknameTable
from .models import ProfessorRecord, utcnow

_COLUMNS = (
    "id, rmp_id, full_name, avg_rating, num_ratings, avg_difficulty, "
    "would_take_again, department, school, last_checked_at"
)


class ProfessorStore:
    """SQLite-backed store of enriched professors and their search keys."""

    def __init__(self, path: Path, nicknames: NicknameTable = DEFAULT_NICKNAMES) -> None:
        self.path = path
        self.nicknames = nicknames
        if str(path) != ":memory:":
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()
        self._conn = sqlite3.connect(str(self.path), check_same_thread=False)
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS professors (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                rmp_id TEXT UNIQUE,
                full_name TEXT NOT NULL,
                avg_rating REAL,
                num_ratings INTEGER NOT NULL DEFAULT 0,
                avg_difficulty REAL,
                would_take_again INTEGER,
                department TEXT,
                school TEXT,
                last_checked_at TEXT NOT NULL
            )
            """
        )
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS professor_search_keys (
                key TEXT NOT NULL,
                professor_id INTEGER NOT NULL REFERENCES professors(id) ON DELETE CASCADE,
                PRIMARY KEY(key, professor_id)
            )
            """
        )
        self._conn.commit()

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def get(self, professor_id: int) -> Optional[ProfessorRecord]:
        with self._lock:
            cursor = self._conn.execute(
                f"SELECT {_COLUMNS} FROM professors WHERE id = ?",
                (professor_id,),
            )
            row = cursor.fetchone()
        return self._row_to_record(row) if row else None

    def get_by_rmp_id(self, rmp_id: str) -> Optional[ProfessorRecord]:
        with self._lock:
            cursor = self._conn.execute(
                f"SELECT {_COLUMNS} FROM professors WHERE rmp_id = ?",
                (rmp_id,),
            )
            row = cursor.fetchone()
        return self._row_to_record(row) if row else None

    def find_candidates(self, keys: Iterable[str]) -> list[ProfessorRecord]:
        """Professors listed under any of the search keys, oldest first."""
        unique_keys = sorted(set(keys))
        if not unique_keys:
            return []
        placeholders = ", ".join("?" for _ in unique_keys)
        with self._lock:
            cursor = self._conn.execute(
                f"""
                SELECT {_COLUMNS} FROM professors
                WHERE id IN (SELECT professor_id FROM professor_search_keys WHERE key IN ({placeholders}))
                ORDER BY id
                """,
                unique_keys,
            )
            rows = cursor.fetchall()
        return [self._row_to_record(row) for row in rows]

    def save(self, record: ProfessorRecord) -> ProfessorRecord:
        """
        Insert or update a professor and rewrite its search keys.

        A record without an id is matched to an existing row by rmp_id.
        """
        values = (
            record.rmp_id,
            record.full_name,
            record.avg_rating,
            int(record.num_ratings or 0),
            record.avg_difficulty,
            record.would_take_again,
            record.department,
            record.school,
            _format_timestamp(record.last_checked_at),
        )
        keys = generate_search_keys(record.full_name, self.nicknames)
        with self._lock:
            if record.id is None and record.rmp_id:
                row = self._conn.execute(
                    "SELECT id FROM professors WHERE rmp_id = ?",
                    (record.rmp_id,),
                ).fetchone()
                if row:
                    record.id = int(row[0])
            if record.id is None:
                cursor = self._conn.execute(
                    """
                    INSERT INTO professors(rmp_id, full_name, avg_rating, num_ratings, avg_difficulty,
                                           would_take_again, department, school, last_checked_at)
                    VALUES(?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    values,
                )
                record.id = int(cursor.lastrowid)
            else:
                self._conn.execute(
                    """
                    UPDATE professors
                    SET rmp_id=?, full_name=?, avg_rating=?, num_ratings=?, avg_difficulty=?,
                        would_take_again=?, department=?, school=?, last_checked_at=?
                    WHERE id = ?
                    """,
                    (*values, record.id),
                )
            self._conn.execute("DELETE FROM professor_search_keys WHERE professor_id = ?", (record.id,))
            self._conn.executemany(
                "INSERT OR IGNORE INTO professor_search_keys(key, professor_id) VALUES(?, ?)",
                [(key, record.id) for key in sorted(keys)],
            )
            self._conn.commit()
        return record

    def mark_checked(self, professor_id: int, when: Optional[datetime] = None) -> None:
        with self._lock:
            self._conn.execute(
                "UPDATE professors SET last_checked_at = ? WHERE id = ?",
                (_format_timestamp(when or utcnow()), professor_id),
            )
            self._conn.commit()

    def count(self) -> int:
        with self._lock:
            cursor = self._conn.execute("SELECT COUNT(*) FROM professors")
            row = cursor.fetchone()
        return int(row[0]) if row else 0

    def clear(self) -> int:
        with self._lock:
            cursor = self._conn.execute("SELECT COUNT(*) FROM professors")
            removed = int(cursor.fetchone()[0])
            self._conn.execute("DELETE FROM professor_search_keys")
            self._conn.execute("DELETE FROM professors")
            self._conn.commit()
        return removed

    @staticmethod
    def _row_to_record(row: tuple) -> ProfessorRecord:
        (
            professor_id,
            rmp_id,
            full_name,
            avg_rating,
            num_ratings,
            avg_difficulty,
            would_take_again,
            department,
            school,
            last_checked_at,
        ) = row
        return ProfessorRecord(
            id=int(professor_id),
            rmp_id=rmp_id,
            full_name=full_name,
            avg_rating=avg_rating,
            num_ratings=int(num_ratings or 0),
            avg_difficulty=avg_difficulty,
            would_take_again=would_take_again,
            department=department,
            school=school,
            last_checked_at=_parse_timestamp(last_checked_at),
        )


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
