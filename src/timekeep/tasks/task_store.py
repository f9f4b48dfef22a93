# src/timekeep/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from ..errors import StorageError, ValidationError
from .task_models import ClosedTask, decode_instant, encode_instant, to_utc

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite log of finished tasks.

    Append-only: rows are inserted and read back, never updated or deleted.
    The table is created on the first append; querying a database that has
    never been written to yields no tasks.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "timekeep.sqlite3") -> None:
        self._db_path = Path(db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @staticmethod
    def _table_exists(conn: sqlite3.Connection) -> bool:
        cur = conn.execute("SELECT name FROM sqlite_master WHERE type='table' AND name='tasks'")
        return cur.fetchone() is not None

    @staticmethod
    def _ensure_schema(conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS tasks (
                project_name TEXT NOT NULL,
                start_time   TEXT NOT NULL,
                end_time     TEXT NOT NULL,
                description  TEXT
            )
            """
        )

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> ClosedTask:
        project_name = row["project_name"]
        description = row["description"]
        if not isinstance(project_name, str):
            raise ValueError(f"project_name is {type(project_name).__name__}")
        if description is not None and not isinstance(description, str):
            raise ValueError(f"description is {type(description).__name__}")
        return ClosedTask(
            project_name,
            decode_instant(row["start_time"]),
            decode_instant(row["end_time"]),
            description,
        )

    def _select(self) -> list[ClosedTask]:
        """Decode every row. One undecodable row fails the whole query."""
        try:
            conn = self._get_conn()
        except (sqlite3.Error, OSError) as exc:
            raise StorageError(f"cannot open task database {self._db_path}: {exc}") from exc
        try:
            if not self._table_exists(conn):
                return []
            cur = conn.execute(
                "SELECT rowid, project_name, start_time, end_time, description "
                "FROM tasks ORDER BY rowid ASC"
            )
            rows = cur.fetchall()
        except sqlite3.Error as exc:
            logger.exception("Task query failed db=%s", self._db_path)
            raise StorageError(f"cannot read task database {self._db_path}: {exc}") from exc
        finally:
            conn.close()

        tasks: list[ClosedTask] = []
        failures: list[str] = []
        for row in rows:
            try:
                tasks.append(self._row_to_task(row))
            except (ValueError, ValidationError) as exc:
                failures.append(f"row {row['rowid']}: {exc}")

        if failures:
            logger.error("Undecodable task rows db=%s count=%d", self._db_path, len(failures))
            raise StorageError(f"{len(failures)} stored task(s) could not be decoded", failures)
        return tasks

    # ---- public API ----

    def count(self) -> int:
        try:
            conn = self._get_conn()
            try:
                if not self._table_exists(conn):
                    return 0
                (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
                return int(n)
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            raise StorageError(f"cannot count tasks in {self._db_path}: {exc}") from exc

    def append(self, task: ClosedTask) -> None:
        try:
            conn = self._get_conn()
            try:
                with conn:
                    self._ensure_schema(conn)
                    conn.execute(
                        "INSERT INTO tasks (project_name, start_time, end_time, description) "
                        "VALUES (?, ?, ?, ?)",
                        (
                            task.project_name,
                            encode_instant(task.start_time),
                            encode_instant(task.end_time),
                            task.description,
                        ),
                    )
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            logger.exception("Task append failed db=%s", self._db_path)
            raise StorageError(f"cannot write task to {self._db_path}: {exc}") from exc

        logger.debug(
            "Task appended project=%s start=%s end=%s",
            task.project_name,
            task.start_time.isoformat(),
            task.end_time.isoformat(),
        )

    def query_all(self) -> list[ClosedTask]:
        return self._select()

    def query_range(self, start: datetime, end: datetime) -> list[ClosedTask]:
        """
        Tasks whose start_time lies in [start, end).

        Half-open so that adjoining windows (day after day, month after month)
        tile without overlap or gaps.
        """
        lo = to_utc(start)
        hi = to_utc(end)
        if hi < lo:
            raise ValidationError(f"range end ({hi.isoformat()}) is before range start ({lo.isoformat()})")
        return [t for t in self._select() if lo <= t.start_time < hi]
