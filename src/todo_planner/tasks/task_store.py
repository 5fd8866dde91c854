# src/todo_planner/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path
from typing import Any

from ..core.errors import StorageError, TaskNotFoundError
from ..recurrence.rules import format_day
from .task_models import Task

logger = logging.getLogger(__name__)

# Search strings in this form filter by exact date instead of text.
SEARCH_DATE_FORMAT = "%d.%m.%Y"


class TaskStore:
    """
    SQLite task store.

    One table (`scheduler`) keyed by an autoincrement id, with
    date/title/comment/repeat columns and an index on date.

    Thread-safety:
    - each method opens its own SQLite connection
    - WAL journal + busy timeout serialize concurrent writers in SQLite itself
    """

    def __init__(self, db_path: str | Path = "scheduler.db") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except StorageError:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _connect(self, action: str) -> Iterator[sqlite3.Connection]:
        """Open a connection and translate driver failures into StorageError."""
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            logger.exception("TaskStore %s: cannot open db=%s", action, self._db_path)
            raise StorageError(f"database error while trying to {action}") from e
        try:
            yield conn
        except sqlite3.Error as e:
            logger.exception("TaskStore %s failed", action)
            raise StorageError(f"database error while trying to {action}") from e
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connect("create schema") as conn:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS scheduler (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    date CHAR(8) NOT NULL DEFAULT '',
                    title TEXT NOT NULL DEFAULT '',
                    comment TEXT NOT NULL DEFAULT '',
                    repeat VARCHAR(128) NOT NULL DEFAULT ''
                )
                """
            )
            cur.execute("CREATE INDEX IF NOT EXISTS idx_scheduler_date ON scheduler(date)")
            conn.commit()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            date=str(row["date"] or ""),
            title=str(row["title"] or ""),
            comment=row["comment"] or None,
            repeat=row["repeat"] or None,
        )

    @staticmethod
    def _search_clause(search: str | None) -> tuple[str, list[Any]]:
        if not search or not search.strip():
            return "", []
        needle = search.strip()
        try:
            day = datetime.strptime(needle, SEARCH_DATE_FORMAT).date()
        except ValueError:
            # User text is matched literally: escape LIKE wildcards.
            escaped = needle.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            pattern = f"%{escaped}%"
            return (
                "WHERE title LIKE ? ESCAPE '\\' OR comment LIKE ? ESCAPE '\\'",
                [pattern, pattern],
            )
        return "WHERE date = ?", [format_day(day)]

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._connect("count tasks") as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM scheduler").fetchone()
            return int(n)

    def add_task(self, task: Task) -> int:
        with self._connect("add task") as conn:
            cur = conn.execute(
                "INSERT INTO scheduler (date, title, comment, repeat) VALUES (?, ?, ?, ?)",
                (task.date or "", task.title, task.comment or "", task.repeat or ""),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StorageError("SQLite did not return lastrowid for task insert")
            task_id = int(rowid)
            logger.debug("Task added id=%s date=%s repeat=%r", task_id, task.date, task.repeat)
            return task_id

    def get_task(self, task_id: int) -> Task:
        with self._connect("get task") as conn:
            row = conn.execute(
                "SELECT id, date, title, comment, repeat FROM scheduler WHERE id = ?",
                (int(task_id),),
            ).fetchone()
        if row is None:
            raise TaskNotFoundError(task_id)
        return self._row_to_task(row)

    def update_task(self, task: Task) -> None:
        if task.id is None:
            raise TaskNotFoundError(None)
        with self._connect("update task") as conn:
            cur = conn.execute(
                """
                UPDATE scheduler
                SET date = ?, title = ?, comment = ?, repeat = ?
                WHERE id = ?
                """,
                (task.date or "", task.title, task.comment or "", task.repeat or "", int(task.id)),
            )
            conn.commit()
            updated = cur.rowcount
        if updated == 0:
            raise TaskNotFoundError(task.id)

    def update_date(self, task_id: int, new_date: str) -> None:
        with self._connect("update task date") as conn:
            cur = conn.execute(
                "UPDATE scheduler SET date = ? WHERE id = ?",
                (new_date, int(task_id)),
            )
            conn.commit()
            updated = cur.rowcount
        if updated == 0:
            raise TaskNotFoundError(task_id)

    def delete_task(self, task_id: int) -> None:
        with self._connect("delete task") as conn:
            cur = conn.execute("DELETE FROM scheduler WHERE id = ?", (int(task_id),))
            conn.commit()
            deleted = cur.rowcount
        if deleted == 0:
            raise TaskNotFoundError(task_id)

    def list_tasks(self, limit: int, search: str | None = None) -> list[Task]:
        """
        Soonest-due tasks first (ties broken by id), at most `limit` of them.

        search:
        - "DD.MM.YYYY" -> tasks due on that date
        - anything else -> substring of title or comment (case-insensitive for ASCII)
        """
        where, params = self._search_clause(search)
        with self._connect("list tasks") as conn:
            rows = conn.execute(
                f"""
                SELECT id, date, title, comment, repeat
                FROM scheduler
                {where}
                ORDER BY date ASC, id ASC
                    LIMIT ?
                """,
                (*params, max(0, int(limit))),
            ).fetchall()
        return [self._row_to_task(r) for r in rows]
