# src/taskpad/tasks/task_repo.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


class SqliteTaskRepo:
    """
    SQLite persistence for TaskStore.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Timestamps are stored as ISO-8601 text so seconds survive a restart.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteTaskRepo ready db=%s", self._db_path)

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

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY,
                    name TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    icon INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    scheduled_at TEXT NOT NULL
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("SqliteTaskRepo migration: added column %s", name)

            add_col("description", "TEXT NOT NULL DEFAULT ''")
            add_col("icon", "INTEGER NOT NULL DEFAULT 0")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_created ON tasks(created_at)")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            name=str(row["name"]),
            description=str(row["description"] or ""),
            icon=int(row["icon"] or 0),
            created_at=datetime.fromisoformat(row["created_at"]),
            scheduled_at=datetime.fromisoformat(row["scheduled_at"]),
        )

    @staticmethod
    def _task_params(task: Task) -> tuple[str, str, int, str, str]:
        return (
            task.name,
            task.description,
            int(task.icon),
            task.created_at.isoformat(),
            task.scheduled_at.isoformat(),
        )

    # ---- TaskPersistence ----

    def load_all(self) -> list[Task]:
        """All tasks, newest first (ties broken by id, newest first)."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks ORDER BY created_at DESC, id DESC")
            out: list[Task] = []
            for row in cur.fetchall():
                try:
                    out.append(self._row_to_task(row))
                except (TypeError, ValueError):
                    logger.warning("Skipping undecodable task row id=%s", row["id"])
            return out
        finally:
            conn.close()

    def insert(self, task: Task) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO tasks(id, name, description, icon, created_at, scheduled_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (int(task.id), *self._task_params(task)),
            )
            conn.commit()
            logger.debug("Task row inserted id=%s", task.id)
        finally:
            conn.close()

    def update(self, task: Task) -> None:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                """
                UPDATE tasks
                SET name = ?, description = ?, icon = ?, created_at = ?, scheduled_at = ?
                WHERE id = ?
                """,
                (*self._task_params(task), int(task.id)),
            )
            conn.commit()
            if cur.rowcount != 1:
                raise LookupError(f"task row {task.id} not found")
        finally:
            conn.close()

    def delete(self, task_id: int) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            conn.commit()
        finally:
            conn.close()

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()


class InMemoryTaskRepo:
    """Volatile TaskPersistence: keeps rows in a dict, newest first on load."""

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._rows: dict[int, Task] = {t.id: t for t in tasks}

    def load_all(self) -> list[Task]:
        return sorted(self._rows.values(), key=lambda t: (t.created_at, t.id), reverse=True)

    def insert(self, task: Task) -> None:
        if task.id in self._rows:
            raise KeyError(f"task {task.id} already exists")
        self._rows[task.id] = task

    def update(self, task: Task) -> None:
        if task.id not in self._rows:
            raise KeyError(f"task {task.id} not found")
        self._rows[task.id] = task

    def delete(self, task_id: int) -> None:
        self._rows.pop(task_id, None)

    def count_tasks(self) -> int:
        return len(self._rows)


def open_task_repo(db_path: str | Path) -> SqliteTaskRepo | InMemoryTaskRepo:
    if str(db_path) == MEMORY_DB:
        logger.info("Using in-memory task repo (nothing is persisted).")
        return InMemoryTaskRepo()
    return SqliteTaskRepo(db_path)
