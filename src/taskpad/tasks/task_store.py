# src/taskpad/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import threading
from dataclasses import replace
from datetime import datetime, timedelta

from ..core.ports import Clock, TaskPersistence, TasksObserver
from .task_models import Err, ErrorKind, Ok, Task, TaskChanges, TaskDraft, TaskError
from .validation import validate_task_fields

logger = logging.getLogger(__name__)

DUE_SOON_WINDOW = timedelta(hours=1)


class TaskStore:
    """
    In-memory, observable task collection backed by a persistence port.

    Ordering:
    - newest created first; add() inserts at the head
    - update() replaces in place, delete() removes
    - load order from the repo is kept as-is at startup

    Thread-safety:
    - one RLock spans validate + mutate + persist of every write
    - reads copy a tuple snapshot under the same lock
    - observers run after the lock is released

    Failure policy:
    - validation / not-found -> Err, state untouched
    - repo raises after the in-memory change -> state restored, Err(PERSISTENCE)
    """

    def __init__(self, repo: TaskPersistence, *, clock: Clock = datetime.now) -> None:
        self._repo = repo
        self._clock = clock
        self._lock = threading.RLock()
        self._observers: list[TasksObserver] = []

        self._tasks: list[Task] = list(repo.load_all())
        self._next_id = max((t.id for t in self._tasks), default=0) + 1
        logger.info("TaskStore ready total=%s next_id=%s", len(self._tasks), self._next_id)

    # ---- observation ----

    def subscribe(self, observer: TasksObserver) -> TasksObserver:
        """
        Register a callback receiving the full snapshot after each change.

        Returns the observer so callers can pass it to unsubscribe().
        """
        with self._lock:
            self._observers.append(observer)
        return observer

    def unsubscribe(self, observer: TasksObserver) -> None:
        with self._lock, contextlib.suppress(ValueError):
            self._observers.remove(observer)

    def _notify(self, snapshot: tuple[Task, ...]) -> None:
        with self._lock:
            observers = list(self._observers)
        for cb in observers:
            try:
                cb(snapshot)
            except Exception:
                logger.exception("Task observer failed: %r", cb)

    # ---- read views ----

    def _now(self, now: datetime | None) -> datetime:
        return self._clock() if now is None else now

    def list(self) -> tuple[Task, ...]:
        with self._lock:
            return tuple(self._tasks)

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def get(self, task_id: int) -> Task | None:
        with self._lock:
            idx = self._index_of(task_id)
            return self._tasks[idx] if idx is not None else None

    def filtered_by_query(self, query: str) -> tuple[Task, ...]:
        snapshot = self.list()
        if not query or not query.strip():
            return snapshot
        q = query.casefold()
        return tuple(t for t in snapshot if q in t.name.casefold())

    def due_within(self, window: timedelta = DUE_SOON_WINDOW, now: datetime | None = None) -> tuple[Task, ...]:
        """Tasks with now < scheduled_at < now + window, in store order."""
        now = self._now(now)
        end = now + window
        return tuple(t for t in self.list() if now < t.scheduled_at < end)

    # ---- mutations ----

    def add(self, draft: TaskDraft, *, now: datetime | None = None) -> Ok[Task] | Err:
        now = self._now(now)
        with self._lock:
            err = validate_task_fields(
                name=draft.name,
                icon=draft.icon,
                scheduled_at=draft.scheduled_at,
                existing=self._tasks,
                now=now,
            )
            if err:
                logger.debug("add rejected kind=%s name=%r", err.kind.value, draft.name)
                return Err(err)

            task = Task(
                id=self._next_id,
                name=draft.name,
                description=draft.description or "",
                icon=draft.icon,
                created_at=now,
                scheduled_at=draft.scheduled_at,
            )

            self._tasks.insert(0, task)
            try:
                self._repo.insert(task)
            except Exception as e:
                self._tasks.pop(0)
                logger.exception("Task insert failed id=%s; rolled back", task.id)
                return Err(TaskError(ErrorKind.PERSISTENCE, str(e)))

            self._next_id += 1
            snapshot = tuple(self._tasks)

        logger.info("Task added id=%s name=%r scheduled_at=%s", task.id, task.name, task.scheduled_at)
        self._notify(snapshot)
        return Ok(task)

    def update(self, task_id: int, changes: TaskChanges, *, now: datetime | None = None) -> Ok[Task] | Err:
        now = self._now(now)
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return Err(TaskError(ErrorKind.NOT_FOUND, f"no task with id {task_id}"))

            current = self._tasks[idx]
            updated = replace(
                current,
                name=current.name if changes.name is None else changes.name,
                description=current.description if changes.description is None else changes.description,
                icon=current.icon if changes.icon is None else changes.icon,
                scheduled_at=current.scheduled_at if changes.scheduled_at is None else changes.scheduled_at,
            )

            err = validate_task_fields(
                name=updated.name,
                icon=updated.icon,
                scheduled_at=updated.scheduled_at,
                existing=self._tasks,
                now=now,
                exclude_id=task_id,
            )
            if err:
                logger.debug("update rejected id=%s kind=%s", task_id, err.kind.value)
                return Err(err)

            self._tasks[idx] = updated
            try:
                self._repo.update(updated)
            except Exception as e:
                self._tasks[idx] = current
                logger.exception("Task update failed id=%s; rolled back", task_id)
                return Err(TaskError(ErrorKind.PERSISTENCE, str(e)))

            snapshot = tuple(self._tasks)

        logger.info("Task updated id=%s", task_id)
        self._notify(snapshot)
        return Ok(updated)

    def delete(self, task_id: int) -> Ok[None] | Err:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return Err(TaskError(ErrorKind.NOT_FOUND, f"no task with id {task_id}"))

            removed = self._tasks.pop(idx)
            try:
                self._repo.delete(task_id)
            except Exception as e:
                self._tasks.insert(idx, removed)
                logger.exception("Task delete failed id=%s; rolled back", task_id)
                return Err(TaskError(ErrorKind.PERSISTENCE, str(e)))

            snapshot = tuple(self._tasks)

        logger.info("Task deleted id=%s", task_id)
        self._notify(snapshot)
        return Ok(None)

    # ---- helpers ----

    def _index_of(self, task_id: int) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None
