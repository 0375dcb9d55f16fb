# src/taskpad/tasks/task_api.py

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from .task_models import Err, MalformedTimestamp, Ok, Task, TaskChanges, TaskDraft, TaskError
from .task_store import TaskStore
from .time_utils import format_timestamp, parse_timestamp, remaining_or_overdue, truncate_to_minute

logger = logging.getLogger(__name__)


def _parse_or_err(text: str) -> datetime | Err:
    try:
        return parse_timestamp(text.strip())
    except MalformedTimestamp as e:
        logger.debug("Rejected timestamp text %r", e.text)
        return Err(TaskError(e.kind, e.text))


def add_task_from_text(
    store: TaskStore,
    *,
    name: str,
    scheduled_text: str,
    description: str = "",
    icon: int = 0,
    now: datetime | None = None,
) -> Ok[Task] | Err:
    """Add a task whose due time comes as "dd/mm/yyyy HH:MM" text."""
    scheduled = _parse_or_err(scheduled_text)
    if isinstance(scheduled, Err):
        return scheduled
    return store.add(
        TaskDraft(name=name, description=description, icon=icon, scheduled_at=scheduled),
        now=now,
    )


def schedule_in_minutes(
    store: TaskStore,
    *,
    name: str,
    minutes: int,
    description: str = "",
    icon: int = 0,
    now: datetime | None = None,
) -> Ok[Task] | Err:
    """
    Convenience helper: due time = now + minutes, rounded up to the next whole minute
    so the stored value survives the text round trip.
    """
    if now is None:
        now = datetime.now()
    target = now + timedelta(minutes=max(0, int(minutes)))
    scheduled = truncate_to_minute(target)
    if scheduled < target:
        scheduled += timedelta(minutes=1)
    return store.add(
        TaskDraft(name=name, description=description, icon=icon, scheduled_at=scheduled),
        now=now,
    )


def edit_task_from_text(
    store: TaskStore,
    task_id: int,
    *,
    name: str | None = None,
    description: str | None = None,
    icon: int | None = None,
    scheduled_text: str | None = None,
    now: datetime | None = None,
) -> Ok[Task] | Err:
    scheduled: datetime | None = None
    if scheduled_text is not None:
        parsed = _parse_or_err(scheduled_text)
        if isinstance(parsed, Err):
            return parsed
        scheduled = parsed
    changes = TaskChanges(name=name, description=description, icon=icon, scheduled_at=scheduled)
    return store.update(task_id, changes, now=now)


def countdown_line(task: Task, now: datetime) -> str:
    """One display line: "#3 Report (due 01/02/2025 10:00) Time left: 1h 5s"."""
    countdown = remaining_or_overdue(task.scheduled_at, now)
    return f"#{task.id} {task.name} (due {format_timestamp(task.scheduled_at)}) {countdown.describe()}"
