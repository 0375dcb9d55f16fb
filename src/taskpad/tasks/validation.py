# src/taskpad/tasks/validation.py

"""
Rule chain shared by TaskStore.add and TaskStore.update.

Rules run in a fixed order and the first violation wins, so the same input
always reports the same error.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime

from .icons import is_valid_icon
from .task_models import ErrorKind, Task, TaskError

NAME_MAX_LEN = 20
NAME_RE = re.compile(r"[A-Za-z0-9 ]+")


def check_name_format(name: str) -> TaskError | None:
    if not isinstance(name, str) or not NAME_RE.fullmatch(name):
        return TaskError(ErrorKind.INVALID_NAME_FORMAT, "name may only contain letters, digits and spaces")
    return None


def check_name_length(name: str) -> TaskError | None:
    if len(name) > NAME_MAX_LEN:
        return TaskError(ErrorKind.NAME_TOO_LONG, f"name is {len(name)} chars, max {NAME_MAX_LEN}")
    return None


def check_name_unique(name: str, existing: Iterable[Task], *, exclude_id: int | None = None) -> TaskError | None:
    key = name.casefold()
    for t in existing:
        if t.id == exclude_id:
            continue
        if t.name.casefold() == key:
            return TaskError(ErrorKind.DUPLICATE_NAME, f"name collides with task {t.id}")
    return None


def check_schedule(scheduled_at: datetime, now: datetime) -> TaskError | None:
    if scheduled_at < now:
        return TaskError(ErrorKind.SCHEDULED_IN_PAST, "scheduled time is in the past")
    return None


def check_icon(icon: int) -> TaskError | None:
    if not is_valid_icon(icon):
        return TaskError(ErrorKind.INVALID_ICON, f"unknown icon {icon!r}")
    return None


def validate_task_fields(
    *,
    name: str,
    icon: int,
    scheduled_at: datetime,
    existing: Iterable[Task],
    now: datetime,
    exclude_id: int | None = None,
) -> TaskError | None:
    """Return the first violated rule, or None when the fields are acceptable."""
    err = check_name_format(name)
    if err:
        return err
    err = check_name_length(name)
    if err:
        return err
    err = check_name_unique(name, existing, exclude_id=exclude_id)
    if err:
        return err
    err = check_schedule(scheduled_at, now)
    if err:
        return err
    return check_icon(icon)
