# src/taskpad/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(StrEnum):
    """
    Why a task operation was rejected.

    Notes:
    - the first five are validation outcomes, reported in this order by add/update
    - PERSISTENCE means the in-memory change was rolled back
    """

    INVALID_NAME_FORMAT = "invalid_name_format"
    NAME_TOO_LONG = "name_too_long"
    DUPLICATE_NAME = "duplicate_name"
    SCHEDULED_IN_PAST = "scheduled_in_past"
    INVALID_ICON = "invalid_icon"
    NOT_FOUND = "not_found"
    MALFORMED_TIMESTAMP = "malformed_timestamp"
    PERSISTENCE = "persistence"


@dataclass(slots=True, frozen=True)
class TaskError:
    kind: ErrorKind
    detail: str = ""


class MalformedTimestamp(ValueError):
    """Raised by parse_timestamp for text that is not a valid dd/mm/yyyy HH:MM."""

    kind = ErrorKind.MALFORMED_TIMESTAMP

    def __init__(self, text: str) -> None:
        super().__init__(f"malformed timestamp: {text!r}")
        self.text = text


@dataclass(slots=True, frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class Err:
    error: TaskError

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    name: str
    description: str
    icon: int
    created_at: datetime
    scheduled_at: datetime


@dataclass(slots=True, frozen=True)
class TaskDraft:
    """Caller-supplied fields of a new task (id and created_at are assigned by the store)."""

    name: str
    scheduled_at: datetime
    description: str = ""
    icon: int = 0


@dataclass(slots=True, frozen=True)
class TaskChanges:
    """Partial update. None means "keep the current value"."""

    name: str | None = None
    description: str | None = None
    icon: int | None = None
    scheduled_at: datetime | None = None
