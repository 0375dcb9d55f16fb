# src/taskpad/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage and notification delivery swappable and makes testing easier.
"""

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import TYPE_CHECKING, Awaitable, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task
    from ..tasks.due_notifier import Reminder

Clock = Callable[[], datetime]
TasksObserver = Callable[[tuple["Task", ...]], None]


class TaskPersistence(Protocol):
    """
    Durable storage behind TaskStore.

    Every method either completes or raises; TaskStore rolls its in-memory
    state back when a write raises.
    """

    def load_all(self) -> Iterable[Task]: ...
    def insert(self, task: Task) -> None: ...
    def update(self, task: Task) -> None: ...
    def delete(self, task_id: int) -> None: ...


class Notifier(Protocol):
    """
    Delivery side of "due soon" reminders.

    The implementation decides how to surface the reminder (console line,
    desktop notification, ...).
    """

    def notify(self, reminder: Reminder) -> Awaitable[None]: ...
