# src/taskpad/tasks/due_notifier.py

from __future__ import annotations

"""
"Due soon" reminders.

A small polling loop that:
- asks the store which tasks are due within the window,
- builds one reminder per task (once per scheduled time),
- hands reminders to an injected notifier port.

Delivery (console line, desktop toast, ...) belongs to the notifier, not to this loop.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.ports import Notifier
from .task_models import Task
from .task_store import DUE_SOON_WINDOW, TaskStore
from .time_utils import Countdown, remaining_or_overdue

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Reminder:
    """What the loop wants surfaced: the task and how long until it is due."""

    task: Task
    countdown: Countdown

    @property
    def text(self) -> str:
        return f"Task '{self.task.name}' is due soon. {self.countdown.describe()}"


class DueSoonTracker:
    """
    Remembers which (task id, scheduled_at) pairs were already reminded.

    Rescheduling a task produces a new pair, so it can be reminded again.
    Pairs of tasks that left the window are forgotten.
    """

    def __init__(self, window: timedelta = DUE_SOON_WINDOW) -> None:
        self.window = window
        self._seen: set[tuple[int, datetime]] = set()

    def poll(self, store: TaskStore, now: datetime) -> list[Reminder]:
        due = store.due_within(self.window, now)
        current = {(t.id, t.scheduled_at) for t in due}

        out = [
            Reminder(task=t, countdown=remaining_or_overdue(t.scheduled_at, now))
            for t in due
            if (t.id, t.scheduled_at) not in self._seen
        ]

        self._seen = current
        return out


async def run_due_notifier(
        store: TaskStore,
        notifier: Notifier,
        *,
        window: timedelta = DUE_SOON_WINDOW,
        interval_seconds: float = 30.0,
        clock: Callable[[], datetime] = datetime.now,
        stop_event: asyncio.Event | None = None,
) -> None:
    """
    Simple polling loop.

    Every interval_seconds:
    - read "now" from clock (fresh per tick)
    - collect tasks newly due within window
    - await notifier.notify(reminder) for each

    A failed delivery is logged and not retried for the same scheduled time.
    To stop the loop, set stop_event or cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))
    tracker = DueSoonTracker(window)

    while stop_event is None or not stop_event.is_set():
        try:
            reminders = tracker.poll(store, clock())
        except Exception:
            logger.exception("due-soon poll failed")
            reminders = []

        for reminder in reminders:
            try:
                await notifier.notify(reminder)
                logger.info("Reminder sent task_id=%s", reminder.task.id)
            except Exception:
                logger.exception("Reminder delivery failed task_id=%s", reminder.task.id)

        if stop_event is None:
            await asyncio.sleep(sleep_s)
        else:
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=sleep_s)
            except asyncio.TimeoutError:
                pass
