# src/taskpad/connectors/reminder_runner.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from dataclasses import dataclass

from ..core.ports import Notifier
from ..core.state import AppState
from ..tasks.due_notifier import run_due_notifier

logger = logging.getLogger(__name__)


@dataclass
class ReminderBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Failed to signal reminder loop stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_reminders_in_background(state: AppState, notifier: Notifier) -> ReminderBackgroundRunner | None:
    """
    Start the due-soon loop in a background thread (so console REPL can run in parallel).

    The console REPL blocks on input(); the reminder loop is async and wants its own event loop.
    """
    settings = state.settings
    if not getattr(settings, "notifier_enabled", True):
        logger.info("Reminder loop disabled, not starting.")
        return None

    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(
                run_due_notifier(
                    state.store,
                    notifier,
                    window=state.due_window,
                    interval_seconds=float(getattr(settings, "notify_interval_seconds", 30.0)),
                    stop_event=stop_event,
                )
            )
        finally:
            with contextlib.suppress(RuntimeError):
                loop.close()

    t = threading.Thread(target=runner, name="taskpad-reminders", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Reminder thread did not initialize properly.")
        return None

    logger.info("Reminder background thread started.")
    return ReminderBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
