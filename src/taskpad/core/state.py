# src/taskpad/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings object (real Settings or a test namespace with the same attributes).
    settings: object

    store: TaskStore
    repo: object

    @property
    def due_window(self) -> timedelta:
        return timedelta(minutes=int(getattr(self.settings, "due_window_minutes", 60)))
