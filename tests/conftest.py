# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskpad.core.state import AppState
from taskpad.tasks.task_store import TaskStore

from .fakes import FailingRepo, FixedClock

NOW = datetime(2030, 5, 17, 9, 30)


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def repo() -> FailingRepo:
    return FailingRepo()


@pytest.fixture()
def store(repo: FailingRepo, clock: FixedClock) -> TaskStore:
    return TaskStore(repo, clock=clock)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the command layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskpad",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        due_window_minutes=60,
        notify_interval_seconds=0.01,
        console_enabled=False,
        notifier_enabled=True,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, repo: FailingRepo) -> AppState:
    return AppState(settings=settings, store=store, repo=repo)
