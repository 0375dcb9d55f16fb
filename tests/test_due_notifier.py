# tests/test_due_notifier.py

from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest

from taskpad.tasks.due_notifier import DueSoonTracker, run_due_notifier
from taskpad.tasks.task_models import TaskChanges, TaskDraft
from taskpad.tasks.task_store import TaskStore

from .conftest import NOW
from .fakes import FakeNotifier, FixedClock


def test_tracker_reports_each_task_once(store: TaskStore) -> None:
    soon = store.add(TaskDraft(name="Report", scheduled_at=NOW + timedelta(minutes=30))).value
    store.add(TaskDraft(name="Later", scheduled_at=NOW + timedelta(hours=5)))

    tracker = DueSoonTracker(timedelta(hours=1))

    first = tracker.poll(store, NOW)
    assert [r.task.id for r in first] == [soon.id]
    assert first[0].countdown.describe() == "Time left: 30m 0s"
    assert "Report" in first[0].text

    assert tracker.poll(store, NOW + timedelta(minutes=1)) == []


def test_tracker_reminds_again_after_reschedule(store: TaskStore) -> None:
    task = store.add(TaskDraft(name="Report", scheduled_at=NOW + timedelta(minutes=30))).value
    tracker = DueSoonTracker(timedelta(hours=1))
    assert len(tracker.poll(store, NOW)) == 1

    store.update(task.id, TaskChanges(scheduled_at=NOW + timedelta(minutes=45)))
    again = tracker.poll(store, NOW)
    assert [r.task.id for r in again] == [task.id]


def test_tracker_picks_up_tasks_entering_window(store: TaskStore) -> None:
    store.add(TaskDraft(name="Later", scheduled_at=NOW + timedelta(hours=2)))
    tracker = DueSoonTracker(timedelta(hours=1))
    assert tracker.poll(store, NOW) == []
    assert len(tracker.poll(store, NOW + timedelta(minutes=90))) == 1


@pytest.mark.asyncio
async def test_notifier_loop_sends_due_task_once(store: TaskStore, clock: FixedClock) -> None:
    store.add(TaskDraft(name="Report", scheduled_at=NOW + timedelta(minutes=10)))
    notifier = FakeNotifier()
    stop = asyncio.Event()

    runner = asyncio.create_task(
        run_due_notifier(
            store,
            notifier,
            window=timedelta(hours=1),
            interval_seconds=0.01,
            clock=clock,
            stop_event=stop,
        )
    )

    await asyncio.sleep(0.05)
    stop.set()
    await asyncio.wait_for(runner, timeout=1.0)

    assert len(notifier.sent) == 1
    assert notifier.sent[0].task.name == "Report"


@pytest.mark.asyncio
async def test_notifier_loop_survives_delivery_errors(store: TaskStore, clock: FixedClock) -> None:
    store.add(TaskDraft(name="Report", scheduled_at=NOW + timedelta(minutes=10)))

    class BrokenNotifier:
        calls = 0

        async def notify(self, reminder) -> None:
            BrokenNotifier.calls += 1
            raise ConnectionError("offline")

    runner = asyncio.create_task(
        run_due_notifier(store, BrokenNotifier(), interval_seconds=0.01, clock=clock)
    )
    await asyncio.sleep(0.05)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert BrokenNotifier.calls == 1
