# src/taskpad/tasks/time_utils.py

"""
Date/time helpers shared by the store, the reminder loop and the console.

All timestamps are naive local datetimes. The text form is fixed to
"dd/mm/yyyy HH:MM" (zero padded, 24-hour clock), minute granularity.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

from .task_models import MalformedTimestamp

TIMESTAMP_PATTERN = "dd/mm/yyyy HH:MM"

# strptime accepts "1/2/2024 3:04"; the text form must be zero padded.
_TIMESTAMP_RE = re.compile(r"(\d{2})/(\d{2})/(\d{4}) (\d{2}):(\d{2})")


class TimeStatus(StrEnum):
    PAST = "past"
    DUE_SOON = "due_soon"
    FUTURE = "future"


def parse_timestamp(text: str) -> datetime:
    m = _TIMESTAMP_RE.fullmatch(text or "")
    if not m:
        raise MalformedTimestamp(text)
    day, month, year, hour, minute = (int(g) for g in m.groups())
    try:
        return datetime(year, month, day, hour, minute)
    except ValueError as e:
        raise MalformedTimestamp(text) from e


def format_timestamp(dt: datetime) -> str:
    # strftime("%Y") does not pad years below 1000 on every platform.
    return f"{dt.day:02d}/{dt.month:02d}/{dt.year:04d} {dt.hour:02d}:{dt.minute:02d}"


def truncate_to_minute(dt: datetime) -> datetime:
    return dt.replace(second=0, microsecond=0)


@dataclass(slots=True, frozen=True)
class Countdown:
    """Distance between a scheduled time and "now", split for display."""

    is_overdue: bool
    magnitude: timedelta

    @property
    def days(self) -> int:
        return self.magnitude.days

    @property
    def hours(self) -> int:
        return self.magnitude.seconds // 3600

    @property
    def minutes(self) -> int:
        return (self.magnitude.seconds // 60) % 60

    @property
    def seconds(self) -> int:
        return self.magnitude.seconds % 60

    def describe(self) -> str:
        if self.is_overdue:
            return f"Overdue by {format_duration(self.magnitude)}"
        return f"Time left: {format_duration(self.magnitude)}"


def remaining_or_overdue(scheduled_at: datetime, now: datetime) -> Countdown:
    delta = scheduled_at - now
    if delta < timedelta(0):
        return Countdown(is_overdue=True, magnitude=-delta)
    return Countdown(is_overdue=False, magnitude=delta)


def format_duration(delta: timedelta) -> str:
    """
    Render a duration as "1d 2h 3m 10s".

    Zero days/hours/minutes are left out; seconds are always present.
    Negative durations are rendered by magnitude.
    """
    delta = abs(delta)
    days = delta.days
    hours = delta.seconds // 3600
    minutes = (delta.seconds // 60) % 60
    seconds = delta.seconds % 60

    parts: list[str] = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    parts.append(f"{seconds}s")
    return " ".join(parts)


def classify(scheduled_at: datetime, now: datetime, window: timedelta) -> TimeStatus:
    if scheduled_at < now:
        return TimeStatus.PAST
    if now < scheduled_at < now + window:
        return TimeStatus.DUE_SOON
    return TimeStatus.FUTURE
