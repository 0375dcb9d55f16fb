# tests/test_time_utils.py

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from taskpad.tasks.task_models import ErrorKind, MalformedTimestamp
from taskpad.tasks.time_utils import (
    TimeStatus,
    classify,
    format_duration,
    format_timestamp,
    parse_timestamp,
    remaining_or_overdue,
    truncate_to_minute,
)


def test_parse_and_format_fixed_pattern() -> None:
    dt = parse_timestamp("07/03/2031 08:05")
    assert dt == datetime(2031, 3, 7, 8, 5)
    assert format_timestamp(dt) == "07/03/2031 08:05"


@pytest.mark.parametrize(
    "dt",
    [
        datetime(2024, 2, 29, 0, 0),
        datetime(1999, 12, 31, 23, 59),
        datetime(5, 1, 1, 12, 30),
    ],
)
def test_round_trip_at_minute_granularity(dt: datetime) -> None:
    assert parse_timestamp(format_timestamp(dt)) == dt


def test_format_drops_seconds() -> None:
    dt = datetime(2030, 1, 2, 3, 4, 59, 123)
    assert parse_timestamp(format_timestamp(dt)) == truncate_to_minute(dt)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "7/3/2031 8:05",  # not zero padded
        "07-03-2031 08:05",
        "07/03/2031 08:05:00",
        "07/13/2031 08:05",  # month 13
        "31/04/2031 08:05",  # 31 April
        "29/02/2023 08:05",  # not a leap year
        "07/03/2031 25:00",
        "07/03/2031 08:60",
        " 07/03/2031 08:05",
    ],
)
def test_parse_rejects_malformed(text: str) -> None:
    with pytest.raises(MalformedTimestamp) as exc:
        parse_timestamp(text)
    assert exc.value.kind is ErrorKind.MALFORMED_TIMESTAMP
    assert isinstance(exc.value, ValueError)


def test_remaining_and_overdue() -> None:
    now = datetime(2030, 1, 1, 12, 0, 0)

    left = remaining_or_overdue(now + timedelta(days=1, hours=2, minutes=3, seconds=10), now)
    assert not left.is_overdue
    assert (left.days, left.hours, left.minutes, left.seconds) == (1, 2, 3, 10)
    assert left.describe() == "Time left: 1d 2h 3m 10s"

    late = remaining_or_overdue(now - timedelta(minutes=5), now)
    assert late.is_overdue
    assert late.magnitude == timedelta(minutes=5)
    assert late.describe() == "Overdue by 5m 0s"

    exact = remaining_or_overdue(now, now)
    assert not exact.is_overdue
    assert exact.magnitude == timedelta(0)


def test_format_duration_skips_zero_parts() -> None:
    assert format_duration(timedelta(0)) == "0s"
    assert format_duration(timedelta(hours=1, seconds=5)) == "1h 5s"
    assert format_duration(timedelta(days=2)) == "2d 0s"
    assert format_duration(-timedelta(minutes=1)) == "1m 0s"


def test_classify() -> None:
    now = datetime(2030, 1, 1, 12, 0)
    hour = timedelta(hours=1)
    assert classify(now - timedelta(seconds=1), now, hour) is TimeStatus.PAST
    assert classify(now + timedelta(minutes=30), now, hour) is TimeStatus.DUE_SOON
    assert classify(now + hour, now, hour) is TimeStatus.FUTURE
    assert classify(now, now, hour) is TimeStatus.FUTURE
