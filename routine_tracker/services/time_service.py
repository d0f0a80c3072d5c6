"""Calendar-day normalization and clocks.

Every comparison between a DayRecord date and "today" / "yesterday" goes
through :func:`day_key`; raw timestamps are never compared directly.
"""

from __future__ import annotations

import datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime.datetime:
        ...


class SystemClock:
    def now(self) -> datetime.datetime:
        return datetime.datetime.now()


class FixedClock:
    """Clock pinned to a given instant, moved forward explicitly."""

    def __init__(self, current: datetime.datetime):
        self.current = current

    def now(self) -> datetime.datetime:
        return self.current

    def set(self, current: datetime.datetime) -> None:
        self.current = current

    def advance(self, **kwargs) -> datetime.datetime:
        self.current = self.current + datetime.timedelta(**kwargs)
        return self.current


def day_key(timestamp: datetime.date | datetime.datetime) -> datetime.date:
    """Reduce a timestamp to its calendar day in the local calendar."""
    if isinstance(timestamp, datetime.datetime):
        # 日本語: タイムゾーン付きはローカル時刻へ変換してから日付化 / English: Aware timestamps are converted to local time first
        if timestamp.tzinfo is not None:
            timestamp = timestamp.astimezone()
        return timestamp.date()
    if isinstance(timestamp, datetime.date):
        return timestamp
    raise TypeError(f"Cannot derive a day key from {type(timestamp).__name__}")


def is_same_day(first: datetime.date | datetime.datetime, second: datetime.date | datetime.datetime) -> bool:
    return day_key(first) == day_key(second)


def today(clock: Clock) -> datetime.date:
    return day_key(clock.now())


def yesterday(clock: Clock) -> datetime.date:
    return today(clock) - datetime.timedelta(days=1)


def tomorrow(clock: Clock) -> datetime.date:
    return today(clock) + datetime.timedelta(days=1)


def week_start(value: datetime.date | datetime.datetime) -> datetime.date:
    """Sunday that opens the week containing ``value``."""
    day = day_key(value)
    # 日本語: weekday() は月曜=0 なので日曜始まりへ補正 / English: weekday() is Monday=0, shift to Sunday-aligned weeks
    return day - datetime.timedelta(days=(day.weekday() + 1) % 7)


def add_weeks(day: datetime.date, weeks: int) -> datetime.date:
    return day + datetime.timedelta(weeks=weeks)


__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "day_key",
    "is_same_day",
    "today",
    "yesterday",
    "tomorrow",
    "week_start",
    "add_weeks",
]
