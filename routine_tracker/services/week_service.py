"""Weekly completion series for the history chart."""

from __future__ import annotations

import datetime
import enum
from dataclasses import dataclass
from typing import List

from routine_tracker.models import Routine
from routine_tracker.services.context import EngineContext
from routine_tracker.services.day_record_service import day_records_between
from routine_tracker.services.time_service import add_weeks, week_start


class WeekDirection(str, enum.Enum):
    PREVIOUS = "previous"
    NEXT = "next"


@dataclass(frozen=True)
class WeekData:
    date_range: str
    # 日本語: 日曜〜土曜の完了数 7 点 / English: Seven completed counts, Sunday through Saturday
    data_points: List[int]
    can_navigate_back: bool
    can_navigate_forward: bool
    week_start: datetime.date
    week_end: datetime.date
    week_offset: int


def format_date_range(start: datetime.date, end: datetime.date) -> str:
    """Label like "Oct 18-24" within a month, "Nov 30-Dec 6" across months."""
    start_label = f"{start:%b} {start.day}"
    if start.month == end.month:
        return f"{start_label}-{end.day}"
    return f"{start_label}-{end:%b} {end.day}"


def _target_week_start(ctx: EngineContext, week_offset: int) -> datetime.date:
    return add_weeks(week_start(ctx.today()), week_offset)


def _start_week(routine: Routine) -> datetime.date | None:
    if routine.start_date is None:
        return None
    return week_start(routine.start_date)


def can_navigate_back(routine: Routine, target_start: datetime.date) -> bool:
    # 日本語: 開始週より前には履歴が無い / English: No history exists before the start week
    start_week = _start_week(routine)
    return start_week is not None and target_start > start_week


def week_data(ctx: EngineContext, routine: Routine, week_offset: int = 0) -> WeekData:
    # 日本語: 未来の週には進めない / English: Future weeks are unreachable
    week_offset = min(week_offset, 0)
    start = _target_week_start(ctx, week_offset)
    end = start + datetime.timedelta(days=6)

    records = {}
    if ctx.db is not None and routine.id is not None:
        records = day_records_between(ctx.db, routine.id, start, end)

    data_points = []
    for offset in range(7):
        record = records.get(start + datetime.timedelta(days=offset))
        data_points.append(record.completed_count if record else 0)

    return WeekData(
        date_range=format_date_range(start, end),
        data_points=data_points,
        can_navigate_back=can_navigate_back(routine, start),
        can_navigate_forward=week_offset < 0,
        week_start=start,
        week_end=end,
        week_offset=week_offset,
    )


def navigate_week(
    ctx: EngineContext, routine: Routine, week_offset: int, direction: WeekDirection
) -> int:
    """Offset after moving one week in ``direction``; unchanged when out of bounds."""
    if direction == WeekDirection.NEXT:
        return week_offset + 1 if week_offset < 0 else week_offset

    target = week_offset - 1
    start_week = _start_week(routine)
    if start_week is not None and _target_week_start(ctx, target) >= start_week:
        return target
    return week_offset
