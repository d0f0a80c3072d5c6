"""Validation and construction of routines before activation."""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from typing import Any, Iterable, List

from dateutil import parser as date_parser

from routine_tracker.core.config import (
    get_max_routine_title_chars,
    get_max_task_title_chars,
    get_max_tasks_per_routine,
)
from routine_tracker.models import Routine, RoutineOrigin, Task
from routine_tracker.services.errors import RoutineValidationError


@dataclass(frozen=True)
class DraftTask:
    title: str
    time: str


def normalize_task_time(value: Any) -> str | None:
    """Return "HH:MM" for clock values such as "07:05", "7:05 AM" or a time object."""
    if isinstance(value, (datetime.time, datetime.datetime)):
        return f"{value.hour:02d}:{value.minute:02d}"
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None

    colon_match = re.fullmatch(r"([01]?\d|2[0-3])\s*:\s*([0-5]\d)", text)
    if colon_match:
        return f"{int(colon_match.group(1)):02d}:{int(colon_match.group(2)):02d}"

    # 日本語: "7:00 AM" のような12時間表記は dateutil に任せる / English: Let dateutil handle 12-hour forms like "7:00 AM"
    try:
        parsed = date_parser.parse(text, default=datetime.datetime(2000, 1, 1))
    except (ValueError, TypeError, OverflowError):
        return None
    return f"{parsed.hour:02d}:{parsed.minute:02d}"


def _coerce_draft_tasks(tasks: Iterable[Any]) -> List[DraftTask]:
    drafts = []
    for item in tasks:
        if isinstance(item, DraftTask):
            draft = item
        elif isinstance(item, dict):
            draft = DraftTask(title=item.get("title") or "", time=item.get("time") or "")
        elif isinstance(item, (tuple, list)) and len(item) == 2:
            draft = DraftTask(title=item[0], time=item[1])
        else:
            raise RoutineValidationError("Invalid task entry")
        # 日本語: 時刻は time オブジェクトも許可 / English: Times may also be time objects
        if not isinstance(draft.title, str) or not isinstance(draft.time, (str, datetime.time, datetime.datetime)):
            raise RoutineValidationError("Invalid task entry")
        drafts.append(draft)
    return drafts


def _build_tasks(drafts: List[DraftTask]) -> List[Task]:
    max_task_title = get_max_task_title_chars()
    built = []
    for draft in drafts:
        title = (draft.title or "").strip()
        if not title:
            raise RoutineValidationError("Please enter a task title")
        if len(title) > max_task_title:
            raise RoutineValidationError(f"Task titles are limited to {max_task_title} characters")
        time_value = normalize_task_time(draft.time)
        if time_value is None:
            raise RoutineValidationError(f"Invalid time for task '{title}'")
        built.append(Task(title=title, time=time_value))
    return built


def build_custom_routine(title: str, tasks: Iterable[Any]) -> Routine:
    """Validate a user-authored draft and return an unsaved, inactive Routine."""
    if title is not None and not isinstance(title, str):
        raise RoutineValidationError("Invalid routine title")
    trimmed_title = (title or "").strip()
    if not trimmed_title:
        raise RoutineValidationError("Please enter a routine title")
    # 日本語: 入力欄と同じく上限で切り詰める / English: Truncate to the limit, as the input field does
    trimmed_title = trimmed_title[: get_max_routine_title_chars()]

    drafts = _coerce_draft_tasks(tasks)
    if not drafts:
        raise RoutineValidationError("Please add at least one task")
    max_tasks = get_max_tasks_per_routine()
    if len(drafts) > max_tasks:
        raise RoutineValidationError(f"Maximum of {max_tasks} tasks allowed")

    built_tasks = sorted(_build_tasks(drafts), key=lambda task: task.time)
    for index, task in enumerate(built_tasks):
        task.order_index = index

    routine = Routine(name=trimmed_title, origin=RoutineOrigin.CUSTOM.value)
    routine.tasks = built_tasks
    return routine


def build_preset_routine(
    name: str,
    tasks: Iterable[Any],
    bio: str | None = None,
    image_name: str | None = None,
) -> Routine:
    """Turn a catalog entry into an unsaved Routine, keeping the catalog order."""
    if name is not None and not isinstance(name, str):
        raise RoutineValidationError("Invalid routine title")
    trimmed_name = (name or "").strip()
    if not trimmed_name:
        raise RoutineValidationError("Preset routine needs a name")

    built_tasks = _build_tasks(_coerce_draft_tasks(tasks))
    for index, task in enumerate(built_tasks):
        task.order_index = index

    routine = Routine(
        name=trimmed_name,
        origin=RoutineOrigin.PRESET.value,
        bio=bio,
        image_name=image_name,
    )
    routine.tasks = built_tasks
    return routine
