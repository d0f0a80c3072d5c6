"""Per-task completion tracking for the live day and lookups for past days."""

from __future__ import annotations

import datetime
import enum
import logging

from routine_tracker.models import CompletionState, Task, TaskCompletion
from routine_tracker.services.context import EngineContext, require_db
from routine_tracker.services.day_record_service import (
    find_completion,
    find_day_record,
    get_or_create_day_record,
)
from routine_tracker.services.lifecycle_service import is_running
from routine_tracker.services.time_service import day_key

logger = logging.getLogger(__name__)


class TaskDayState(str, enum.Enum):
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    # 日本語: live 日で未操作。確定日では incomplete と区別される / English: Not touched on a live day; differs from incomplete only once finalized
    UNTOUCHED = "untouched"


def can_toggle(ctx: EngineContext, task: Task, date_value: datetime.date | datetime.datetime) -> bool:
    """Toggling is allowed only for today while the owning routine is running."""
    routine = task.routine
    if routine is None:
        return False
    today = ctx.today()
    return day_key(date_value) == today and is_running(routine, today)


def toggle(ctx: EngineContext, task: Task, date_value: datetime.date | datetime.datetime) -> bool | None:
    """Flip the task between completed and untouched for ``date_value``.

    On a finalized day the row stays and flips between completed and incomplete.

    Returns the new completion flag, or None when there is nothing to toggle.
    """
    if not require_db(ctx, "completion toggle"):
        return None
    routine = task.routine
    if routine is None or routine.id is None:
        logger.warning("Skipping toggle for task %s: no owning routine", task.id)
        return None

    record = get_or_create_day_record(ctx.db, routine, date_value)
    existing = find_completion(record, task.id)
    if existing is not None and existing.state == CompletionState.INCOMPLETE:
        # 日本語: 確定済みの日に残る incomplete 行は completed へ書き換える / English: An incomplete row from a finalized day flips to completed
        existing.state = CompletionState.COMPLETED.value
        ctx.db.add(existing)
        record.completed_count += 1
        task.is_completed_today = True
    elif existing is not None:
        if record.is_finalized:
            # 日本語: 確定済みの日は行を残して incomplete に戻す / English: Finalized days keep one row per task
            existing.state = CompletionState.INCOMPLETE.value
            ctx.db.add(existing)
        else:
            # 日本語: 「未操作」へ戻す（incomplete ではない） / English: Back to untouched, not to incomplete
            record.completions.remove(existing)
            ctx.db.delete(existing)
        record.completed_count = max(0, record.completed_count - 1)
        task.is_completed_today = False
    else:
        record.completions.append(
            TaskCompletion(
                task_id=task.id,
                task_title=task.title,
                order_index=task.order_index,
                state=CompletionState.COMPLETED.value,
            )
        )
        record.completed_count += 1
        task.is_completed_today = True

    ctx.db.add(record)
    ctx.db.add(task)
    ctx.save("completion toggle")
    return task.is_completed_today


def is_completed(ctx: EngineContext, task: Task, date_value: datetime.date | datetime.datetime) -> bool:
    if not require_db(ctx, "completion lookup") or task.routine_id is None:
        return False
    record = find_day_record(ctx.db, task.routine_id, date_value)
    if record is None:
        return False
    completion = find_completion(record, task.id)
    return completion is not None and completion.state == CompletionState.COMPLETED


def completion_state(
    ctx: EngineContext, task: Task, date_value: datetime.date | datetime.datetime
) -> TaskDayState:
    """Completed / incomplete / untouched, as shown for any day of the routine."""
    if not require_db(ctx, "completion lookup") or task.routine_id is None:
        return TaskDayState.UNTOUCHED
    record = find_day_record(ctx.db, task.routine_id, date_value)
    if record is None:
        return TaskDayState.UNTOUCHED
    completion = find_completion(record, task.id)
    if completion is not None:
        if completion.state == CompletionState.COMPLETED:
            return TaskDayState.COMPLETED
        return TaskDayState.INCOMPLETE
    # 日本語: 確定日に行が無いのは不整合だが incomplete として扱う / English: A finalized day missing a row is read as incomplete
    if record.is_finalized:
        return TaskDayState.INCOMPLETE
    return TaskDayState.UNTOUCHED
