"""Routine lifecycle: activation, retirement, restart, deletion and day rollover.

A routine's state is derived, never stored:

* Pending  - active, start date still in the future (or not set yet)
* Running  - active, start date today or earlier
* Retired  - inactive

Only one routine may be active. Finalizing a day converts the live
``Task.is_completed_today`` flags into a ``DayRecord`` plus one
``TaskCompletion`` per task, as an idempotent upsert.
"""

from __future__ import annotations

import datetime
import enum
import logging
from typing import Any, Iterable, List

from sqlmodel import select

from routine_tracker.core.config import get_visible_future_days
from routine_tracker.models import (
    CompletionState,
    DayRecord,
    DayRecordStatus,
    Routine,
    TaskCompletion,
)
from routine_tracker.services.context import EngineContext, require_db
from routine_tracker.services.errors import RoutineNotFoundError
from routine_tracker.services.day_record_service import (
    find_day_record,
    get_or_create_day_record,
    stale_live_records,
)
from routine_tracker.services.notification_service import (
    cancel_all,
    cancel_for_routine,
    schedule_for_routine,
)
from routine_tracker.services.routine_draft_service import (
    build_custom_routine,
    build_preset_routine,
)
from routine_tracker.services.settings_service import (
    get_last_midnight_check,
    set_last_midnight_check,
    set_notifications_enabled,
)
from routine_tracker.services.time_service import day_key

logger = logging.getLogger(__name__)


class RoutineStatus(str, enum.Enum):
    PENDING = "pending"
    RUNNING = "running"
    RETIRED = "retired"


def routine_status(routine: Routine, today: datetime.date) -> RoutineStatus:
    if not routine.is_active:
        return RoutineStatus.RETIRED
    if routine.start_date is not None and routine.start_date <= today:
        return RoutineStatus.RUNNING
    return RoutineStatus.PENDING


def is_running(routine: Routine, today: datetime.date) -> bool:
    return routine_status(routine, today) == RoutineStatus.RUNNING


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def get_active_routine(ctx: EngineContext) -> Routine | None:
    if not require_db(ctx, "active routine lookup"):
        return None
    return ctx.db.exec(
        select(Routine).where(Routine.is_active == True).order_by(Routine.created_at.desc())  # noqa: E712
    ).first()


def get_all_routines(ctx: EngineContext) -> List[Routine]:
    """Every routine with history, active first, then newest first."""
    if not require_db(ctx, "routine listing"):
        return []
    routines = ctx.db.exec(
        select(Routine).order_by(Routine.created_at.desc(), Routine.id.desc())
    ).all()
    # 日本語: sorted は安定ソートなので作成日時の降順が保たれる / English: Stable sort keeps newest-first within each group
    return sorted(routines, key=lambda routine: not routine.is_active)


def get_routine(ctx: EngineContext, routine_id: int) -> Routine | None:
    if not require_db(ctx, "routine lookup"):
        return None
    return ctx.db.get(Routine, routine_id)


def require_routine(ctx: EngineContext, routine_id: int) -> Routine:
    routine = get_routine(ctx, routine_id)
    if routine is None:
        raise RoutineNotFoundError(f"Routine {routine_id} not found")
    return routine


def visible_dates(ctx: EngineContext, routine: Routine | None) -> List[datetime.date]:
    """Days from the routine's start date through the visible future window."""
    if routine is None or routine.start_date is None:
        return []
    end = ctx.today() + datetime.timedelta(days=get_visible_future_days())
    dates = []
    current = routine.start_date
    while current <= end:
        dates.append(current)
        current += datetime.timedelta(days=1)
    return dates


# ---------------------------------------------------------------------------
# Day finalization
# ---------------------------------------------------------------------------


def _clear_live_flags(routine: Routine) -> None:
    for task in routine.tasks:
        task.is_completed_today = False


def _upsert_finalized_day(
    ctx: EngineContext,
    routine: Routine,
    day: datetime.date,
    *,
    use_live_flags: bool = True,
) -> DayRecord:
    record = get_or_create_day_record(ctx.db, routine, day)

    # 日本語: タスクごとに存在確認してから追加（重複しない） / English: Check-before-insert per task so reruns never duplicate rows
    recorded_task_ids = {completion.task_id for completion in record.completions}
    for task in sorted(routine.tasks, key=lambda item: item.order_index):
        if task.id in recorded_task_ids:
            continue
        completed = use_live_flags and task.is_completed_today
        record.completions.append(
            TaskCompletion(
                task_id=task.id,
                task_title=task.title,
                order_index=task.order_index,
                state=(CompletionState.COMPLETED if completed else CompletionState.INCOMPLETE).value,
            )
        )
        recorded_task_ids.add(task.id)

    if record.completions:
        record.completed_count = sum(
            1 for completion in record.completions if completion.state == CompletionState.COMPLETED
        )
    else:
        record.completed_count = sum(1 for task in routine.tasks if task.is_completed_today)
    record.status = DayRecordStatus.FINALIZED.value
    ctx.db.add(record)
    return record


def finalize_day(
    ctx: EngineContext, routine: Routine, date_value: datetime.date | datetime.datetime
) -> DayRecord | None:
    """Snapshot the routine's live completion state into the record for ``date_value``."""
    if not require_db(ctx, "day finalization"):
        return None
    record = _upsert_finalized_day(ctx, routine, day_key(date_value))
    ctx.save("day finalization")
    return record


def perform_midnight_check(ctx: EngineContext, now: datetime.datetime | None = None) -> bool:
    """Roll the active routine over to a new day at most once per calendar day.

    Returns True when the check ran, False when it was a no-op.
    """
    if not require_db(ctx, "midnight check"):
        return False

    today = day_key(now or ctx.now())
    yesterday = today - datetime.timedelta(days=1)
    if get_last_midnight_check(ctx.db) == today:
        return False

    routine = get_active_routine(ctx)
    if routine is not None and routine.start_date is not None and routine.start_date <= yesterday:
        # 日本語: 取り残された過去の live 記録は記録済みの行だけで確定 / English: Older live records left behind are closed from their own rows
        yesterday_played = find_day_record(ctx.db, routine.id, yesterday) is not None
        stale_records = stale_live_records(ctx.db, routine.id, yesterday)
        for record in stale_records:
            _upsert_finalized_day(ctx, routine, record.date, use_live_flags=False)
        # 日本語: 昨日の記録が無ければ live フラグは古い日のもの / English: Without a record for yesterday the live flags belong to an older day
        _upsert_finalized_day(
            ctx, routine, yesterday, use_live_flags=yesterday_played or not stale_records
        )
        _clear_live_flags(routine)
        logger.info("Finalized %s for routine %s", yesterday.isoformat(), routine.id)

    set_last_midnight_check(ctx.db, today)
    ctx.save("midnight check")
    return True


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def _retire(ctx: EngineContext, routine: Routine) -> None:
    today = ctx.today()
    # 日本語: 実行中なら今日の結果を確定してから非アクティブ化 / English: Running routines get today finalized before retiring
    if is_running(routine, today):
        _upsert_finalized_day(ctx, routine, today)
    routine.is_active = False
    ctx.db.add(routine)


def deactivate(ctx: EngineContext, routine: Routine) -> None:
    if not require_db(ctx, "deactivation"):
        return
    _retire(ctx, routine)
    ctx.save("deactivation")
    cancel_for_routine(ctx, routine.id)
    logger.info("Deactivated routine %s", routine.id)


def deactivate_current_routine(ctx: EngineContext) -> Routine | None:
    current = get_active_routine(ctx)
    if current is not None:
        deactivate(ctx, current)
    return current


def activate(ctx: EngineContext, routine: Routine) -> Routine | None:
    """Make ``routine`` the single active routine, starting tomorrow."""
    if not require_db(ctx, "activation"):
        return None

    current = get_active_routine(ctx)
    if current is not None and current is not routine:
        deactivate(ctx, current)

    routine.is_active = True
    routine.start_date = ctx.tomorrow()
    ctx.db.add(routine)
    ctx.save("activation")
    ctx.db.refresh(routine)
    schedule_for_routine(ctx, routine)
    logger.info("Activated routine %s starting %s", routine.id, routine.start_date.isoformat())
    return routine


def create_custom_routine(ctx: EngineContext, title: str, tasks: Iterable[Any]) -> Routine | None:
    routine = build_custom_routine(title, tasks)
    return activate(ctx, routine)


def activate_preset(
    ctx: EngineContext,
    name: str,
    tasks: Iterable[Any],
    bio: str | None = None,
    image_name: str | None = None,
) -> Routine | None:
    routine = build_preset_routine(name, tasks, bio=bio, image_name=image_name)
    return activate(ctx, routine)


def restart(ctx: EngineContext, routine: Routine) -> Routine | None:
    """Re-enter Pending with a fresh slate; earlier DayRecords stay as history."""
    if not require_db(ctx, "restart"):
        return None

    current = get_active_routine(ctx)
    retired = None
    if current is not None and current.id != routine.id:
        _retire(ctx, current)
        retired = current

    routine.is_active = True
    routine.start_date = ctx.tomorrow()
    _clear_live_flags(routine)
    ctx.db.add(routine)
    ctx.save("restart")

    if retired is not None:
        cancel_for_routine(ctx, retired.id)
    schedule_for_routine(ctx, routine)
    logger.info("Restarted routine %s starting %s", routine.id, routine.start_date.isoformat())
    return routine


def _remove_routine_tree(ctx: EngineContext, routine: Routine) -> None:
    # 日本語: 所有関係を明示的に辿って削除 / English: Walk the ownership tree explicitly
    for record in list(routine.day_records):
        for completion in list(record.completions):
            ctx.db.delete(completion)
        ctx.db.delete(record)
    for task in list(routine.tasks):
        ctx.db.delete(task)
    ctx.db.delete(routine)


def delete_routine(ctx: EngineContext, routine: Routine) -> None:
    """Remove a routine and all of its history. Nothing is finalized."""
    if not require_db(ctx, "deletion"):
        return
    was_active = routine.is_active
    routine_id = routine.id
    _remove_routine_tree(ctx, routine)
    ctx.save("deletion")
    if was_active:
        cancel_for_routine(ctx, routine_id)
    logger.info("Deleted routine %s", routine_id)


def reset_all_data(ctx: EngineContext) -> None:
    """Erase every routine and device-level state except purchases."""
    if not require_db(ctx, "reset"):
        return
    cancel_all(ctx)
    for routine in ctx.db.exec(select(Routine)).all():
        _remove_routine_tree(ctx, routine)
    set_last_midnight_check(ctx.db, None)
    set_notifications_enabled(ctx.db, False)
    ctx.save("reset")
    logger.info("Reset all routine data")
