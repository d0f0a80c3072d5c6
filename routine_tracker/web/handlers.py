"""HTTP handler implementations for the routine engine."""

from __future__ import annotations

import datetime
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from fastapi import HTTPException, Request

from routine_tracker.models import Routine, Task
from routine_tracker.services import completion_service, lifecycle_service, week_service
from routine_tracker.services.context import EngineContext
from routine_tracker.services.errors import (
    PersistenceError,
    RoutineNotFoundError,
    RoutineValidationError,
)
from routine_tracker.services.settings_service import (
    notifications_enabled,
    set_notifications_enabled,
)


@contextmanager
def _engine_errors() -> Iterator[None]:
    try:
        yield
    except RoutineValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except RoutineNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc))


async def _json_payload(request: Request) -> Dict[str, Any]:
    try:
        payload = await request.json()
    except Exception:
        payload = {}
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="payload must be an object")
    return payload


def _parse_day(date_str: str) -> datetime.date:
    try:
        return datetime.datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format")


def _routine_or_404(ctx: EngineContext, routine_id: int) -> Routine:
    with _engine_errors():
        return lifecycle_service.require_routine(ctx, routine_id)


def _serialize_task(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "time": task.time,
        "order_index": task.order_index,
        "is_completed_today": task.is_completed_today,
    }


def _serialize_routine(ctx: EngineContext, routine: Routine) -> Dict[str, Any]:
    return {
        "id": routine.id,
        "name": routine.name,
        "origin": routine.origin,
        "is_active": routine.is_active,
        "status": lifecycle_service.routine_status(routine, ctx.today()).value,
        "start_date": routine.start_date.isoformat() if routine.start_date else None,
        "created_at": routine.created_at.isoformat(),
        "bio": routine.bio,
        "image_name": routine.image_name,
        "tasks": [_serialize_task(task) for task in sorted(routine.tasks, key=lambda item: item.order_index)],
    }


def api_routines(ctx: EngineContext):
    return {"routines": [_serialize_routine(ctx, routine) for routine in lifecycle_service.get_all_routines(ctx)]}


def api_active_routine(ctx: EngineContext):
    routine = lifecycle_service.get_active_routine(ctx)
    if routine is None:
        return {"routine": None, "visible_dates": []}
    return {
        "routine": _serialize_routine(ctx, routine),
        "visible_dates": [day.isoformat() for day in lifecycle_service.visible_dates(ctx, routine)],
    }


async def create_routine(request: Request, ctx: EngineContext):
    payload = await _json_payload(request)
    tasks = payload.get("tasks", [])
    if not isinstance(tasks, list):
        raise HTTPException(status_code=400, detail="tasks must be a list")
    with _engine_errors():
        routine = lifecycle_service.create_custom_routine(ctx, payload.get("title", ""), tasks)
    return {"routine": _serialize_routine(ctx, routine)}


async def activate_preset(request: Request, ctx: EngineContext):
    payload = await _json_payload(request)
    tasks = payload.get("tasks", [])
    if not isinstance(tasks, list):
        raise HTTPException(status_code=400, detail="tasks must be a list")
    with _engine_errors():
        routine = lifecycle_service.activate_preset(
            ctx,
            payload.get("name", ""),
            tasks,
            bio=payload.get("bio"),
            image_name=payload.get("image_name"),
        )
    return {"routine": _serialize_routine(ctx, routine)}


def restart_routine(routine_id: int, ctx: EngineContext):
    routine = _routine_or_404(ctx, routine_id)
    with _engine_errors():
        lifecycle_service.restart(ctx, routine)
    return {"routine": _serialize_routine(ctx, routine)}


def deactivate_routine(routine_id: int, ctx: EngineContext):
    routine = _routine_or_404(ctx, routine_id)
    with _engine_errors():
        lifecycle_service.deactivate(ctx, routine)
    return {"routine": _serialize_routine(ctx, routine)}


def delete_routine(routine_id: int, ctx: EngineContext):
    routine = _routine_or_404(ctx, routine_id)
    with _engine_errors():
        lifecycle_service.delete_routine(ctx, routine)
    return {"status": "deleted", "id": routine_id}


def routine_week(routine_id: int, offset: int, ctx: EngineContext):
    routine = _routine_or_404(ctx, routine_id)
    data = week_service.week_data(ctx, routine, offset)
    return {
        "date_range": data.date_range,
        "data_points": data.data_points,
        "can_navigate_back": data.can_navigate_back,
        "can_navigate_forward": data.can_navigate_forward,
        "week_start": data.week_start.isoformat(),
        "week_end": data.week_end.isoformat(),
        "week_offset": data.week_offset,
    }


def api_day_view(date_str: str, ctx: EngineContext):
    date_obj = _parse_day(date_str)
    routine = lifecycle_service.get_active_routine(ctx)
    if routine is None:
        return {"date": date_obj.isoformat(), "routine_id": None, "tasks": []}

    today = ctx.today()
    serialized_tasks = []
    for task in sorted(routine.tasks, key=lambda item: item.order_index):
        # 日本語: 未来日はまだ操作できないので常に未完了 / English: Future days are not playable yet
        if date_obj > today:
            state = completion_service.TaskDayState.UNTOUCHED
        else:
            state = completion_service.completion_state(ctx, task, date_obj)
        serialized_tasks.append(
            {
                **_serialize_task(task),
                "state": state.value,
                "can_toggle": completion_service.can_toggle(ctx, task, date_obj),
            }
        )

    return {
        "date": date_obj.isoformat(),
        "is_today": date_obj == today,
        "routine_id": routine.id,
        "status": lifecycle_service.routine_status(routine, today).value,
        "tasks": serialized_tasks,
    }


def toggle_task(task_id: int, ctx: EngineContext):
    task = ctx.db.get(Task, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    today = ctx.today()
    if not completion_service.can_toggle(ctx, task, today):
        raise HTTPException(status_code=409, detail="Task can only be toggled today while its routine is running")
    with _engine_errors():
        completed = completion_service.toggle(ctx, task, today)
    return {"task_id": task_id, "date": today.isoformat(), "completed": completed}


def midnight_check(ctx: EngineContext):
    with _engine_errors():
        ran = lifecycle_service.perform_midnight_check(ctx)
    return {"status": "ran" if ran else "skipped", "today": ctx.today().isoformat()}


def reset_all(ctx: EngineContext):
    with _engine_errors():
        lifecycle_service.reset_all_data(ctx)
    return {"status": "reset"}


def get_notification_settings(ctx: EngineContext):
    return {"enabled": notifications_enabled(ctx.db)}


async def update_notification_settings(request: Request, ctx: EngineContext):
    payload = await _json_payload(request)
    enabled = payload.get("enabled")
    if not isinstance(enabled, bool):
        raise HTTPException(status_code=400, detail="enabled must be a boolean")
    set_notifications_enabled(ctx.db, enabled)
    with _engine_errors():
        ctx.save("notification settings")
    return {"enabled": enabled}
