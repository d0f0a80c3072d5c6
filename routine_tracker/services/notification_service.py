"""Notification Scheduler boundary.

The engine only asks for a daily reminder to be scheduled or cancelled; how the
reminder is delivered belongs to the host. Calls are fire-and-forget: a failing
scheduler is logged and never undoes the lifecycle transition that triggered it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Protocol

from routine_tracker.core.config import NOTIFICATION_BODY_TEMPLATE, NOTIFICATION_TITLE
from routine_tracker.models import Routine
from routine_tracker.services.settings_service import notifications_enabled

if TYPE_CHECKING:
    from routine_tracker.services.context import EngineContext

logger = logging.getLogger(__name__)

NOTIFICATION_PREFIX = "routine_tracker.routine."


class NotificationScheduler(Protocol):
    def schedule_daily(self, routine_id: int, first_task_time: str, title: str, body: str) -> None:
        ...

    def cancel(self, routine_id: int) -> None:
        ...

    def cancel_all(self) -> None:
        ...


@dataclass(frozen=True)
class ScheduledReminder:
    identifier: str
    routine_id: int
    time: str
    title: str
    body: str


def notification_identifier(routine_id: int) -> str:
    return f"{NOTIFICATION_PREFIX}{routine_id}"


class LoggingNotificationScheduler:
    """In-process scheduler that records pending reminders and logs them."""

    def __init__(self) -> None:
        self.pending: Dict[str, ScheduledReminder] = {}

    def schedule_daily(self, routine_id: int, first_task_time: str, title: str, body: str) -> None:
        identifier = notification_identifier(routine_id)
        # 日本語: 同じルーチンの既存通知は置き換える / English: Replace any existing reminder for the routine
        self.pending[identifier] = ScheduledReminder(identifier, routine_id, first_task_time, title, body)
        logger.info("Scheduled daily reminder %s at %s", identifier, first_task_time)

    def cancel(self, routine_id: int) -> None:
        identifier = notification_identifier(routine_id)
        if self.pending.pop(identifier, None) is not None:
            logger.info("Cancelled reminder %s", identifier)

    def cancel_all(self) -> None:
        self.pending.clear()
        logger.info("Cancelled all reminders")


def _first_task_time(routine: Routine) -> str | None:
    times = [task.time for task in routine.tasks if task.time]
    return min(times) if times else None


def schedule_for_routine(ctx: "EngineContext", routine: Routine) -> bool:
    """Schedule the routine's daily reminder at its earliest task time."""
    if ctx.db is not None and not notifications_enabled(ctx.db):
        return False
    first_time = _first_task_time(routine)
    if first_time is None or routine.id is None:
        return False

    body = NOTIFICATION_BODY_TEMPLATE.format(name=routine.name)
    try:
        ctx.notifier.schedule_daily(routine.id, first_time, NOTIFICATION_TITLE, body)
    except Exception:
        logger.exception("Failed to schedule reminder for routine %s", routine.id)
        return False
    return True


def cancel_for_routine(ctx: "EngineContext", routine_id: int | None) -> None:
    if routine_id is None:
        return
    try:
        ctx.notifier.cancel(routine_id)
    except Exception:
        logger.exception("Failed to cancel reminder for routine %s", routine_id)


def cancel_all(ctx: "EngineContext") -> None:
    try:
        ctx.notifier.cancel_all()
    except Exception:
        logger.exception("Failed to cancel reminders")
