"""Service-layer exports."""

from .completion_service import TaskDayState, can_toggle, completion_state, is_completed, toggle
from .context import EngineContext
from .errors import (
    PersistenceError,
    RoutineNotFoundError,
    RoutineTrackerError,
    RoutineValidationError,
)
from .lifecycle_service import (
    RoutineStatus,
    activate,
    activate_preset,
    create_custom_routine,
    deactivate,
    deactivate_current_routine,
    delete_routine,
    finalize_day,
    get_active_routine,
    get_all_routines,
    get_routine,
    perform_midnight_check,
    require_routine,
    reset_all_data,
    restart,
    routine_status,
    visible_dates,
)
from .notification_service import LoggingNotificationScheduler, NotificationScheduler
from .time_service import FixedClock, SystemClock, day_key
from .week_service import WeekData, WeekDirection, navigate_week, week_data

__all__ = [
    "EngineContext",
    "FixedClock",
    "SystemClock",
    "day_key",
    "NotificationScheduler",
    "LoggingNotificationScheduler",
    "RoutineTrackerError",
    "PersistenceError",
    "RoutineValidationError",
    "RoutineNotFoundError",
    "RoutineStatus",
    "routine_status",
    "get_active_routine",
    "get_all_routines",
    "get_routine",
    "require_routine",
    "visible_dates",
    "activate",
    "activate_preset",
    "create_custom_routine",
    "deactivate",
    "deactivate_current_routine",
    "restart",
    "delete_routine",
    "finalize_day",
    "perform_midnight_check",
    "reset_all_data",
    "TaskDayState",
    "can_toggle",
    "toggle",
    "is_completed",
    "completion_state",
    "WeekData",
    "WeekDirection",
    "week_data",
    "navigate_week",
]
