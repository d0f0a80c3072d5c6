"""SQLModel exports for Routine Tracker."""

from .routine_models import (
    CompletionState,
    DayRecord,
    DayRecordStatus,
    Routine,
    RoutineOrigin,
    Task,
    TaskCompletion,
)
from .settings_models import AppSetting

__all__ = [
    "Routine",
    "RoutineOrigin",
    "Task",
    "DayRecord",
    "DayRecordStatus",
    "TaskCompletion",
    "CompletionState",
    "AppSetting",
]
