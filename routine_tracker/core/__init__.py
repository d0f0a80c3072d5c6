"""Core package exports."""

from .config import (
    BASE_DIR,
    DATABASE_URL,
    LOG_LEVEL,
    NOTIFICATION_BODY_TEMPLATE,
    NOTIFICATION_TITLE,
    PROXY_PREFIX,
    get_max_routine_title_chars,
    get_max_task_title_chars,
    get_max_tasks_per_routine,
    get_visible_future_days,
)
from .db import Session, create_session, engine, get_db

__all__ = [
    "BASE_DIR",
    "DATABASE_URL",
    "LOG_LEVEL",
    "PROXY_PREFIX",
    "NOTIFICATION_TITLE",
    "NOTIFICATION_BODY_TEMPLATE",
    "get_max_tasks_per_routine",
    "get_max_routine_title_chars",
    "get_max_task_title_chars",
    "get_visible_future_days",
    "engine",
    "Session",
    "create_session",
    "get_db",
]
