"""Core configuration for Routine Tracker."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# 日本語: ルート直下の secrets.env を起動時に読み込む / English: Load root-level secrets.env on startup
load_dotenv("secrets.env")

# 日本語: プロジェクトルート基準パス / English: Project root directory
BASE_DIR = Path(__file__).resolve().parents[2]

# 日本語: 既定は単一端末向けの SQLite / English: Default to a single-device SQLite file
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///routine_tracker.db")

# 日本語: 逆プロキシ配下向けプレフィックス / English: Prefix for reverse-proxy deployments
PROXY_PREFIX = os.getenv("PROXY_PREFIX", "")

LOG_LEVEL = os.getenv("ROUTINE_TRACKER_LOG_LEVEL", "INFO")

# 日本語: 毎朝の通知文面 / English: Daily reminder wording
NOTIFICATION_TITLE = os.getenv("ROUTINE_TRACKER_NOTIFICATION_TITLE", "Good Morning! ☀️")
NOTIFICATION_BODY_TEMPLATE = os.getenv(
    "ROUTINE_TRACKER_NOTIFICATION_BODY", "Time to start your {name} routine."
)


def _clamped_int_env(name: str, default: int, minimum: int, maximum: int) -> int:
    raw_value = os.getenv(name, str(default))
    try:
        parsed = int(raw_value)
    except (TypeError, ValueError):
        parsed = default
    return max(minimum, min(parsed, maximum))


def get_max_tasks_per_routine() -> int:
    """Maximum number of tasks a custom routine may hold."""
    return _clamped_int_env("ROUTINE_TRACKER_MAX_TASKS", 12, 1, 12)


def get_max_routine_title_chars() -> int:
    """Maximum characters for a custom routine title."""
    return _clamped_int_env("ROUTINE_TRACKER_MAX_TITLE_CHARS", 20, 1, 100)


def get_max_task_title_chars() -> int:
    """Maximum characters for a single task title."""
    return _clamped_int_env("ROUTINE_TRACKER_MAX_TASK_TITLE_CHARS", 70, 1, 100)


def get_visible_future_days() -> int:
    """How many days past today the date strip shows."""
    # 日本語: 0〜60 日にクランプ / English: Clamp to 0-60 days
    return _clamped_int_env("ROUTINE_TRACKER_VISIBLE_FUTURE_DAYS", 14, 0, 60)
