"""Persisted app-level state (midnight-check marker, notification toggle)."""

from __future__ import annotations

import datetime

from sqlmodel import Session

from routine_tracker.models import AppSetting

LAST_MIDNIGHT_CHECK_KEY = "last_midnight_check"
NOTIFICATIONS_ENABLED_KEY = "notifications_enabled"


def get_setting(db: Session, key: str) -> str | None:
    setting = db.get(AppSetting, key)
    return setting.value if setting else None


def set_setting(db: Session, key: str, value: str | None) -> None:
    # 日本語: commit は呼び出し側の操作単位で行う / English: Caller commits as part of its own operation
    setting = db.get(AppSetting, key)
    if setting is None:
        setting = AppSetting(key=key)
    setting.value = value
    db.add(setting)


def get_last_midnight_check(db: Session) -> datetime.date | None:
    raw_value = get_setting(db, LAST_MIDNIGHT_CHECK_KEY)
    if not raw_value:
        return None
    try:
        return datetime.date.fromisoformat(raw_value)
    except ValueError:
        return None


def set_last_midnight_check(db: Session, day: datetime.date | None) -> None:
    set_setting(db, LAST_MIDNIGHT_CHECK_KEY, day.isoformat() if day else None)


def notifications_enabled(db: Session) -> bool:
    raw_value = get_setting(db, NOTIFICATIONS_ENABLED_KEY)
    if raw_value is None:
        return True
    return raw_value == "1"


def set_notifications_enabled(db: Session, enabled: bool) -> None:
    set_setting(db, NOTIFICATIONS_ENABLED_KEY, "1" if enabled else "0")
