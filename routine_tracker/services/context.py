"""Engine context handed to every lifecycle and completion operation."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from routine_tracker.services import time_service
from routine_tracker.services.errors import PersistenceError
from routine_tracker.services.notification_service import (
    LoggingNotificationScheduler,
    NotificationScheduler,
)
from routine_tracker.services.time_service import Clock, SystemClock

logger = logging.getLogger(__name__)


@dataclass
class EngineContext:
    """Store, clock and notification collaborators for one logical writer."""

    db: Session | None
    clock: Clock = field(default_factory=SystemClock)
    notifier: NotificationScheduler = field(default_factory=LoggingNotificationScheduler)

    @property
    def is_configured(self) -> bool:
        return self.db is not None

    def now(self) -> datetime.datetime:
        return self.clock.now()

    def today(self) -> datetime.date:
        return time_service.today(self.clock)

    def yesterday(self) -> datetime.date:
        return time_service.yesterday(self.clock)

    def tomorrow(self) -> datetime.date:
        return time_service.tomorrow(self.clock)

    def save(self, operation: str) -> None:
        """Commit the current operation; report failure as PersistenceError."""
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            logger.exception("Failed to save changes during %s", operation)
            # 日本語: セッションを再利用可能に戻す。再試行は upsert の冪等性に任せる / English: Reset the session; retry relies on upsert idempotency
            self.db.rollback()
            raise PersistenceError(operation) from exc


def require_db(ctx: EngineContext, operation: str) -> bool:
    if ctx.is_configured:
        return True
    logger.warning("Skipping %s: no store configured", operation)
    return False
