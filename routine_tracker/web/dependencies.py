"""FastAPI dependency providers."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlmodel import Session

from routine_tracker.core.db import get_db
from routine_tracker.services.context import EngineContext


def get_engine_context(request: Request, db: Session = Depends(get_db)) -> EngineContext:
    # 日本語: 時計と通知スケジューラはアプリ単位で共有 / English: Clock and notifier are shared per application
    return EngineContext(db=db, clock=request.app.state.clock, notifier=request.app.state.notifier)
