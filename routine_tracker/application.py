"""FastAPI application assembly."""

from __future__ import annotations

import os

from fastapi import FastAPI

from routine_tracker.core.config import PROXY_PREFIX
from routine_tracker.core.db import _init_db
from routine_tracker.services.notification_service import (
    LoggingNotificationScheduler,
    NotificationScheduler,
)
from routine_tracker.services.time_service import Clock, SystemClock
from routine_tracker.web.routers import day_router, lifecycle_router, routines_router


def create_app(
    clock: Clock | None = None,
    notifier: NotificationScheduler | None = None,
) -> FastAPI:
    # 日本語: 逆プロキシ配下運用を想定して root_path を環境変数から解決 / English: Resolve root_path from env for reverse-proxy deployments
    proxy_prefix = os.getenv("PROXY_PREFIX", PROXY_PREFIX)

    app = FastAPI(root_path=proxy_prefix)
    # 日本語: 単一ライターの協調オブジェクトをアプリ状態に保持 / English: Keep single-writer collaborators on app state
    app.state.clock = clock or SystemClock()
    app.state.notifier = notifier or LoggingNotificationScheduler()

    app.include_router(routines_router)
    app.include_router(day_router)
    app.include_router(lifecycle_router)

    @app.on_event("startup")
    def _startup_init_db() -> None:
        # 日本語: 起動時にマイグレーション適用を保証 / English: Ensure migrations are applied on startup
        _init_db()

    return app


# 日本語: import 時点で既定アプリを構築 / English: Build default app instance at import time
app = create_app()
