"""Host trigger and app-state routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from routine_tracker.services.context import EngineContext
from routine_tracker.web import handlers as web_handlers
from routine_tracker.web.dependencies import get_engine_context

# 日本語: ホスト側の起動・前面復帰トリガー用 / English: Triggers fired by the host on launch or foreground
router = APIRouter()


@router.post("/api/lifecycle/midnight-check", name="midnight_check")
def midnight_check(ctx: EngineContext = Depends(get_engine_context)):
    return web_handlers.midnight_check(ctx)


@router.post("/api/reset", name="reset_all")
def reset_all(ctx: EngineContext = Depends(get_engine_context)):
    return web_handlers.reset_all(ctx)


@router.get("/api/settings/notifications", name="notification_settings")
def notification_settings(ctx: EngineContext = Depends(get_engine_context)):
    return web_handlers.get_notification_settings(ctx)


@router.post("/api/settings/notifications", name="update_notification_settings")
async def update_notification_settings(request: Request, ctx: EngineContext = Depends(get_engine_context)):
    return await web_handlers.update_notification_settings(request, ctx)
