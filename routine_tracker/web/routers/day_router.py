"""Day detail and completion toggle routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from routine_tracker.services.context import EngineContext
from routine_tracker.web import handlers as web_handlers
from routine_tracker.web.dependencies import get_engine_context

router = APIRouter()


@router.get("/api/day/{date_str}", name="api_day_view")
def api_day_view(date_str: str, ctx: EngineContext = Depends(get_engine_context)):
    return web_handlers.api_day_view(date_str, ctx)


@router.post("/api/tasks/{id}/toggle", name="toggle_task")
def toggle_task(id: int, ctx: EngineContext = Depends(get_engine_context)):
    return web_handlers.toggle_task(id, ctx)
