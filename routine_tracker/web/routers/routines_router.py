"""Routine lifecycle routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from routine_tracker.services.context import EngineContext
from routine_tracker.web import handlers as web_handlers
from routine_tracker.web.dependencies import get_engine_context

router = APIRouter()


@router.get("/api/routines", name="api_routines")
def api_routines(ctx: EngineContext = Depends(get_engine_context)):
    return web_handlers.api_routines(ctx)


@router.get("/api/routines/active", name="api_active_routine")
def api_active_routine(ctx: EngineContext = Depends(get_engine_context)):
    return web_handlers.api_active_routine(ctx)


@router.post("/api/routines", name="create_routine")
async def create_routine(request: Request, ctx: EngineContext = Depends(get_engine_context)):
    return await web_handlers.create_routine(request, ctx)


@router.post("/api/routines/preset", name="activate_preset")
async def activate_preset(request: Request, ctx: EngineContext = Depends(get_engine_context)):
    return await web_handlers.activate_preset(request, ctx)


@router.post("/api/routines/{id}/restart", name="restart_routine")
def restart_routine(id: int, ctx: EngineContext = Depends(get_engine_context)):
    return web_handlers.restart_routine(id, ctx)


@router.post("/api/routines/{id}/deactivate", name="deactivate_routine")
def deactivate_routine(id: int, ctx: EngineContext = Depends(get_engine_context)):
    return web_handlers.deactivate_routine(id, ctx)


@router.delete("/api/routines/{id}", name="delete_routine")
def delete_routine(id: int, ctx: EngineContext = Depends(get_engine_context)):
    return web_handlers.delete_routine(id, ctx)


@router.get("/api/routines/{id}/week", name="routine_week")
def routine_week(id: int, offset: int = 0, ctx: EngineContext = Depends(get_engine_context)):
    # 日本語: offset=0 が今週、負値が過去週 / English: offset 0 is this week, negative values are past weeks
    return web_handlers.routine_week(id, offset, ctx)
