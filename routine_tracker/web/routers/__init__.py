"""Router exports."""

# 日本語: 各機能ルーターを集約して application.py から一括 import 可能にする / English: Re-export feature routers for centralized app wiring
from .day_router import router as day_router
from .lifecycle_router import router as lifecycle_router
from .routines_router import router as routines_router

__all__ = [
    "day_router",
    "lifecycle_router",
    "routines_router",
]
