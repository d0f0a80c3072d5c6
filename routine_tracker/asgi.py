"""ASGI entrypoint."""

import logging

from routine_tracker.core.config import LOG_LEVEL

from .application import app, create_app

logging.basicConfig(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger("routine_tracker_asgi")

__all__ = ["app", "create_app"]
