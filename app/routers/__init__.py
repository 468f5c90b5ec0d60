"""Routers package for the recurring task service."""

from .reset import router as reset_router
from .tasks import router as tasks_router

__all__ = ["reset_router", "tasks_router"]
