"""
Routes module - contains all API route handlers
"""

from .generation import router as generation_router
from .videos import router as videos_router
from .health import router as health_router
from .runs import router as runs_router

__all__ = [
    "generation_router",
    "videos_router",
    "health_router",
    "runs_router",
]
