"""
Routes module - contains all API route handlers
"""

from .generation import router as generation_router
from .jobs import router as jobs_router
from .automation import router as automation_router
from .trigger import router as trigger_router

__all__ = [
    "generation_router",
    "jobs_router",
    "automation_router",
    "trigger_router",
]
