"""
Router package for the session tracking API.

This package contains all API routers organized by domain:
- health: Health check endpoints
- sessions: Session lifecycle (start, patch set, add exercise, complete, abort, reads)
- scheduled: Quick-complete of scheduled workouts
- analytics: Volume, e1RM, adherence, overview and plan-vs-actual
"""

from api.routers.health import router as health_router
from api.routers.sessions import router as sessions_router
from api.routers.scheduled import router as scheduled_router
from api.routers.analytics import router as analytics_router

__all__ = [
    "health_router",
    "sessions_router",
    "scheduled_router",
    "analytics_router",
]
