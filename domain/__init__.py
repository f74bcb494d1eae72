"""
Domain layer for the session tracking API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    ScheduledStatus,
    ScheduledWorkout,
    SessionExercise,
    SessionSet,
    SessionStatus,
    WorkoutSession,
)

__all__ = [
    "WorkoutSession",
    "SessionExercise",
    "SessionSet",
    "SessionStatus",
    "ScheduledWorkout",
    "ScheduledStatus",
]
