"""
Domain models for the session tracking API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- WorkoutSession: The aggregate root for one execution of a scheduled workout
- SessionExercise: Snapshot of a planned (or ad-hoc) exercise
- SessionSet: A set with immutable planned values and mutable actuals
- ScheduledWorkout: Read-only plan instance a session is started from

Usage:
    >>> from domain.models import WorkoutSession, SessionStatus

    >>> session.status == SessionStatus.IN_PROGRESS
    True

    >>> # Serialize to JSON
    >>> json_str = session.model_dump_json(indent=2)
"""

from domain.models.scheduled import (
    ScheduledExercise,
    ScheduledSet,
    ScheduledStatus,
    ScheduledWorkout,
)
from domain.models.session import (
    MUTABLE_SET_FIELDS,
    PlannedSet,
    SessionExercise,
    SessionSet,
    SessionStatus,
    SetActuals,
    WorkoutSession,
    append_abort_reason,
    compute_duration_sec,
    ensure_utc,
    utc_now,
)

__all__ = [
    # Session aggregate
    "WorkoutSession",
    "SessionExercise",
    "SessionSet",
    "SetActuals",
    "PlannedSet",
    "MUTABLE_SET_FIELDS",
    # Scheduled input
    "ScheduledWorkout",
    "ScheduledExercise",
    "ScheduledSet",
    # Enums
    "SessionStatus",
    "ScheduledStatus",
    # Helpers
    "utc_now",
    "ensure_utc",
    "compute_duration_sec",
    "append_abort_reason",
]
