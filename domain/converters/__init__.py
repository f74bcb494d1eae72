"""
Domain converters for session tracking.

This module provides pure converter functions:

- build_session_from_scheduled: ScheduledWorkout -> in-progress WorkoutSession
- build_quick_completed_session: ScheduledWorkout -> completed WorkoutSession
- build_ad_hoc_exercise: name + planned sets -> SessionExercise
- db_row_to_session / session_to_payload: Supabase rows <-> WorkoutSession
- db_row_to_scheduled: Supabase row -> ScheduledWorkout

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import build_session_from_scheduled
    >>> session = build_session_from_scheduled(
    ...     scheduled, user_id="user-1", started_at=utc_now()
    ... )

    >>> # Convert to/from database
    >>> payload = session_to_payload(session)
    >>> session = db_row_to_session(row)
"""

from domain.converters.db_converters import (
    db_row_to_scheduled,
    db_row_to_session,
    session_exercise_to_payload,
    session_to_payload,
    set_changes_to_payload,
)
from domain.converters.scheduled_to_session import (
    build_ad_hoc_exercise,
    build_quick_completed_session,
    build_session_from_scheduled,
)

__all__ = [
    "build_session_from_scheduled",
    "build_quick_completed_session",
    "build_ad_hoc_exercise",
    "db_row_to_session",
    "db_row_to_scheduled",
    "session_to_payload",
    "session_exercise_to_payload",
    "set_changes_to_payload",
]
