"""
Converter: ScheduledWorkout -> WorkoutSession snapshot.

Part of LL-102: Session snapshot from scheduled workouts

The snapshot is a deep, independent copy of the plan taken when a session
starts. Later edits to the plan never reach an existing session, and
mutating the session never touches the plan.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from domain.models import (
    PlannedSet,
    ScheduledExercise,
    ScheduledWorkout,
    SessionExercise,
    SessionSet,
    SessionStatus,
    WorkoutSession,
    compute_duration_sec,
    ensure_utc,
)


def _snapshot_exercise(exercise: ScheduledExercise, order: int) -> SessionExercise:
    sets = [
        SessionSet(
            set_number=s.set_number,
            reps_planned=s.reps,
            weight_planned=s.weight,
        )
        for s in sorted(exercise.sets, key=lambda s: s.set_number)
    ]
    return SessionExercise(
        order=order,
        name=exercise.name,
        rest_sec_planned=exercise.rest_seconds,
        scheduled_exercise_id=exercise.id,
        sets=sets,
    )


def build_session_from_scheduled(
    scheduled: ScheduledWorkout,
    *,
    user_id: str,
    started_at: datetime,
    session_id: Optional[str] = None,
) -> WorkoutSession:
    """
    Snapshot a scheduled workout into a fresh in-progress session.

    Exercises get orders 1..N in the scheduled sequence. Set numbers are
    copied verbatim and sets are emitted sorted by set number. All actual
    values start empty.

    Args:
        scheduled: Scheduled workout to copy (never modified).
        user_id: Owner of the new session.
        started_at: Session start timestamp (normalized to UTC).
        session_id: Optional explicit ID, generated when omitted.

    Returns:
        New WorkoutSession in IN_PROGRESS state.

    Examples:
        >>> from datetime import date, timezone
        >>> scheduled = ScheduledWorkout(
        ...     id="sw-1",
        ...     user_id="user-1",
        ...     date=date(2024, 3, 4),
        ...     exercises=[
        ...         ScheduledExercise(name="Squat"),
        ...         ScheduledExercise(name="Bench Press"),
        ...     ],
        ... )
        >>> session = build_session_from_scheduled(
        ...     scheduled,
        ...     user_id="user-1",
        ...     started_at=datetime(2024, 3, 4, 10, 0, tzinfo=timezone.utc),
        ... )
        >>> [ex.order for ex in session.exercises]
        [1, 2]
    """
    exercises = [
        _snapshot_exercise(exercise, order)
        for order, exercise in enumerate(scheduled.exercises, start=1)
    ]
    return WorkoutSession(
        id=session_id or str(uuid.uuid4()),
        user_id=user_id,
        scheduled_id=scheduled.id,
        started_at=ensure_utc(started_at),
        status=SessionStatus.IN_PROGRESS,
        exercises=exercises,
    )


def build_quick_completed_session(
    scheduled: ScheduledWorkout,
    *,
    user_id: str,
    started_at: datetime,
    completed_at: datetime,
    notes: Optional[str] = None,
    populate_actuals: bool = True,
    session_id: Optional[str] = None,
) -> WorkoutSession:
    """
    Build an already-completed session for a scheduled workout.

    Used when a workout is logged as done without running it live. Actual
    rest equals planned rest. With ``populate_actuals`` every set is marked
    as done exactly as planned.

    A completion time earlier than the start is clamped to the start.
    """
    started_at = ensure_utc(started_at)
    completed_at = ensure_utc(completed_at)
    if completed_at < started_at:
        completed_at = started_at

    session = build_session_from_scheduled(
        scheduled, user_id=user_id, started_at=started_at, session_id=session_id
    )
    for exercise in session.exercises:
        exercise.rest_sec_actual = exercise.rest_sec_planned
        if populate_actuals:
            for session_set in exercise.sets:
                session_set.reps_done = session_set.reps_planned
                session_set.weight_done = session_set.weight_planned

    session.status = SessionStatus.COMPLETED
    session.completed_at = completed_at
    session.duration_sec = compute_duration_sec(started_at, completed_at)
    session.notes = notes if notes and notes.strip() else scheduled.notes
    session.is_quick_complete = True
    return session


def build_ad_hoc_exercise(
    name: str,
    sets: List[PlannedSet],
    *,
    order: int,
    rest_sec_planned: Optional[int] = None,
) -> SessionExercise:
    """
    Build an exercise added during a session that was not in the plan.

    Sets are numbered 1..n in the order given.
    """
    return SessionExercise(
        order=order,
        name=name,
        rest_sec_planned=90 if rest_sec_planned is None else rest_sec_planned,
        is_ad_hoc=True,
        sets=[
            SessionSet(set_number=n, reps_planned=s.reps, weight_planned=s.weight)
            for n, s in enumerate(sets, start=1)
        ],
    )
