"""
Converters: Database row format <-> session domain models.

Part of LL-104: Supabase persistence for sessions

Provides conversion between Supabase rows (with embedded children, as
returned by PostgREST resource embedding) and the domain models.

Database schema:
- workout_sessions: id, user_id, scheduled_workout_id, started_at,
  completed_at, duration_sec, status, notes, is_quick_complete
- session_exercises: id, session_id, exercise_order, name,
  rest_sec_planned, rest_sec_actual, is_ad_hoc, scheduled_exercise_id
- session_sets: id, session_exercise_id, set_number, reps_planned,
  weight_planned, reps_done, weight_done, rpe, is_failure
- scheduled_workouts: id, user_id, date, plan_name, notes, status
- scheduled_exercises: id, scheduled_workout_id, position, name, rest_seconds
- scheduled_sets: id, scheduled_exercise_id, set_number, reps, weight
"""

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from domain.models import (
    ScheduledExercise,
    ScheduledSet,
    ScheduledStatus,
    ScheduledWorkout,
    SessionExercise,
    SessionSet,
    SessionStatus,
    WorkoutSession,
)


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from various formats, always returning aware UTC."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            # Postgres emits "Z" or "+00:00" depending on the client
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            value = datetime.fromisoformat(value)
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _parse_decimal(value: Any) -> Optional[Decimal]:
    """Parse numeric columns; PostgREST returns numeric as JSON numbers or strings."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    try:
        # str() first so 72.5 does not become 72.5000000000000000001
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def _decimal_to_json(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


def _datetime_to_json(value: Optional[datetime]) -> Optional[str]:
    return None if value is None else value.isoformat()


# =============================================================================
# Sessions
# =============================================================================


def _db_row_to_session_set(row: Dict[str, Any]) -> SessionSet:
    return SessionSet(
        set_number=row["set_number"],
        reps_planned=row.get("reps_planned") or 0,
        weight_planned=_parse_decimal(row.get("weight_planned")) or Decimal("0"),
        reps_done=row.get("reps_done"),
        weight_done=_parse_decimal(row.get("weight_done")),
        rpe=_parse_decimal(row.get("rpe")),
        is_failure=row.get("is_failure"),
    )


def _db_row_to_session_exercise(row: Dict[str, Any]) -> SessionExercise:
    sets = [_db_row_to_session_set(s) for s in row.get("session_sets") or []]
    sets.sort(key=lambda s: s.set_number)
    return SessionExercise(
        order=row["exercise_order"],
        name=row["name"],
        rest_sec_planned=row.get("rest_sec_planned") or 0,
        rest_sec_actual=row.get("rest_sec_actual"),
        is_ad_hoc=row.get("is_ad_hoc", False) or False,
        scheduled_exercise_id=row.get("scheduled_exercise_id"),
        sets=sets,
    )


def db_row_to_session(row: Dict[str, Any]) -> WorkoutSession:
    """
    Convert a workout_sessions row (with embedded children) to WorkoutSession.

    Args:
        row: Row from ``workout_sessions`` selected with
            ``session_exercises(*, session_sets(*))`` embedded.

    Returns:
        WorkoutSession with exercises ordered by order and sets by set number.

    Raises:
        ValueError: If the row has no valid started_at.

    Examples:
        >>> row = {
        ...     "id": "s-1",
        ...     "user_id": "user-1",
        ...     "started_at": "2024-01-01T10:00:00Z",
        ...     "status": "in_progress",
        ...     "session_exercises": [],
        ... }
        >>> db_row_to_session(row).status
        <SessionStatus.IN_PROGRESS: 'in_progress'>
    """
    started_at = _parse_datetime(row.get("started_at"))
    if started_at is None:
        raise ValueError("Database row missing started_at")

    exercises = [_db_row_to_session_exercise(e) for e in row.get("session_exercises") or []]
    exercises.sort(key=lambda e: e.order)

    return WorkoutSession(
        id=str(row["id"]),
        user_id=row["user_id"],
        scheduled_id=row.get("scheduled_workout_id"),
        started_at=started_at,
        completed_at=_parse_datetime(row.get("completed_at")),
        duration_sec=row.get("duration_sec"),
        status=SessionStatus(row.get("status") or SessionStatus.IN_PROGRESS.value),
        notes=row.get("notes"),
        is_quick_complete=row.get("is_quick_complete", False) or False,
        exercises=exercises,
    )


def session_exercise_to_payload(exercise: SessionExercise) -> Dict[str, Any]:
    """Serialize a session exercise and its sets for RPC arguments."""
    return {
        "exercise_order": exercise.order,
        "name": exercise.name,
        "rest_sec_planned": exercise.rest_sec_planned,
        "rest_sec_actual": exercise.rest_sec_actual,
        "is_ad_hoc": exercise.is_ad_hoc,
        "scheduled_exercise_id": exercise.scheduled_exercise_id,
        "sets": [
            {
                "set_number": s.set_number,
                "reps_planned": s.reps_planned,
                "weight_planned": _decimal_to_json(s.weight_planned),
                "reps_done": s.reps_done,
                "weight_done": _decimal_to_json(s.weight_done),
                "rpe": _decimal_to_json(s.rpe),
                "is_failure": s.is_failure,
            }
            for s in exercise.sets
        ],
    }


def session_to_payload(session: WorkoutSession) -> Dict[str, Any]:
    """
    Serialize a full session tree for the create RPC.

    Decimals are sent as strings so Postgres numeric columns receive the
    exact value.
    """
    return {
        "id": session.id,
        "user_id": session.user_id,
        "scheduled_workout_id": session.scheduled_id,
        "started_at": _datetime_to_json(session.started_at),
        "completed_at": _datetime_to_json(session.completed_at),
        "duration_sec": session.duration_sec,
        "status": session.status.value,
        "notes": session.notes,
        "is_quick_complete": session.is_quick_complete,
        "exercises": [session_exercise_to_payload(e) for e in session.exercises],
    }


def set_changes_to_payload(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Serialize a partial set update, keeping only the supplied keys."""
    payload: Dict[str, Any] = {}
    for key, value in changes.items():
        if isinstance(value, Decimal):
            payload[key] = _decimal_to_json(value)
        else:
            payload[key] = value
    return payload


# =============================================================================
# Scheduled workouts
# =============================================================================


def db_row_to_scheduled(row: Dict[str, Any]) -> ScheduledWorkout:
    """
    Convert a scheduled_workouts row (with embedded children) to ScheduledWorkout.

    Exercises are ordered by their ``position`` column.
    """
    exercise_rows = sorted(
        row.get("scheduled_exercises") or [],
        key=lambda e: e.get("position") or 0,
    )
    exercises: List[ScheduledExercise] = []
    for ex in exercise_rows:
        sets = [
            ScheduledSet(
                set_number=s["set_number"],
                reps=s.get("reps") or 0,
                weight=_parse_decimal(s.get("weight")) or Decimal("0"),
            )
            for s in ex.get("scheduled_sets") or []
        ]
        rest = ex.get("rest_seconds")
        exercises.append(
            ScheduledExercise(
                id=str(ex["id"]) if ex.get("id") is not None else None,
                name=ex["name"],
                rest_seconds=90 if rest is None else rest,
                sets=sets,
            )
        )

    return ScheduledWorkout(
        id=str(row["id"]),
        user_id=row["user_id"],
        date=_parse_date(row.get("date")),
        plan_name=row.get("plan_name") or "",
        notes=row.get("notes"),
        status=ScheduledStatus(row.get("status") or ScheduledStatus.PLANNED.value),
        exercises=exercises,
    )
