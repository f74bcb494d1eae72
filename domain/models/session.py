"""
Workout session aggregate.

Part of LL-101: Workout session lifecycle

A WorkoutSession is one concrete execution attempt of a scheduled workout.
It owns an ordered list of SessionExercise snapshots, each owning an ordered
list of SessionSet records. Children never reference their parent; a set is
addressed by (session_id, exercise order, set number).

Lifecycle:
    IN_PROGRESS -> COMPLETED
    IN_PROGRESS -> ABORTED

Once terminal, a session is never changed again.
"""

import math
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SessionStatus(str, Enum):
    """Lifecycle state of a workout session."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self != SessionStatus.IN_PROGRESS


# Actual-performance fields a caller may overwrite while a session is live.
MUTABLE_SET_FIELDS = ("reps_done", "weight_done", "rpe", "is_failure")


class SessionSet(BaseModel):
    """
    A single set inside a session exercise.

    Planned values are copied from the schedule at snapshot time and never
    change afterwards. Actual values start empty and are filled in while the
    session is in progress.
    """

    set_number: int = Field(..., ge=1)
    reps_planned: int = Field(..., ge=0)
    weight_planned: Decimal = Field(default=Decimal("0"), ge=0)
    reps_done: Optional[int] = None
    weight_done: Optional[Decimal] = None
    rpe: Optional[Decimal] = None
    is_failure: Optional[bool] = None


class SessionExercise(BaseModel):
    """Snapshot of one planned (or ad-hoc) exercise inside a session."""

    order: int = Field(..., ge=1, description="1-based position, stable for the session lifetime")
    name: str = Field(..., min_length=1)
    rest_sec_planned: int = Field(default=90, ge=0)
    rest_sec_actual: Optional[int] = None
    is_ad_hoc: bool = Field(default=False, description="Added during the session, not in the plan")
    scheduled_exercise_id: Optional[str] = Field(
        default=None, description="Provenance only, never navigated"
    )
    sets: List[SessionSet] = Field(default_factory=list)

    def get_set(self, set_number: int) -> Optional[SessionSet]:
        for session_set in self.sets:
            if session_set.set_number == set_number:
                return session_set
        return None


class WorkoutSession(BaseModel):
    """
    Aggregate root for a workout execution.

    Examples:
        >>> session = WorkoutSession(
        ...     id="s-1",
        ...     user_id="user-1",
        ...     scheduled_id="sw-1",
        ...     started_at=datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
        ... )
        >>> session.status
        <SessionStatus.IN_PROGRESS: 'in_progress'>
        >>> session.is_terminal
        False
    """

    id: str
    user_id: str
    scheduled_id: Optional[str] = None
    started_at: datetime
    completed_at: Optional[datetime] = None
    duration_sec: Optional[int] = None
    status: SessionStatus = SessionStatus.IN_PROGRESS
    notes: Optional[str] = None
    is_quick_complete: bool = False
    exercises: List[SessionExercise] = Field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def get_exercise(self, order: int) -> Optional[SessionExercise]:
        for exercise in self.exercises:
            if exercise.order == order:
                return exercise
        return None

    def next_exercise_order(self) -> int:
        """Order for an exercise appended after all existing ones."""
        return max((ex.order for ex in self.exercises), default=0) + 1


class SetActuals(BaseModel):
    """
    Partial update for a session set.

    Only fields explicitly provided are applied; omitted fields keep their
    current value. Explicit ``None`` clears a value.
    """

    reps_done: Optional[int] = None
    weight_done: Optional[Decimal] = None
    rpe: Optional[Decimal] = None
    is_failure: Optional[bool] = None

    def changes(self) -> Dict[str, Any]:
        """Fields the caller actually supplied."""
        return self.model_dump(include=set(MUTABLE_SET_FIELDS), exclude_unset=True)


class PlannedSet(BaseModel):
    """Target reps/weight for a set of an ad-hoc exercise."""

    reps: int = Field(..., ge=0)
    weight: Decimal = Field(default=Decimal("0"), ge=0)


# =============================================================================
# Time and notes helpers
# =============================================================================


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Naive values are interpreted as already being UTC; aware values are
    converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def compute_duration_sec(started_at: datetime, completed_at: datetime) -> int:
    """Whole seconds between start and completion, never negative."""
    elapsed = (ensure_utc(completed_at) - ensure_utc(started_at)).total_seconds()
    return max(0, math.floor(elapsed))


def append_abort_reason(notes: Optional[str], reason: Optional[str]) -> Optional[str]:
    """
    Append an abort reason to existing session notes.

    Examples:
        >>> append_abort_reason(None, "injury")
        'Aborted: injury'
        >>> append_abort_reason("felt heavy", "injury")
        'felt heavy\\nAborted: injury'
        >>> append_abort_reason("felt heavy", "  ")
        'felt heavy'
    """
    if reason is None or not reason.strip():
        return notes
    line = f"Aborted: {reason}"
    if not notes:
        return line
    return f"{notes}\n{line}"
