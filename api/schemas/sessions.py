"""
Session request/response schemas.

Status values cross the wire as their enum string value
("in_progress", "completed", "aborted"). Decimal weights and RPE are sent
as JSON numbers.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models import (
    MUTABLE_SET_FIELDS,
    PlannedSet,
    SessionExercise,
    SessionSet,
    SetActuals,
    WorkoutSession,
)


def _to_float(value: Optional[Decimal]) -> Optional[float]:
    return None if value is None else float(value)


# =============================================================================
# Requests
# =============================================================================


class StartSessionRequest(BaseModel):
    """Start a session from a scheduled workout."""
    scheduled_id: str = Field(..., min_length=1)


class PatchSetRequest(BaseModel):
    """
    Partial update of one set.

    Omitted fields are left unchanged; explicit null clears a value.
    """
    exercise_order: int = Field(..., ge=1)
    set_number: int = Field(..., ge=1)
    reps_done: Optional[int] = None
    weight_done: Optional[Decimal] = None
    rpe: Optional[Decimal] = None
    is_failure: Optional[bool] = None

    def to_actuals(self) -> SetActuals:
        supplied = self.model_dump(include=set(MUTABLE_SET_FIELDS), exclude_unset=True)
        return SetActuals(**supplied)


class CompleteSessionRequest(BaseModel):
    completed_at: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=2000)


class AbortSessionRequest(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=500)


class PlannedSetRequest(BaseModel):
    reps: int = Field(..., ge=0)
    weight: Decimal = Field(default=Decimal("0"), ge=0)

    def to_domain(self) -> PlannedSet:
        return PlannedSet(reps=self.reps, weight=self.weight)


class AddExerciseRequest(BaseModel):
    """Add an exercise that was not in the plan."""
    name: str = Field(..., min_length=1, max_length=200)
    rest_sec_planned: Optional[int] = Field(default=None, ge=0)
    sets: List[PlannedSetRequest] = Field(..., min_length=1)


class QuickCompleteRequest(BaseModel):
    """Log a scheduled workout as done without a live session."""
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    populate_actuals: bool = True


# =============================================================================
# Responses
# =============================================================================


class SessionSetResponse(BaseModel):
    set_number: int
    reps_planned: int
    weight_planned: float
    reps_done: Optional[int] = None
    weight_done: Optional[float] = None
    rpe: Optional[float] = None
    is_failure: Optional[bool] = None

    @classmethod
    def from_domain(cls, session_set: SessionSet) -> "SessionSetResponse":
        return cls(
            set_number=session_set.set_number,
            reps_planned=session_set.reps_planned,
            weight_planned=float(session_set.weight_planned),
            reps_done=session_set.reps_done,
            weight_done=_to_float(session_set.weight_done),
            rpe=_to_float(session_set.rpe),
            is_failure=session_set.is_failure,
        )


class SessionExerciseResponse(BaseModel):
    order: int
    name: str
    rest_sec_planned: int
    rest_sec_actual: Optional[int] = None
    is_ad_hoc: bool = False
    sets: List[SessionSetResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, exercise: SessionExercise) -> "SessionExerciseResponse":
        return cls(
            order=exercise.order,
            name=exercise.name,
            rest_sec_planned=exercise.rest_sec_planned,
            rest_sec_actual=exercise.rest_sec_actual,
            is_ad_hoc=exercise.is_ad_hoc,
            sets=[SessionSetResponse.from_domain(s) for s in exercise.sets],
        )


class SessionResponse(BaseModel):
    """Full session with exercises and sets."""
    id: str
    scheduled_id: Optional[str] = None
    started_at: datetime
    completed_at: Optional[datetime] = None
    duration_sec: Optional[int] = None
    status: str
    notes: Optional[str] = None
    is_quick_complete: bool = False
    exercises: List[SessionExerciseResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, session: WorkoutSession) -> "SessionResponse":
        return cls(
            id=session.id,
            scheduled_id=session.scheduled_id,
            started_at=session.started_at,
            completed_at=session.completed_at,
            duration_sec=session.duration_sec,
            status=session.status.value,
            notes=session.notes,
            is_quick_complete=session.is_quick_complete,
            exercises=[SessionExerciseResponse.from_domain(e) for e in session.exercises],
        )


class SessionListResponse(BaseModel):
    sessions: List[SessionResponse]
    total: int
