"""
Scheduled workout models (read-only input to session tracking).

Part of LL-102: Session snapshot from scheduled workouts

A scheduled workout is an instance of a training plan placed on a calendar
date. Session tracking never edits it, except for promoting its status from
planned to completed when a session finishes.
"""

from datetime import date as date_type
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ScheduledStatus(str, Enum):
    """Status of a scheduled workout."""

    PLANNED = "planned"
    COMPLETED = "completed"


class ScheduledSet(BaseModel):
    """A target set inside a scheduled exercise."""

    set_number: int = Field(..., ge=1, description="1-based set number")
    reps: int = Field(..., ge=0, description="Target repetitions")
    weight: Decimal = Field(default=Decimal("0"), ge=0, description="Target weight")


class ScheduledExercise(BaseModel):
    """An exercise of a scheduled workout with its target sets."""

    id: Optional[str] = Field(default=None, description="Scheduled exercise ID")
    name: str = Field(..., min_length=1, description="Exercise name")
    rest_seconds: int = Field(default=90, ge=0, description="Planned rest between sets")
    sets: List[ScheduledSet] = Field(default_factory=list)


class ScheduledWorkout(BaseModel):
    """
    A plan instance on a specific calendar date.

    Examples:
        >>> scheduled = ScheduledWorkout(
        ...     id="sw-1",
        ...     user_id="user-1",
        ...     date=date_type(2024, 3, 4),
        ...     plan_name="Push A",
        ...     exercises=[
        ...         ScheduledExercise(
        ...             name="Bench Press",
        ...             sets=[ScheduledSet(set_number=1, reps=5, weight=Decimal("100"))],
        ...         )
        ...     ],
        ... )
        >>> scheduled.is_completed
        False
    """

    id: str
    user_id: str
    date: date_type
    plan_name: str = ""
    notes: Optional[str] = None
    status: ScheduledStatus = ScheduledStatus.PLANNED
    exercises: List[ScheduledExercise] = Field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return self.status == ScheduledStatus.COMPLETED
