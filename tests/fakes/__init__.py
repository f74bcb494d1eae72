"""
Fake Repository Implementations for Testing.

Part of LL-104: Supabase persistence for sessions

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import create_repos, make_scheduled_workout

    scheduled_repo, session_repo = create_repos()
    scheduled_repo.seed([make_scheduled_workout(user_id="user-1")])
"""
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

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
from tests.fakes.scheduled_workout_repository import FakeScheduledWorkoutRepository
from tests.fakes.session_repository import FakeSessionRepository


# =============================================================================
# Factory Functions
# =============================================================================


def create_repos() -> Tuple[FakeScheduledWorkoutRepository, FakeSessionRepository]:
    """
    Create a linked pair of fakes.

    The session fake promotes scheduled workouts in the scheduled fake,
    like the database RPCs do.
    """
    scheduled_repo = FakeScheduledWorkoutRepository()
    session_repo = FakeSessionRepository(scheduled_repo=scheduled_repo)
    return scheduled_repo, session_repo


def make_scheduled_workout(
    *,
    user_id: str = "test_user",
    scheduled_id: Optional[str] = None,
    on: date = date(2024, 3, 4),
    status: ScheduledStatus = ScheduledStatus.PLANNED,
    notes: Optional[str] = None,
) -> ScheduledWorkout:
    """
    Build a two-exercise scheduled workout.

    Bench Press: 3 x 5 @ 100, rest 120s
    Barbell Row: 2 x 8 @ 60, default rest
    """
    return ScheduledWorkout(
        id=scheduled_id or str(uuid.uuid4()),
        user_id=user_id,
        date=on,
        plan_name="Push A",
        notes=notes,
        status=status,
        exercises=[
            ScheduledExercise(
                id="se-bench",
                name="Bench Press",
                rest_seconds=120,
                sets=[
                    ScheduledSet(set_number=n, reps=5, weight=Decimal("100"))
                    for n in (1, 2, 3)
                ],
            ),
            ScheduledExercise(
                id="se-row",
                name="Barbell Row",
                sets=[
                    ScheduledSet(set_number=n, reps=8, weight=Decimal("60"))
                    for n in (1, 2)
                ],
            ),
        ],
    )


def make_session(
    *,
    user_id: str = "test_user",
    session_id: Optional[str] = None,
    scheduled_id: Optional[str] = None,
    started_at: datetime = datetime(2024, 3, 4, 10, 0, tzinfo=timezone.utc),
    status: SessionStatus = SessionStatus.COMPLETED,
    exercises: Optional[List[SessionExercise]] = None,
) -> WorkoutSession:
    """Build a session for analytics tests; defaults to one empty Bench Press set."""
    if exercises is None:
        exercises = [
            SessionExercise(
                order=1,
                name="Bench Press",
                sets=[SessionSet(set_number=1, reps_planned=5, weight_planned=Decimal("100"))],
            )
        ]
    return WorkoutSession(
        id=session_id or str(uuid.uuid4()),
        user_id=user_id,
        scheduled_id=scheduled_id,
        started_at=started_at,
        status=status,
        exercises=exercises,
    )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Fake implementations
    "FakeSessionRepository",
    "FakeScheduledWorkoutRepository",
    # Factory functions
    "create_repos",
    "make_scheduled_workout",
    "make_session",
]
