"""
Application Use Cases for the session tracking API.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return domain models and raise application exceptions

Usage:
    from application.use_cases import (
        StartSessionUseCase,
        PatchSessionSetUseCase,
        CompleteSessionUseCase,
    )

    # Start a session from a scheduled workout
    start = StartSessionUseCase(session_repo=session_repo, scheduled_repo=scheduled_repo)
    session = start.execute(user_id="user-123", scheduled_id="sw-1")

    # Record a set
    patch = PatchSessionSetUseCase(session_repo=session_repo)
    session = patch.execute(
        user_id="user-123",
        session_id=session.id,
        exercise_order=1,
        set_number=1,
        actuals=SetActuals(reps_done=5, weight_done=Decimal("100")),
    )

    # Finish it
    complete = CompleteSessionUseCase(session_repo=session_repo)
    session = complete.execute("user-123", session.id)
"""

from application.use_cases.abort_session import AbortSessionUseCase
from application.use_cases.add_session_exercise import AddSessionExerciseUseCase
from application.use_cases.complete_session import CompleteSessionUseCase
from application.use_cases.get_session import GetSessionUseCase
from application.use_cases.patch_session_set import PatchSessionSetUseCase
from application.use_cases.quick_complete_scheduled import QuickCompleteScheduledUseCase
from application.use_cases.start_session import StartSessionUseCase

__all__ = [
    # Lifecycle
    "StartSessionUseCase",
    "CompleteSessionUseCase",
    "AbortSessionUseCase",
    # Mutation
    "PatchSessionSetUseCase",
    "AddSessionExerciseUseCase",
    # Reads
    "GetSessionUseCase",
    # Scheduled workouts
    "QuickCompleteScheduledUseCase",
]
