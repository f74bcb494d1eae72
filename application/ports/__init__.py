"""
Repository Interfaces (Ports) for the session tracking API.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import SessionRepository, ScheduledWorkoutRepository

    class CompleteSessionUseCase:
        def __init__(self, session_repo: SessionRepository):
            self._session_repo = session_repo
"""

# Session persistence
from application.ports.session_repository import SessionRepository

# Scheduled workouts (read-only)
from application.ports.scheduled_workout_repository import (
    ScheduledWorkoutRepository,
    ScheduledCounts,
)

__all__ = [
    # Sessions
    "SessionRepository",
    # Scheduled workouts
    "ScheduledWorkoutRepository",
    "ScheduledCounts",
]
