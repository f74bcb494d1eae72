"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseSessionRepository,
        SupabaseScheduledWorkoutRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    session_repo = SupabaseSessionRepository(client)
    scheduled_repo = SupabaseScheduledWorkoutRepository(client)
"""

from infrastructure.db.session_repository import SupabaseSessionRepository
from infrastructure.db.scheduled_workout_repository import SupabaseScheduledWorkoutRepository

__all__ = [
    # Session persistence
    "SupabaseSessionRepository",

    # Scheduled workouts (read-only)
    "SupabaseScheduledWorkoutRepository",
]
