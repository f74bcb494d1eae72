"""
Infrastructure Layer for the session tracking API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseSessionRepository,
    SupabaseScheduledWorkoutRepository,
)

__all__ = [
    "SupabaseSessionRepository",
    "SupabaseScheduledWorkoutRepository",
]
