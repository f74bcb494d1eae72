"""
Scheduled Workout Repository Interface (Port).

Part of LL-102: Session snapshot from scheduled workouts

Plan and schedule CRUD live outside this service. This port only reads
scheduled workouts and counts them for adherence.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional, Protocol

from domain.models import ScheduledWorkout


@dataclass
class ScheduledCounts:
    """Planned and completed scheduled workouts in a date range."""
    planned: int = 0
    completed: int = 0


class ScheduledWorkoutRepository(Protocol):
    """Abstract interface for reading scheduled workouts."""

    def get_by_id(self, user_id: str, scheduled_id: str) -> Optional[ScheduledWorkout]:
        """
        Get a scheduled workout with its exercises and target sets.

        Returns:
            The scheduled workout, or None if missing or owned by another user
        """
        ...

    def count_by_status(
        self,
        user_id: str,
        from_date: date,
        to_date: date,
    ) -> ScheduledCounts:
        """
        Count scheduled workouts dated in [from_date, to_date] (both inclusive).

        Returns:
            ScheduledCounts with all workouts in range as ``planned`` and
            those with status completed as ``completed``
        """
        ...
