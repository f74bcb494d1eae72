"""
Fake Scheduled Workout Repository for testing.

Part of LL-102: Session snapshot from scheduled workouts

In-memory implementation of ScheduledWorkoutRepository.
"""
import copy
import threading
from datetime import date
from typing import Dict, List, Optional

from application.ports import ScheduledCounts
from domain.models import ScheduledStatus, ScheduledWorkout


class FakeScheduledWorkoutRepository:
    """
    In-memory fake implementation of ScheduledWorkoutRepository.

    Usage:
        repo = FakeScheduledWorkoutRepository()
        repo.seed([ScheduledWorkout(id="sw-1", user_id="user-1", date=date(2024, 3, 4))])
    """

    def __init__(self):
        """Initialize with empty storage."""
        self._workouts: Dict[str, ScheduledWorkout] = {}
        self._lock = threading.Lock()

    def reset(self) -> None:
        """Clear all stored scheduled workouts."""
        with self._lock:
            self._workouts.clear()

    def seed(self, workouts: List[ScheduledWorkout]) -> None:
        """Seed the repository with scheduled workouts (stored as copies)."""
        with self._lock:
            for workout in workouts:
                self._workouts[workout.id] = copy.deepcopy(workout)

    def mark_completed(self, user_id: str, scheduled_id: str) -> None:
        """Promote a planned workout to completed (used by the session fake)."""
        with self._lock:
            workout = self._workouts.get(scheduled_id)
            if (
                workout is not None
                and workout.user_id == user_id
                and workout.status == ScheduledStatus.PLANNED
            ):
                workout.status = ScheduledStatus.COMPLETED

    # =========================================================================
    # ScheduledWorkoutRepository Protocol Methods
    # =========================================================================

    def get_by_id(self, user_id: str, scheduled_id: str) -> Optional[ScheduledWorkout]:
        with self._lock:
            workout = self._workouts.get(scheduled_id)
            if workout is None or workout.user_id != user_id:
                return None
            return copy.deepcopy(workout)

    def count_by_status(
        self,
        user_id: str,
        from_date: date,
        to_date: date,
    ) -> ScheduledCounts:
        with self._lock:
            in_range = [
                w for w in self._workouts.values()
                if w.user_id == user_id and from_date <= w.date <= to_date
            ]
        return ScheduledCounts(
            planned=len(in_range),
            completed=sum(1 for w in in_range if w.status == ScheduledStatus.COMPLETED),
        )
