"""
QuickCompleteScheduled Use Case.

Part of LL-106: Quick-complete scheduled workouts

Logs a scheduled workout as done without running a live session. A
completed session is created in one step and the scheduled workout is
promoted in the same transaction.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from application.exceptions import InvalidStateError, NotFoundError
from application.ports import ScheduledWorkoutRepository, SessionRepository
from application.use_cases._common import require_user_id
from domain.converters import build_quick_completed_session
from domain.models import WorkoutSession, ensure_utc, utc_now

logger = logging.getLogger(__name__)


class QuickCompleteScheduledUseCase:
    """
    Use case for completing a scheduled workout in one step.

    Usage:
        >>> use_case = QuickCompleteScheduledUseCase(session_repo, scheduled_repo)
        >>> session = use_case.execute("user-1", "sw-1", notes="Done at the hotel gym")
        >>> session.is_quick_complete
        True
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        scheduled_repo: ScheduledWorkoutRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._session_repo = session_repo
        self._scheduled_repo = scheduled_repo
        self._clock = clock

    def execute(
        self,
        user_id: str,
        scheduled_id: str,
        *,
        started_at: Optional[datetime] = None,
        completed_at: Optional[datetime] = None,
        notes: Optional[str] = None,
        populate_actuals: bool = True,
    ) -> WorkoutSession:
        """
        Create a completed session for a scheduled workout.

        Args:
            user_id: Caller identity
            scheduled_id: Scheduled workout to mark as done
            started_at: Defaults to now
            completed_at: Defaults to now; clamped to started_at if earlier
            notes: Session notes; falls back to the scheduled workout notes
            populate_actuals: Copy planned reps/weight into the actuals

        Raises:
            NotFoundError: Scheduled workout does not exist for the user
            InvalidStateError: Already completed, or a non-aborted session exists
        """
        require_user_id(user_id)

        scheduled = self._scheduled_repo.get_by_id(user_id, scheduled_id)
        if scheduled is None:
            raise NotFoundError("ScheduledWorkout", scheduled_id)

        if scheduled.is_completed:
            logger.warning("Quick complete rejected: %s already completed", scheduled_id)
            raise InvalidStateError(
                f"Scheduled workout {scheduled_id} is already completed",
                entity="ScheduledWorkout",
                entity_id=scheduled_id,
                current_status=scheduled.status.value,
            )

        if self._session_repo.has_active_or_completed_for_scheduled(user_id, scheduled_id):
            logger.warning("Quick complete rejected: %s has an open session", scheduled_id)
            raise InvalidStateError(
                f"Scheduled workout {scheduled_id} already has a session",
                entity="ScheduledWorkout",
                entity_id=scheduled_id,
            )

        now = self._clock()
        session = build_quick_completed_session(
            scheduled,
            user_id=user_id,
            started_at=ensure_utc(started_at) if started_at is not None else now,
            completed_at=ensure_utc(completed_at) if completed_at is not None else now,
            notes=notes,
            populate_actuals=populate_actuals,
        )
        stored = self._session_repo.create(session, promote_scheduled=True)
        logger.info("Quick-completed scheduled workout %s as session %s", scheduled_id, stored.id)
        return stored
