"""
StartSession Use Case.

Part of LL-101: Workout session lifecycle

Workflow:
1. Load the scheduled workout owned by the caller
2. Snapshot it into a new in-progress session
3. Persist the session tree atomically
4. Return the stored session
"""

import logging
from datetime import datetime
from typing import Callable

from application.exceptions import NotFoundError
from application.ports import ScheduledWorkoutRepository, SessionRepository
from application.use_cases._common import require_user_id
from domain.converters import build_session_from_scheduled
from domain.models import WorkoutSession, utc_now

logger = logging.getLogger(__name__)


class StartSessionUseCase:
    """
    Use case for starting a workout session from a scheduled workout.

    Usage:
        >>> use_case = StartSessionUseCase(session_repo, scheduled_repo)
        >>> session = use_case.execute(user_id="user-1", scheduled_id="sw-1")
        >>> session.status
        <SessionStatus.IN_PROGRESS: 'in_progress'>
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        scheduled_repo: ScheduledWorkoutRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            session_repo: Repository for session persistence
            scheduled_repo: Repository for reading scheduled workouts
            clock: Source of the current UTC time
        """
        self._session_repo = session_repo
        self._scheduled_repo = scheduled_repo
        self._clock = clock

    def execute(self, user_id: str, scheduled_id: str) -> WorkoutSession:
        """
        Start a session.

        Args:
            user_id: Caller identity
            scheduled_id: Scheduled workout to execute

        Returns:
            The new in-progress session with its snapshot

        Raises:
            NotFoundError: If the scheduled workout does not exist for the user
        """
        require_user_id(user_id)

        scheduled = self._scheduled_repo.get_by_id(user_id, scheduled_id)
        if scheduled is None:
            logger.warning("Start rejected: scheduled workout %s not found", scheduled_id)
            raise NotFoundError("ScheduledWorkout", scheduled_id)

        session = build_session_from_scheduled(
            scheduled,
            user_id=user_id,
            started_at=self._clock(),
        )
        stored = self._session_repo.create(session)
        logger.info(
            "Started session %s from scheduled workout %s (%d exercises)",
            stored.id, scheduled_id, len(stored.exercises),
        )
        return stored
