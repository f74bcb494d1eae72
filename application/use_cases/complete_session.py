"""
CompleteSession Use Case.

Part of LL-101: Workout session lifecycle

Moves an in-progress session to COMPLETED and promotes its scheduled
workout from planned to completed in the same transaction.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from application.ports import SessionRepository
from application.use_cases._common import ensure_in_progress, load_session, require_user_id
from domain.models import (
    SessionStatus,
    WorkoutSession,
    compute_duration_sec,
    ensure_utc,
    utc_now,
)

logger = logging.getLogger(__name__)


class CompleteSessionUseCase:
    """
    Use case for completing a workout session.

    Usage:
        >>> use_case = CompleteSessionUseCase(session_repo)
        >>> session = use_case.execute("user-1", "s-1", notes="Felt strong")
        >>> session.status
        <SessionStatus.COMPLETED: 'completed'>
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._session_repo = session_repo
        self._clock = clock

    def execute(
        self,
        user_id: str,
        session_id: str,
        *,
        completed_at: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> WorkoutSession:
        """
        Complete a session.

        Args:
            user_id: Caller identity
            session_id: Session to complete
            completed_at: Completion time; naive values are treated as UTC.
                Defaults to now.
            notes: Replaces existing notes only when not blank

        Returns:
            The completed session

        Raises:
            NotFoundError: Session does not exist for the user
            InvalidStateError: Session is already completed or aborted
        """
        require_user_id(user_id)

        session = load_session(self._session_repo, user_id, session_id)
        ensure_in_progress(session, "complete session")

        finished_at = ensure_utc(completed_at) if completed_at is not None else self._clock()
        duration_sec = compute_duration_sec(session.started_at, finished_at)
        new_notes = notes if notes is not None and notes.strip() else session.notes

        completed = self._session_repo.finish(
            user_id,
            session_id,
            status=SessionStatus.COMPLETED,
            completed_at=finished_at,
            duration_sec=duration_sec,
            notes=new_notes,
            promote_scheduled=True,
        )
        logger.info("Completed session %s after %ds", session_id, duration_sec)
        return completed
