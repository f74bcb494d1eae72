"""
AbortSession Use Case.

Part of LL-101: Workout session lifecycle

Moves an in-progress session to ABORTED. The scheduled workout is left
untouched so it can be started again.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from application.ports import SessionRepository
from application.use_cases._common import ensure_in_progress, load_session, require_user_id
from domain.models import (
    SessionStatus,
    WorkoutSession,
    append_abort_reason,
    compute_duration_sec,
    utc_now,
)

logger = logging.getLogger(__name__)


class AbortSessionUseCase:
    """Use case for aborting a workout session."""

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
        reason: Optional[str] = None,
    ) -> WorkoutSession:
        """
        Abort a session.

        A non-blank reason is appended to the notes as ``Aborted: <reason>``.

        Raises:
            NotFoundError: Session does not exist for the user
            InvalidStateError: Session is already completed or aborted
        """
        require_user_id(user_id)

        session = load_session(self._session_repo, user_id, session_id)
        ensure_in_progress(session, "abort session")

        aborted_at = self._clock()
        duration_sec = compute_duration_sec(session.started_at, aborted_at)

        aborted = self._session_repo.finish(
            user_id,
            session_id,
            status=SessionStatus.ABORTED,
            completed_at=aborted_at,
            duration_sec=duration_sec,
            notes=append_abort_reason(session.notes, reason),
            promote_scheduled=False,
        )
        logger.info("Aborted session %s after %ds", session_id, duration_sec)
        return aborted
