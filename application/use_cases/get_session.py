"""
GetSession Use Case.

Part of LL-101: Workout session lifecycle

Read-only access to a user's sessions, by ID or by start-time range.
"""

import logging
from datetime import datetime
from typing import List

from application.ports import SessionRepository
from application.use_cases._common import load_session, require_user_id
from domain.models import WorkoutSession, ensure_utc

logger = logging.getLogger(__name__)


class GetSessionUseCase:
    """
    Use case for reading sessions.

    Usage:
        >>> use_case = GetSessionUseCase(session_repo)
        >>> session = use_case.get_by_id("user-1", "s-1")
        >>> recent = use_case.list_by_range("user-1", week_start, week_end)
    """

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def get_by_id(self, user_id: str, session_id: str) -> WorkoutSession:
        """
        Get a session owned by the user.

        Raises:
            NotFoundError: Session does not exist or belongs to another user
        """
        require_user_id(user_id)
        return load_session(self._session_repo, user_id, session_id)

    def list_by_range(
        self,
        user_id: str,
        from_utc: datetime,
        to_utc: datetime,
    ) -> List[WorkoutSession]:
        """
        List sessions started in [from_utc, to_utc), newest first.

        An empty or inverted range yields an empty list.
        """
        require_user_id(user_id)
        from_utc = ensure_utc(from_utc)
        to_utc = ensure_utc(to_utc)
        if from_utc >= to_utc:
            return []
        return self._session_repo.list_by_range(user_id, from_utc, to_utc)
