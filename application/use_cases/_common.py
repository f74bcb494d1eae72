"""
Shared guards for session use cases.
"""

import logging

from application.exceptions import InvalidStateError, NotFoundError, UnauthorizedError
from application.ports import SessionRepository
from domain.models import SessionStatus, WorkoutSession

logger = logging.getLogger(__name__)


def require_user_id(user_id: str) -> str:
    """Reject calls made without a caller identity."""
    if not user_id or not user_id.strip():
        raise UnauthorizedError()
    return user_id


def load_session(
    session_repo: SessionRepository,
    user_id: str,
    session_id: str,
) -> WorkoutSession:
    """Load a session owned by the user or raise NotFoundError."""
    session = session_repo.get_by_id(user_id, session_id)
    if session is None:
        raise NotFoundError("Session", session_id)
    return session


def ensure_in_progress(session: WorkoutSession, action: str) -> None:
    """Raise InvalidStateError unless the session can still be mutated."""
    if session.status != SessionStatus.IN_PROGRESS:
        logger.warning(
            "Rejected %s on session %s in status %s",
            action, session.id, session.status.value,
        )
        raise InvalidStateError(
            f"Cannot {action}: session {session.id} is {session.status.value}",
            entity="Session",
            entity_id=session.id,
            current_status=session.status.value,
        )
