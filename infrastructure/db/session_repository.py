"""
Supabase Session Repository Implementation.

Part of LL-104: Supabase persistence for sessions

Implements SessionRepository on top of Supabase/PostgREST.

Reads use resource embedding so a session comes back with all exercises
and sets in one committed snapshot. Every write goes through a Postgres
function (see supabase/migrations) that locks the session row with
SELECT ... FOR UPDATE, re-checks the status and applies the whole change
in one transaction.

RPC errors are mapped by SQLSTATE:
- P0002 -> NotFoundError
- 22P02 (id is not a valid uuid) -> NotFoundError
- 55000 -> InvalidStateError
- anything else -> RepositoryError

Reads treat a malformed id as a missing row.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from supabase import Client

from application.exceptions import InvalidStateError, NotFoundError, RepositoryError
from domain.converters import (
    db_row_to_session,
    session_exercise_to_payload,
    session_to_payload,
    set_changes_to_payload,
)
from domain.models import SessionExercise, SessionStatus, WorkoutSession

logger = logging.getLogger(__name__)

SESSION_SELECT = "*, session_exercises(*, session_sets(*))"

SQLSTATE_NOT_FOUND = "P0002"
SQLSTATE_INVALID_TEXT = "22P02"
SQLSTATE_INVALID_STATE = "55000"


class SupabaseSessionRepository:
    """
    Supabase implementation of SessionRepository.

    Tables: workout_sessions -> session_exercises -> session_sets.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    # =========================================================================
    # Helpers
    # =========================================================================

    def _call_rpc(self, function: str, params: Dict[str, Any], *, session_id: str) -> Any:
        """Execute an RPC and translate database errors to application errors."""
        try:
            response = self._client.rpc(function, params).execute()
        except Exception as e:
            code = getattr(e, "code", None)
            message = getattr(e, "message", None) or str(e)
            if code in (SQLSTATE_NOT_FOUND, SQLSTATE_INVALID_TEXT):
                raise NotFoundError("Session", session_id) from e
            if code == SQLSTATE_INVALID_STATE:
                raise InvalidStateError(message, entity="Session", entity_id=session_id) from e
            logger.error(f"RPC {function} failed for session {session_id}: {e}")
            raise RepositoryError(f"{function} failed: {message}") from e
        return response.data

    def _require(self, user_id: str, session_id: str) -> WorkoutSession:
        session = self.get_by_id(user_id, session_id)
        if session is None:
            raise NotFoundError("Session", session_id)
        return session

    @staticmethod
    def _to_session(row: Dict[str, Any]) -> WorkoutSession:
        """Convert a stored row; rows that do not fit the model are a storage fault."""
        try:
            return db_row_to_session(row)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed session row {row.get('id')}: {e}")
            raise RepositoryError(f"Malformed session row {row.get('id')}") from e

    # =========================================================================
    # SessionRepository Protocol Methods
    # =========================================================================

    def create(
        self,
        session: WorkoutSession,
        *,
        promote_scheduled: bool = False,
    ) -> WorkoutSession:
        """
        Insert the session tree via the create_workout_session RPC.

        With promote_scheduled the function also locks the scheduled workout,
        rejects the insert if it is completed or already has a non-aborted
        session, and marks it completed.
        """
        self._call_rpc(
            "create_workout_session",
            {
                "p_session": json.dumps(session_to_payload(session)),
                "p_promote_scheduled": promote_scheduled,
            },
            session_id=session.id,
        )
        return self._require(session.user_id, session.id)

    def get_by_id(self, user_id: str, session_id: str) -> Optional[WorkoutSession]:
        """Get a session with its exercises and sets."""
        try:
            result = (
                self._client.table("workout_sessions")
                .select(SESSION_SELECT)
                .eq("id", session_id)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            if getattr(e, "code", None) == SQLSTATE_INVALID_TEXT:
                logger.debug(f"Malformed session id {session_id!r}")
                return None
            logger.error(f"Failed to load session {session_id}: {e}")
            raise RepositoryError(f"Failed to load session {session_id}") from e

        if not result.data:
            return None
        return self._to_session(result.data[0])

    def list_by_range(
        self,
        user_id: str,
        from_utc: datetime,
        to_utc: datetime,
        *,
        status: Optional[SessionStatus] = None,
    ) -> List[WorkoutSession]:
        """List sessions started in [from_utc, to_utc), newest first."""
        query = (
            self._client.table("workout_sessions")
            .select(SESSION_SELECT)
            .eq("user_id", user_id)
            .gte("started_at", from_utc.isoformat())
            .lt("started_at", to_utc.isoformat())
        )
        if status is not None:
            query = query.eq("status", status.value)

        try:
            result = query.order("started_at", desc=True).execute()
        except Exception as e:
            logger.error(f"Failed to list sessions for user {user_id}: {e}")
            raise RepositoryError("Failed to list sessions") from e

        return [self._to_session(row) for row in result.data or []]

    def update_set(
        self,
        user_id: str,
        session_id: str,
        exercise_order: int,
        set_number: int,
        changes: Dict[str, Any],
    ) -> WorkoutSession:
        """Patch the supplied columns of one set via the patch_session_set RPC."""
        self._call_rpc(
            "patch_session_set",
            {
                "p_user_id": user_id,
                "p_session_id": session_id,
                "p_exercise_order": exercise_order,
                "p_set_number": set_number,
                "p_changes": json.dumps(set_changes_to_payload(changes)),
            },
            session_id=session_id,
        )
        return self._require(user_id, session_id)

    def finish(
        self,
        user_id: str,
        session_id: str,
        *,
        status: SessionStatus,
        completed_at: datetime,
        duration_sec: int,
        notes: Optional[str],
        promote_scheduled: bool,
    ) -> WorkoutSession:
        """Move the session to a terminal status via the finish_workout_session RPC."""
        self._call_rpc(
            "finish_workout_session",
            {
                "p_user_id": user_id,
                "p_session_id": session_id,
                "p_status": status.value,
                "p_completed_at": completed_at.isoformat(),
                "p_duration_sec": duration_sec,
                "p_notes": notes,
                "p_promote_scheduled": promote_scheduled,
            },
            session_id=session_id,
        )
        return self._require(user_id, session_id)

    def append_exercise(
        self,
        user_id: str,
        session_id: str,
        exercise: SessionExercise,
    ) -> WorkoutSession:
        """Append an exercise via the add_session_exercise RPC (order assigned in SQL)."""
        self._call_rpc(
            "add_session_exercise",
            {
                "p_user_id": user_id,
                "p_session_id": session_id,
                "p_exercise": json.dumps(session_exercise_to_payload(exercise)),
            },
            session_id=session_id,
        )
        return self._require(user_id, session_id)

    def has_active_or_completed_for_scheduled(self, user_id: str, scheduled_id: str) -> bool:
        """Check for any non-aborted session of a scheduled workout."""
        result = (
            self._client.table("workout_sessions")
            .select("id")
            .eq("user_id", user_id)
            .eq("scheduled_workout_id", scheduled_id)
            .neq("status", SessionStatus.ABORTED.value)
            .limit(1)
            .execute()
        )
        return bool(result.data)
