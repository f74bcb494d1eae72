"""
Session Repository Interface (Port).

Part of LL-104: Supabase persistence for sessions

This module defines the abstract interface for persisting workout sessions.
Every mutating method is a single transactional unit: it re-checks the
session state under a lock and either applies the whole change or raises.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from domain.models import SessionExercise, SessionStatus, WorkoutSession


class SessionRepository(Protocol):
    """
    Abstract interface for workout session persistence.

    All methods are scoped to a user; a session owned by someone else is
    treated exactly like a missing one.
    """

    def create(
        self,
        session: WorkoutSession,
        *,
        promote_scheduled: bool = False,
    ) -> WorkoutSession:
        """
        Persist a new session with its full exercise/set tree atomically.

        Args:
            session: Session to insert (id already assigned)
            promote_scheduled: Also mark the scheduled workout completed in
                the same transaction (quick complete). The store rejects the
                insert if the scheduled workout is already completed or has a
                non-aborted session.

        Returns:
            The stored session

        Raises:
            InvalidStateError: If promote_scheduled checks fail
            RepositoryError: If the insert fails
        """
        ...

    def get_by_id(self, user_id: str, session_id: str) -> Optional[WorkoutSession]:
        """
        Get a session with all exercises and sets.

        Returns:
            The session, or None if missing or owned by another user
        """
        ...

    def list_by_range(
        self,
        user_id: str,
        from_utc: datetime,
        to_utc: datetime,
        *,
        status: Optional[SessionStatus] = None,
    ) -> List[WorkoutSession]:
        """
        List sessions whose start lies in [from_utc, to_utc).

        Args:
            user_id: Owner
            from_utc: Inclusive lower bound
            to_utc: Exclusive upper bound
            status: Optional status filter

        Returns:
            Sessions ordered newest first (by started_at)
        """
        ...

    def update_set(
        self,
        user_id: str,
        session_id: str,
        exercise_order: int,
        set_number: int,
        changes: Dict[str, Any],
    ) -> WorkoutSession:
        """
        Overwrite the supplied actual fields of one set.

        Only keys present in ``changes`` are written, so concurrent updates
        to different sets (or different fields) never overwrite each other.
        Two updates to the same field: last write wins.

        Raises:
            NotFoundError: Session, exercise or set does not exist
            InvalidStateError: Session is no longer in progress
        """
        ...

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
        """
        Move an in-progress session to a terminal status.

        The status check and the update happen under one row lock; of two
        concurrent calls exactly one succeeds.

        Args:
            promote_scheduled: Mark the scheduled workout completed (if it is
                still planned) in the same transaction

        Raises:
            NotFoundError: Session does not exist
            InvalidStateError: Session is already terminal
        """
        ...

    def append_exercise(
        self,
        user_id: str,
        session_id: str,
        exercise: SessionExercise,
    ) -> WorkoutSession:
        """
        Append an exercise to an in-progress session.

        The stored order is max(existing order) + 1, computed under lock;
        ``exercise.order`` is only a hint.

        Raises:
            NotFoundError: Session does not exist
            InvalidStateError: Session is no longer in progress
        """
        ...

    def has_active_or_completed_for_scheduled(self, user_id: str, scheduled_id: str) -> bool:
        """Check whether a non-aborted session exists for a scheduled workout."""
        ...
