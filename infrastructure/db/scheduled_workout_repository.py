"""
Supabase Scheduled Workout Repository Implementation.

Part of LL-102: Session snapshot from scheduled workouts

Read-only access to scheduled workouts owned by the planning service.
"""

import logging
from datetime import date
from typing import Optional

from supabase import Client

from application.exceptions import RepositoryError
from application.ports import ScheduledCounts
from domain.converters import db_row_to_scheduled
from domain.models import ScheduledStatus, ScheduledWorkout

logger = logging.getLogger(__name__)

SCHEDULED_SELECT = "*, scheduled_exercises(*, scheduled_sets(*))"

SQLSTATE_INVALID_TEXT = "22P02"


class SupabaseScheduledWorkoutRepository:
    """Supabase implementation of ScheduledWorkoutRepository."""

    def __init__(self, client: Client):
        self._client = client

    def get_by_id(self, user_id: str, scheduled_id: str) -> Optional[ScheduledWorkout]:
        """
        Get a scheduled workout with exercises and target sets.

        A malformed id (not a uuid) is treated as a missing row.
        """
        try:
            result = (
                self._client.table("scheduled_workouts")
                .select(SCHEDULED_SELECT)
                .eq("id", scheduled_id)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            if getattr(e, "code", None) == SQLSTATE_INVALID_TEXT:
                logger.debug(f"Malformed scheduled workout id {scheduled_id!r}")
                return None
            logger.error(f"Failed to load scheduled workout {scheduled_id}: {e}")
            raise RepositoryError(f"Failed to load scheduled workout {scheduled_id}") from e

        if not result.data:
            return None
        try:
            return db_row_to_scheduled(result.data[0])
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed scheduled workout row {scheduled_id}: {e}")
            raise RepositoryError(f"Malformed scheduled workout row {scheduled_id}") from e

    def count_by_status(
        self,
        user_id: str,
        from_date: date,
        to_date: date,
    ) -> ScheduledCounts:
        """Count planned/completed scheduled workouts dated in [from_date, to_date]."""
        result = (
            self._client.table("scheduled_workouts")
            .select("status")
            .eq("user_id", user_id)
            .gte("date", from_date.isoformat())
            .lte("date", to_date.isoformat())
            .execute()
        )
        rows = result.data or []
        completed = sum(1 for row in rows if row.get("status") == ScheduledStatus.COMPLETED.value)
        logger.debug(
            "Scheduled counts for %s %s..%s: planned=%d completed=%d",
            user_id, from_date, to_date, len(rows), completed,
        )
        return ScheduledCounts(planned=len(rows), completed=completed)
