"""
AddSessionExercise Use Case.

Part of LL-107: Ad-hoc exercises

Appends an exercise that was not in the plan to an in-progress session.
It gets the next free order and shows up as "extra" in plan-vs-actual.
"""

import logging
from typing import List, Optional

from application.ports import SessionRepository
from application.use_cases._common import ensure_in_progress, load_session, require_user_id
from domain.converters import build_ad_hoc_exercise
from domain.models import PlannedSet, WorkoutSession

logger = logging.getLogger(__name__)


class AddSessionExerciseUseCase:
    """Use case for adding an ad-hoc exercise to a live session."""

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def execute(
        self,
        user_id: str,
        session_id: str,
        name: str,
        sets: List[PlannedSet],
        *,
        rest_sec_planned: Optional[int] = None,
    ) -> WorkoutSession:
        """
        Add an exercise.

        Args:
            user_id: Caller identity
            session_id: In-progress session
            name: Exercise name
            sets: Target sets, numbered 1..n in the given order
            rest_sec_planned: Planned rest, defaults to 90 seconds

        Returns:
            The full session including the new exercise

        Raises:
            NotFoundError: Session does not exist for the user
            InvalidStateError: Session is no longer in progress
        """
        require_user_id(user_id)

        session = load_session(self._session_repo, user_id, session_id)
        ensure_in_progress(session, "add exercise")

        exercise = build_ad_hoc_exercise(
            name,
            sets,
            order=session.next_exercise_order(),
            rest_sec_planned=rest_sec_planned,
        )
        updated = self._session_repo.append_exercise(user_id, session_id, exercise)
        logger.info("Added ad-hoc exercise %r to session %s", name, session_id)
        return updated
