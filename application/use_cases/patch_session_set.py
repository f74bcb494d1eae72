"""
PatchSessionSet Use Case.

Part of LL-103: Record set actuals

Applies a partial update (reps done, weight done, RPE, failure flag) to one
set of an in-progress session.

Preconditions are checked in this order:
1. Session exists -> NotFoundError
2. Session is in progress -> InvalidStateError
3. Exercise with the given order exists -> NotFoundError
4. Set with the given number exists -> NotFoundError

Concurrent patches to the same set are last-write-wins; there is no
version token. Patches only write the supplied fields.
"""

import logging

from application.exceptions import NotFoundError
from application.ports import SessionRepository
from application.use_cases._common import ensure_in_progress, load_session, require_user_id
from domain.models import SetActuals, WorkoutSession

logger = logging.getLogger(__name__)


class PatchSessionSetUseCase:
    """
    Use case for recording the actual performance of a set.

    Usage:
        >>> use_case = PatchSessionSetUseCase(session_repo)
        >>> session = use_case.execute(
        ...     user_id="user-1",
        ...     session_id="s-1",
        ...     exercise_order=1,
        ...     set_number=2,
        ...     actuals=SetActuals(reps_done=8, weight_done=Decimal("80")),
        ... )
    """

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def execute(
        self,
        user_id: str,
        session_id: str,
        exercise_order: int,
        set_number: int,
        actuals: SetActuals,
    ) -> WorkoutSession:
        """
        Patch a set.

        An empty patch changes nothing but still enforces every precondition.

        Returns:
            The full session after the update
        """
        require_user_id(user_id)

        session = load_session(self._session_repo, user_id, session_id)
        ensure_in_progress(session, "patch set")

        exercise = session.get_exercise(exercise_order)
        if exercise is None:
            raise NotFoundError("SessionExercise", f"{session_id}/{exercise_order}")
        if exercise.get_set(set_number) is None:
            raise NotFoundError("SessionSet", f"{session_id}/{exercise_order}/{set_number}")

        changes = actuals.changes()
        if not changes:
            return session

        updated = self._session_repo.update_set(
            user_id, session_id, exercise_order, set_number, changes
        )
        logger.debug(
            "Patched set %s/%s/%s fields=%s",
            session_id, exercise_order, set_number, sorted(changes),
        )
        return updated
