"""
Unit tests for QuickCompleteScheduledUseCase.

Part of LL-106: Quick-complete scheduled workouts
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from application.exceptions import InvalidStateError, NotFoundError
from application.use_cases import (
    AbortSessionUseCase,
    QuickCompleteScheduledUseCase,
    StartSessionUseCase,
)
from domain.models import ScheduledStatus, SessionStatus
from tests.fakes import make_scheduled_workout

pytestmark = pytest.mark.unit

USER = "test_user"


@pytest.fixture
def quick_complete(session_repo, scheduled_repo, clock):
    return QuickCompleteScheduledUseCase(session_repo, scheduled_repo, clock=clock)


class TestQuickComplete:
    """Tests for QuickCompleteScheduledUseCase."""

    def test_creates_completed_session_with_actuals(self, quick_complete, scheduled_workout, clock):
        session = quick_complete.execute(USER, scheduled_workout.id)

        assert session.status == SessionStatus.COMPLETED
        assert session.is_quick_complete is True
        assert session.started_at == clock.now
        assert session.duration_sec == 0
        bench_set = session.get_exercise(1).get_set(1)
        assert bench_set.reps_done == 5
        assert bench_set.weight_done == Decimal("100")

    def test_promotes_scheduled_workout(self, quick_complete, scheduled_workout, scheduled_repo):
        quick_complete.execute(USER, scheduled_workout.id)
        assert scheduled_repo.get_by_id(USER, scheduled_workout.id).status == ScheduledStatus.COMPLETED

    def test_session_is_persisted(self, quick_complete, scheduled_workout, session_repo):
        session = quick_complete.execute(USER, scheduled_workout.id)
        assert session_repo.get_by_id(USER, session.id) == session

    def test_explicit_times(self, quick_complete, scheduled_workout):
        started = datetime(2024, 3, 3, 18, 0, tzinfo=timezone.utc)
        session = quick_complete.execute(
            USER, scheduled_workout.id,
            started_at=started,
            completed_at=started + timedelta(minutes=50),
        )
        assert session.started_at == started
        assert session.duration_sec == 3000

    def test_without_actuals(self, quick_complete, scheduled_workout):
        session = quick_complete.execute(USER, scheduled_workout.id, populate_actuals=False)
        assert all(s.reps_done is None for e in session.exercises for s in e.sets)

    def test_unknown_scheduled_workout(self, quick_complete):
        with pytest.raises(NotFoundError):
            quick_complete.execute(USER, "missing")

    def test_already_completed_is_rejected(self, quick_complete, scheduled_repo):
        scheduled_repo.seed([
            make_scheduled_workout(user_id=USER, scheduled_id="done", status=ScheduledStatus.COMPLETED)
        ])
        with pytest.raises(InvalidStateError):
            quick_complete.execute(USER, "done")

    def test_second_quick_complete_is_rejected(self, quick_complete, scheduled_workout):
        quick_complete.execute(USER, scheduled_workout.id)
        with pytest.raises(InvalidStateError):
            quick_complete.execute(USER, scheduled_workout.id)

    def test_rejected_while_session_in_progress(
        self, quick_complete, scheduled_workout, session_repo, scheduled_repo, clock
    ):
        StartSessionUseCase(session_repo, scheduled_repo, clock=clock).execute(
            USER, scheduled_workout.id
        )
        with pytest.raises(InvalidStateError):
            quick_complete.execute(USER, scheduled_workout.id)

    def test_allowed_after_aborted_session(
        self, quick_complete, scheduled_workout, session_repo, scheduled_repo, clock
    ):
        """Aborted attempts do not block a quick complete."""
        started = StartSessionUseCase(session_repo, scheduled_repo, clock=clock).execute(
            USER, scheduled_workout.id
        )
        AbortSessionUseCase(session_repo, clock=clock).execute(USER, started.id, reason="Rain")

        session = quick_complete.execute(USER, scheduled_workout.id)
        assert session.status == SessionStatus.COMPLETED
