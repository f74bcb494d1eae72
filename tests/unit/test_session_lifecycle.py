"""
Unit tests for the session lifecycle use cases.

Part of LL-101: Workout session lifecycle

Tests cover:
- StartSessionUseCase
- CompleteSessionUseCase (duration, notes, scheduled promotion)
- AbortSessionUseCase (reason handling)
- GetSessionUseCase (ownership, range listing)
- Terminal-state guards
"""
import threading
from datetime import datetime, timedelta, timezone

import pytest

from application.exceptions import InvalidStateError, NotFoundError, UnauthorizedError
from application.use_cases import (
    AbortSessionUseCase,
    CompleteSessionUseCase,
    GetSessionUseCase,
    PatchSessionSetUseCase,
    StartSessionUseCase,
)
from domain.models import ScheduledStatus, SessionStatus, SetActuals
from tests.fakes import make_session

pytestmark = pytest.mark.unit

USER = "test_user"
OTHER_USER = "other_user"


@pytest.fixture
def start(session_repo, scheduled_repo, clock):
    return StartSessionUseCase(session_repo, scheduled_repo, clock=clock)


@pytest.fixture
def complete(session_repo, clock):
    return CompleteSessionUseCase(session_repo, clock=clock)


@pytest.fixture
def abort(session_repo, clock):
    return AbortSessionUseCase(session_repo, clock=clock)


# =============================================================================
# Start
# =============================================================================


class TestStartSession:
    """Tests for StartSessionUseCase."""

    def test_start_snapshots_scheduled_workout(self, start, scheduled_workout, clock):
        """Starting creates an in-progress session with the plan copied."""
        session = start.execute(USER, scheduled_workout.id)

        assert session.status == SessionStatus.IN_PROGRESS
        assert session.started_at == clock.now
        assert session.scheduled_id == scheduled_workout.id
        assert len(session.exercises) == 2
        assert sum(len(e.sets) for e in session.exercises) == 5

    def test_start_persists_session(self, start, scheduled_workout, session_repo):
        session = start.execute(USER, scheduled_workout.id)
        assert session_repo.get_by_id(USER, session.id) == session

    def test_start_unknown_scheduled_workout(self, start):
        with pytest.raises(NotFoundError) as exc_info:
            start.execute(USER, "missing")
        assert exc_info.value.entity == "ScheduledWorkout"

    def test_start_foreign_scheduled_workout(self, start, scheduled_workout):
        """Another user's scheduled workout is reported as not found."""
        with pytest.raises(NotFoundError):
            start.execute(OTHER_USER, scheduled_workout.id)

    def test_start_does_not_change_scheduled_status(self, start, scheduled_workout, scheduled_repo):
        start.execute(USER, scheduled_workout.id)
        assert scheduled_repo.get_by_id(USER, scheduled_workout.id).status == ScheduledStatus.PLANNED

    def test_start_requires_user(self, start, scheduled_workout):
        with pytest.raises(UnauthorizedError):
            start.execute("", scheduled_workout.id)


# =============================================================================
# Complete
# =============================================================================


class TestCompleteSession:
    """Tests for CompleteSessionUseCase."""

    def test_duration_from_start_to_completion(self, start, complete, scheduled_workout, clock):
        """Start at 10:00, complete at 10:40 -> 2400 seconds."""
        session = start.execute(USER, scheduled_workout.id)
        clock.advance(minutes=40)

        completed = complete.execute(USER, session.id)

        assert completed.status == SessionStatus.COMPLETED
        assert completed.completed_at == datetime(2024, 3, 4, 10, 40, tzinfo=timezone.utc)
        assert completed.duration_sec == 2400

    def test_explicit_completion_time(self, start, complete, scheduled_workout):
        session = start.execute(USER, scheduled_workout.id)
        completed = complete.execute(
            USER, session.id, completed_at=datetime(2024, 3, 4, 11, 0, 30)
        )

        assert completed.completed_at == datetime(2024, 3, 4, 11, 0, 30, tzinfo=timezone.utc)
        assert completed.duration_sec == 3630

    def test_completion_before_start_gives_zero_duration(self, start, complete, scheduled_workout):
        session = start.execute(USER, scheduled_workout.id)
        completed = complete.execute(
            USER, session.id, completed_at=session.started_at - timedelta(minutes=5)
        )
        assert completed.duration_sec == 0

    def test_complete_promotes_scheduled_workout(
        self, start, complete, scheduled_workout, scheduled_repo
    ):
        """Completing marks the scheduled workout completed."""
        session = start.execute(USER, scheduled_workout.id)
        complete.execute(USER, session.id)

        assert scheduled_repo.get_by_id(USER, scheduled_workout.id).is_completed

    def test_complete_when_scheduled_already_completed(
        self, start, complete, scheduled_workout, scheduled_repo
    ):
        """A second session of the same workout completes; the workout stays completed."""
        first = start.execute(USER, scheduled_workout.id)
        second = start.execute(USER, scheduled_workout.id)
        complete.execute(USER, first.id)

        completed = complete.execute(USER, second.id)

        assert completed.status == SessionStatus.COMPLETED
        assert scheduled_repo.get_by_id(USER, scheduled_workout.id).status == ScheduledStatus.COMPLETED

    def test_blank_notes_keep_existing(self, start, complete, scheduled_workout):
        session = start.execute(USER, scheduled_workout.id)
        completed = complete.execute(USER, session.id, notes="   ")
        assert completed.notes is None

    def test_notes_set_on_completion(self, start, complete, scheduled_workout):
        session = start.execute(USER, scheduled_workout.id)
        completed = complete.execute(USER, session.id, notes="Felt strong")
        assert completed.notes == "Felt strong"

    def test_second_complete_is_rejected(self, start, complete, scheduled_workout):
        """A completed session cannot be completed again."""
        session = start.execute(USER, scheduled_workout.id)
        complete.execute(USER, session.id)

        with pytest.raises(InvalidStateError) as exc_info:
            complete.execute(USER, session.id)
        assert exc_info.value.current_status == "completed"

    def test_complete_unknown_session(self, complete):
        with pytest.raises(NotFoundError):
            complete.execute(USER, "missing")

    def test_complete_foreign_session(self, start, complete, scheduled_workout):
        session = start.execute(USER, scheduled_workout.id)
        with pytest.raises(NotFoundError):
            complete.execute(OTHER_USER, session.id)


# =============================================================================
# Abort
# =============================================================================


class TestAbortSession:
    """Tests for AbortSessionUseCase."""

    def test_abort_records_reason(self, start, abort, scheduled_workout, clock):
        session = start.execute(USER, scheduled_workout.id)
        clock.advance(minutes=10)

        aborted = abort.execute(USER, session.id, reason="Shoulder pain")

        assert aborted.status == SessionStatus.ABORTED
        assert aborted.notes == "Aborted: Shoulder pain"
        assert aborted.duration_sec == 600
        assert aborted.completed_at == clock.now

    def test_abort_appends_to_existing_notes(self, session_repo, abort):
        session = make_session(user_id=USER, status=SessionStatus.IN_PROGRESS)
        session.notes = "Warmup felt off"
        session_repo.seed([session])

        aborted = abort.execute(USER, session.id, reason="Gym closing")
        assert aborted.notes == "Warmup felt off\nAborted: Gym closing"

    def test_abort_without_reason_keeps_notes(self, start, abort, scheduled_workout):
        session = start.execute(USER, scheduled_workout.id)
        aborted = abort.execute(USER, session.id)
        assert aborted.notes is None

    def test_abort_does_not_promote_scheduled(self, start, abort, scheduled_workout, scheduled_repo):
        session = start.execute(USER, scheduled_workout.id)
        abort.execute(USER, session.id, reason="Sick")

        assert scheduled_repo.get_by_id(USER, scheduled_workout.id).status == ScheduledStatus.PLANNED

    def test_abort_after_complete_is_rejected(self, start, complete, abort, scheduled_workout):
        session = start.execute(USER, scheduled_workout.id)
        complete.execute(USER, session.id)

        with pytest.raises(InvalidStateError):
            abort.execute(USER, session.id)

    def test_complete_after_abort_is_rejected(self, start, complete, abort, scheduled_workout):
        session = start.execute(USER, scheduled_workout.id)
        abort.execute(USER, session.id)

        with pytest.raises(InvalidStateError) as exc_info:
            complete.execute(USER, session.id)
        assert exc_info.value.current_status == "aborted"

    def test_terminal_session_is_unchanged_after_rejection(
        self, start, complete, abort, scheduled_workout, session_repo
    ):
        """A rejected transition leaves the stored session untouched."""
        session = start.execute(USER, scheduled_workout.id)
        completed = complete.execute(USER, session.id, notes="Done")

        with pytest.raises(InvalidStateError):
            abort.execute(USER, session.id, reason="oops")

        assert session_repo.get_by_id(USER, session.id) == completed

    def test_patch_after_complete_is_rejected(self, start, complete, scheduled_workout, session_repo):
        session = start.execute(USER, scheduled_workout.id)
        complete.execute(USER, session.id)

        patch = PatchSessionSetUseCase(session_repo)
        with pytest.raises(InvalidStateError):
            patch.execute(USER, session.id, 1, 1, SetActuals(reps_done=5))


# =============================================================================
# Reads
# =============================================================================


class TestGetSession:
    """Tests for GetSessionUseCase."""

    def test_get_by_id(self, session_repo):
        session = make_session(user_id=USER)
        session_repo.seed([session])

        assert GetSessionUseCase(session_repo).get_by_id(USER, session.id) == session

    def test_get_foreign_session_is_not_found(self, session_repo):
        session = make_session(user_id=USER)
        session_repo.seed([session])

        with pytest.raises(NotFoundError):
            GetSessionUseCase(session_repo).get_by_id(OTHER_USER, session.id)

    def test_list_by_range_newest_first(self, session_repo):
        base = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
        sessions = [
            make_session(user_id=USER, session_id=f"s-{i}", started_at=base + timedelta(days=i))
            for i in range(4)
        ]
        sessions.append(make_session(user_id=OTHER_USER, session_id="foreign", started_at=base))
        session_repo.seed(sessions)

        result = GetSessionUseCase(session_repo).list_by_range(
            USER, base, base + timedelta(days=3)
        )

        # Upper bound is exclusive
        assert [s.id for s in result] == ["s-2", "s-1", "s-0"]

    def test_list_by_range_inverted_range_is_empty(self, session_repo):
        session_repo.seed([make_session(user_id=USER)])
        now = datetime(2024, 3, 4, tzinfo=timezone.utc)

        assert GetSessionUseCase(session_repo).list_by_range(USER, now, now) == []
        assert GetSessionUseCase(session_repo).list_by_range(
            USER, now + timedelta(days=1), now
        ) == []


class TestConcurrentTransitions:
    """Racing terminal transitions."""

    def test_only_one_of_two_concurrent_completions_succeeds(
        self, start, complete, scheduled_workout
    ):
        session = start.execute(USER, scheduled_workout.id)
        barrier = threading.Barrier(2)
        outcomes = []

        def worker():
            barrier.wait()
            try:
                complete.execute(USER, session.id)
                outcomes.append("completed")
            except InvalidStateError:
                outcomes.append("rejected")

        threads = [threading.Thread(target=worker) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(outcomes) == ["completed", "rejected"]
