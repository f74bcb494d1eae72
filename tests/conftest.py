"""
Shared pytest fixtures for the session tracking API tests.

Part of LL-101: Workout session lifecycle
"""
from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from tests.fakes import create_repos, make_scheduled_workout

TEST_USER_ID = "test_user"
OTHER_USER_ID = "other_user"
SCHEDULED_ID = "sw-1"


class FakeClock:
    """Controllable UTC clock for use cases."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Keep tests independent of the developer's environment."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
    monkeypatch.delenv("SENTRY_DSN", raising=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 4, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def repos():
    """Linked (scheduled_repo, session_repo) fakes."""
    return create_repos()


@pytest.fixture
def scheduled_repo(repos):
    return repos[0]


@pytest.fixture
def session_repo(repos):
    return repos[1]


@pytest.fixture
def scheduled_workout(scheduled_repo):
    """A planned two-exercise workout seeded for TEST_USER_ID."""
    workout = make_scheduled_workout(user_id=TEST_USER_ID, scheduled_id=SCHEDULED_ID)
    scheduled_repo.seed([workout])
    return workout
