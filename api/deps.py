"""
FastAPI Dependency Providers for the session tracking API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository providers create new instances per-request
- Use case and service providers are built from the repository providers
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_current_user, get_complete_session_use_case

    @router.post("/sessions/{session_id}/complete")
    def complete(
        session_id: str,
        user_id: str = Depends(get_current_user),
        use_case: CompleteSessionUseCase = Depends(get_complete_session_use_case),
    ):
        return use_case.execute(user_id, session_id)

Testing:
    # Override the repositories; everything above them is rebuilt per request
    app.dependency_overrides[get_session_repo] = lambda: FakeSessionRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import ScheduledWorkoutRepository, SessionRepository

# Concrete implementations
from infrastructure import SupabaseScheduledWorkoutRepository, SupabaseSessionRepository

# Use cases and services
from application.use_cases import (
    AbortSessionUseCase,
    AddSessionExerciseUseCase,
    CompleteSessionUseCase,
    GetSessionUseCase,
    PatchSessionSetUseCase,
    QuickCompleteScheduledUseCase,
    StartSessionUseCase,
)
from backend.core.analytics_service import AnalyticsService

from backend.settings import Settings, get_settings as _get_settings

# Auth from existing module (wrap to maintain single source of truth)
from backend.auth import get_current_user as _get_current_user


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_session_repo(
    client: Client = Depends(get_supabase_client_required),
) -> SessionRepository:
    """
    Get SessionRepository implementation.

    Returns a SupabaseSessionRepository instance with injected client.
    The return type is the Protocol to enable easy faking.

    Args:
        client: Supabase client (injected)

    Returns:
        SessionRepository: Repository for session persistence
    """
    return SupabaseSessionRepository(client)


def get_scheduled_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ScheduledWorkoutRepository:
    """
    Get ScheduledWorkoutRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        ScheduledWorkoutRepository: Read access to scheduled workouts
    """
    return SupabaseScheduledWorkoutRepository(client)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_start_session_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
    scheduled_repo: ScheduledWorkoutRepository = Depends(get_scheduled_repo),
) -> StartSessionUseCase:
    return StartSessionUseCase(session_repo=session_repo, scheduled_repo=scheduled_repo)


def get_patch_session_set_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
) -> PatchSessionSetUseCase:
    return PatchSessionSetUseCase(session_repo=session_repo)


def get_complete_session_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
) -> CompleteSessionUseCase:
    return CompleteSessionUseCase(session_repo=session_repo)


def get_abort_session_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
) -> AbortSessionUseCase:
    return AbortSessionUseCase(session_repo=session_repo)


def get_get_session_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
) -> GetSessionUseCase:
    return GetSessionUseCase(session_repo=session_repo)


def get_add_session_exercise_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
) -> AddSessionExerciseUseCase:
    return AddSessionExerciseUseCase(session_repo=session_repo)


def get_quick_complete_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
    scheduled_repo: ScheduledWorkoutRepository = Depends(get_scheduled_repo),
) -> QuickCompleteScheduledUseCase:
    return QuickCompleteScheduledUseCase(
        session_repo=session_repo, scheduled_repo=scheduled_repo
    )


def get_analytics_service(
    session_repo: SessionRepository = Depends(get_session_repo),
    scheduled_repo: ScheduledWorkoutRepository = Depends(get_scheduled_repo),
) -> AnalyticsService:
    """
    Get AnalyticsService with injected repositories.

    Returns:
        AnalyticsService: Service for training analytics
    """
    return AnalyticsService(session_repo=session_repo, scheduled_repo=scheduled_repo)


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.
    Supports:
    - HS256 JWT (shared secret)
    - RS256 JWT (JWKS)
    - API key authentication

    Returns:
        str: User ID from authentication

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(authorization=authorization, x_api_key=x_api_key)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_session_repo",
    "get_scheduled_repo",
    # Use cases and services
    "get_start_session_use_case",
    "get_patch_session_set_use_case",
    "get_complete_session_use_case",
    "get_abort_session_use_case",
    "get_get_session_use_case",
    "get_add_session_exercise_use_case",
    "get_quick_complete_use_case",
    "get_analytics_service",
    # Authentication
    "get_current_user",
]
