"""
Sessions router for the workout session lifecycle.

Part of LL-101: Workout session lifecycle

This router provides endpoints for:
- Starting a session from a scheduled workout
- Recording set actuals
- Adding ad-hoc exercises
- Completing or aborting a session
- Reading sessions by ID or start-time range

Lifecycle errors raised by the use cases (NotFoundError, InvalidStateError)
are translated to HTTP responses by the handlers in backend.main.
"""
import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from api.deps import (
    get_abort_session_use_case,
    get_add_session_exercise_use_case,
    get_complete_session_use_case,
    get_current_user,
    get_get_session_use_case,
    get_patch_session_set_use_case,
    get_start_session_use_case,
)
from api.schemas.sessions import (
    AbortSessionRequest,
    AddExerciseRequest,
    CompleteSessionRequest,
    PatchSetRequest,
    SessionListResponse,
    SessionResponse,
    StartSessionRequest,
)
from application.use_cases import (
    AbortSessionUseCase,
    AddSessionExerciseUseCase,
    CompleteSessionUseCase,
    GetSessionUseCase,
    PatchSessionSetUseCase,
    StartSessionUseCase,
)
from domain.models import ensure_utc

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/sessions",
    tags=["Sessions"],
)


# =============================================================================
# Lifecycle Endpoints
# =============================================================================


@router.post("/start", response_model=SessionResponse, status_code=201)
def start_session(
    request: StartSessionRequest,
    user_id: str = Depends(get_current_user),
    use_case: StartSessionUseCase = Depends(get_start_session_use_case),
) -> SessionResponse:
    """
    Start a session from a scheduled workout.

    The scheduled workout is snapshotted; later plan edits do not affect
    the session.
    """
    session = use_case.execute(user_id, request.scheduled_id)
    return SessionResponse.from_domain(session)


@router.patch("/{session_id}/set", response_model=SessionResponse)
def patch_set(
    request: PatchSetRequest,
    session_id: str = Path(..., description="Session ID"),
    user_id: str = Depends(get_current_user),
    use_case: PatchSessionSetUseCase = Depends(get_patch_session_set_use_case),
) -> SessionResponse:
    """
    Record actual reps, weight, RPE or failure for one set.

    Only fields present in the body are changed.
    """
    session = use_case.execute(
        user_id,
        session_id,
        request.exercise_order,
        request.set_number,
        request.to_actuals(),
    )
    return SessionResponse.from_domain(session)


@router.post("/{session_id}/exercises", response_model=SessionResponse)
def add_exercise(
    request: AddExerciseRequest,
    session_id: str = Path(..., description="Session ID"),
    user_id: str = Depends(get_current_user),
    use_case: AddSessionExerciseUseCase = Depends(get_add_session_exercise_use_case),
) -> SessionResponse:
    """Append an exercise that was not part of the plan."""
    session = use_case.execute(
        user_id,
        session_id,
        request.name,
        [s.to_domain() for s in request.sets],
        rest_sec_planned=request.rest_sec_planned,
    )
    return SessionResponse.from_domain(session)


@router.post("/{session_id}/complete", response_model=SessionResponse)
def complete_session(
    request: Optional[CompleteSessionRequest] = None,
    session_id: str = Path(..., description="Session ID"),
    user_id: str = Depends(get_current_user),
    use_case: CompleteSessionUseCase = Depends(get_complete_session_use_case),
) -> SessionResponse:
    """
    Complete an in-progress session.

    Also marks the scheduled workout as completed if it is still planned.
    """
    request = request or CompleteSessionRequest()
    session = use_case.execute(
        user_id,
        session_id,
        completed_at=request.completed_at,
        notes=request.notes,
    )
    return SessionResponse.from_domain(session)


@router.post("/{session_id}/abort", response_model=SessionResponse)
def abort_session(
    request: Optional[AbortSessionRequest] = None,
    session_id: str = Path(..., description="Session ID"),
    user_id: str = Depends(get_current_user),
    use_case: AbortSessionUseCase = Depends(get_abort_session_use_case),
) -> SessionResponse:
    """Abort an in-progress session, optionally recording a reason."""
    reason = request.reason if request else None
    session = use_case.execute(user_id, session_id, reason=reason)
    return SessionResponse.from_domain(session)


# =============================================================================
# Read Endpoints
# =============================================================================


# Declared before /{session_id} so "by-range" is not captured as an ID
@router.get("/by-range", response_model=SessionListResponse)
def get_sessions_by_range(
    from_utc: datetime = Query(..., description="Range start (inclusive, UTC)"),
    to_utc: datetime = Query(..., description="Range end (exclusive, UTC)"),
    user_id: str = Depends(get_current_user),
    use_case: GetSessionUseCase = Depends(get_get_session_use_case),
) -> SessionListResponse:
    """List sessions started in [from_utc, to_utc), newest first."""
    if ensure_utc(to_utc) <= ensure_utc(from_utc):
        raise HTTPException(status_code=400, detail="to_utc must be after from_utc")

    sessions = use_case.list_by_range(user_id, from_utc, to_utc)
    return SessionListResponse(
        sessions=[SessionResponse.from_domain(s) for s in sessions],
        total=len(sessions),
    )


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(
    session_id: str = Path(..., description="Session ID"),
    user_id: str = Depends(get_current_user),
    use_case: GetSessionUseCase = Depends(get_get_session_use_case),
) -> SessionResponse:
    """Get a session with all exercises and sets."""
    return SessionResponse.from_domain(use_case.get_by_id(user_id, session_id))
