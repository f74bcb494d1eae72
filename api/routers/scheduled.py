"""
Scheduled workouts router.

Part of LL-106: Quick-complete scheduled workouts

Scheduled workout CRUD belongs to the planning service; this router only
exposes the one operation that creates a session from a scheduled workout
without running it live.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Path

from api.deps import get_current_user, get_quick_complete_use_case
from api.schemas.sessions import QuickCompleteRequest, SessionResponse
from application.use_cases import QuickCompleteScheduledUseCase

router = APIRouter(
    prefix="/scheduled",
    tags=["Scheduled"],
)


@router.post("/{scheduled_id}/complete", response_model=SessionResponse, status_code=201)
def quick_complete_scheduled(
    request: Optional[QuickCompleteRequest] = None,
    scheduled_id: str = Path(..., description="Scheduled workout ID"),
    user_id: str = Depends(get_current_user),
    use_case: QuickCompleteScheduledUseCase = Depends(get_quick_complete_use_case),
) -> SessionResponse:
    """
    Mark a scheduled workout as done.

    Creates a completed session (planned values copied into actuals unless
    populate_actuals is false) and promotes the scheduled workout.
    """
    request = request or QuickCompleteRequest()
    session = use_case.execute(
        user_id,
        scheduled_id,
        started_at=request.started_at,
        completed_at=request.completed_at,
        notes=request.notes,
        populate_actuals=request.populate_actuals,
    )
    return SessionResponse.from_domain(session)
