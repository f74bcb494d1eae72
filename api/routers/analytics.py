"""
Analytics router for training metrics.

Part of LL-105: Training analytics

This router provides endpoints for:
- KPI overview (volume, intensity, session count, adherence)
- Volume series by day, ISO week or exercise
- Estimated 1RM series per exercise
- Scheduled workout adherence
- Plan-vs-actual for one session
"""
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from api.deps import get_analytics_service, get_current_user
from api.schemas.analytics import (
    AdherenceResponse,
    E1rmPointResponse,
    E1rmSeriesResponse,
    OverviewResponse,
    PlanVsActualItemResponse,
    PlanVsActualResponse,
    VolumePointResponse,
    VolumeSeriesResponse,
)
from backend.core.analytics_service import AnalyticsService, VALID_GROUP_BY

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"],
)


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/overview", response_model=OverviewResponse)
def get_overview(
    from_utc: datetime = Query(..., description="Range start (inclusive, UTC)"),
    to_utc: datetime = Query(..., description="Range end (exclusive, UTC)"),
    user_id: str = Depends(get_current_user),
    service: AnalyticsService = Depends(get_analytics_service),
) -> OverviewResponse:
    """
    Get KPIs for a time range.

    new_prs is always 0; personal-record detection is not implemented.
    """
    result = service.get_overview(user_id, from_utc, to_utc)
    return OverviewResponse.from_result(result)


@router.get("/volume", response_model=VolumeSeriesResponse)
def get_volume(
    from_utc: datetime = Query(..., description="Range start (inclusive, UTC)"),
    to_utc: datetime = Query(..., description="Range end (exclusive, UTC)"),
    group_by: str = Query("day", description="day, week or exercise"),
    exercise_name: Optional[str] = Query(None, description="Exact exercise name filter"),
    user_id: str = Depends(get_current_user),
    service: AnalyticsService = Depends(get_analytics_service),
) -> VolumeSeriesResponse:
    """
    Get total volume (reps x weight) grouped by period.

    Sets without recorded actuals fall back to their planned values.
    """
    group_by = group_by.lower()
    if group_by not in VALID_GROUP_BY:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid group_by. Use one of: {', '.join(VALID_GROUP_BY)}",
        )

    points = service.get_volume_series(
        user_id, from_utc, to_utc, group_by=group_by, exercise_name=exercise_name
    )
    return VolumeSeriesResponse(
        group_by=group_by,
        points=[VolumePointResponse.from_point(p) for p in points],
    )


@router.get("/exercises/{exercise_name}/e1rm", response_model=E1rmSeriesResponse)
def get_e1rm(
    exercise_name: str = Path(..., min_length=1, description="Exact exercise name"),
    from_utc: datetime = Query(..., description="Range start (inclusive, UTC)"),
    to_utc: datetime = Query(..., description="Range end (exclusive, UTC)"),
    user_id: str = Depends(get_current_user),
    service: AnalyticsService = Depends(get_analytics_service),
) -> E1rmSeriesResponse:
    """Get the best Epley e1RM per day for one exercise."""
    points = service.get_e1rm_series(user_id, exercise_name, from_utc, to_utc)
    return E1rmSeriesResponse(
        exercise_name=exercise_name,
        points=[E1rmPointResponse.from_point(p) for p in points],
    )


@router.get("/adherence", response_model=AdherenceResponse)
def get_adherence(
    from_date: date = Query(..., description="First day (inclusive)"),
    to_date: date = Query(..., description="Last day (inclusive)"),
    user_id: str = Depends(get_current_user),
    service: AnalyticsService = Depends(get_analytics_service),
) -> AdherenceResponse:
    """Get completed vs planned scheduled workouts."""
    result = service.get_adherence(user_id, from_date, to_date)
    return AdherenceResponse.from_result(result)


@router.get("/plan-vs-actual", response_model=PlanVsActualResponse)
def get_plan_vs_actual(
    session_id: str = Query(..., min_length=1, description="Session ID"),
    user_id: str = Depends(get_current_user),
    service: AnalyticsService = Depends(get_analytics_service),
) -> PlanVsActualResponse:
    """
    Compare planned and actual values per set.

    Unknown or foreign sessions return an empty list rather than 404.
    """
    items = service.get_plan_vs_actual(user_id, session_id)
    return PlanVsActualResponse(
        session_id=session_id,
        items=[PlanVsActualItemResponse.from_item(i) for i in items],
    )
