"""
Pydantic schemas for API requests and responses.

Organized by feature/domain:
- sessions: Session lifecycle requests and session responses
- analytics: Analytics responses
"""

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
from api.schemas.sessions import (
    AbortSessionRequest,
    AddExerciseRequest,
    CompleteSessionRequest,
    PatchSetRequest,
    PlannedSetRequest,
    QuickCompleteRequest,
    SessionExerciseResponse,
    SessionListResponse,
    SessionResponse,
    SessionSetResponse,
    StartSessionRequest,
)

__all__ = [
    # Sessions
    "StartSessionRequest",
    "PatchSetRequest",
    "CompleteSessionRequest",
    "AbortSessionRequest",
    "AddExerciseRequest",
    "PlannedSetRequest",
    "QuickCompleteRequest",
    "SessionResponse",
    "SessionExerciseResponse",
    "SessionSetResponse",
    "SessionListResponse",
    # Analytics
    "OverviewResponse",
    "VolumePointResponse",
    "VolumeSeriesResponse",
    "E1rmPointResponse",
    "E1rmSeriesResponse",
    "AdherenceResponse",
    "PlanVsActualItemResponse",
    "PlanVsActualResponse",
]
