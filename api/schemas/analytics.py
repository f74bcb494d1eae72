"""
Analytics response schemas.

Built from the dataclass DTOs of backend.core.analytics_service; Decimal
values become JSON numbers here and nowhere earlier.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from backend.core.analytics_service import (
    AdherenceResult,
    E1rmPoint,
    OverviewResult,
    PlanVsActualItem,
    VolumePoint,
)


class OverviewResponse(BaseModel):
    total_volume: float
    avg_intensity: float
    sessions_count: int
    adherence_pct: float
    new_prs: int = 0

    @classmethod
    def from_result(cls, result: OverviewResult) -> "OverviewResponse":
        return cls(
            total_volume=float(result.total_volume),
            avg_intensity=float(result.avg_intensity),
            sessions_count=result.sessions_count,
            adherence_pct=float(result.adherence_pct),
            new_prs=result.new_prs,
        )


class VolumePointResponse(BaseModel):
    period: str
    value: float
    exercise_name: Optional[str] = None

    @classmethod
    def from_point(cls, point: VolumePoint) -> "VolumePointResponse":
        return cls(period=point.period, value=float(point.value), exercise_name=point.exercise_name)


class E1rmPointResponse(BaseModel):
    day: date
    e1rm: float
    session_id: str

    @classmethod
    def from_point(cls, point: E1rmPoint) -> "E1rmPointResponse":
        return cls(day=point.day, e1rm=float(point.e1rm), session_id=point.session_id)


class AdherenceResponse(BaseModel):
    planned: int
    completed: int
    missed: int
    adherence_pct: float

    @classmethod
    def from_result(cls, result: AdherenceResult) -> "AdherenceResponse":
        return cls(
            planned=result.planned,
            completed=result.completed,
            missed=result.missed,
            adherence_pct=float(result.adherence_pct),
        )


class PlanVsActualItemResponse(BaseModel):
    exercise_name: str
    set_number: int
    reps_planned: int
    weight_planned: float
    reps_done: Optional[int] = None
    weight_done: Optional[float] = None
    rpe: Optional[float] = None
    is_failure: Optional[bool] = None
    reps_diff: int
    weight_diff: float
    is_extra: bool = False

    @classmethod
    def from_item(cls, item: PlanVsActualItem) -> "PlanVsActualItemResponse":
        return cls(
            exercise_name=item.exercise_name,
            set_number=item.set_number,
            reps_planned=item.reps_planned,
            weight_planned=float(item.weight_planned),
            reps_done=item.reps_done,
            weight_done=None if item.weight_done is None else float(item.weight_done),
            rpe=None if item.rpe is None else float(item.rpe),
            is_failure=item.is_failure,
            reps_diff=item.reps_diff,
            weight_diff=float(item.weight_diff),
            is_extra=item.is_extra,
        )


class VolumeSeriesResponse(BaseModel):
    group_by: str
    points: List[VolumePointResponse]


class E1rmSeriesResponse(BaseModel):
    exercise_name: str
    points: List[E1rmPointResponse]


class PlanVsActualResponse(BaseModel):
    session_id: str
    items: List[PlanVsActualItemResponse]
