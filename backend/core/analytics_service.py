"""
Analytics Service for training sessions.

Part of LL-105: Training analytics

This module derives read-only analytics from recorded sessions:
- Overview KPIs (volume, average intensity, session count, adherence)
- Volume series grouped by day, ISO week or exercise
- Estimated 1RM series per day for one exercise
- Adherence of scheduled workouts
- Plan-vs-actual comparison for one session

Only sessions with status COMPLETED count towards aggregates; aborted
sessions are ignored even though they carry a completion timestamp.
Time ranges are half-open [from, to) on session start and are swapped
silently when reversed.
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
import logging

from application.exceptions import UnauthorizedError
from application.ports import ScheduledWorkoutRepository, SessionRepository
from backend.core.training_metrics import (
    adherence_pct,
    calculate_1rm_epley,
    day_key,
    day_of,
    iso_week_key,
    normalize_range,
    round_2,
    set_volume,
)
from domain.models import SessionStatus, WorkoutSession, ensure_utc

logger = logging.getLogger(__name__)

GROUP_BY_DAY = "day"
GROUP_BY_WEEK = "week"
GROUP_BY_EXERCISE = "exercise"
VALID_GROUP_BY = (GROUP_BY_DAY, GROUP_BY_WEEK, GROUP_BY_EXERCISE)


# =============================================================================
# Response DTOs
# =============================================================================


@dataclass
class OverviewResult:
    """KPIs for a time range."""
    total_volume: Decimal
    avg_intensity: Decimal
    sessions_count: int
    adherence_pct: Decimal
    new_prs: int = 0  # personal-record detection is not implemented


@dataclass
class VolumePoint:
    """Total volume for one period (day, ISO week or exercise)."""
    period: str
    value: Decimal
    exercise_name: Optional[str] = None


@dataclass
class E1rmPoint:
    """Best estimated 1RM on one day."""
    day: date
    e1rm: Decimal
    session_id: str


@dataclass
class AdherenceResult:
    """Scheduled workout adherence for a date range."""
    planned: int
    completed: int

    @property
    def missed(self) -> int:
        return max(0, self.planned - self.completed)

    @property
    def adherence_pct(self) -> Decimal:
        return adherence_pct(self.completed, self.planned)


@dataclass
class PlanVsActualItem:
    """Planned targets next to recorded actuals for one set."""
    exercise_name: str
    set_number: int
    reps_planned: int
    weight_planned: Decimal
    reps_done: Optional[int] = None
    weight_done: Optional[Decimal] = None
    rpe: Optional[Decimal] = None
    is_failure: Optional[bool] = None
    is_extra: bool = False

    @property
    def reps_diff(self) -> int:
        return (self.reps_done or 0) - self.reps_planned

    @property
    def weight_diff(self) -> Decimal:
        return (self.weight_done or Decimal(0)) - self.weight_planned


# =============================================================================
# Analytics Service
# =============================================================================


class AnalyticsService:
    """
    Service for training analytics.

    Reads sessions and scheduled-workout counts through the repository
    ports and aggregates them in memory with Decimal arithmetic.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        scheduled_repo: ScheduledWorkoutRepository,
    ):
        """
        Initialize the analytics service.

        Args:
            session_repo: Repository for session data
            scheduled_repo: Repository for scheduled workout counts
        """
        self.session_repo = session_repo
        self.scheduled_repo = scheduled_repo

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_user(user_id: str) -> None:
        if not user_id or not user_id.strip():
            raise UnauthorizedError()

    def _completed_sessions(
        self,
        user_id: str,
        from_utc: datetime,
        to_utc: datetime,
    ) -> List[WorkoutSession]:
        """Completed sessions started in the normalized range, oldest first."""
        from_utc, to_utc = normalize_range(ensure_utc(from_utc), ensure_utc(to_utc))
        if from_utc == to_utc:
            return []
        sessions = self.session_repo.list_by_range(
            user_id, from_utc, to_utc, status=SessionStatus.COMPLETED
        )
        # Repositories return newest first
        completed = [s for s in sessions if s.status == SessionStatus.COMPLETED]
        completed.sort(key=lambda s: s.started_at)
        return completed

    # -------------------------------------------------------------------------
    # Overview
    # -------------------------------------------------------------------------

    def get_overview(
        self,
        user_id: str,
        from_utc: datetime,
        to_utc: datetime,
    ) -> OverviewResult:
        """
        Get KPI overview for a time range.

        Args:
            user_id: User ID
            from_utc: Range start (inclusive)
            to_utc: Range end (exclusive)

        Returns:
            OverviewResult. Adherence uses scheduled workouts dated between
            the calendar days of the two bounds, both inclusive.
        """
        self._require_user(user_id)
        from_utc, to_utc = normalize_range(ensure_utc(from_utc), ensure_utc(to_utc))
        sessions = self._completed_sessions(user_id, from_utc, to_utc)

        total_volume = Decimal(0)
        intensity_sum = Decimal(0)
        intensity_count = 0
        for session in sessions:
            for exercise in session.exercises:
                for session_set in exercise.sets:
                    total_volume += set_volume(session_set)
                    if session_set.weight_done is not None:
                        intensity_sum += session_set.weight_done
                        intensity_count += 1

        avg_intensity = (
            intensity_sum / Decimal(intensity_count) if intensity_count else Decimal(0)
        )

        counts = self.scheduled_repo.count_by_status(
            user_id, day_of(from_utc), day_of(to_utc)
        )

        return OverviewResult(
            total_volume=round_2(total_volume),
            avg_intensity=round_2(avg_intensity),
            sessions_count=len(sessions),
            adherence_pct=adherence_pct(counts.completed, counts.planned),
            new_prs=0,
        )

    # -------------------------------------------------------------------------
    # Volume series
    # -------------------------------------------------------------------------

    def get_volume_series(
        self,
        user_id: str,
        from_utc: datetime,
        to_utc: datetime,
        group_by: str = GROUP_BY_DAY,
        exercise_name: Optional[str] = None,
    ) -> List[VolumePoint]:
        """
        Get total volume grouped by day, ISO week or exercise.

        Args:
            user_id: User ID
            from_utc: Range start (inclusive)
            to_utc: Range end (exclusive)
            group_by: "day" (YYYY-MM-DD), "week" (YYYY-Www) or "exercise"
            exercise_name: Restrict day/week series to one exercise (exact,
                case-sensitive). Ignored when grouping by exercise.

        Returns:
            Points sorted ascending by period, values rounded to 2 decimals

        Raises:
            ValueError: Unknown group_by
        """
        self._require_user(user_id)
        group_by = (group_by or GROUP_BY_DAY).lower()
        if group_by not in VALID_GROUP_BY:
            raise ValueError(
                f"Invalid group_by '{group_by}'. Must be one of: {', '.join(VALID_GROUP_BY)}"
            )

        name_filter = exercise_name if group_by != GROUP_BY_EXERCISE else None
        totals: Dict[str, Decimal] = {}

        for session in self._completed_sessions(user_id, from_utc, to_utc):
            if group_by == GROUP_BY_WEEK:
                session_key = iso_week_key(session.started_at)
            else:
                session_key = day_key(session.started_at)

            for exercise in session.exercises:
                if name_filter and exercise.name != name_filter:
                    continue
                key = exercise.name if group_by == GROUP_BY_EXERCISE else session_key
                volume = sum((set_volume(s) for s in exercise.sets), Decimal(0))
                totals[key] = totals.get(key, Decimal(0)) + volume

        return [
            VolumePoint(
                period=key,
                value=round_2(totals[key]),
                exercise_name=key if group_by == GROUP_BY_EXERCISE else None,
            )
            for key in sorted(totals)
        ]

    # -------------------------------------------------------------------------
    # Estimated 1RM series
    # -------------------------------------------------------------------------

    def get_e1rm_series(
        self,
        user_id: str,
        exercise_name: str,
        from_utc: datetime,
        to_utc: datetime,
    ) -> List[E1rmPoint]:
        """
        Get the best Epley e1RM per day for one exercise.

        Only sets with both reps_done and weight_done recorded are used. For
        each day the maximum e1RM is reported along with the first session
        (by start time) that had a qualifying set that day.

        Returns:
            Points sorted ascending by day, e1RM rounded to 2 decimals
        """
        self._require_user(user_id)
        best_by_day: Dict[date, Tuple[Decimal, str]] = {}

        for session in self._completed_sessions(user_id, from_utc, to_utc):
            day = day_of(session.started_at)
            for exercise in session.exercises:
                if exercise.name != exercise_name:
                    continue
                for session_set in exercise.sets:
                    if session_set.reps_done is None or session_set.weight_done is None:
                        continue
                    e1rm = calculate_1rm_epley(session_set.weight_done, session_set.reps_done)
                    if day not in best_by_day:
                        best_by_day[day] = (e1rm, session.id)
                    elif e1rm > best_by_day[day][0]:
                        best_by_day[day] = (e1rm, best_by_day[day][1])

        return [
            E1rmPoint(day=day, e1rm=round_2(best), session_id=session_id)
            for day, (best, session_id) in sorted(best_by_day.items())
        ]

    # -------------------------------------------------------------------------
    # Adherence
    # -------------------------------------------------------------------------

    def get_adherence(
        self,
        user_id: str,
        from_date: date,
        to_date: date,
    ) -> AdherenceResult:
        """
        Get planned vs completed scheduled workouts in [from_date, to_date].

        Uses scheduled-workout status, not session status.
        """
        self._require_user(user_id)
        from_date, to_date = normalize_range(from_date, to_date)
        counts = self.scheduled_repo.count_by_status(user_id, from_date, to_date)
        return AdherenceResult(planned=counts.planned, completed=counts.completed)

    # -------------------------------------------------------------------------
    # Plan vs actual
    # -------------------------------------------------------------------------

    def get_plan_vs_actual(self, user_id: str, session_id: str) -> List[PlanVsActualItem]:
        """
        Compare planned and recorded values per set of one session.

        Returns an empty list when the session does not exist or belongs to
        another user, so callers cannot probe for foreign session IDs.
        """
        self._require_user(user_id)
        session = self.session_repo.get_by_id(user_id, session_id)
        if session is None:
            logger.debug("Plan-vs-actual for unknown session %s", session_id)
            return []

        items: List[PlanVsActualItem] = []
        for exercise in sorted(session.exercises, key=lambda e: e.order):
            for session_set in sorted(exercise.sets, key=lambda s: s.set_number):
                items.append(PlanVsActualItem(
                    exercise_name=exercise.name,
                    set_number=session_set.set_number,
                    reps_planned=session_set.reps_planned,
                    weight_planned=session_set.weight_planned,
                    reps_done=session_set.reps_done,
                    weight_done=session_set.weight_done,
                    rpe=session_set.rpe,
                    is_failure=session_set.is_failure,
                    is_extra=exercise.is_ad_hoc,
                ))
        return items
