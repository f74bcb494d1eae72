"""
Training metric formulas.

Part of LL-105: Training analytics

Pure helpers shared by the analytics service:
- Effective reps/weight with planned-value fallback
- Set volume
- Estimated 1RM (Epley)
- Period keys (calendar day, ISO week)
- Adherence percentage
- Decimal rounding

All arithmetic is done with Decimal so results such as 100 x (1 + 5/30)
are exact up to the Decimal context precision, never binary float.
"""
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple, TypeVar

from domain.models import SessionSet

TWO_PLACES = Decimal("0.01")
ONE_PLACE = Decimal("0.1")

T = TypeVar("T")


# =============================================================================
# Set-level formulas
# =============================================================================


def effective_reps(session_set: SessionSet) -> int:
    """Reps done, falling back to reps planned when nothing was recorded."""
    if session_set.reps_done is not None:
        return session_set.reps_done
    return session_set.reps_planned


def effective_weight(session_set: SessionSet) -> Decimal:
    """Weight done, falling back to weight planned when nothing was recorded."""
    if session_set.weight_done is not None:
        return session_set.weight_done
    return session_set.weight_planned


def set_volume(session_set: SessionSet) -> Decimal:
    """
    Volume of a single set: effective reps x effective weight.

    Examples:
        >>> set_volume(SessionSet(set_number=1, reps_planned=10, weight_planned=Decimal("50")))
        Decimal('500')
    """
    return Decimal(effective_reps(session_set)) * effective_weight(session_set)


def calculate_1rm_epley(weight: Decimal, reps: int) -> Decimal:
    """
    Calculate estimated 1RM using the Epley formula.

    Formula: 1RM = weight * (1 + reps/30)

    Args:
        weight: Weight lifted
        reps: Number of reps completed

    Returns:
        Estimated 1RM, unrounded

    Examples:
        >>> calculate_1rm_epley(Decimal("100"), 5)
        Decimal('116.6666666666666666666666667')
    """
    return weight * (Decimal(1) + Decimal(reps) / Decimal(30))


# =============================================================================
# Period keys
# =============================================================================


def day_key(moment: datetime) -> str:
    """Calendar day key ``YYYY-MM-DD``."""
    return moment.date().isoformat()


def iso_week_key(moment: datetime) -> str:
    """
    ISO-8601 week key ``YYYY-Www``.

    The year is the ISO week-numbering year, so 2021-01-01 (a Friday)
    belongs to ``2020-W53``.
    """
    iso_year, iso_week, _ = moment.isocalendar()
    return f"{iso_year:04d}-W{iso_week:02d}"


# =============================================================================
# Ratios and rounding
# =============================================================================


def round_2(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def round_1(value: Decimal) -> Decimal:
    return value.quantize(ONE_PLACE, rounding=ROUND_HALF_UP)


def adherence_pct(completed: int, planned: int) -> Decimal:
    """
    Completed / planned x 100, rounded to one decimal.

    Returns 0 when nothing was planned.

    Examples:
        >>> adherence_pct(3, 4)
        Decimal('75.0')
        >>> adherence_pct(0, 0)
        Decimal('0.0')
    """
    if planned <= 0:
        return round_1(Decimal(0))
    return round_1(Decimal(completed) * Decimal(100) / Decimal(planned))


def normalize_range(start: T, end: T) -> Tuple[T, T]:
    """Swap the bounds of a reversed range."""
    if start > end:
        return end, start
    return start, end


def day_of(moment: datetime) -> date:
    return moment.date()
