"""
Unit tests for training metric formulas.

Part of LL-105: Training analytics
"""
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from backend.core.training_metrics import (
    adherence_pct,
    calculate_1rm_epley,
    day_key,
    effective_reps,
    effective_weight,
    iso_week_key,
    normalize_range,
    round_1,
    round_2,
    set_volume,
)
from domain.models import SessionSet

pytestmark = pytest.mark.unit


class TestEffectiveValues:
    """Actual values with planned fallback."""

    def test_planned_values_used_when_nothing_recorded(self):
        s = SessionSet(set_number=1, reps_planned=10, weight_planned=Decimal("50"))
        assert effective_reps(s) == 10
        assert effective_weight(s) == Decimal("50")
        assert set_volume(s) == Decimal("500")

    def test_actual_values_win(self):
        s = SessionSet(
            set_number=1, reps_planned=10, weight_planned=Decimal("50"),
            reps_done=8, weight_done=Decimal("52.5"),
        )
        assert set_volume(s) == Decimal("420.0")

    def test_zero_reps_done_is_not_a_fallback(self):
        """A recorded 0 is a real value, not a missing one."""
        s = SessionSet(set_number=1, reps_planned=10, weight_planned=Decimal("50"), reps_done=0)
        assert set_volume(s) == Decimal("0")

    def test_mixed_fallback(self):
        s = SessionSet(set_number=1, reps_planned=5, weight_planned=Decimal("100"), reps_done=3)
        assert set_volume(s) == Decimal("300")


class TestEpley:
    """Tests for calculate_1rm_epley."""

    def test_exact_decimal_result(self):
        assert calculate_1rm_epley(Decimal("100"), 5) == Decimal("100") * (
            Decimal(1) + Decimal(5) / Decimal(30)
        )
        assert round_2(calculate_1rm_epley(Decimal("100"), 5)) == Decimal("116.67")

    def test_single_rep(self):
        assert round_2(calculate_1rm_epley(Decimal("90"), 1)) == Decimal("93.00")

    def test_zero_reps_returns_weight(self):
        assert calculate_1rm_epley(Decimal("80"), 0) == Decimal("80")


class TestPeriodKeys:
    """Calendar day and ISO week keys."""

    def test_day_key(self):
        assert day_key(datetime(2024, 3, 4, 23, 59, tzinfo=timezone.utc)) == "2024-03-04"

    def test_iso_week_key(self):
        assert iso_week_key(datetime(2024, 3, 4, tzinfo=timezone.utc)) == "2024-W10"

    def test_iso_week_year_boundary(self):
        """2021-01-01 belongs to the last ISO week of 2020."""
        assert iso_week_key(datetime(2021, 1, 1, tzinfo=timezone.utc)) == "2020-W53"

    def test_iso_week_zero_padded(self):
        assert iso_week_key(datetime(2024, 1, 3, tzinfo=timezone.utc)) == "2024-W01"


class TestRatiosAndRounding:
    """Adherence and rounding helpers."""

    def test_adherence_three_of_four(self):
        assert adherence_pct(3, 4) == Decimal("75.0")

    def test_adherence_nothing_planned(self):
        assert adherence_pct(0, 0) == Decimal("0.0")

    def test_adherence_rounds_half_up(self):
        assert adherence_pct(2, 3) == Decimal("66.7")
        assert adherence_pct(1, 8) == Decimal("12.5")

    def test_round_half_up(self):
        assert round_2(Decimal("1.005")) == Decimal("1.01")
        assert round_1(Decimal("0.25")) == Decimal("0.3")

    def test_normalize_range_swaps(self):
        assert normalize_range(date(2024, 3, 10), date(2024, 3, 1)) == (
            date(2024, 3, 1), date(2024, 3, 10)
        )
        assert normalize_range(1, 2) == (1, 2)
