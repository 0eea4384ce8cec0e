"""Tests for engine/break_even.py — bisection over the utilization scale."""

from __future__ import annotations

import pytest

from fleet_cashflow.config import GlobalSettings, SeasonMonth, Vehicle
from fleet_cashflow.engine.break_even import (
    BREAK_EVEN_TOLERANCE,
    cash_flow_at_scale,
    solve_break_even,
)
from fleet_cashflow.engine.forecast import aggregate, fee_rate, vehicle_month_base


# ═══════════════════════════════════════════════════════════════════════════
# Converging solves
# ═══════════════════════════════════════════════════════════════════════════

class TestSolved:
    def test_single_vehicle_reaches_target_near_baseline(self, single_vehicle, flat_month, bare_settings):
        """50 % of 30 days = 15 days × $200 = $3,000 at scale 1."""
        result = solve_break_even([single_vehicle], [flat_month], bare_settings, 3_000, 0)
        assert result.solved is True
        assert result.month_index == 0
        # 15 rental days first appear once 30 × 0.5 × scale ≥ 14.5
        assert result.scale == pytest.approx(29 / 30, abs=1e-6)
        assert 0.95 < result.scale <= 1.0
        assert result.implied_avg_util_pct == pytest.approx(50 * 29 / 30, abs=1e-4)
        assert abs(result.achieved_cash_flow - 3_000) <= BREAK_EVEN_TOLERANCE

    def test_target_cash_flow_echoed(self, single_vehicle, flat_month, bare_settings):
        result = solve_break_even([single_vehicle], [flat_month], bare_settings, 3_000, 0)
        assert result.target_cash_flow == 3_000

    def test_tolerance_band_counts_as_solved(self, single_vehicle, flat_month, bare_settings):
        """Revenue moves in $200 steps, so $3,100 can only be hit within $100."""
        result = solve_break_even([single_vehicle], [flat_month], bare_settings, 3_100, 0)
        assert result.solved is True
        assert result.achieved_cash_flow in (pytest.approx(3_000), pytest.approx(3_200))

    def test_overhead_and_fees_raise_required_scale(self, single_vehicle, flat_month):
        s = GlobalSettings(revenue_fee_pct=10, company_overhead_monthly=900)
        result = solve_break_even([single_vehicle], [flat_month], s, 0, 0)
        # 0.9 × 200 × days − 900 ≥ 0  ⇒  days ≥ 5  ⇒  30 × 0.5 × scale ≥ 4.5
        assert result.solved is True
        assert result.scale == pytest.approx(0.3, abs=1e-6)

    def test_sample_plan(self, plan):
        result = solve_break_even(plan.vehicles, plan.months, plan.settings, 25_000, 6)
        assert result.month_index == 6
        assert 0.0 <= result.scale <= 2.0
        assert 0.0 <= result.implied_avg_util_pct <= 100.0


# ═══════════════════════════════════════════════════════════════════════════
# Unreachable targets & degenerate input
# ═══════════════════════════════════════════════════════════════════════════

class TestUnsolved:
    def test_target_above_maximum_converges_to_upper_bound(self, single_vehicle, flat_month, bare_settings):
        result = solve_break_even([single_vehicle], [flat_month], bare_settings, 1_000_000, 0)
        assert result.solved is False
        assert result.scale == pytest.approx(2.0, abs=1e-9)
        # 50 % × 2 = 100 %, capped per vehicle
        assert result.implied_avg_util_pct == pytest.approx(100.0)
        assert result.achieved_cash_flow == pytest.approx(6_000)

    def test_target_below_minimum_converges_to_lower_bound(self, single_vehicle, flat_month):
        s = GlobalSettings(revenue_fee_pct=0, company_overhead_monthly=10_000)
        result = solve_break_even([single_vehicle], [flat_month], s, -1_000_000, 0)
        assert result.solved is False
        assert result.scale == pytest.approx(0.0, abs=1e-9)
        assert result.implied_avg_util_pct == pytest.approx(0.0, abs=1e-6)

    def test_per_vehicle_cap_at_100_percent(self, flat_month, bare_settings):
        busy = Vehicle(base_adr=100, base_util_pct=80, fixed_monthly=0, variable_per_day=0, maintenance_reserve=0)
        result = solve_break_even([busy], [flat_month], bare_settings, 10_000, 0)
        assert result.solved is False
        assert result.implied_avg_util_pct == pytest.approx(100.0)   # not 160
        assert result.achieved_cash_flow == pytest.approx(3_000)

    def test_empty_roster(self, months, settings):
        result = solve_break_even([], months, settings, 25_000, 6)
        assert result.scale == 0.0
        assert result.implied_avg_util_pct == 0.0
        assert result.solved is False
        assert result.month_index is None

    def test_no_months(self, fleet, settings):
        result = solve_break_even(fleet, [], settings, 25_000, 0)
        assert result.solved is False
        assert result.scale == 0.0

    def test_malformed_target_treated_as_zero(self, single_vehicle, flat_month, bare_settings):
        result = solve_break_even([single_vehicle], [flat_month], bare_settings, "lots", 0)
        assert result.target_cash_flow == 0.0


# ═══════════════════════════════════════════════════════════════════════════
# Month selection, tax exclusion, consistency with the aggregator
# ═══════════════════════════════════════════════════════════════════════════

class TestPolicy:
    @pytest.mark.parametrize("index, expected", [(99, 11), (-5, 0), (3, 3)])
    def test_month_index_clamped(self, fleet, months, settings, index, expected):
        assert solve_break_even(fleet, months, settings, 0, index).month_index == expected

    def test_tax_policy_ignored(self, fleet, months):
        base = dict(revenue_fee_pct=2.9, company_overhead_monthly=18_500, sales_tax_pct=8.265)
        no_tax = GlobalSettings(**base, tax_enabled=False)
        kept_tax = GlobalSettings(**base, tax_enabled=True, tax_pass_through=False)
        a = solve_break_even(fleet, months, no_tax, 25_000, 6)
        b = solve_break_even(fleet, months, kept_tax, 25_000, 6)
        assert a.model_dump() == b.model_dump()

    def test_scale_one_matches_aggregator(self, fleet, months, settings):
        forecast = aggregate(fleet, months, settings)
        for index, month in enumerate(months):
            bases = [vehicle_month_base(v, month) for v in fleet]
            cf = cash_flow_at_scale(bases, month.days, fee_rate(settings), settings.company_overhead_monthly, 1.0)
            assert cf == pytest.approx(forecast.months[index].cash_flow)

    def test_cash_flow_monotonic_for_typical_fleet(self, fleet, months, settings):
        month = months[6]
        bases = [vehicle_month_base(v, month) for v in fleet]
        rate = fee_rate(settings)
        values = [
            cash_flow_at_scale(bases, month.days, rate, settings.company_overhead_monthly, s / 10)
            for s in range(21)
        ]
        assert values == sorted(values)

    def test_deterministic(self, plan):
        a = solve_break_even(plan.vehicles, plan.months, plan.settings, 25_000, 6)
        b = solve_break_even(plan.vehicles, plan.months, plan.settings, 25_000, 6)
        assert a == b

    def test_unguarded_when_variable_cost_exceeds_adr(self, flat_month, bare_settings):
        """Cash flow falls with utilization here.

        Zero cash flow is only reachable below scale 1/30, but the first midpoint
        (1.0) already misses, so the search walks up to the upper bound.
        """
        lossy = Vehicle(base_adr=50, base_util_pct=50, fixed_monthly=0, variable_per_day=80, maintenance_reserve=0)
        result = solve_break_even([lossy], [flat_month], bare_settings, 0, 0)
        assert result.solved is False
        assert result.scale == pytest.approx(2.0, abs=1e-9)
        assert result.achieved_cash_flow == pytest.approx(-900.0)
