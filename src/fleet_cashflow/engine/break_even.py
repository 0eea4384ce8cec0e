"""Break-even solver — uniform utilization scale for a target cash flow.

Answers: "By how much would every vehicle's utilization in month M have to
be scaled for the fleet to make X in that month?"

Search strategy (bisection over the scale):
  1. Precompute each vehicle's effective ADR / utilization for month M
  2. cash_flow(scale) = Σ contribution(util × scale, re-clamped to 100 %) − overhead
     (pre-tax: the tax pass-through policy is not applied here)
  3. Bisect scale ∈ [0, 2] for a fixed 40 steps, assuming cash_flow is
     non-decreasing in scale (not checked — it can fail when a vehicle's
     variable cost per day exceeds its ADR)
  4. solved ⇔ |cash_flow(scale) − target| ≤ 250
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fleet_cashflow.config.season import SeasonMonth
from fleet_cashflow.config.settings import GlobalSettings
from fleet_cashflow.config.vehicle import Vehicle
from fleet_cashflow.engine.forecast import (
    VehicleMonthBase,
    evaluate_vehicle_month,
    fee_rate,
    vehicle_month_base,
)
from fleet_cashflow.models.results import BreakEvenResult
from fleet_cashflow.numeric import clamp, round_half_up, safe_num

logger = logging.getLogger(__name__)

SCALE_LOWER_BOUND = 0.0
SCALE_UPPER_BOUND = 2.0
BISECTION_ITERATIONS = 40
BREAK_EVEN_TOLERANCE = 250.0
"""Currency units; a solve closer than this to the target counts as solved."""


def cash_flow_at_scale(
    bases: Sequence[VehicleMonthBase],
    days: float,
    rate: float,
    overhead: float,
    scale: float,
) -> float:
    """Pre-tax fleet cash flow for one month with utilization scaled by ``scale``."""
    total_contribution = 0.0
    for base in bases:
        total_contribution += evaluate_vehicle_month(base, days, rate, scale).contribution
    return total_contribution - overhead


def solve_break_even(
    vehicles: Sequence[Vehicle],
    months: Sequence[SeasonMonth],
    settings: GlobalSettings,
    target_cash_flow: float,
    month_index: int,
) -> BreakEvenResult:
    """Find the utilization scale that brings month ``month_index`` to the target.

    Parameters
    ----------
    vehicles, months, settings
        Same inputs as ``aggregate``.
    target_cash_flow : float
        Desired pre-tax cash flow for the month.
    month_index : int
        0-based month; clamped into the valid range.

    Returns
    -------
    BreakEvenResult
        Never raises.  Unreachable targets converge to a bound (0 or 2)
        with ``solved=False``; an empty roster or month list returns
        ``scale=0, implied_avg_util_pct=0, solved=False`` without searching.
    """
    target = safe_num(target_cash_flow)

    if not vehicles or not months:
        return BreakEvenResult(
            scale=0.0, implied_avg_util_pct=0.0, solved=False, target_cash_flow=target,
        )

    index = int(clamp(round_half_up(safe_num(month_index)), 0, len(months) - 1))
    month = months[index]
    days = safe_num(month.days)
    rate = fee_rate(settings)
    overhead = safe_num(settings.company_overhead_monthly)
    bases = [vehicle_month_base(v, month) for v in vehicles]

    lo, hi = SCALE_LOWER_BOUND, SCALE_UPPER_BOUND
    mid = 1.0
    for _ in range(BISECTION_ITERATIONS):
        mid = (lo + hi) / 2
        if cash_flow_at_scale(bases, days, rate, overhead, mid) >= target:
            hi = mid
        else:
            lo = mid

    achieved = cash_flow_at_scale(bases, days, rate, overhead, mid)
    implied_avg_util_pct = sum(
        clamp(b.effective_util_pct * mid, 0.0, 100.0) for b in bases
    ) / len(bases)
    solved = abs(achieved - target) <= BREAK_EVEN_TOLERANCE

    logger.debug(
        "break-even %s: scale=%.6f achieved=%.2f target=%.2f solved=%s",
        month.label, mid, achieved, target, solved,
    )
    return BreakEvenResult(
        scale=mid,
        implied_avg_util_pct=implied_avg_util_pct,
        solved=solved,
        month_index=index,
        target_cash_flow=target,
        achieved_cash_flow=achieved,
    )
