"""Plan runner — forecast, best/worst months and break-even in one call.

Entry point: ``run_plan(plan)``.  Callers re-run it whenever the roster,
the months or the settings change; nothing is cached between calls.
"""

from __future__ import annotations

import logging

from fleet_cashflow.config.plan import FleetPlan
from fleet_cashflow.engine.break_even import solve_break_even
from fleet_cashflow.engine.extremes import select_extremal_periods
from fleet_cashflow.engine.forecast import aggregate
from fleet_cashflow.models.results import PlanReport

logger = logging.getLogger(__name__)


def run_plan(plan: FleetPlan) -> PlanReport:
    """Run the aggregator, the selector and the solver for ``plan``."""
    forecast = aggregate(plan.vehicles, plan.months, plan.settings)
    extremes = select_extremal_periods(forecast.months)
    break_even = solve_break_even(
        plan.vehicles,
        plan.months,
        plan.settings,
        plan.target_monthly_cash_flow,
        plan.break_even_month_index,
    )
    logger.debug(
        "plan run: %d vehicles, %d months, break-even solved=%s",
        len(plan.vehicles), len(plan.months), break_even.solved,
    )
    return PlanReport(forecast=forecast, extremes=extremes, break_even=break_even)
