"""Engine — forecast aggregation, extremal months, break-even solving."""

from fleet_cashflow.engine.forecast import aggregate, evaluate_vehicle_month
from fleet_cashflow.engine.extremes import select_extremal_periods
from fleet_cashflow.engine.break_even import solve_break_even
from fleet_cashflow.engine.orchestrator import run_plan

__all__ = [
    "aggregate",
    "evaluate_vehicle_month",
    "select_extremal_periods",
    "solve_break_even",
    "run_plan",
]
