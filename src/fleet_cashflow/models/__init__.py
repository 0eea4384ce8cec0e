"""Result models — forecast and solver output contracts."""

from fleet_cashflow.models.results import (
    AnnualTotals,
    BreakEvenResult,
    ExtremalMonths,
    ForecastResult,
    MonthResult,
    PlanReport,
    VehicleMonthLine,
)

__all__ = [
    "AnnualTotals",
    "BreakEvenResult",
    "ExtremalMonths",
    "ForecastResult",
    "MonthResult",
    "PlanReport",
    "VehicleMonthLine",
]
