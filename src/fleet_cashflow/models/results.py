"""Result types — the contract between engine, API, and dashboard.

All monetary values are unrounded floats; presentation layers format them.
"""

from __future__ import annotations

from pydantic import BaseModel


# ═══════════════════════════════════════════════════════════════════════════
# Forecast
# ═══════════════════════════════════════════════════════════════════════════

class VehicleMonthLine(BaseModel):
    """One vehicle's economics for one month."""

    vehicle_id: str

    effective_adr: float
    """base_adr × adr_mult_pct / 100."""

    effective_util_pct: float
    """clamp(base_util_pct × util_mult_pct / 100, 0, 100) — clamped after multiplying."""

    rental_days: int
    """round(days × effective_util_pct / 100), halves rounded up."""

    revenue: float
    fees: float
    """revenue × fee rate.  Never charged on contribution."""

    variable_cost: float
    fixed_cost: float
    """fixed_monthly + maintenance_reserve, independent of rental days."""

    contribution: float
    """revenue − fees − variable_cost − fixed_cost."""


class MonthResult(BaseModel):
    """Fleet totals for one seasonal month."""

    index: int
    """Position in the input month list."""

    label: str
    days: int
    adr_mult_pct: float
    util_mult_pct: float

    lines: list[VehicleMonthLine]

    total_revenue: float = 0.0
    total_fees: float = 0.0
    total_variable: float = 0.0
    total_vehicle_fixed: float = 0.0
    total_contribution: float = 0.0
    total_rental_days: int = 0

    overhead: float = 0.0
    """Company overhead deducted this month."""

    tax_collected: float = 0.0
    """Sales tax on total revenue; 0 when tax is disabled."""

    cash_flow: float = 0.0
    """total_contribution − overhead, plus tax_collected only when tax is
    enabled and not passed through."""

    weighted_util_pct: float = 0.0
    """total_rental_days / (vehicles × days) × 100; 0 with no vehicles or no days."""


class AnnualTotals(BaseModel):
    """Sum of every month-level total across all months."""

    revenue: float = 0.0
    fees: float = 0.0
    variable: float = 0.0
    vehicle_fixed: float = 0.0
    contribution: float = 0.0
    overhead: float = 0.0
    tax_collected: float = 0.0
    cash_flow: float = 0.0


class ForecastResult(BaseModel):
    """Complete output of one aggregation."""

    months: list[MonthResult]
    annual: AnnualTotals


# ═══════════════════════════════════════════════════════════════════════════
# Selector & solver
# ═══════════════════════════════════════════════════════════════════════════

class ExtremalMonths(BaseModel):
    """Best and worst month by cash flow; both None when there are no months."""

    best: MonthResult | None = None
    worst: MonthResult | None = None


class BreakEvenResult(BaseModel):
    """Uniform utilization scale needed to reach a target monthly cash flow."""

    scale: float
    """Multiplier on each vehicle's effective utilization, within [0, 2]."""

    implied_avg_util_pct: float
    """Mean over vehicles of clamp(effective_util_pct × scale, 0, 100)."""

    solved: bool
    """True when cash flow at ``scale`` is within ``BREAK_EVEN_TOLERANCE`` of the target."""

    month_index: int | None = None
    """Month actually solved for (after clamping), None when nothing was solved."""

    target_cash_flow: float = 0.0
    achieved_cash_flow: float = 0.0
    """Pre-tax cash flow evaluated at ``scale``."""


class PlanReport(BaseModel):
    """Forecast, best/worst months and break-even for one plan."""

    forecast: ForecastResult
    extremes: ExtremalMonths
    break_even: BreakEvenResult
