"""Seasonal forecast aggregation.

Per month, per vehicle, in this order:
  1. effective_adr      = base_adr × adr_mult_pct / 100
  2. effective_util_pct = clamp(base_util_pct × util_mult_pct / 100, 0, 100)
     (clamped AFTER multiplying: 70 % × 150 % → 105 → 100)
  3. rental_days        = round(days × effective_util_pct / 100), halves up
  4. revenue            = rental_days × effective_adr
  5. fees               = revenue × fee_rate
  6. variable_cost      = rental_days × variable_per_day
  7. fixed_cost         = fixed_monthly + maintenance_reserve
  8. contribution       = revenue − fees − variable_cost − fixed_cost

Month cash flow = Σ contribution − overhead (+ tax when collected and not
passed through).  The annual row is a plain sum of the monthly rows.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from fleet_cashflow.config.season import SeasonMonth
from fleet_cashflow.config.settings import GlobalSettings
from fleet_cashflow.config.vehicle import Vehicle
from fleet_cashflow.models.results import (
    AnnualTotals,
    ForecastResult,
    MonthResult,
    VehicleMonthLine,
)
from fleet_cashflow.numeric import clamp, percent, round_half_up, safe_num

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VehicleMonthBase:
    """Scale-independent inputs for one vehicle in one month (steps 1–2, 6–7)."""

    vehicle_id: str
    effective_adr: float
    effective_util_pct: float
    variable_per_day: float
    fixed_cost: float


@dataclass(frozen=True)
class LineFigures:
    """Steps 2–8 evaluated at one utilization scale."""

    util_pct: float
    rental_days: int
    revenue: float
    fees: float
    variable_cost: float
    contribution: float


def fee_rate(settings: GlobalSettings) -> float:
    return percent(clamp(safe_num(settings.revenue_fee_pct), 0.0, 100.0))


def tax_rate(settings: GlobalSettings) -> float:
    return percent(clamp(safe_num(settings.sales_tax_pct), 0.0, 100.0))


def vehicle_month_base(vehicle: Vehicle, month: SeasonMonth) -> VehicleMonthBase:
    """Apply the month's multipliers to one vehicle."""
    effective_adr = safe_num(vehicle.base_adr) * percent(safe_num(month.adr_mult_pct))
    effective_util_pct = clamp(
        safe_num(vehicle.base_util_pct) * percent(safe_num(month.util_mult_pct)), 0.0, 100.0,
    )
    fixed_cost = safe_num(vehicle.fixed_monthly) + safe_num(vehicle.maintenance_reserve)
    return VehicleMonthBase(
        vehicle_id=vehicle.id,
        effective_adr=effective_adr,
        effective_util_pct=effective_util_pct,
        variable_per_day=safe_num(vehicle.variable_per_day),
        fixed_cost=fixed_cost,
    )


def evaluate_vehicle_month(
    base: VehicleMonthBase,
    days: float,
    rate: float,
    util_scale: float = 1.0,
) -> LineFigures:
    """Evaluate one vehicle-month with utilization scaled by ``util_scale``.

    The scaled utilization is re-clamped to [0, 100] per vehicle.  The
    aggregator calls this with ``util_scale=1.0``; the break-even solver
    sweeps it.
    """
    util_pct = clamp(base.effective_util_pct * util_scale, 0.0, 100.0)
    rental_days = round_half_up(days * percent(util_pct))
    revenue = rental_days * base.effective_adr
    fees = revenue * rate
    variable_cost = rental_days * base.variable_per_day
    contribution = revenue - fees - variable_cost - base.fixed_cost
    return LineFigures(
        util_pct=util_pct,
        rental_days=rental_days,
        revenue=revenue,
        fees=fees,
        variable_cost=variable_cost,
        contribution=contribution,
    )


def apply_tax_policy(raw_cash_flow: float, tax_collected: float, settings: GlobalSettings) -> float:
    """Pass-through tax stays out of cash flow; retained tax is added back."""
    if settings.tax_enabled and not settings.tax_pass_through:
        return raw_cash_flow + tax_collected
    return raw_cash_flow


def aggregate(
    vehicles: Sequence[Vehicle],
    months: Sequence[SeasonMonth],
    settings: GlobalSettings,
) -> ForecastResult:
    """Build per-vehicle, per-month and annual figures.

    Total over its inputs: an empty roster gives zero-valued months, no
    months gives an empty month list and zero annual totals.
    """
    rate = fee_rate(settings)
    overhead = safe_num(settings.company_overhead_monthly)
    vehicle_count = len(vehicles)

    month_results: list[MonthResult] = []
    for index, month in enumerate(months):
        days = safe_num(month.days)

        lines: list[VehicleMonthLine] = []
        total_revenue = 0.0
        total_fees = 0.0
        total_variable = 0.0
        total_vehicle_fixed = 0.0
        total_contribution = 0.0
        total_rental_days = 0

        for vehicle in vehicles:
            base = vehicle_month_base(vehicle, month)
            fig = evaluate_vehicle_month(base, days, rate)

            total_revenue += fig.revenue
            total_fees += fig.fees
            total_variable += fig.variable_cost
            total_vehicle_fixed += base.fixed_cost
            total_contribution += fig.contribution
            total_rental_days += fig.rental_days

            lines.append(VehicleMonthLine(
                vehicle_id=base.vehicle_id,
                effective_adr=base.effective_adr,
                effective_util_pct=fig.util_pct,
                rental_days=fig.rental_days,
                revenue=fig.revenue,
                fees=fig.fees,
                variable_cost=fig.variable_cost,
                fixed_cost=base.fixed_cost,
                contribution=fig.contribution,
            ))

        tax_collected = total_revenue * tax_rate(settings) if settings.tax_enabled else 0.0
        cash_flow = apply_tax_policy(total_contribution - overhead, tax_collected, settings)

        available_days = vehicle_count * days
        weighted_util_pct = (
            total_rental_days / available_days * 100 if available_days > 0 else 0.0
        )

        month_results.append(MonthResult(
            index=index,
            label=month.label,
            days=int(days),
            adr_mult_pct=month.adr_mult_pct,
            util_mult_pct=month.util_mult_pct,
            lines=lines,
            total_revenue=total_revenue,
            total_fees=total_fees,
            total_variable=total_variable,
            total_vehicle_fixed=total_vehicle_fixed,
            total_contribution=total_contribution,
            total_rental_days=total_rental_days,
            overhead=overhead,
            tax_collected=tax_collected,
            cash_flow=cash_flow,
            weighted_util_pct=weighted_util_pct,
        ))

    annual = AnnualTotals()
    for m in month_results:
        annual.revenue += m.total_revenue
        annual.fees += m.total_fees
        annual.variable += m.total_variable
        annual.vehicle_fixed += m.total_vehicle_fixed
        annual.contribution += m.total_contribution
        annual.overhead += m.overhead
        annual.tax_collected += m.tax_collected
        annual.cash_flow += m.cash_flow

    logger.debug(
        "aggregated %d vehicles × %d months, annual cash flow %.2f",
        vehicle_count, len(month_results), annual.cash_flow,
    )
    return ForecastResult(months=month_results, annual=annual)
