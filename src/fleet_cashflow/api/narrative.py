"""Narrative generator — plain-English summary of a plan report."""

from __future__ import annotations

from fleet_cashflow.models.results import PlanReport


def _money(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def generate_narrative(report: PlanReport) -> str:
    """Summarise annual figures, best/worst months and the break-even solve."""
    f = report.forecast
    a = f.annual
    ex = report.extremes
    be = report.break_even

    sections: list[str] = []

    sections.append("=" * 60)
    sections.append("ANNUAL FORECAST")
    sections.append("=" * 60)
    fleet_size = len(f.months[0].lines) if f.months else 0
    sections.append(
        f"Vehicles: {fleet_size}\n"
        f"Months: {len(f.months)}\n"
        f"Revenue: {_money(a.revenue)}\n"
        f"Fees: {_money(a.fees)}\n"
        f"Variable costs: {_money(a.variable)}\n"
        f"Vehicle fixed costs: {_money(a.vehicle_fixed)}\n"
        f"Company overhead: {_money(a.overhead)}\n"
        f"Cash flow: {_money(a.cash_flow)}"
    )
    if a.tax_collected:
        sections.append(f"Sales tax collected: {_money(a.tax_collected)}")

    sections.append("")
    sections.append("=" * 60)
    sections.append("SEASONALITY")
    sections.append("=" * 60)
    if ex.best is None or ex.worst is None:
        sections.append("No months configured.")
    else:
        sections.append(
            f"Best month: {ex.best.label} ({_money(ex.best.cash_flow)}, "
            f"{ex.best.weighted_util_pct:.1f}% utilization)\n"
            f"Worst month: {ex.worst.label} ({_money(ex.worst.cash_flow)}, "
            f"{ex.worst.weighted_util_pct:.1f}% utilization)"
        )
        negative = [m.label for m in f.months if m.cash_flow < 0]
        if negative:
            sections.append(f"Months with negative cash flow: {', '.join(negative)}")

    sections.append("")
    sections.append("=" * 60)
    sections.append("BREAK-EVEN")
    sections.append("=" * 60)
    if be.month_index is None:
        sections.append("Nothing to solve: the roster or the month list is empty.")
    else:
        if be.month_index < len(f.months):
            label = f.months[be.month_index].label
        else:
            label = f"#{be.month_index}"
        verdict = "REACHABLE" if be.solved else "NOT REACHABLE within 0–200% of baseline utilization"
        sections.append(
            f"Target for {label}: {_money(be.target_cash_flow)} → {verdict}\n"
            f"Utilization scale: {be.scale:.3f}×\n"
            f"Implied average utilization: {be.implied_avg_util_pct:.1f}%\n"
            f"Cash flow at that scale (pre-tax): {_money(be.achieved_cash_flow)}"
        )

    return "\n".join(sections)
