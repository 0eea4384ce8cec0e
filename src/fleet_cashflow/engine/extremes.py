"""Best / worst month selection by cash flow."""

from __future__ import annotations

from collections.abc import Sequence

from fleet_cashflow.models.results import ExtremalMonths, MonthResult


def select_extremal_periods(months: Sequence[MonthResult]) -> ExtremalMonths:
    """Return the months with the highest and lowest cash flow.

    Ties keep the earliest month (strict comparisons while scanning).
    An empty list yields ``best=None, worst=None``.
    """
    best: MonthResult | None = None
    worst: MonthResult | None = None
    for month in months:
        if best is None or month.cash_flow > best.cash_flow:
            best = month
        if worst is None or month.cash_flow < worst.cash_flow:
            worst = month
    return ExtremalMonths(best=best, worst=worst)
