"""Shared test fixtures — a one-vehicle fleet with round numbers plus the sample plan."""

from __future__ import annotations

import pytest

from fleet_cashflow.config import (
    FleetPlan,
    GlobalSettings,
    SeasonMonth,
    Vehicle,
    default_months,
    sample_fleet,
)


@pytest.fixture
def single_vehicle() -> Vehicle:
    return Vehicle(
        id="v1",
        name="Test car",
        base_adr=200,
        base_util_pct=50,
        fixed_monthly=0,
        variable_per_day=0,
        maintenance_reserve=0,
    )


@pytest.fixture
def flat_month() -> SeasonMonth:
    return SeasonMonth(label="Jun", days=30, adr_mult_pct=100, util_mult_pct=100)


@pytest.fixture
def bare_settings() -> GlobalSettings:
    """No fees, no overhead, no tax."""
    return GlobalSettings(
        revenue_fee_pct=0,
        company_overhead_monthly=0,
        sales_tax_pct=0,
        tax_enabled=False,
        tax_pass_through=True,
    )


@pytest.fixture
def fleet() -> list[Vehicle]:
    return sample_fleet()


@pytest.fixture
def months() -> list[SeasonMonth]:
    return default_months()


@pytest.fixture
def settings() -> GlobalSettings:
    return GlobalSettings()


@pytest.fixture
def plan(fleet: list[Vehicle], months: list[SeasonMonth], settings: GlobalSettings) -> FleetPlan:
    return FleetPlan(vehicles=fleet, months=months, settings=settings)
