"""Top-level plan — bundles roster, season, settings and break-even inputs."""

from pydantic import AliasChoices, Field, field_validator

from fleet_cashflow.config.base import PlannerModel
from fleet_cashflow.config.season import SeasonMonth, default_months
from fleet_cashflow.config.settings import GlobalSettings
from fleet_cashflow.config.vehicle import Vehicle
from fleet_cashflow.numeric import round_half_up, safe_num


def sample_fleet() -> list[Vehicle]:
    """Five-vehicle sample roster used for defaults and 'reset'."""
    return [
        Vehicle(
            name="Escalade 1",
            category="Cadillac Escalade (Luxury)",
            base_adr=325, base_util_pct=62,
            fixed_monthly=1_450, variable_per_day=28, maintenance_reserve=180,
            notes="Flagship executive. Higher ADR + higher turn cost.",
        ),
        Vehicle(
            name="Suburban 1",
            category="Chevy Suburban (Family)",
            base_adr=245, base_util_pct=66,
            fixed_monthly=1_180, variable_per_day=24, maintenance_reserve=150,
            notes="High demand; strong all-seasons performer.",
        ),
        Vehicle(
            name="Wrangler 1",
            category="Jeep Wrangler 4-Door (Go Topless)",
            base_adr=265, base_util_pct=58,
            fixed_monthly=980, variable_per_day=26, maintenance_reserve=140,
            notes="Seasonal lift in summer; marketing centerpiece.",
        ),
        Vehicle(
            name="Model Y 1",
            category="Tesla Model Y (AWD)",
            base_adr=210, base_util_pct=60,
            fixed_monthly=1_120, variable_per_day=18, maintenance_reserve=120,
            notes="Strong demand with corporate travelers; low variable cost.",
        ),
        Vehicle(
            name="Transit 1",
            category="Ford Transit Passenger (Group)",
            base_adr=295, base_util_pct=45,
            fixed_monthly=1_350, variable_per_day=32, maintenance_reserve=220,
            notes="Lower utilization but high revenue per rental day.",
        ),
    ]


class FleetPlan(PlannerModel):
    """Complete input bundle for one forecast + break-even run."""

    vehicles: list[Vehicle] = Field(default_factory=sample_fleet)
    months: list[SeasonMonth] = Field(default_factory=default_months)
    settings: GlobalSettings = Field(
        default_factory=GlobalSettings,
        validation_alias=AliasChoices("settings", "globals"),
    )
    target_monthly_cash_flow: float = Field(
        default=25_000.0,
        description="Cash flow the break-even solver aims for in the chosen month ($).",
    )
    break_even_month_index: int = Field(
        default=6,
        description="0-based index into ``months`` for the break-even solve (6 = Jul).",
    )

    @field_validator("target_monthly_cash_flow", mode="before")
    @classmethod
    def _target(cls, v: object) -> float:
        return safe_num(v)

    @field_validator("break_even_month_index", mode="before")
    @classmethod
    def _month_index(cls, v: object) -> int:
        return round_half_up(safe_num(v))
