"""Vehicle (fleet asset) record."""

from uuid import uuid4

from pydantic import Field, field_validator

from fleet_cashflow.config.base import PlannerModel, as_text
from fleet_cashflow.numeric import clamp, safe_num


def new_vehicle_id() -> str:
    """Opaque identity, generated once per vehicle and never reused."""
    return uuid4().hex


class Vehicle(PlannerModel):
    """One revenue-generating vehicle with its own rate and cost structure."""

    id: str = Field(default_factory=new_vehicle_id, description="Opaque row identity")
    name: str = Field(default="", description="Display name (no effect on computation)")
    category: str = Field(default="", description="Display category (no effect on computation)")
    base_adr: float = Field(default=200.0, description="Average daily rate before seasonality ($/day)")
    base_util_pct: float = Field(
        default=55.0,
        description="Baseline utilization (0–100 %). Clamped on input.",
    )
    fixed_monthly: float = Field(default=1_000.0, description="Fixed cost per month ($)")
    variable_per_day: float = Field(default=20.0, description="Variable cost per rental day ($)")
    maintenance_reserve: float = Field(default=100.0, description="Maintenance reserve per month ($)")
    notes: str = Field(default="", description="Free-text notes")

    @field_validator("name", "category", "notes", mode="before")
    @classmethod
    def _text(cls, v: object) -> str:
        return as_text(v)

    @field_validator("id", mode="before")
    @classmethod
    def _identity(cls, v: object) -> str:
        text = as_text(v).strip()
        return text or new_vehicle_id()

    @field_validator("base_adr", "fixed_monthly", "variable_per_day", "maintenance_reserve", mode="before")
    @classmethod
    def _money(cls, v: object) -> float:
        return safe_num(v)

    @field_validator("base_util_pct", mode="before")
    @classmethod
    def _util(cls, v: object) -> float:
        return clamp(safe_num(v), 0.0, 100.0)
