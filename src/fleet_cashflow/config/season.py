"""Seasonal month assumptions."""

from pydantic import Field, field_validator

from fleet_cashflow.config.base import PlannerModel, as_text
from fleet_cashflow.numeric import clamp, round_half_up, safe_num


class SeasonMonth(PlannerModel):
    """Day count and rate/utilization multipliers for one seasonal period.

    ``label`` doubles as the row key and should be unique, but duplicates
    and lists of other than twelve months are processed positionally.
    """

    label: str = Field(default="", description="Display label, e.g. 'Jul'")
    days: int = Field(default=30, description="Days in the period (0–31). Clamped on input.")
    adr_mult_pct: float = Field(
        default=100.0,
        description="ADR multiplier in percent (0–300). 120 = 1.2× base ADR.",
    )
    util_mult_pct: float = Field(
        default=100.0,
        description="Utilization multiplier in percent (0–300). Applied before the 100 % cap.",
    )

    @field_validator("label", mode="before")
    @classmethod
    def _label(cls, v: object) -> str:
        return as_text(v)

    @field_validator("days", mode="before")
    @classmethod
    def _days(cls, v: object) -> int:
        return round_half_up(clamp(safe_num(v), 0.0, 31.0))

    @field_validator("adr_mult_pct", "util_mult_pct", mode="before")
    @classmethod
    def _multiplier(cls, v: object) -> float:
        return clamp(safe_num(v, 100.0), 0.0, 300.0)


_DEFAULT_SEASON: list[tuple[str, int, float, float]] = [
    ("Jan", 31, 105, 95),
    ("Feb", 28, 110, 100),
    ("Mar", 31, 105, 95),
    ("Apr", 30, 95, 85),
    ("May", 31, 100, 90),
    ("Jun", 30, 115, 105),
    ("Jul", 31, 125, 115),
    ("Aug", 31, 120, 110),
    ("Sep", 30, 105, 95),
    ("Oct", 31, 100, 90),
    ("Nov", 30, 105, 95),
    ("Dec", 31, 120, 110),
]


def default_months() -> list[SeasonMonth]:
    """The twelve default seasonal months (summer and December peaks)."""
    return [
        SeasonMonth(label=label, days=days, adr_mult_pct=adr, util_mult_pct=util)
        for label, days, adr, util in _DEFAULT_SEASON
    ]
