"""Global fee, overhead and sales-tax settings."""

from pydantic import Field, ValidationInfo, field_validator

from fleet_cashflow.config.base import PlannerModel, as_flag
from fleet_cashflow.numeric import clamp, safe_num


class GlobalSettings(PlannerModel):
    """Company-wide assumptions applied to every month."""

    revenue_fee_pct: float = Field(
        default=2.9,
        description="Platform / booking fee as a percent of revenue (0–100).",
    )
    company_overhead_monthly: float = Field(
        default=18_500.0,
        description="Flat company overhead per month, independent of fleet size ($).",
    )
    sales_tax_pct: float = Field(default=8.265, description="Sales tax rate on revenue (0–100).")
    tax_enabled: bool = Field(default=False, description="Collect sales tax on revenue.")
    tax_pass_through: bool = Field(
        default=True,
        description="When tax is enabled: True excludes collected tax from cash flow, "
                    "False adds it back in.",
    )

    @field_validator("revenue_fee_pct", "sales_tax_pct", mode="before")
    @classmethod
    def _rate(cls, v: object) -> float:
        return clamp(safe_num(v), 0.0, 100.0)

    @field_validator("company_overhead_monthly", mode="before")
    @classmethod
    def _overhead(cls, v: object) -> float:
        return safe_num(v)

    @field_validator("tax_enabled", "tax_pass_through", mode="before")
    @classmethod
    def _flag(cls, v: object, info: ValidationInfo) -> bool:
        return as_flag(v, cls.model_fields[info.field_name].default)
