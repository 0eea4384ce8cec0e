"""FastAPI server for the fleet cash-flow planner.

Run with:
    uvicorn fleet_cashflow.api.server:app --reload --port 8000

Or:
    python -m fleet_cashflow.api.server

Endpoints:
    GET  /health            — liveness
    GET  /schema            — JSON Schema for FleetPlan inputs
    GET  /plan/defaults     — complete default plan as JSON
    POST /forecast          — monthly + annual forecast, best/worst month
    POST /break-even        — utilization scale for a target month cash flow
    POST /report            — forecast + break-even + plain-English narrative
    POST /vehicles/import   — roster CSV → vehicle records
    POST /vehicles/export   — vehicle records → roster CSV
"""

from __future__ import annotations

import logging
import os
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from fleet_cashflow import __version__
from fleet_cashflow.api.narrative import generate_narrative
from fleet_cashflow.config.plan import FleetPlan
from fleet_cashflow.config.vehicle import Vehicle
from fleet_cashflow.engine.break_even import solve_break_even
from fleet_cashflow.engine.extremes import select_extremal_periods
from fleet_cashflow.engine.forecast import aggregate
from fleet_cashflow.engine.orchestrator import run_plan
from fleet_cashflow.exceptions import FleetCashflowError
from fleet_cashflow.io.vehicles_csv import import_vehicles_csv, vehicles_to_csv
from fleet_cashflow.logging_config import configure_logging
from fleet_cashflow.models.results import BreakEvenResult, MonthResult

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Fleet Cash Flow Planner API",
    version=__version__,
    description=(
        "Seasonal cash-flow forecasting for a rental fleet: per-vehicle and "
        "per-month economics, annual totals, best/worst months, and the "
        "utilization scale needed to reach a target monthly cash flow."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FleetCashflowError)
async def _planner_error_handler(request: Request, exc: FleetCashflowError) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class PlanRequest(BaseModel):
    """Request body carrying a partial plan. Missing fields use defaults."""
    plan: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full FleetPlan JSON (snake_case or camelCase keys). "
                    "Lists (vehicles, months) replace the defaults wholesale. "
                    "Example: {'settings': {'revenue_fee_pct': 5}}",
    )


class BreakEvenRequest(PlanRequest):
    """Request body for /break-even. Target and month default to the plan's own."""
    target_cash_flow: float | None = Field(default=None, description="Target month cash flow ($)")
    month_index: int | None = Field(default=None, description="0-based month to solve for")


class CsvImportRequest(BaseModel):
    csv: str = Field(..., description="Roster CSV text including the header row")


class CsvExportRequest(BaseModel):
    vehicles: list[dict[str, Any]] = Field(default_factory=list)


class ForecastResponse(BaseModel):
    """Response from /forecast."""
    forecast: dict[str, Any]
    best: MonthResult | None
    worst: MonthResult | None


class ReportResponse(BaseModel):
    """Response from /report."""
    report: dict[str, Any]
    narrative: str = ""


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _camelize(obj: Any) -> Any:
    """Recursively rewrite dict keys to camelCase (already-camel keys unchanged)."""
    if isinstance(obj, dict):
        return {to_camel(str(k)): _camelize(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_camelize(v) for v in obj]
    return obj


def _build_plan(overrides: dict[str, Any]) -> FleetPlan:
    """Build a FleetPlan from partial overrides merged onto defaults."""
    defaults = FleetPlan().model_dump(mode="json", by_alias=True)
    overrides = _camelize(overrides)
    if "globals" in overrides:
        overrides.setdefault("settings", overrides.pop("globals"))
    _deep_merge(defaults, overrides)
    return FleetPlan.model_validate(defaults)


def _deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            _deep_merge(base[key], val)
        else:
            base[key] = val
    return base


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — name, version and where to start."""
    return {
        "name": "Fleet Cash Flow Planner API",
        "version": __version__,
        "start_here": "GET /plan/defaults",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/schema")
def get_schema():
    """JSON Schema for FleetPlan — every input with its default and description."""
    return FleetPlan.model_json_schema()


@app.get("/plan/defaults")
def get_defaults():
    """Complete default plan (sample fleet, default season, default settings)."""
    return FleetPlan().model_dump(mode="json")


@app.post("/forecast", response_model=ForecastResponse)
def forecast(req: PlanRequest):
    """Per-vehicle, per-month and annual figures plus best/worst month."""
    plan = _build_plan(req.plan)
    result = aggregate(plan.vehicles, plan.months, plan.settings)
    extremes = select_extremal_periods(result.months)
    return ForecastResponse(
        forecast=result.model_dump(),
        best=extremes.best,
        worst=extremes.worst,
    )


@app.post("/break-even", response_model=BreakEvenResult)
def break_even(req: BreakEvenRequest):
    """Solve for the utilization scale that reaches the target cash flow.

    Unreachable targets return the nearest bound with ``solved: false``.
    """
    plan = _build_plan(req.plan)
    target = req.target_cash_flow if req.target_cash_flow is not None else plan.target_monthly_cash_flow
    month_index = req.month_index if req.month_index is not None else plan.break_even_month_index
    return solve_break_even(plan.vehicles, plan.months, plan.settings, target, month_index)


@app.post("/report", response_model=ReportResponse)
def report(req: PlanRequest):
    """Full plan run with a plain-English narrative."""
    plan = _build_plan(req.plan)
    result = run_plan(plan)
    return ReportResponse(report=result.model_dump(), narrative=generate_narrative(result))


@app.post("/vehicles/import")
def import_vehicles(req: CsvImportRequest):
    """Parse a roster CSV. Missing columns or no rows → 422."""
    vehicles = import_vehicles_csv(req.csv)
    return {"vehicles": [v.model_dump(mode="json") for v in vehicles]}


@app.post("/vehicles/export", response_class=PlainTextResponse)
def export_vehicles(req: CsvExportRequest):
    """Serialize vehicle records to roster CSV."""
    vehicles = [Vehicle.model_validate(v) for v in req.vehicles]
    return PlainTextResponse(vehicles_to_csv(vehicles), media_type="text/csv")


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    configure_logging()
    uvicorn.run(
        "fleet_cashflow.api.server:app",
        host=os.environ.get("FLEET_CASHFLOW_HOST", "127.0.0.1"),
        port=int(os.environ.get("FLEET_CASHFLOW_PORT", "8000")),
        reload=False,
    )


if __name__ == "__main__":
    main()
