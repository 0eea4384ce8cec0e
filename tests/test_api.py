"""Tests for the HTTP API layer.

Covers:
  - Schema / defaults endpoints
  - /forecast, /break-even, /report
  - CSV import / export and error mapping
  - Partial-plan merge helpers
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from fleet_cashflow.api.server import _build_plan, _deep_merge, app


client = TestClient(app)

CSV_TEXT = (
    "name,category,baseAdr,baseUtilPct,fixedMonthly,variablePerDay,maintenanceReserve,notes\n"
    "Escalade 1,Luxury,325,62,1450,28,180,Flagship\n"
)


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

class TestBuildPlan:
    def test_deep_merge(self):
        base = {"a": {"b": 1, "c": 2}, "d": [1]}
        assert _deep_merge(base, {"a": {"c": 3}, "d": [2]}) == {"a": {"b": 1, "c": 3}, "d": [2]}

    def test_empty_overrides_give_defaults(self):
        plan = _build_plan({})
        assert len(plan.vehicles) == 5
        assert plan.settings.revenue_fee_pct == 2.9

    @pytest.mark.parametrize(
        "overrides",
        [
            {"settings": {"revenue_fee_pct": 5}},
            {"settings": {"revenueFeePct": 5}},
            {"globals": {"revenueFeePct": 5}},
        ],
    )
    def test_settings_override_spellings(self, overrides):
        plan = _build_plan(overrides)
        assert plan.settings.revenue_fee_pct == 5
        assert plan.settings.company_overhead_monthly == 18_500

    def test_lists_replace_defaults(self):
        plan = _build_plan({"vehicles": [{"name": "Solo", "base_adr": 100}]})
        assert [v.name for v in plan.vehicles] == ["Solo"]


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

class TestEndpoints:
    def test_health(self):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok"}

    def test_root(self):
        assert client.get("/").json()["name"] == "Fleet Cash Flow Planner API"

    def test_schema(self):
        schema = client.get("/schema").json()
        assert "vehicles" in schema["properties"]

    def test_defaults(self):
        data = client.get("/plan/defaults").json()
        assert len(data["vehicles"]) == 5
        assert len(data["months"]) == 12
        assert data["settings"]["company_overhead_monthly"] == 18_500

    def test_forecast_defaults(self):
        r = client.post("/forecast", json={})
        assert r.status_code == 200
        data = r.json()
        assert len(data["forecast"]["months"]) == 12
        assert data["best"]["label"] == "Jul"
        assert data["worst"]["label"] == "Apr"

    def test_forecast_empty_roster(self):
        data = client.post("/forecast", json={"plan": {"vehicles": []}}).json()
        assert data["forecast"]["annual"]["revenue"] == 0
        assert data["best"]["label"] == "Jan"

    def test_forecast_unreadable_tax_flag(self):
        r = client.post("/forecast", json={"plan": {"settings": {"taxEnabled": "maybe"}}})
        assert r.status_code == 200
        assert r.json()["forecast"]["annual"]["tax_collected"] == 0

    def test_forecast_no_months(self):
        data = client.post("/forecast", json={"plan": {"months": []}}).json()
        assert data["best"] is None
        assert data["worst"] is None

    def test_break_even(self):
        body = {
            "plan": {
                "vehicles": [{"base_adr": 200, "base_util_pct": 50, "fixed_monthly": 0,
                              "variable_per_day": 0, "maintenance_reserve": 0}],
                "months": [{"label": "Jun", "days": 30}],
                "settings": {"revenue_fee_pct": 0, "company_overhead_monthly": 0},
            },
            "target_cash_flow": 3_000,
            "month_index": 0,
        }
        data = client.post("/break-even", json=body).json()
        assert data["solved"] is True
        assert data["scale"] == pytest.approx(29 / 30, abs=1e-6)

    def test_break_even_uses_plan_inputs(self):
        data = client.post("/break-even", json={}).json()
        assert data["month_index"] == 6
        assert data["target_cash_flow"] == 25_000

    def test_report(self):
        data = client.post("/report", json={"plan": {"target_monthly_cash_flow": 5_000}}).json()
        assert data["report"]["break_even"]["target_cash_flow"] == 5_000
        assert "BREAK-EVEN" in data["narrative"]

    def test_import_csv(self):
        r = client.post("/vehicles/import", json={"csv": CSV_TEXT})
        assert r.status_code == 200
        vehicles = r.json()["vehicles"]
        assert vehicles[0]["name"] == "Escalade 1"
        assert vehicles[0]["base_adr"] == 325

    def test_import_csv_missing_column_is_422(self):
        r = client.post("/vehicles/import", json={"csv": "name,category\nA,B\n"})
        assert r.status_code == 422
        assert "baseAdr" in r.json()["detail"]

    def test_import_csv_no_rows_is_422(self):
        r = client.post("/vehicles/import", json={"csv": CSV_TEXT.splitlines()[0]})
        assert r.status_code == 422

    def test_import_bare_token_is_422(self):
        r = client.post("/vehicles/import", json={"csv": "name"})
        assert r.status_code == 422
        assert "missing required column: category" in r.json()["detail"]

    def test_import_never_reads_server_files(self, tmp_path):
        path = tmp_path / "server_side.csv"
        path.write_text(CSV_TEXT.replace("Escalade 1", "Secret"), encoding="utf-8")
        r = client.post("/vehicles/import", json={"csv": str(path)})
        assert r.status_code == 422
        assert "Secret" not in r.text

    def test_export_csv(self):
        vehicles = client.post("/vehicles/import", json={"csv": CSV_TEXT}).json()["vehicles"]
        r = client.post("/vehicles/export", json={"vehicles": vehicles})
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/csv")
        assert r.text == CSV_TEXT.rstrip("\n")
